import pytest

from time_dilation_clock.clock import ClockReading, SystemClock


@pytest.mark.parametrize(
    "second, fraction, expected",
    [
        (0, 0.0, 0),
        (0, 0.5, 30),
        (30, 0.5, 1830),
        (59, 0.999999, 3599),
        (59, 1.0, 3599),
    ],
)
def test_sec3600(second, fraction, expected):
    reading = ClockReading(hour=1, minute=2, second=second, fraction=fraction)
    assert reading.sec3600 == expected


def test_subsecond_ticks_use_sixtieths():
    assert ClockReading(0, 0, 0, 1 / 60 + 1e-9).subsecond_ticks == 1
    assert ClockReading(0, 0, 0, 0.0166).subsecond_ticks == 0


def test_system_clock_reading_ranges():
    reading = SystemClock().now()
    assert 0 <= reading.hour < 24
    assert 0 <= reading.minute < 60
    assert 0 <= reading.second < 60
    assert 0.0 <= reading.fraction < 1.0
    assert 0 <= reading.sec3600 < 3600
