import numpy as np
import pytest

from time_dilation_clock.config import (
    FULL_CIRCUMFERENCE_M,
    RADIUS_SAMPLES,
    REVOLUTION_PERIOD_S,
    SPEED_OF_LIGHT_M_S,
)
from time_dilation_clock.errors import ClockError, DomainError
from time_dilation_clock.physics import (
    calibrate_velocity_table,
    generate_velocity_table,
    step_radius,
    time_dilation_factor,
    time_dilation_factors,
)

C = SPEED_OF_LIGHT_M_S


@pytest.fixture(scope="module")
def velocities():
    return generate_velocity_table(FULL_CIRCUMFERENCE_M, REVOLUTION_PERIOD_S, RADIUS_SAMPLES)


def test_outermost_sample_moves_at_light_speed(velocities):
    assert velocities.shape == (500,)
    assert abs(velocities[499] - 299792458) <= 1e-3


def test_innermost_sample_velocity(velocities):
    assert velocities[0] == pytest.approx(599584.916, rel=1e-9)


def test_velocities_grow_linearly(velocities):
    assert np.all(np.diff(velocities) > 0)
    np.testing.assert_allclose(velocities, velocities[0] * np.arange(1, 501), rtol=1e-12)


def test_velocity_matches_step_radius_formula(velocities):
    step = step_radius(FULL_CIRCUMFERENCE_M, RADIUS_SAMPLES)
    assert step == pytest.approx(5725614.1910843307, rel=1e-12)
    for i in (1, 250, 500):
        expected = 2 * np.pi * (step * i) / REVOLUTION_PERIOD_S
        assert velocities[i - 1] == pytest.approx(expected, rel=1e-12)


def test_velocity_table_is_read_only(velocities):
    with pytest.raises(ValueError):
        velocities[0] = 0.0


def test_calibration_passes(velocities):
    calibrate_velocity_table(velocities, C)


def test_calibration_rejects_wrong_geometry():
    short = generate_velocity_table(FULL_CIRCUMFERENCE_M * 0.99, REVOLUTION_PERIOD_S)
    with pytest.raises(DomainError):
        calibrate_velocity_table(short, C)


def test_calibration_rejects_superluminal_samples():
    fast = generate_velocity_table(FULL_CIRCUMFERENCE_M, REVOLUTION_PERIOD_S / 2)
    with pytest.raises(DomainError):
        calibrate_velocity_table(fast, C)


def test_dilation_endpoints():
    assert time_dilation_factor(0.0) == 1.0
    assert time_dilation_factor(C) == 0.0
    assert time_dilation_factor(-C) == 0.0


def test_dilation_known_value():
    assert time_dilation_factor(0.6 * C) == pytest.approx(0.8)


def test_dilation_strictly_decreasing(velocities):
    samples = np.concatenate(([0.0], velocities))
    factors = [time_dilation_factor(v) for v in samples]
    assert all(a > b for a, b in zip(factors, factors[1:]))


@pytest.mark.parametrize("v", [C * 1.000001, C + 1.0, -(C + 1.0), 2 * C, float("nan"), float("inf")])
def test_dilation_above_light_speed_fails(v):
    with pytest.raises(DomainError):
        time_dilation_factor(v)


def test_domain_error_kinds():
    assert issubclass(DomainError, ClockError)
    assert issubclass(DomainError, ValueError)


def test_vectorized_factors_match_scalar(velocities):
    factors = time_dilation_factors(velocities, C)
    assert factors.shape == (500,)
    for i in (0, 1, 123, 498, 499):
        assert factors[i] == time_dilation_factor(float(velocities[i]), C)
    assert factors[499] == 0.0


def test_vectorized_factors_reject_superluminal():
    with pytest.raises(DomainError):
        time_dilation_factors(np.array([0.0, C * 1.5]), C)


def test_vectorized_factors_reject_nan():
    with pytest.raises(DomainError):
        time_dilation_factors(np.array([0.0, np.nan]), C)


def test_calibration_rejects_nan_table():
    with pytest.raises(DomainError):
        calibrate_velocity_table(np.array([1.0, np.nan]), C)
    with pytest.raises(DomainError):
        calibrate_velocity_table(np.array([np.nan, C]), C)


def test_rejects_bad_sample_count():
    with pytest.raises(ValueError):
        generate_velocity_table(FULL_CIRCUMFERENCE_M, REVOLUTION_PERIOD_S, 0)
