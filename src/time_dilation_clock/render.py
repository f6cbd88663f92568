"""Render back ends for the frame driver.

The driver only issues the calls of ``Renderer``; nothing else in the package
touches pygame.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

Point = Tuple[int, int]
Color = Tuple[int, int, int]

COLORS: Dict[str, Color] = {
    "background": (0, 0, 0),
    "face": (85, 85, 85),
    "hands": (170, 170, 170),
    "second": (0, 0, 170),
    "dilation": (0, 170, 0),
    "text": (170, 170, 170),
}


class Renderer(Protocol):
    def set_color(self, name: str) -> None: ...
    def set_pixel(self, x: int, y: int) -> None: ...
    def set_pixels(self, points: Iterable[Point]) -> None: ...
    def draw_line(self, x0: int, y0: int, x1: int, y1: int) -> None: ...
    def draw_circle(self, cx: int, cy: int, r: int) -> None: ...
    def draw_text(self, x: int, y: int, text: str, *, centered: bool = False) -> None: ...
    def clear_frame(self) -> None: ...
    def present_frame(self) -> None: ...
    def poll_quit_requested(self) -> bool: ...
    def pace(self) -> None: ...
    def close(self) -> None: ...


@dataclass
class RecordedFrame:
    pixels: List[Tuple[str, Point]] = field(default_factory=list)
    lines: List[Tuple[str, Point, Point]] = field(default_factory=list)
    circles: List[Tuple[str, Point, int]] = field(default_factory=list)
    texts: List[Tuple[str, Point, str]] = field(default_factory=list)

    def pixels_of(self, color: str) -> List[Point]:
        return [p for c, p in self.pixels if c == color]


class RecordingRenderer:
    """Headless back end that keeps every presented frame in memory."""

    def __init__(self, *, quit_after: Optional[int] = None, keep_frames: int = 0) -> None:
        self.quit_after = quit_after
        self.keep_frames = keep_frames
        self.color = "face"
        self.current = RecordedFrame()
        self.frames: List[RecordedFrame] = []
        self.presented = 0
        self.closed = False

    def set_color(self, name: str) -> None:
        if name not in COLORS:
            raise KeyError(f"unknown color: {name}")
        self.color = name

    def set_pixel(self, x: int, y: int) -> None:
        self.current.pixels.append((self.color, (int(x), int(y))))

    def set_pixels(self, points: Iterable[Point]) -> None:
        for x, y in points:
            self.set_pixel(x, y)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        self.current.lines.append((self.color, (int(x0), int(y0)), (int(x1), int(y1))))

    def draw_circle(self, cx: int, cy: int, r: int) -> None:
        self.current.circles.append((self.color, (int(cx), int(cy)), int(r)))

    def draw_text(self, x: int, y: int, text: str, *, centered: bool = False) -> None:
        self.current.texts.append((self.color, (int(x), int(y)), text))

    def clear_frame(self) -> None:
        self.current = RecordedFrame()

    def present_frame(self) -> None:
        self.presented += 1
        if self.keep_frames:
            self.frames.append(self.current)
            del self.frames[: -self.keep_frames]

    def poll_quit_requested(self) -> bool:
        return self.quit_after is not None and self.presented >= self.quit_after

    def pace(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    @property
    def last_frame(self) -> RecordedFrame:
        if not self.frames:
            raise IndexError("no frames kept (set keep_frames)")
        return self.frames[-1]


class PygameRenderer:
    """Window back end: any key or closing the window ends the run."""

    def __init__(self, width: int, height: int, *, fps: float, title: str = "Time Dilation Clock") -> None:
        import pygame

        pygame.init()
        self._pygame = pygame
        self._screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(f"{title} - Any key to quit")
        self._font = pygame.font.SysFont(None, 22)
        self.fps = fps
        self._color: Color = COLORS["face"]
        self._last_frame_wall = time.perf_counter()

    def set_color(self, name: str) -> None:
        self._color = COLORS[name]

    def set_pixel(self, x: int, y: int) -> None:
        self._screen.set_at((int(x), int(y)), self._color)

    def set_pixels(self, points: Iterable[Point]) -> None:
        set_at = self._screen.set_at
        color = self._color
        for x, y in points:
            set_at((int(x), int(y)), color)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        self._pygame.draw.line(self._screen, self._color, (x0, y0), (x1, y1))

    def draw_circle(self, cx: int, cy: int, r: int) -> None:
        self._pygame.draw.circle(self._screen, self._color, (cx, cy), r, width=1)

    def draw_text(self, x: int, y: int, text: str, *, centered: bool = False) -> None:
        surf = self._font.render(text, True, self._color)
        if centered:
            rect = surf.get_rect(center=(x, y))
        else:
            rect = surf.get_rect(midleft=(x, y))
        self._screen.blit(surf, rect)

    def clear_frame(self) -> None:
        self._screen.fill(COLORS["background"])

    def present_frame(self) -> None:
        self._pygame.display.flip()

    def poll_quit_requested(self) -> bool:
        for event in self._pygame.event.get():
            if event.type in (self._pygame.QUIT, self._pygame.KEYDOWN):
                return True
        return False

    def pace(self) -> None:
        if self.fps <= 0:
            time.sleep(0.001)
            return
        target_dt = 1.0 / self.fps
        while True:
            now = time.perf_counter()
            elapsed = now - self._last_frame_wall
            if elapsed >= target_dt:
                self._last_frame_wall = now
                return
            # Sleep in short slices so the window stays responsive.
            time.sleep(min(0.002, target_dt - elapsed))

    def close(self) -> None:
        self._pygame.quit()
