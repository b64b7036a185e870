"""
Raster drawing on a flat 32-bit pixel buffer.

`PixelCanvas` treats `array` as a flat, mutable 1D buffer representing a
`width` by `height` bitmap in row-major order. Pixel (x, y) is column `x`,
row `y` and lives at index `y * width + x`.

Writes outside the canvas are silently dropped, so the rasterizers never
clip their coordinates up front. Reads outside the canvas raise.
"""

import array
from collections.abc import Callable, Iterable, Iterator
from typing import Final

from .color import WHITE

ScanFunction = Callable[[int], Iterable[tuple[int, int]]]
"""Maps a column (or row) index to the (cross coordinate, color) pairs to paint."""


class PixelCanvas:
    """A bitmap canvas of packed ARGB colors backed by a 1D buffer.

    - `array` is modified in-place.
    - Coordinates are 0-based, with origin at top-left.
    - Negative sizes are a caller error and raise ValueError.
    """

    def __init__(self, w: int, h: int, background: int = WHITE) -> None:
        if w < 0 or h < 0:
            raise ValueError(f"canvas size must not be negative ({w}x{h})")
        self.array: Final = array.array("I", [background]) * (w * h)
        self.width: int = w
        self.height: int = h

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def set_pixel(self, x: int, y: int, color: int) -> None:
        if self._in_bounds(x, y):
            self.array[self._index(x, y)] = color

    def get_pixel(self, x: int, y: int) -> int:
        if not self._in_bounds(x, y):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} canvas"
            )
        return self.array[self._index(x, y)]

    def clear(self, color: int) -> None:
        for i in range(len(self.array)):
            self.array[i] = color

    def rows(self) -> Iterator[array.array]:
        """Yield each row, top to bottom."""
        for y in range(self.height):
            start = y * self.width
            yield self.array[start : start + self.width]

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, col: int) -> None:
        """Draw a line from (x0, y0) to (x1, y1) using Bresenham's algorithm.

        Both endpoints are painted. Points outside the canvas are skipped, so
        a line crossing the border is drawn only partially.
        """

        dx = abs(x1 - x0)
        sx = 1 if x0 < x1 else -1
        dy = -abs(y1 - y0)
        sy = 1 if y0 < y1 else -1
        err = dx + dy  # error term

        while True:
            self.set_pixel(x0, y0, col)
            e2 = 2 * err
            if e2 >= dy:
                if x0 == x1:
                    break
                err += dy
                x0 += sx
            if e2 <= dx:
                if y0 == y1:
                    break
                err += dx
                y0 += sy

    def draw_circle(self, cx: int, cy: int, radius: int, col: int) -> None:
        """Draw a circle outline using the midpoint circle algorithm."""

        if radius < 0:
            raise ValueError(f"radius must not be negative ({radius})")
        if radius == 0:
            self.set_pixel(cx, cy, col)
            return

        x = 0
        y = radius
        d = 3 - 2 * radius

        while x <= y:
            self._draw_eight_points(cx, cy, x, y, col)
            if d > 0:
                y -= 1
                d += 4 * (x - y) + 10
            else:
                d += 4 * x + 6
            x += 1

    def _draw_eight_points(self, cx: int, cy: int, x: int, y: int, col: int) -> None:
        # Negative coordinates fall out through set_pixel.
        for px, py in (
            (cx + x, cy + y),
            (cx - x, cy - y),
            (cx + x, cy - y),
            (cx - x, cy + y),
            (cx + y, cy + x),
            (cx - y, cy - x),
            (cx + y, cy - x),
            (cx - y, cy + x),
        ):
            self.set_pixel(px, py, col)

    def apply_on_x(self, fn: ScanFunction) -> None:
        """Call `fn(x)` for every column and paint the (y, color) pairs it yields."""
        for x in range(self.width):
            for y, color in fn(x):
                if 0 <= y < self.height:
                    self.set_pixel(x, y, color)

    def apply_on_y(self, fn: ScanFunction) -> None:
        """Call `fn(y)` for every row and paint the (x, color) pairs it yields."""
        for y in range(self.height):
            for x, color in fn(y):
                if 0 <= x < self.width:
                    self.set_pixel(x, y, color)
