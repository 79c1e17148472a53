"""Bresenham line drawing on a linear frame buffer."""

from __future__ import annotations

from collections.abc import Iterator

from .framebuffer import Screen


def line_offsets(x1: int, y1: int, x2: int, y2: int, width: int) -> Iterator[int]:
    """Yield the linear buffer offsets of the pixels on a line."""
    offset = y1 * width + x1

    ydiff = y2 - y1
    y_unit = width
    if ydiff < 0:
        ydiff = -ydiff
        y_unit = -width

    xdiff = x2 - x1
    x_unit = 1
    if xdiff < 0:
        xdiff = -xdiff
        x_unit = -1

    error_term = 0
    if xdiff > ydiff:
        for _ in range(xdiff + 1):
            yield offset
            offset += x_unit
            error_term += ydiff
            if error_term > xdiff:
                error_term -= xdiff
                offset += y_unit
    else:
        for _ in range(ydiff + 1):
            yield offset
            offset += y_unit
            error_term += xdiff
            if error_term > 0:
                error_term -= ydiff
                offset += x_unit


def draw_line(screen: Screen, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
    """Draw a line from (x1, y1) to (x2, y2) in the given colour."""
    size = len(screen)
    for offset in line_offsets(x1, y1, x2, y2, screen.width):
        if not 0 <= offset < size:
            raise IndexError(f"line leaves the screen at offset {offset}")
        screen.pixels[offset] = color