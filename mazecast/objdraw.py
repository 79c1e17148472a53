"""Drawing scaled, depth-tested sprite objects into the maze viewport."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .framebuffer import Screen

SHIFT = 16
SHIFT_MULT = 1 << SHIFT


@dataclass
class SceneObject:
    """A fixed object in the maze and its last projection onto the screen."""

    screenx: int = 0
    screeny: int = 0
    mazex: int = 0
    mazey: int = 0
    alignx: int = 0
    aligny: int = 0
    projx: int = 0
    projy: int = 0
    wbit: int = 64
    hbit: int = 64
    wdraw: int = 64
    hdraw: int = 64
    visible: bool = False
    distance: int = 0
    imagenum: int = 0


def draw_object(
    obj: SceneObject,
    bitmap,
    lclipx: int,
    lclipy: int,
    rclipx: int,
    rclipy: int,
    distance: int,
    depths: Sequence[int],
    screen: Screen,
    litelevel,
) -> None:
    """Scale `bitmap` to the object's drawn size and draw it, lit through `litelevel`.

    Columns outside lclipx..rclipx or behind the wall depth in `depths` are
    skipped; rows are clipped to lclipy..rclipy. Zero pixels are transparent.
    """
    if obj.wdraw <= 0 or obj.hdraw <= 0:
        return

    bitmap = bytes(bitmap)
    fix_wincrement = int(obj.wbit / obj.wdraw * SHIFT_MULT)
    fix_hincrement = int(obj.hbit / obj.hdraw * SHIFT_MULT)
    stride = screen.width
    pixels = screen.pixels
    top, bottom = lclipy, rclipy

    column = 0
    for sx in range(obj.screenx, obj.screenx + obj.hdraw):
        column += fix_wincrement
        if not (lclipx <= sx <= rclipx) or distance >= depths[sx]:
            continue

        vert_offset = top - obj.screeny
        if vert_offset > 0:
            line = vert_offset * fix_hincrement + top
            sptr = top * stride + sx
            bptr = (column >> SHIFT) + ((vert_offset * fix_hincrement) >> SHIFT) * obj.wbit
            sline = top
        else:
            line = 0
            sptr = obj.screeny * stride + sx
            bptr = column >> SHIFT
            sline = obj.screeny

        lastline = line >> SHIFT
        for _ in range(lastline, obj.wdraw):
            b = bitmap[bptr] if 0 <= bptr < len(bitmap) else 0
            if b and (line >> SHIFT) <= bottom:
                pixels[sptr] = litelevel[b]
            line += fix_hincrement
            advance = (line >> SHIFT) - lastline
            if advance:
                bptr += obj.wbit * advance
                lastline = line >> SHIFT
            sptr += stride
            sline += 1
            if sline > bottom:
                break