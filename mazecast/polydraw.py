"""Filling four-sided wall polygons clipped to a viewport."""

from __future__ import annotations

from dataclasses import dataclass, field

from .framebuffer import Screen


@dataclass
class Polygon:
    """Four corners: top left, top right, bottom right, bottom left."""

    x: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    y: list[int] = field(default_factory=lambda: [0, 0, 0, 0])

    def __post_init__(self) -> None:
        if len(self.x) != 4 or len(self.y) != 4:
            raise ValueError("a polygon needs exactly four corners")


def _put(screen: Screen, offset: int, color: int) -> None:
    if not 0 <= offset < len(screen):
        raise IndexError(f"polygon leaves the screen at offset {offset}")
    screen.pixels[offset] = color


def polydraw(
    poly: Polygon,
    leftx: int,
    lefty: int,
    rightx: int,
    righty: int,
    color: int,
    screen: Screen,
) -> None:
    """Fill `poly` in `color`, clipped to the viewport (leftx, lefty)-(rightx, righty).

    The left and right edges are vertical; the top and bottom edges are
    stepped with error terms. The polygon itself is left unchanged.
    """
    xs = list(poly.x)
    ys = list(poly.y)

    if xs[0] < leftx:
        if xs[1] == xs[0]:
            return
        tslope = (ys[1] - ys[0]) / (xs[1] - xs[0])
        bslope = (ys[3] - ys[2]) / (xs[0] - xs[1])
        ys[0] = int(ys[0] + tslope * (leftx - xs[0]))
        ys[3] = int(ys[3] + bslope * (leftx - xs[0]))
        xs[0] = leftx

    x = xs[0]
    y = ys[0]
    topdiff = ys[1] - ys[0]
    botdiff = ys[2] - ys[3]
    height = ys[3] - ys[0]
    width = xs[1] - xs[0] + 1
    wwidth = width - (xs[1] - rightx) if xs[1] > rightx else width

    toperror = 0
    boterror = 0
    stride = screen.width
    for _ in range(wwidth):
        if y < lefty:
            wy = lefty
            wheight = height - (lefty - y)
        else:
            wy = y
            wheight = height
        if wy + wheight > righty:
            wheight = righty - wy

        ptr = wy * stride + x
        for _ in range(wheight):
            _put(screen, ptr, color)
            ptr += stride

        x += 1

        toperror += abs(topdiff)
        while toperror >= width:
            toperror -= width
            if topdiff > 0:
                y += 1
                height -= 1
            else:
                y -= 1
                height += 1

        boterror += abs(botdiff)
        while boterror >= width:
            boterror -= width
            if botdiff > 0:
                height += 1
            else:
                height -= 1