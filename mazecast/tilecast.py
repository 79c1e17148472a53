"""Raycasting a maze whose floor heights come from per-pixel height tiles."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .blokcast import _cdiv, _check_map, _plot, _texel, _tile_origin
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Screen

IMAGE_WIDTH = 64
IMAGE_HEIGHT = 64
TEXTURE_WIDTH = 320

WALL_HEIGHT = 64
VIEWER_DISTANCE = 128
VIEWPORT_LEFT = 0
VIEWPORT_RIGHT = 319
VIEWPORT_TOP = 0
VIEWPORT_BOT = 199
VIEWPORT_HEIGHT = VIEWPORT_BOT - VIEWPORT_TOP
VIEWPORT_CENTER = VIEWPORT_TOP + VIEWPORT_HEIGHT // 2
ZOOM = 2
GRIDWIDTH = 16
GRIDSIZE = 64
WALLCOLOR = 18

DEMO_XVIEW = 8 * 64 + 32
DEMO_YVIEW = 7 * 64
DEMO_VIEWER_HEIGHT = 150

DEMO_WALL = (
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 28, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 28, 28, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 28, 28, 28, 0, 0, 0, 0, 0, 0, 0, 0, 18, 18, 0, 0),
    (0, 22, 22, 22, 0, 0, 0, 0, 0, 0, 0, 0, 18, 18, 0, 0),
    (0, 17, 17, 17, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 17, 17, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 17, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
)

DEMO_FLOOR = (
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 3, 3, 3, 3, 3, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 12, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 12, 12, 1, 0, 0, 0, 0, 0, 0, 0, 0, 5, 10, 0, 0),
    (0, 12, 12, 12, 0, 0, 0, 0, 0, 0, 0, 0, 6, 11, 0, 0),
    (0, 12, 12, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 12, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
)

DEMO_HIGHTILE = (
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 3, 3, 3, 3, 3, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 5, 10, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 6, 11, 0, 0),
    (0, 0, 2, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 2, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
)

DEMO_FLOORBASE = (
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 20, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 40, 20, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 40, 40, 20, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 40, 20, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 20, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
)

Grid = Sequence[Sequence[int]]


def _in_grid(xmaze: int, ymaze: int) -> bool:
    return 0 <= xmaze < GRIDWIDTH and 0 <= ymaze < GRIDWIDTH


def _column_angle(column: int) -> float:
    angle = math.atan(_cdiv(column - 160, ZOOM) / VIEWER_DISTANCE)
    return angle or 0.0001


def draw_maze(
    wall: Grid,
    floor: Grid,
    hightile: Grid,
    floorbase: Grid,
    screen: Screen,
    xview: int,
    yview: int,
    viewing_angle: float,
    viewer_height: int,
    textmaps,
    highmaps,
) -> None:
    """Raycast a height-mapped floor as seen from (xview, yview) into `screen`.

    Maps are indexed [x][y]. `hightile` picks a tile of `highmaps` whose pixel
    values are floor heights, raised by `floorbase`; `floor` picks a tile of
    `textmaps` for the floor texture; `wall` gives the colour of the vertical
    faces where the floor rises. Angle 0 looks along increasing y, in radians.
    """
    if screen.width != SCREEN_WIDTH or screen.height != SCREEN_HEIGHT:
        raise ValueError(f"screen must be {SCREEN_WIDTH}x{SCREEN_HEIGHT}")
    for name, grid in (
        ("wall", wall),
        ("floor", floor),
        ("hightile", hightile),
        ("floorbase", floorbase),
    ):
        _check_map(name, grid)
    if not (0 <= xview < GRIDWIDTH * GRIDSIZE and 0 <= yview < GRIDWIDTH * GRIDSIZE):
        raise ValueError(f"viewer position ({xview}, {yview}) is outside the maze")

    textures = bytes(textmaps)
    heights = bytes(highmaps)
    pixels = screen.pixels

    view_tile = hightile[xview // GRIDSIZE][yview // GRIDSIZE]
    start_height = _texel(
        heights,
        _tile_origin(view_tile)
        + (yview % IMAGE_HEIGHT) * TEXTURE_WIDTH
        + xview % IMAGE_WIDTH,
    )

    for column in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        column_angle = _column_angle(column)
        cos_column = math.cos(column_angle)
        radians = viewing_angle + column_angle
        sin_ray = math.sin(radians)
        cos_ray = math.cos(radians)

        currentheight = start_height
        row = VIEWPORT_BOT
        # The loop's state is (row, currentheight); a repeat can never end.
        seen: set[tuple[int, int]] = set()

        while (row, currentheight) not in seen:
            seen.add((row, currentheight))

            screen_height = (row - VIEWPORT_CENTER) or 0.00001
            ratio = (viewer_height - currentheight) / screen_height
            real_distance = int(ratio * VIEWER_DISTANCE)
            distance = int(real_distance / cos_column)

            x = int(-distance * sin_ray) + xview
            y = int(distance * cos_ray) + yview
            xmaze = _cdiv(x, GRIDSIZE)
            ymaze = _cdiv(y, GRIDSIZE)
            if not _in_grid(xmaze, ymaze):
                break

            t = (y & 0x3F) * TEXTURE_WIDTH + (x & 0x3F)
            newheight = (
                _texel(heights, _tile_origin(hightile[xmaze][ymaze]) + t)
                + floorbase[xmaze][ymaze]
            )

            if newheight < currentheight:
                currentheight = newheight
                continue

            if newheight > currentheight:
                currentheight = newheight
                scale = VIEWER_DISTANCE / (real_distance or 1)
                newrow = VIEWPORT_CENTER + int(scale * (viewer_height - currentheight))
                color = wall[xmaze][ymaze]
                for i in range(min(row, VIEWPORT_BOT), max(newrow, VIEWPORT_TOP - 1), -1):
                    pixels[i * SCREEN_WIDTH + column] = color
                row = newrow

            if row > VIEWPORT_CENTER:
                tileptr = _tile_origin(floor[xmaze][ymaze]) + t
                _plot(pixels, row * SCREEN_WIDTH + column, _texel(textures, tileptr))
                row -= 1


def render_demo(
    textmaps,
    highmaps,
    viewing_angle: float = 0.0,
    viewer_height: int = DEMO_VIEWER_HEIGHT,
) -> Screen:
    """Render the built-in height-mapped maze from its fixed viewpoint."""
    screen = Screen(SCREEN_WIDTH, SCREEN_HEIGHT)
    draw_maze(
        DEMO_WALL,
        DEMO_FLOOR,
        DEMO_HIGHTILE,
        DEMO_FLOORBASE,
        screen,
        DEMO_XVIEW,
        DEMO_YVIEW,
        viewing_angle,
        viewer_height,
        textmaps,
        highmaps,
    )
    return screen