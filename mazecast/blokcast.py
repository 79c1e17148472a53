"""Raycasting a maze of block-aligned floor heights with textured walls and floors."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Screen

IMAGE_WIDTH = 64
IMAGE_HEIGHT = 64
TEXTURE_WIDTH = 320
TILES_PER_ROW = 5

WALL_HEIGHT = 64
VIEWER_DISTANCE = 192
VIEWPORT_LEFT = 0
VIEWPORT_RIGHT = 319
VIEWPORT_TOP = 0
VIEWPORT_BOT = 199
VIEWPORT_HEIGHT = VIEWPORT_BOT - VIEWPORT_TOP
VIEWPORT_CENTER = VIEWPORT_TOP + VIEWPORT_HEIGHT // 2
GRIDWIDTH = 16
GRIDSIZE = 64

DEMO_XVIEW = 6 * 64 + 48
DEMO_YVIEW = 6 * 64

DEMO_WALL = (
    (7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
    (1, 1, 1, 7, 2, 2, 2, 2, 2, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 2, 2, 2, 2, 2, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 2, 2, 2, 2, 2, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 2, 2, 2, 2, 2, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 2, 2, 2, 2, 2, 7, 7, 7, 7, 7, 7, 7),
    (7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7, 7),
)

DEMO_FLOOR = (
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 8, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 10, 10, 2, 2, 2, 2, 2, 2, 2, 0, 0, 0, 0, 0, 0),
    (2, 10, 10, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 0, 0),
    (2, 10, 10, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 0, 0),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 0, 0, 0, 0, 0, 0),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 5, 5, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 5, 5, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 5, 5, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 5, 5, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 5, 5, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
)

DEMO_FLOORHEIGHT = (
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
    (20, 0, 0, 20, 20, 20, 20, 20, 20, 20, 40, 60, 80, 100, 120, 120),
    (20, 0, 0, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 120, 120),
    (20, 0, 0, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 120, 120),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 40, 60, 80, 100, 120, 120),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 60, 60, 60, 60, 60, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 60, 100, 100, 100, 60, 20, 20, 20, 20, 40, 20, 20),
    (20, 20, 20, 20, 60, 100, 150, 100, 60, 20, 20, 20, 40, 40, 20, 20),
    (20, 20, 20, 20, 60, 100, 100, 100, 60, 20, 20, 40, 40, 40, 20, 20),
    (20, 20, 20, 20, 60, 60, 60, 60, 60, 20, 20, 20, 20, 20, 20, 20),
    (20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20, 20),
)

Grid = Sequence[Sequence[int]]


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _in_grid(xmaze: int, ymaze: int) -> bool:
    return 0 <= xmaze < GRIDWIDTH and 0 <= ymaze < GRIDWIDTH


def _check_map(name: str, grid: Grid) -> None:
    if len(grid) != GRIDWIDTH or any(len(row) != GRIDWIDTH for row in grid):
        raise ValueError(f"{name} map must be {GRIDWIDTH}x{GRIDWIDTH}")


def _tile_origin(tile: int) -> int:
    """Offset of a 64x64 tile inside a 320-pixel-wide texture sheet."""
    row = _cdiv(tile, TILES_PER_ROW)
    column = tile - row * TILES_PER_ROW
    return row * TEXTURE_WIDTH * IMAGE_HEIGHT + column * IMAGE_WIDTH


def _texel(textures: bytes, index: int) -> int:
    if not 0 <= index < len(textures):
        raise IndexError(f"texture offset {index} is outside the texture sheet")
    return textures[index]


def _plot(pixels: bytearray, offset: int, color: int) -> None:
    if 0 <= offset < len(pixels):
        pixels[offset] = color


def _grid_line(coord: float, positive: bool) -> int:
    base = int(coord) & ~0x3F
    return base + GRIDSIZE if positive else base - 1


def _draw_wall(
    pixels: bytearray,
    textures: bytes,
    column: int,
    bot: int,
    lasttop: int,
    distance: int,
    wallheight: int,
    tmcolumn: int,
    tile: int,
) -> tuple[int, int]:
    """Draw one textured wall slice; return its clipped top and bottom rows."""
    visheight = int(VIEWER_DISTANCE * wallheight / distance)
    top = bot - visheight
    t = tmcolumn
    dheight = visheight
    iheight = wallheight
    yratio = wallheight / visheight if visheight else 0.0
    if top < VIEWPORT_TOP:
        clip = VIEWPORT_TOP - top
        dheight -= clip
        t += int(clip * yratio) * TEXTURE_WIDTH
        iheight = int(iheight - clip * yratio)
        top = VIEWPORT_TOP
    if bot > lasttop:
        clip = bot - lasttop
        dheight -= clip
        iheight = int(iheight - clip * yratio)
        bot = lasttop

    offset = top * SCREEN_WIDTH + column
    tyerror = iheight
    tileptr = _tile_origin(tile) + t
    for _ in range(iheight):
        while tyerror >= iheight:
            _plot(pixels, offset, _texel(textures, tileptr))
            tyerror -= iheight
            offset += SCREEN_WIDTH
        tyerror += dheight
        tileptr += TEXTURE_WIDTH
    return top, bot


def draw_maze(
    wall: Grid,
    floor: Grid,
    floorheight: Grid,
    screen: Screen,
    xview: int,
    yview: int,
    viewing_angle: float,
    viewer_height: int,
    textmaps,
) -> None:
    """Raycast the maze as seen from (xview, yview) into `screen`.

    Angle 0 looks along increasing y; angles are in radians. Each map is
    indexed [x][y]. `wall` and `floor` hold tile numbers into the 320-wide
    `textmaps` sheet (wall tiles are numbered from 1), `floorheight` the
    height of each block.
    """
    if screen.width != SCREEN_WIDTH or screen.height != SCREEN_HEIGHT:
        raise ValueError(f"screen must be {SCREEN_WIDTH}x{SCREEN_HEIGHT}")
    for name, grid in (("wall", wall), ("floor", floor), ("floorheight", floorheight)):
        _check_map(name, grid)
    if not _in_grid(_cdiv(xview, GRIDSIZE), _cdiv(yview, GRIDSIZE)):
        raise ValueError(f"viewer position ({xview}, {yview}) is outside the maze")

    textures = bytes(textmaps)
    pixels = screen.pixels

    for column in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        xmaze = _cdiv(xview, GRIDSIZE)
        ymaze = _cdiv(yview, GRIDSIZE)
        currentheight = floorheight[xmaze][ymaze]
        newheight = currentheight
        vheight = viewer_height + currentheight

        column_angle = math.atan((column - 160) / VIEWER_DISTANCE)
        cos_column = math.cos(column_angle)
        radians = viewing_angle + column_angle
        sin_ray = math.sin(radians)
        cos_ray = math.cos(radians)

        x2 = int(-1024 * sin_ray) + xview
        y2 = int(1024 * cos_ray) + yview
        x = float(xview)
        y = float(yview)
        xdiff = (x2 - xview) or 1
        ydiff = y2 - yview
        slope = (ydiff / xdiff) or 0.0001

        lasttop = VIEWPORT_BOT
        tmcolumn = 0
        top = VIEWPORT_BOT

        while _in_grid(xmaze, ymaze):
            while _in_grid(xmaze, ymaze):
                grid_x = _grid_line(x, xdiff > 0)
                grid_y = _grid_line(y, ydiff > 0)

                xcross_x = float(grid_x)
                xcross_y = y + slope * (grid_x - x)
                ycross_x = x + (grid_y - y) / slope
                ycross_y = float(grid_y)

                xdist = int(math.hypot(xcross_x - x, xcross_y - y))
                ydist = int(math.hypot(ycross_x - x, ycross_y - y))

                if xdist < ydist:
                    x, y = xcross_x, xcross_y
                    tmcolumn = int(y) & 0x3F
                else:
                    x, y = ycross_x, ycross_y
                    tmcolumn = int(x) & 0x3F
                xmaze = int(x / GRIDSIZE)
                ymaze = int(y / GRIDSIZE)

                if not _in_grid(xmaze, ymaze):
                    break
                if floorheight[xmaze][ymaze] != currentheight:
                    break

            realdistance = int(math.hypot(x - xview, y - yview))
            distance = int(realdistance * cos_column) or 1
            ratio = VIEWER_DISTANCE / distance
            bot = VIEWPORT_CENTER + int(ratio * (vheight - currentheight))

            if _in_grid(xmaze, ymaze):
                newheight = floorheight[xmaze][ymaze]
                wallheight = newheight - currentheight
                if wallheight <= 0:
                    top = bot
                else:
                    top, bot = _draw_wall(
                        pixels,
                        textures,
                        column,
                        bot,
                        lasttop,
                        distance,
                        wallheight,
                        tmcolumn,
                        wall[xmaze][ymaze] - 1,
                    )

            if bot > VIEWPORT_CENTER:
                for row in range(bot + 1, lasttop):
                    floor_ratio = (vheight - currentheight) / (row - VIEWPORT_CENTER)
                    floor_distance = int(floor_ratio * VIEWER_DISTANCE / cos_column)
                    px = int(-floor_distance * sin_ray) + xview
                    py = int(floor_distance * cos_ray) + yview
                    xmazes = _cdiv(px, GRIDSIZE)
                    ymazes = _cdiv(py, GRIDSIZE)
                    if not _in_grid(xmazes, ymazes):
                        continue
                    t = (py & 0x3F) * TEXTURE_WIDTH + (px & 0x3F)
                    tileptr = _tile_origin(floor[xmazes][ymazes]) + t
                    pixels[row * SCREEN_WIDTH + column] = _texel(textures, tileptr)

            currentheight = newheight
            if top < lasttop:
                lasttop = top


def render_demo(textmaps, viewing_angle: float = 0.0, viewer_height: int = 32) -> Screen:
    """Render the built-in height-field maze from its fixed viewpoint."""
    screen = Screen(SCREEN_WIDTH, SCREEN_HEIGHT)
    draw_maze(
        DEMO_WALL,
        DEMO_FLOOR,
        DEMO_FLOORHEIGHT,
        screen,
        DEMO_XVIEW,
        DEMO_YVIEW,
        viewing_angle,
        viewer_height,
        textmaps,
    )
    return screen