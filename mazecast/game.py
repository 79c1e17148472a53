"""The walk-through game: its maze, automap drawing and frame timing."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from .framebuffer import Screen
from .objdraw import SceneObject

WALL_HEIGHT = 64
VIEWER_DISTANCE = 192
VIEWPORT_LEFT = 16
VIEWPORT_RIGHT = 218
VIEWPORT_TOP = 16
VIEWPORT_BOT = 126
VIEWPORT_HEIGHT = VIEWPORT_BOT - VIEWPORT_TOP + 1
VERT_CENTER = VIEWPORT_TOP + VIEWPORT_HEIGHT // 2
VIEWPORT_WIDTH = VIEWPORT_RIGHT - VIEWPORT_LEFT + 1
HORIZ_CENTER = VIEWPORT_LEFT + VIEWPORT_WIDTH // 2
GRIDSIZE = 64
GRIDWIDTH = 16
MAXDISTANCE = 64 * GRIDSIZE
NUMTEXTURES = 15
NUMOBJECTS = 2
MAXOBJECTS = 50
NUMIMAGES = 4
MAXLIGHT = 32

MAXFRAMES = 500
MULTIPLIER = 3.0
DISTANCE_PER_SECOND = 128
ROTATION_PER_SECOND = 1024
MAPX = 240
MAPY = 28
MAP_CELL = 4
PLAYER_COLOR = 13
WALL_COLOR = 15
TITLE_DELAY = 2_000_000

TEXTURE_WIDTH = 320
TILE_SIZE = 64
TILES_PER_ROW = 5

START_XVIEW = 6 * 64 + 32
START_YVIEW = 6 * 64 + 32
START_ANGLE = 130
VIEWER_HEIGHT = 32
AMBIENT_LEVEL = 10

WALLS = (
    (2, 2, 2, 2, 7, 4, 7, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (9, 2, 0, 2, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 2, 8, 0, 0, 0, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 8, 6, 0, 0, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 6, 2, 2, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2, 2, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 9, 9, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 4, 0, 0, 2),
    (2, 2, 2, 0, 0, 0, 0, 0, 0, 0, 0, 9, 9, 0, 0, 2),
    (5, 0, 0, 0, 0, 0, 0, 0, 0, 2, 2, 2, 0, 0, 0, 2),
    (2, 2, 2, 0, 0, 0, 2, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (7, 0, 0, 0, 0, 0, 2, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (7, 0, 0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 2),
    (7, 0, 0, 0, 0, 0, 0, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (7, 7, 7, 7, 7, 0, 0, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
)

FLOOR = tuple(
    tuple(5 if abs(x - 6) + abs(y - 4) <= 2 and 4 <= x <= 8 else 2 for y in range(16))
    for x in range(16)
)

CEILING = tuple(tuple(9 for _ in range(16)) for _ in range(16))

OBJMAP = tuple(
    tuple(2 if (x, y) == (3, 3) else 1 if (x, y) == (5, 5) else 0 for y in range(16))
    for x in range(16)
)


def default_objects() -> list[SceneObject]:
    """Return fresh copies of the fixed objects: a skull and a column."""
    return [
        SceneObject(mazex=5 * 64 + 32, mazey=5 * 64 + 32, imagenum=0),
        SceneObject(mazex=3 * 64 + 32, mazey=3 * 64 + 32, imagenum=3),
    ]


Grid = Sequence[Sequence[int]]


def _cell(coord: int) -> int:
    """Map square of a coordinate, truncating toward zero."""
    return int(coord / GRIDSIZE)


class FrameStats:
    """The times of the most recent frames, kept in whole milliseconds."""

    def __init__(self, capacity: int = MAXFRAMES) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._frames: deque[int] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._frames)

    def add(self, elapsed: int) -> None:
        """Record one frame that took `elapsed` microseconds."""
        self._frames.append(int(elapsed) // 1000)

    def average_ms(self) -> int | None:
        """Average frame time in milliseconds, or None when nothing was recorded."""
        if not self._frames:
            return None
        return sum(self._frames) // len(self._frames)

    def report(self) -> str:
        """Text summarising the average frame time and frame rate."""
        average = self.average_ms()
        if average is None:
            return "Average time per frame (ms): timer disabled\r\n"
        text = f"Average time per frame (ms): {average}\r\n"
        if average:
            text += f"Average frames per second: {1000 // average}"
        return text


def draw_map(screen: Screen, walls: Grid = WALLS) -> None:
    """Draw every wall square of the map as a 4x4 block of the automap."""
    for x, row in enumerate(walls):
        for y, square in enumerate(row):
            if square:
                screen.clear_window(
                    MAPX + y * MAP_CELL, MAPY + x * MAP_CELL, MAP_CELL, MAP_CELL, WALL_COLOR
                )


def _player_block(screen: Screen, xview: int, yview: int, color: int) -> None:
    screen.clear_window(
        MAPX + _cell(yview) * MAP_CELL,
        MAPY + _cell(xview) * MAP_CELL,
        MAP_CELL,
        MAP_CELL,
        color,
    )


def draw_player(screen: Screen, xview: int, yview: int) -> None:
    """Mark the viewer's square on the automap."""
    _player_block(screen, xview, yview, PLAYER_COLOR)


def erase_player(screen: Screen, xview: int, yview: int) -> None:
    """Clear the viewer's square on the automap."""
    _player_block(screen, xview, yview, 0)


def light_levels(intensity: float, multiplier: float = MULTIPLIER) -> bytes:
    """Light level 0..MAXLIGHT for every distance below MAXDISTANCE.

    The level falls off as intensity / distance * multiplier, capped at
    full light; distance 0 has level 0.
    """
    levels = bytearray(MAXDISTANCE)
    for distance in range(1, MAXDISTANCE):
        ratio = min(intensity / distance * multiplier, 1.0)
        levels[distance] = max(int(ratio * MAXLIGHT), 0)
    return bytes(levels)


def transpose_tiles(image) -> bytes:
    """Swap rows and columns inside each of the 15 64x64 tiles of a texture sheet."""
    data = bytearray(image)
    rows_needed = (NUMTEXTURES + TILES_PER_ROW - 1) // TILES_PER_ROW * TILE_SIZE
    if len(data) < rows_needed * TEXTURE_WIDTH:
        raise ValueError(
            f"texture sheet holds {len(data)} pixels, need {rows_needed * TEXTURE_WIDTH}"
        )
    for tile in range(NUMTEXTURES):
        row, column = divmod(tile, TILES_PER_ROW)
        origin = row * TEXTURE_WIDTH * TILE_SIZE + column * TILE_SIZE
        rows = [
            bytes(data[origin + y * TEXTURE_WIDTH:origin + y * TEXTURE_WIDTH + TILE_SIZE])
            for y in range(TILE_SIZE)
        ]
        for y, new_row in enumerate(zip(*rows)):
            start = origin + y * TEXTURE_WIDTH
            data[start:start + TILE_SIZE] = bytes(new_row)
    return bytes(data)


def can_move(walls: Grid, objmap: Grid, x: int, y: int) -> bool:
    """Whether the viewer may stand at (x, y): no wall and no object there."""
    xmaze, ymaze = _cell(x), _cell(y)
    if not (0 <= xmaze < len(walls) and 0 <= ymaze < len(walls[xmaze])):
        return False
    if not (0 <= xmaze < len(objmap) and 0 <= ymaze < len(objmap[xmaze])):
        return False
    return walls[xmaze][ymaze] == 0 and objmap[xmaze][ymaze] == 0