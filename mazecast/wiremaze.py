"""A wireframe view of a grid maze and a walker that moves through it."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .framebuffer import Screen
from .lines import draw_line

LINE_COLOR = 15
DEFAULT_VISIBILITY = 4

DEFAULT_MAZE = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 0, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1, 1, 0, 1),
    (1, 0, 0, 0, 1, 0, 0, 0, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 0, 0, 1, 1, 0, 0, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 1, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)

# Per direction: step forward, the square to the left, the square to the right.
_INCREMENT = ((-1, 0), (0, 1), (1, 0), (0, -1))
_LEFT = ((0, -1), (-1, 0), (0, 1), (1, 0))
_RIGHT = ((0, 1), (1, 0), (0, -1), (-1, 0))

Segment = tuple[int, int, int, int]
Grid = Sequence[Sequence[int]]

_BOX = ((82, 19, 294, 19), (294, 19, 294, 119), (294, 119, 82, 119), (82, 119, 82, 19))


@dataclass(frozen=True)
class _Frame:
    """The line segments that make up one step of depth in the view."""

    front: tuple[Segment, ...]
    left_wall: tuple[Segment, ...]
    left_open: tuple[Segment, ...]
    right_wall: tuple[Segment, ...]
    right_open: tuple[Segment, ...]


_FRAMES = (
    _Frame(
        front=(),
        left_wall=((82, 19, 135, 44), (135, 44, 135, 93), (135, 93, 82, 118)),
        left_open=((82, 44, 135, 44), (135, 44, 135, 93), (135, 93, 82, 93)),
        right_wall=((294, 19, 242, 44), (242, 44, 242, 93), (294, 118, 242, 93)),
        right_open=((294, 44, 242, 44), (242, 44, 242, 93), (242, 93, 294, 93)),
    ),
    _Frame(
        front=((135, 44, 135, 93), (242, 44, 242, 93), (135, 44, 242, 44), (135, 93, 242, 93)),
        left_wall=((135, 44, 162, 57), (162, 57, 162, 80), (162, 80, 135, 93)),
        left_open=((135, 57, 162, 57), (162, 57, 162, 80), (162, 80, 135, 80)),
        right_wall=((242, 44, 215, 57), (215, 57, 215, 80), (215, 80, 242, 93)),
        right_open=((242, 57, 215, 57), (215, 57, 215, 80), (215, 80, 242, 80)),
    ),
    _Frame(
        front=((162, 57, 162, 80), (215, 57, 215, 80), (162, 57, 215, 57), (162, 80, 215, 80)),
        left_wall=((162, 57, 175, 63), (175, 63, 175, 74), (175, 74, 162, 80)),
        left_open=((162, 63, 175, 63), (175, 63, 175, 74), (175, 74, 162, 74)),
        right_wall=((215, 57, 202, 63), (202, 63, 202, 74), (202, 74, 215, 80)),
        right_open=((215, 63, 202, 63), (202, 63, 202, 74), (202, 74, 215, 74)),
    ),
    _Frame(
        front=((175, 63, 175, 74), (202, 63, 202, 74), (175, 63, 202, 63), (175, 74, 202, 74)),
        left_wall=((175, 63, 182, 66), (182, 66, 182, 70), (182, 70, 175, 74)),
        left_open=((175, 66, 182, 66), (182, 66, 182, 70), (182, 70, 175, 70)),
        right_wall=((202, 63, 195, 66), (195, 66, 195, 70), (195, 70, 202, 74)),
        right_open=((202, 66, 195, 66), (195, 66, 195, 70), (195, 70, 202, 70)),
    ),
)


def _check_direction(direction: int) -> None:
    if direction not in range(4):
        raise ValueError(f"direction must be 0..3, got {direction}")


def _solid(maze: Grid, x: int, y: int) -> bool:
    """Whether square (x, y) is a wall; squares off the map count as walls."""
    if not (0 <= x < len(maze) and 0 <= y < len(maze[x])):
        return True
    return bool(maze[x][y])


def _draw_segments(screen: Screen, segments) -> None:
    for x1, y1, x2, y2 in segments:
        draw_line(screen, x1, y1, x2, y2, LINE_COLOR)


def draw_box(screen: Screen) -> None:
    """Draw the frame around the maze window."""
    _draw_segments(screen, _BOX)


def draw_maze(
    screen: Screen,
    maze: Grid,
    pos: tuple[int, int],
    direction: int,
    visibility: int = DEFAULT_VISIBILITY,
) -> None:
    """Clear the maze window and draw the view from `pos` facing `direction`.

    Squares are drawn outwards up to `visibility` steps and the view stops at
    the first wall straight ahead.
    """
    _check_direction(direction)
    screen.clear_window(83, 20, 211, 99)

    dx, dy = _INCREMENT[direction]
    left = _LEFT[direction]
    right = _RIGHT[direction]
    px, py = pos

    for dist in range(visibility):
        bx, by = px + dist * dx, py + dist * dy
        block_solid = _solid(maze, bx, by)

        if dist < len(_FRAMES):
            frame = _FRAMES[dist]
            if frame.front and block_solid:
                _draw_segments(screen, frame.front)
            else:
                for (sx, sy), wall_lines, open_lines in (
                    (left, frame.left_wall, frame.left_open),
                    (right, frame.right_wall, frame.right_open),
                ):
                    side_x, side_y = bx + sx, by + sy
                    if _solid(maze, side_x, side_y):
                        _draw_segments(screen, wall_lines)
                    elif _solid(maze, side_x + dx, side_y + dy):
                        _draw_segments(screen, open_lines)

        if block_solid:
            break


@dataclass
class Walker:
    """A viewer standing on a maze square and facing one of four directions."""

    maze: Grid = field(default=DEFAULT_MAZE)
    pos: tuple[int, int] = (5, 5)
    direction: int = 0

    def __post_init__(self) -> None:
        _check_direction(self.direction)
        self.pos = tuple(self.pos)

    def step(self, events) -> None:
        """Move or turn according to one set of input events.

        Forward wins over back and left over right; moves into walls are refused.
        """
        dx, dy = _INCREMENT[self.direction]
        x, y = self.pos
        if events.go_forward:
            target = (x + dx, y + dy)
        elif events.go_back:
            target = (x - dx, y - dy)
        else:
            target = None
        if target is not None and not _solid(self.maze, *target):
            self.pos = target

        if events.go_left:
            self.direction = (self.direction - 1) % 4
        elif events.go_right:
            self.direction = (self.direction + 1) % 4