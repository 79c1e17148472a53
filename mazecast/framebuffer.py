"""An indexed-colour frame buffer and the simple fills drawn into it."""

from __future__ import annotations

SCREEN_WIDTH = 320
SCREEN_HEIGHT = 200
WHITE = 0x0F

_SWATCH_WIDTH = 20
_SWATCH_HEIGHT = 12
_SWATCHES_PER_ROW = 16


class Screen:
    """A rectangle of 8-bit palette indices stored row after row."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"screen size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height)

    def __len__(self) -> int:
        return len(self.pixels)

    def offset(self, x: int, y: int) -> int:
        """Return the linear offset of pixel (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.width}x{self.height} screen")
        return y * self.width + x

    def pixel(self, x: int, y: int) -> int:
        return self.pixels[self.offset(x, y)]

    def set_pixel(self, x: int, y: int, color: int) -> None:
        self.pixels[self.offset(x, y)] = color

    def _check_window(self, x: int, y: int, width: int, height: int) -> None:
        if (
            width < 0
            or height < 0
            or x < 0
            or y < 0
            or x + width > self.width
            or y + height > self.height
        ):
            raise ValueError(
                f"window {width}x{height} at ({x}, {y}) does not fit a "
                f"{self.width}x{self.height} screen"
            )

    def _row_slices(self, x: int, y: int, width: int, height: int):
        for row in range(y, y + height):
            start = row * self.width + x
            yield slice(start, start + width)

    def clear(self, color: int = 0) -> None:
        """Fill the whole screen with one colour."""
        self.pixels[:] = bytes([color]) * len(self.pixels)

    def clear_window(self, x: int, y: int, width: int, height: int, color: int = 0) -> None:
        """Fill a rectangular window with one colour."""
        self._check_window(x, y, width, height)
        fill = bytes([color]) * width
        for row in self._row_slices(x, y, width, height):
            self.pixels[row] = fill

    def copy_window(self, source: Screen, x: int, y: int, width: int, height: int) -> None:
        """Copy the same window of another screen into this one."""
        self._check_window(x, y, width, height)
        source._check_window(x, y, width, height)
        for dest, src in zip(
            self._row_slices(x, y, width, height),
            source._row_slices(x, y, width, height),
        ):
            self.pixels[dest] = source.pixels[src]

    def grab(self, x: int, y: int, width: int, height: int) -> bytes:
        """Return the pixels of a window as a row-major bitmap."""
        self._check_window(x, y, width, height)
        return b"".join(bytes(self.pixels[row]) for row in self._row_slices(x, y, width, height))

    def blit(self, x: int, y: int, width: int, height: int, sprite) -> None:
        """Copy a row-major bitmap into a window, zero pixels included."""
        self._check_window(x, y, width, height)
        data = bytes(sprite)
        if len(data) < width * height:
            raise ValueError(f"sprite holds {len(data)} pixels, need {width * height}")
        for index, row in enumerate(self._row_slices(x, y, width, height)):
            self.pixels[row] = data[index * width:(index + 1) * width]


def horizontal_line(
    screen: Screen, x: int = 10, y: int = 100, length: int = 300, color: int = WHITE
) -> None:
    """Set `length` consecutive pixels starting at (x, y)."""
    start = screen.offset(x, y)
    end = start + length
    if length < 0 or end > len(screen):
        raise IndexError(f"line of {length} pixels runs off the screen")
    screen.pixels[start:end] = bytes([color]) * length


def vertical_line(
    screen: Screen, x: int = 160, y: int = 10, length: int = 180, color: int = WHITE
) -> None:
    """Set `length` pixels downwards starting at (x, y)."""
    for row in range(y, y + length):
        screen.set_pixel(x, row, color)


def whiteout(screen: Screen) -> None:
    """Fill the whole screen with white."""
    screen.clear(WHITE)


def palette_matrix(screen: Screen) -> None:
    """Draw all 256 colours as a 16x16 grid of 20x12 swatches."""
    for color in range(256):
        row, column = divmod(color, _SWATCHES_PER_ROW)
        screen.clear_window(
            column * _SWATCH_WIDTH,
            row * _SWATCH_HEIGHT,
            _SWATCH_WIDTH,
            _SWATCH_HEIGHT,
            color,
        )