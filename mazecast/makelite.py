"""Building the light-sourcing tables that darken palette colours by distance."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path

from .pcx import PcxError, load_pcx

MAXLIGHT = 32
PALETTE_COLORS = 256
TABLE_SIZE = (MAXLIGHT + 1) * PALETTE_COLORS

_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

Color = tuple[int, int, int]


def _split_palette(palette) -> list[Color]:
    data = bytes(palette)
    if not data or len(data) % 3:
        raise ValueError(f"palette must hold whole RGB triples, got {len(data)} bytes")
    channels = iter(data)
    return list(zip(channels, channels, channels))


def _light_columns(colors: Sequence[Color], target: Color) -> Iterator[list[int]]:
    """Yield, for each palette colour, its closest match at every light level."""
    red_target, green_target, blue_target = target
    cache: dict[tuple[float, float, float], int] = {}

    def closest(lite: tuple[float, float, float]) -> int:
        if lite not in cache:
            red, green, blue = lite
            cache[lite] = min(
                enumerate(colors),
                key=lambda item: abs(item[1][0] - red)
                + abs(item[1][1] - green)
                + abs(item[1][2] - blue),
            )[0]
        return cache[lite]

    for red, green, blue in colors:
        yield [
            closest(
                (
                    (red - red_target) / MAXLIGHT * level + red_target,
                    (green - green_target) / MAXLIGHT * level + green_target,
                    (blue - blue_target) / MAXLIGHT * level + blue_target,
                )
            )
            for level in range(MAXLIGHT + 1)
        ]


def build_light_tables(palette, target: Color = (0, 0, 0)) -> tuple[bytes, ...]:
    """Return one row per light level 0..MAXLIGHT mapping each colour to its lit colour.

    At level 0 every colour fades fully to `target`; at MAXLIGHT it keeps its
    own value. The nearest palette entry is found by summed channel distance,
    the lowest index winning ties.
    """
    colors = _split_palette(palette)
    columns = list(_light_columns(colors, tuple(target)))
    return tuple(bytes(row) for row in zip(*columns))


def write_light_tables(tables, path) -> None:
    """Write the tables to `path`, level after level."""
    Path(path).write_bytes(b"".join(bytes(row) for row in tables))


def read_light_tables(path) -> tuple[bytes, ...]:
    """Read a full set of 256-colour tables written by `write_light_tables`."""
    data = Path(path).read_bytes()
    if len(data) != TABLE_SIZE:
        raise ValueError(f"light table file holds {len(data)} bytes, expected {TABLE_SIZE}")
    return tuple(
        data[start:start + PALETTE_COLORS] for start in range(0, TABLE_SIZE, PALETTE_COLORS)
    )


def _atof(text: str) -> int:
    match = _NUMBER.match(text)
    return int(float(match.group())) if match else 0


def main(argv=None) -> int:
    """Generate light tables from a PCX palette: SOURCE TARGET [RED [BLUE [GREEN]]]."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 1:
        print("You must type a name for the source file.")
        return 1
    if len(args) < 2:
        print("You must type a name for the target file.")
        return 1

    red_target = _atof(args[2]) if len(args) >= 3 else 0
    blue_target = _atof(args[3]) if len(args) >= 4 else 0
    green_target = _atof(args[4]) if len(args) >= 5 else 0

    print("Loading palette.")
    try:
        image = load_pcx(args[0])
    except (OSError, PcxError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print("Calculating lightsourcing tables", end="", flush=True)
    columns = []
    for column in _light_columns(
        _split_palette(image.palette), (red_target, green_target, blue_target)
    ):
        print(".", end="", flush=True)
        columns.append(column)
    tables = tuple(bytes(row) for row in zip(*columns))

    print("\nWriting lightsourcing tables to disk.")
    try:
        write_light_tables(tables, args[1])
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())