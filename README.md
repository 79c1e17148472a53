# mazecast

`mazecast` draws first-person and overhead views of tile mazes into an
indexed-colour frame buffer (320x200, 256 colours by default), the way classic
software raycasters did. It is pure Python with no third-party dependencies:
you get a `Screen` holding palette indices in a `bytearray` and decide what to
do with it.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

| Module | What it provides |
| --- | --- |
| `mazecast.framebuffer` | `Screen` (pixels, `clear`, `clear_window`, `copy_window`, `grab`, `blit`), and the fills `horizontal_line`, `vertical_line`, `whiteout`, `palette_matrix` |
| `mazecast.lines` | Bresenham lines: `line_offsets` yields buffer offsets, `draw_line` draws on a `Screen` |
| `mazecast.pcx` | 8-bit version 5 PCX images up to 320x200: `load_pcx`, `read_pcx`, `decode_rle`, `compress`, `PcxHeader`, `PcxImage`, `PcxError` |
| `mazecast.polydraw` | `Polygon` and `polydraw`, which fills a four-cornered wall polygon clipped to a viewport |
| `mazecast.makelite` | Light-sourcing tables: `build_light_tables`, `write_light_tables`, `read_light_tables`, and the `mazecast-makelite` command |
| `mazecast.events` | `get_events` turns an `InputState` snapshot into `Events`, for the devices selected by an `EventSource` mask, using a joystick `Calibration` |
| `mazecast.objdraw` | `SceneObject` and `draw_object`: scaled, lit, depth-tested sprites with transparent zero pixels |
| `mazecast.blokcast` | Raycaster for block-aligned floor heights with textured walls and floors: `draw_maze`, `render_demo` |
| `mazecast.tilecast` | Raycaster for per-pixel height tiles: `draw_maze`, `render_demo` |
| `mazecast.wiremaze` | Wireframe corridor view: `draw_box`, `draw_maze`, and `Walker`, which moves and turns on `Events` |
| `mazecast.hitimer` | `HTimer`, a microsecond stopwatch over an interval-timer clock, with `elapsed_pulses` and `pulses_to_microseconds` |
| `mazecast.game` | Game pieces: the maze maps, `default_objects`, automap drawing (`draw_map`, `draw_player`, `erase_player`), `light_levels`, `transpose_tiles`, `can_move` and `FrameStats` |

Maps are indexed `[x][y]`. Out-of-range drawing raises `IndexError` or
`ValueError` rather than writing outside the buffer.

## Examples

Load a texture sheet and draw a line:

```python
from mazecast.framebuffer import Screen
from mazecast.lines import draw_line
from mazecast.pcx import load_pcx

textures = load_pcx("walls.pcx")   # raises PcxError on an unsupported file
screen = Screen()
draw_line(screen, 10, 10, 300, 150, 15)
```

Render the built-in block-height scene from that sheet's pixels:

```python
from mazecast.blokcast import render_demo

view = render_demo(textures.image, 0.0, 32)   # angle in radians, viewer height
print(view.pixel(160, 150))
```

Walk the wireframe maze:

```python
from mazecast.events import Events
from mazecast.framebuffer import Screen
from mazecast.wiremaze import Walker, draw_box, draw_maze

walker = Walker()
walker.step(Events(go_forward=True))
screen = Screen()
draw_box(screen)
draw_maze(screen, walker.maze, walker.pos, walker.direction)
```

## Building light-sourcing tables

For each of 33 light levels, every palette colour is mapped to the palette
entry nearest that colour faded towards a target colour (black by default).
Build the tables from the palette of a 256-colour PCX file:

```
mazecast-makelite palette.pcx litesorc.dat
```

Up to three further numbers set the target colour, in the order red, blue,
green:

```
mazecast-makelite palette.pcx litesorc.dat 10 0 20
```

The output file holds 33 rows of 256 bytes. Read it back with
`read_light_tables`, or build the tables in memory with `build_light_tables`.

## What it does not do

- It opens no window and sets no video mode; showing or saving a `Screen` is
  up to you.
- It reads no input devices. `get_events` works on `InputState` values that
  you fill in yourself.
- `mazecast.game` holds the game's maps, automap, lighting and frame-timing
  helpers, but there is no renderer for the lit, textured game view with
  floors and ceilings, no title sequence and no playable game loop.