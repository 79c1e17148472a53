import pytest

from mazecast.blokcast import draw_maze, render_demo
from mazecast.framebuffer import Screen

WIDTH = 320
HEIGHT = 200


def tile_textures():
    """A texture sheet in which tile n is filled with colour n + 1."""
    data = bytearray(WIDTH * HEIGHT)
    for tile in range(15):
        top = (tile // 5) * 64
        left = (tile % 5) * 64
        for row in range(top, top + 64):
            start = row * WIDTH + left
            data[start:start + 64] = bytes([tile + 1]) * 64
    return bytes(data)


def constant_map(value):
    return [[value] * 16 for _ in range(16)]


def column_pixels(screen, column):
    return [screen.pixel(column, row) for row in range(HEIGHT)]


def test_flat_floor_draws_only_below_horizon():
    screen = Screen(WIDTH, HEIGHT)
    draw_maze(
        constant_map(3), constant_map(4), constant_map(0), screen,
        544, 544, 0.0, 32, tile_textures(),
    )
    assert screen.pixels[: 100 * WIDTH] == bytes(100 * WIDTH)
    assert set(screen.pixels) == {0, 5}
    assert screen.pixel(160, 198) == 5


def test_last_row_and_last_column_are_left_alone():
    screen = Screen(WIDTH, HEIGHT)
    draw_maze(
        constant_map(3), constant_map(4), constant_map(0), screen,
        544, 544, 0.0, 32, tile_textures(),
    )
    assert all(value == 0 for value in column_pixels(screen, 319))
    assert screen.grab(0, 199, WIDTH, 1) == bytes(WIDTH)


def test_checkered_floor_uses_both_tiles():
    floor = [[(x + y) % 2 for y in range(16)] for x in range(16)]
    screen = Screen(WIDTH, HEIGHT)
    draw_maze(
        constant_map(3), floor, constant_map(0), screen,
        544, 544, 0.0, 32, tile_textures(),
    )
    assert set(screen.pixels) == {0, 1, 2}


def test_raised_block_shows_wall_above_floor():
    heights = [[64 if y >= 11 else 0 for y in range(16)] for x in range(16)]
    screen = Screen(WIDTH, HEIGHT)
    draw_maze(
        constant_map(3), constant_map(0), heights, screen,
        544, 544, 0.0, 32, tile_textures(),
    )
    pixels = column_pixels(screen, 160)
    wall_rows = [row for row, value in enumerate(pixels) if value == 3]
    floor_rows = [row for row, value in enumerate(pixels) if value == 1]
    assert wall_rows
    assert floor_rows
    assert max(wall_rows) < min(floor_rows)
    assert wall_rows == list(range(wall_rows[0], wall_rows[-1] + 1))
    assert pixels[0] == 0
    assert pixels[198] == 1


def test_wall_reaches_above_horizon_when_taller_than_viewer():
    heights = [[64 if y >= 11 else 0 for y in range(16)] for x in range(16)]
    screen = Screen(WIDTH, HEIGHT)
    draw_maze(
        constant_map(3), constant_map(0), heights, screen,
        544, 544, 0.0, 32, tile_textures(),
    )
    pixels = column_pixels(screen, 160)
    wall_rows = [row for row, value in enumerate(pixels) if value == 3]
    assert min(wall_rows) < 99 < max(wall_rows)


def test_wrong_screen_size_is_rejected():
    with pytest.raises(ValueError):
        draw_maze(
            constant_map(3), constant_map(0), constant_map(0), Screen(100, 100),
            544, 544, 0.0, 32, tile_textures(),
        )


def test_viewer_outside_maze_is_rejected():
    with pytest.raises(ValueError):
        draw_maze(
            constant_map(3), constant_map(0), constant_map(0), Screen(WIDTH, HEIGHT),
            2000, 544, 0.0, 32, tile_textures(),
        )


def test_map_of_wrong_shape_is_rejected():
    short = [[0] * 16 for _ in range(15)]
    with pytest.raises(ValueError):
        draw_maze(
            constant_map(3), short, constant_map(0), Screen(WIDTH, HEIGHT),
            544, 544, 0.0, 32, tile_textures(),
        )


def test_render_demo_draws_tile_colours():
    textures = tile_textures()
    screen = render_demo(textures)
    assert (screen.width, screen.height) == (WIDTH, HEIGHT)
    colours = set(screen.pixels)
    assert colours <= set(range(16))
    assert colours - {0}
    assert all(value == 0 for value in column_pixels(screen, 319))


def test_render_demo_depends_on_viewer_height():
    textures = tile_textures()
    low = render_demo(textures, 0.0, 32)
    high = render_demo(textures, 0.0, 90)
    assert set(high.pixels) <= set(range(16))
    assert low.pixels != high.pixels