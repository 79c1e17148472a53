from mazecast.framebuffer import Screen
from mazecast.objdraw import SceneObject, draw_object

TOP = 16
BOT = 126
LEFT = 16
RIGHT = 218
LIT = 200


def _lite():
    table = bytearray(256)
    table[7] = LIT
    return bytes(table)


def _obj(size, screenx, screeny):
    return SceneObject(
        screenx=screenx, screeny=screeny, wbit=size, hbit=size, wdraw=size, hdraw=size
    )


def _changed(screen):
    return [
        (offset % screen.width, offset // screen.width, value)
        for offset, value in enumerate(screen.pixels)
        if value
    ]


def _draw(obj, bitmap, distance=10, depth=100):
    screen = Screen()
    draw_object(obj, bitmap, LEFT, TOP, RIGHT, BOT, distance, [depth] * 320, screen, _lite())
    return screen


def test_uniform_bitmap_drawn_through_light_table():
    screen = _draw(_obj(4, 100, 50), bytes([7]) * 16)
    changed = _changed(screen)
    assert screen.pixel(100, 50) == LIT
    assert changed
    assert all(value == LIT for _, _, value in changed)
    assert all(100 <= x <= 103 and 50 <= y <= 53 for x, y, _ in changed)


def test_zero_pixels_are_transparent():
    screen = _draw(_obj(4, 100, 50), bytes(16))
    assert _changed(screen) == []


def test_hidden_behind_wall():
    screen = _draw(_obj(4, 100, 50), bytes([7]) * 16, distance=100, depth=100)
    assert _changed(screen) == []


def test_horizontal_clipping():
    screen = _draw(_obj(4, RIGHT + 1, 50), bytes([7]) * 16)
    assert _changed(screen) == []
    partial = _draw(_obj(4, LEFT - 2, 50), bytes([7]) * 16)
    assert all(x >= LEFT for x, _, _ in _changed(partial))
    assert partial.pixel(LEFT, 50) == LIT


def test_top_clipping():
    screen = _draw(_obj(16, 100, TOP - 6), bytes([7]) * 256)
    changed = _changed(screen)
    assert all(y >= TOP for _, y, _ in changed)
    assert screen.pixel(100, TOP) == LIT


def test_bottom_clipping():
    screen = _draw(_obj(16, 100, BOT - 6), bytes([7]) * 256)
    changed = _changed(screen)
    assert all(y <= BOT for _, y, _ in changed)
    assert screen.pixel(100, BOT) == LIT


def test_zero_size_draws_nothing():
    obj = _obj(4, 100, 50)
    obj.wdraw = 0
    screen = _draw(obj, bytes([7]) * 16)
    assert _changed(screen) == []