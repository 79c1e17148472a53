import struct

import pytest

from mazecast.makelite import (
    MAXLIGHT,
    TABLE_SIZE,
    build_light_tables,
    main,
    read_light_tables,
    write_light_tables,
)

BLACK_WHITE = bytes([0, 0, 0, 63, 63, 63])


def _pcx_file(path, palette):
    header = (
        bytes([10, 5, 1, 8])
        + struct.pack("<6h", 0, 0, 0, 0, 320, 200)
        + bytes(48)
        + bytes([0, 1])
        + struct.pack("<2h", 1, 1)
        + bytes(58)
    )
    path.write_bytes(header + b"\x05" + bytes(palette))


def test_table_shape():
    tables = build_light_tables(BLACK_WHITE, (0, 0, 0))
    assert len(tables) == MAXLIGHT + 1
    assert all(len(row) == 2 for row in tables)


def test_full_light_keeps_colour_and_no_light_reaches_target():
    tables = build_light_tables(BLACK_WHITE, (0, 0, 0))
    assert tables[MAXLIGHT] == bytes([0, 1])
    assert tables[0] == bytes([0, 0])


def test_white_target():
    tables = build_light_tables(BLACK_WHITE, (63, 63, 63))
    assert tables[0] == bytes([1, 1])
    assert tables[MAXLIGHT] == bytes([0, 1])


def test_duplicate_colours_map_to_first_index():
    palette = bytes([10, 20, 30, 40, 40, 40, 10, 20, 30])
    tables = build_light_tables(palette, (0, 0, 0))
    assert tables[MAXLIGHT][2] == 0
    assert tables[MAXLIGHT][1] == 1


def test_entries_are_valid_indices():
    palette = bytes(range(0, 60, 2))
    tables = build_light_tables(palette, (5, 5, 5))
    assert all(value < len(palette) // 3 for row in tables for value in row)


def test_bad_palette_length():
    with pytest.raises(ValueError):
        build_light_tables(bytes([1, 2]), (0, 0, 0))


def test_write_read_round_trip(tmp_path):
    tables = tuple(bytes([level % 256]) * 256 for level in range(MAXLIGHT + 1))
    path = tmp_path / "litesorc.dat"
    write_light_tables(tables, path)
    assert path.stat().st_size == TABLE_SIZE
    assert read_light_tables(path) == tables


def test_read_wrong_size(tmp_path):
    path = tmp_path / "short.dat"
    path.write_bytes(bytes(10))
    with pytest.raises(ValueError):
        read_light_tables(path)


def test_main_requires_source(capsys):
    assert main([]) == 1
    assert "source file" in capsys.readouterr().out


def test_main_requires_target(capsys):
    assert main(["only.pcx"]) == 1
    assert "target file" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.pcx"), str(tmp_path / "out.dat")]) == 1


def test_main_writes_tables(tmp_path, capsys):
    palette = bytearray(768)
    palette[3:6] = bytes([252, 252, 252])
    source = tmp_path / "pal.pcx"
    _pcx_file(source, palette)
    target = tmp_path / "out.dat"
    assert main([str(source), str(target)]) == 0
    assert "Done!" in capsys.readouterr().out
    tables = read_light_tables(target)
    assert tables[MAXLIGHT][1] == 1
    assert tables[0][1] == 0
    assert tables[MAXLIGHT][5] == 0