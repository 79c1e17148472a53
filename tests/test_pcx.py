import struct

import pytest

from mazecast.pcx import (
    HEADER_SIZE,
    PALETTE_SIZE,
    PcxError,
    PcxHeader,
    compress,
    decode_rle,
    load_pcx,
    read_pcx,
)


def _header(version=5, xmin=0, ymin=0, xmax=3, ymax=1):
    return struct.pack(
        "<4B6h48s2B2h58s",
        10, version, 1, 8,
        xmin, ymin, xmax, ymax, 320, 200,
        bytes(48), 0, 1, xmax - xmin + 1, 1, bytes(58),
    )


def _pcx_file(pixels, palette_byte=252, **header):
    return _header(**header) + bytes(pixels) + b"\x0c" + bytes([palette_byte]) * PALETTE_SIZE


def _expand(packed):
    out = bytearray()
    index = 0
    while index < len(packed):
        control = packed[index]
        if control >= 128:
            out += bytes([packed[index + 1]]) * (control - 128)
            index += 2
        else:
            out += packed[index + 1:index + 1 + control]
            index += 1 + control
    return bytes(out)


def test_header_parsed():
    header = PcxHeader.from_bytes(_header(xmin=2, ymin=1, xmax=9, ymax=4))
    assert header.version == 5
    assert (header.xmin, header.ymin, header.xmax, header.ymax) == (2, 1, 9, 4)
    assert header.width == 9 - 2 + 1
    assert header.height == 4 - 1 + 1


def test_header_too_short():
    with pytest.raises(PcxError):
        PcxHeader.from_bytes(bytes(HEADER_SIZE - 1))


def test_decode_literals():
    assert decode_rle(bytes([1, 2, 3]), 3) == bytes([1, 2, 3])


def test_decode_run():
    assert decode_rle(bytes([0xC3, 7, 4]), 4) == bytes([7, 7, 7, 4])


def test_decode_high_value_through_run():
    assert decode_rle(bytes([0xC1, 0xC5]), 1) == bytes([0xC5])


def test_decode_truncated_pads_with_zero():
    assert decode_rle(bytes([5, 6]), 4) == bytes([5, 6, 0, 0])


def test_decode_stops_at_size():
    assert decode_rle(bytes([0xC9, 2]), 3) == bytes([2, 2, 2])


def test_read_pcx():
    pixels = bytes([1, 2, 3, 4, 5, 6, 7, 8])
    image = read_pcx(_pcx_file(pixels))
    assert image.image == pixels
    assert image.header.width * image.header.height == len(pixels)
    assert len(image.palette) == PALETTE_SIZE
    assert set(image.palette) == {63}


def test_read_pcx_rejects_version():
    with pytest.raises(PcxError):
        read_pcx(_pcx_file(bytes(8), version=3))


def test_read_pcx_rejects_wide_image():
    with pytest.raises(PcxError):
        read_pcx(_pcx_file(bytes(8), xmax=320, ymax=0))


def test_read_pcx_rejects_tall_image():
    with pytest.raises(PcxError):
        read_pcx(_pcx_file(bytes(8), xmax=0, ymax=200))


def test_read_pcx_rejects_missing_palette():
    with pytest.raises(PcxError):
        read_pcx(_header() + bytes(8))


def test_load_pcx(tmp_path):
    pixels = bytes([9, 8, 7, 6, 5, 4, 3, 2])
    path = tmp_path / "picture.pcx"
    path.write_bytes(_pcx_file(pixels, palette_byte=4))
    image = load_pcx(path)
    assert image.image == pixels
    assert set(image.palette) == {1}


def test_load_pcx_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pcx(tmp_path / "absent.pcx")


def test_compress_zero_run():
    assert compress(bytes(3)) == bytes([131, 0])


def test_compress_literal_run():
    assert compress(bytes([1, 2])) == bytes([2, 1, 2])


@pytest.mark.parametrize(
    "pixels",
    [
        bytes(),
        bytes(300),
        bytes(range(1, 256)),
        bytes([0, 0, 5, 5, 0, 9, 0, 0, 0]),
        bytes([i % 3 for i in range(1000)]),
    ],
)
def test_compress_round_trip(pixels):
    packed = compress(pixels)
    assert _expand(packed) == pixels


def test_compress_runs_are_bounded():
    packed = compress(bytes([7]) * 400 + bytes(400))
    index = 0
    while index < len(packed):
        control = packed[index]
        if control >= 128:
            assert control - 128 <= 127
            index += 2
        else:
            assert control <= 127
            index += 1 + control
    assert index == len(packed)