"""Reading 256-colour PCX images and packing pixel data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

HEADER_SIZE = 128
PALETTE_SIZE = 3 * 256
MAX_WIDTH = 320
MAX_HEIGHT = 200
SUPPORTED_VERSION = 5
MAX_RUN = 127

_HEADER_FORMAT = struct.Struct("<4B6h48s2B2h58s")


class PcxError(ValueError):
    """Raised when PCX data cannot be read."""


@dataclass(frozen=True)
class PcxHeader:
    manufacturer: int
    version: int
    encoding: int
    bits_per_pixel: int
    xmin: int
    ymin: int
    xmax: int
    ymax: int
    hres: int
    vres: int
    palette16: bytes
    reserved: int
    color_planes: int
    bytes_per_line: int
    palette_type: int

    @classmethod
    def from_bytes(cls, data) -> PcxHeader:
        """Parse the 128-byte header at the start of `data`."""
        if len(data) < HEADER_SIZE:
            raise PcxError(f"PCX header needs {HEADER_SIZE} bytes, got {len(data)}")
        fields = _HEADER_FORMAT.unpack_from(bytes(data[:HEADER_SIZE]))
        return cls(*fields[:-1])

    @property
    def width(self) -> int:
        return self.xmax - self.xmin + 1

    @property
    def height(self) -> int:
        return self.ymax - self.ymin + 1


@dataclass(frozen=True)
class PcxImage:
    """A decoded image: pixels row by row and a palette of 6-bit RGB values."""

    header: PcxHeader
    image: bytes
    palette: bytes


def decode_rle(data, size: int) -> bytes:
    """Expand PCX run-length data into `size` pixels.

    If the data runs out early the remaining pixels are zero.
    """
    source = iter(bytes(data))
    out = bytearray()
    count = 0
    value = 0
    in_run = False
    for _ in range(size):
        if not in_run:
            byte = next(source, None)
            if byte is None:
                break
            value = byte
            if value > 0xBF:
                count = value & 0x3F
                byte = next(source, None)
                if byte is None:
                    break
                value = byte
                count = (count - 1) & 0xFF
                if count > 0:
                    in_run = True
        else:
            count = (count - 1) & 0xFF
            if count == 0:
                in_run = False
        out.append(value)
    out.extend(bytes(size - len(out)))
    return bytes(out)


def read_pcx(data) -> PcxImage:
    """Decode a complete PCX file held in memory."""
    data = bytes(data)
    header = PcxHeader.from_bytes(data)
    if header.width > MAX_WIDTH:
        raise PcxError(f"image width {header.width} exceeds {MAX_WIDTH}")
    if header.height > MAX_HEIGHT:
        raise PcxError(f"image height {header.height} exceeds {MAX_HEIGHT}")
    if header.version != SUPPORTED_VERSION:
        raise PcxError(f"unsupported PCX version {header.version}")
    if len(data) < HEADER_SIZE + PALETTE_SIZE:
        raise PcxError("PCX data too short to hold a palette")
    size = max(header.width, 0) * max(header.height, 0)
    image = decode_rle(data[HEADER_SIZE:], size)
    palette = bytes(value >> 2 for value in data[-PALETTE_SIZE:])
    return PcxImage(header, image, palette)


def load_pcx(path) -> PcxImage:
    """Read and decode the PCX file at `path`."""
    return read_pcx(Path(path).read_bytes())


def compress(image) -> bytes:
    """Pack pixels into runs of zeros and runs of literal non-zero bytes.

    A zero run is stored as (length + 128, 0); a literal run as its length
    followed by the bytes. No run is longer than 127 pixels.
    """
    data = bytes(image)
    size = len(data)
    out = bytearray()
    ptr = 0
    while ptr < size:
        zero = data[ptr] == 0
        start = ptr
        while ptr < size and (data[ptr] == 0) == zero and ptr - start < MAX_RUN:
            ptr += 1
        run = ptr - start
        if zero:
            out += bytes((run + 128, 0))
        else:
            out.append(run)
            out += data[start:ptr]
    return bytes(out)