"""
Uncompressed 32 bits-per-pixel BMP encoding.

The file is a 14 byte file header, a 40 byte BITMAPINFOHEADER and the
pixel rows. All integer fields are little-endian. Rows are written in
canvas order (row 0 first) with each pixel stored as a little-endian
0xAARRGGBB word. Rows need no padding since every pixel is 4 bytes.
"""

import array
import struct
import sys
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import BinaryIO, Final

from .draw import PixelCanvas

logger = getLogger(__name__)

FILE_HEADER: Final = struct.Struct("<2sIHHI")
INFO_HEADER: Final = struct.Struct("<IiiHHIIiiII")
HEADER_SIZE: Final = FILE_HEADER.size + INFO_HEADER.size  # 54
BITS_PER_PIXEL: Final = 32
BYTES_PER_PIXEL: Final = BITS_PER_PIXEL // 8


class BmpFormatError(ValueError):
    """Data is not a BMP in the layout this module writes."""


@dataclass(frozen=True)
class BmpInfo:
    """Header metadata of an image. Densities are in pixels per meter."""

    width: int
    height: int
    horizontal_ppm: int = 2835
    vertical_ppm: int = 2835

    def __post_init__(self):
        for name in ("width", "height", "horizontal_ppm", "vertical_ppm"):
            value = getattr(self, name)
            if not -(2**31) <= value < 2**31:
                raise ValueError(f"{name} {value} does not fit a 32-bit field")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"size must not be negative ({self.width}x{self.height})")
        if self.file_size >= 2**32:
            raise ValueError(f"{self.width}x{self.height} image is too large for BMP")

    @property
    def image_size(self) -> int:
        return BYTES_PER_PIXEL * self.width * self.height

    @property
    def file_size(self) -> int:
        return HEADER_SIZE + self.image_size


def encode_header(info: BmpInfo) -> bytes:
    """Return the 54 header bytes describing `info`."""
    file_header = FILE_HEADER.pack(
        b"BM",
        info.file_size,
        0,  # reserved
        0,  # reserved
        HEADER_SIZE,  # pixel array offset
    )
    info_header = INFO_HEADER.pack(
        INFO_HEADER.size,
        info.width,
        info.height,
        1,  # color planes
        BITS_PER_PIXEL,
        0,  # no compression
        info.image_size,
        info.horizontal_ppm,
        info.vertical_ppm,
        0,  # palette colors
        0,  # important colors
    )
    return file_header + info_header


def encode_pixels(canvas: PixelCanvas) -> bytes:
    """Serialize the canvas rows, top to bottom, as little-endian words."""
    out = bytearray()
    for row in canvas.rows():
        if sys.byteorder == "big":
            row.byteswap()
        out += row.tobytes()
    return bytes(out)


def _check_size(info: BmpInfo, canvas: PixelCanvas) -> None:
    if (info.width, info.height) != (canvas.width, canvas.height):
        raise ValueError(
            f"header size {info.width}x{info.height} does not match "
            f"canvas size {canvas.width}x{canvas.height}"
        )


def encode(
    width: int, height: int, hppm: int, vppm: int, canvas: PixelCanvas
) -> bytes:
    """Return a complete BMP file for `canvas`."""
    info = BmpInfo(width, height, hppm, vppm)
    _check_size(info, canvas)
    data = encode_header(info) + encode_pixels(canvas)
    logger.debug(f"Encoded {width}x{height} bitmap, {len(data)} bytes")
    return data


def write_bmp(sink: BinaryIO, info: BmpInfo, canvas: PixelCanvas) -> None:
    """Write header then pixels to `sink`. Write errors propagate."""
    _check_size(info, canvas)
    sink.write(encode_header(info))
    sink.write(encode_pixels(canvas))


def save_bmp(path: Path | str, info: BmpInfo, canvas: PixelCanvas) -> None:
    """Write a BMP file. A failed write can leave a truncated file behind."""
    with open(path, "wb") as f:
        write_bmp(f, info, canvas)
    logger.debug(f"Wrote {info.width}x{info.height} bitmap to {path}")


def decode(data: bytes) -> tuple[BmpInfo, PixelCanvas]:
    """Parse a BMP produced by `encode` back into its header and canvas."""
    if len(data) < HEADER_SIZE:
        raise BmpFormatError(f"truncated header ({len(data)} bytes)")

    magic, file_size, _, _, offset = FILE_HEADER.unpack_from(data, 0)
    (
        info_size,
        width,
        height,
        planes,
        bpp,
        compression,
        image_size,
        hppm,
        vppm,
        _,
        _,
    ) = INFO_HEADER.unpack_from(data, FILE_HEADER.size)

    if magic != b"BM":
        raise BmpFormatError(f"bad signature {magic!r}")
    if info_size != INFO_HEADER.size or offset != HEADER_SIZE:
        raise BmpFormatError(
            f"unsupported header layout (info size {info_size}, offset {offset})"
        )
    if planes != 1 or bpp != BITS_PER_PIXEL or compression != 0:
        raise BmpFormatError(
            f"unsupported format (planes {planes}, bpp {bpp}, compression {compression})"
        )
    if width < 0 or height < 0:
        raise BmpFormatError(f"unsupported size {width}x{height}")

    try:
        info = BmpInfo(width, height, hppm, vppm)
    except ValueError as e:
        raise BmpFormatError(str(e)) from e
    if image_size != info.image_size or file_size != info.file_size:
        raise BmpFormatError(
            f"size fields ({file_size}, {image_size}) do not match {width}x{height}"
        )
    if len(data) < info.file_size:
        raise BmpFormatError(
            f"truncated pixel data ({len(data)} of {info.file_size} bytes)"
        )

    canvas = PixelCanvas(width, height)
    pixels = array.array("I")
    pixels.frombytes(data[HEADER_SIZE : info.file_size])
    if sys.byteorder == "big":
        pixels.byteswap()
    canvas.array[:] = pixels
    return info, canvas


def read_bmp(source: BinaryIO | Path | str) -> tuple[BmpInfo, PixelCanvas]:
    if isinstance(source, (str, Path)):
        with open(source, "rb") as f:
            return decode(f.read())
    return decode(source.read())
