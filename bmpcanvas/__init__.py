"""Draw pixels, lines and circles on a 32-bit canvas and save it as BMP."""

from .bmp import BmpFormatError, BmpInfo, decode, encode, read_bmp, save_bmp, write_bmp
from .color import from_argb, from_rgb
from .draw import PixelCanvas
from .image import BmpImage

__all__ = [
    "BmpFormatError",
    "BmpImage",
    "BmpInfo",
    "PixelCanvas",
    "decode",
    "encode",
    "from_argb",
    "from_rgb",
    "read_bmp",
    "save_bmp",
    "write_bmp",
]
