from logging import getLogger
from pathlib import Path
from typing import BinaryIO

from .bmp import BmpInfo, encode, read_bmp, save_bmp, write_bmp
from .color import WHITE
from .draw import PixelCanvas, ScanFunction

logger = getLogger(__name__)


class BmpImage:
    """A canvas together with the header metadata it is saved with."""

    def __init__(
        self,
        width: int,
        height: int,
        horizontal_ppm: int = 2835,
        vertical_ppm: int = 2835,
        background: int = WHITE,
    ):
        self.info: BmpInfo = BmpInfo(width, height, horizontal_ppm, vertical_ppm)
        self.canvas: PixelCanvas = PixelCanvas(width, height, background)

    @property
    def width(self) -> int:
        return self.info.width

    @property
    def height(self) -> int:
        return self.info.height

    def set_pixel(self, x: int, y: int, color: int) -> None:
        self.canvas.set_pixel(x, y, color)

    def get_pixel(self, x: int, y: int) -> int:
        return self.canvas.get_pixel(x, y)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
        self.canvas.draw_line(x0, y0, x1, y1, color)

    def draw_circle(self, cx: int, cy: int, radius: int, color: int) -> None:
        self.canvas.draw_circle(cx, cy, radius, color)

    def apply_on_x(self, fn: ScanFunction) -> None:
        self.canvas.apply_on_x(fn)

    def apply_on_y(self, fn: ScanFunction) -> None:
        self.canvas.apply_on_y(fn)

    def to_bytes(self) -> bytes:
        i = self.info
        return encode(i.width, i.height, i.horizontal_ppm, i.vertical_ppm, self.canvas)

    def write(self, sink: BinaryIO) -> None:
        write_bmp(sink, self.info, self.canvas)

    def save(self, path: Path | str) -> None:
        save_bmp(path, self.info, self.canvas)

    @classmethod
    def load(cls, source: BinaryIO | Path | str) -> "BmpImage":
        info, canvas = read_bmp(source)
        image = cls(info.width, info.height, info.horizontal_ppm, info.vertical_ppm)
        image.canvas = canvas
        logger.debug(f"Loaded {info.width}x{info.height} bitmap")
        return image
