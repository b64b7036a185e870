from dataclasses import dataclass
from pathlib import Path


@dataclass
class CanvasConfig:
    scene_file: Path
    """YAML scene with size, background and drawing commands"""

    output: Path = Path("image.bmp")
    """Where to write the bitmap"""

    width: int | None = None
    """Override the scene width"""

    height: int | None = None
    """Override the scene height"""

    background: str | None = None
    """Override the scene background ('0xAARRGGBB', '#RRGGBB' or a name)"""

    horizontal_ppm: int | None = None
    vertical_ppm: int | None = None

    verbose: bool = False
    """Log debug output"""
