#!/usr/bin/env python
import logging
import sys
from typing import cast

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

import jsonargparse

from .config import CanvasConfig
from .image import BmpImage
from .scene import load_scene, render_scene

logger = logging.getLogger(__name__)


class IndentMultiline(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord):
        s = super().format(record)
        head, *rest = s.splitlines()
        if rest:
            rest = ["    " + line for line in rest]
            return "\n".join([head, *rest])
        return s


def setup_logging(verbose: bool = False):
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(IndentMultiline(fmt))
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(handler)


def render(config: CanvasConfig) -> BmpImage:
    scene = load_scene(config.scene_file)
    image = render_scene(
        scene,
        width=config.width,
        height=config.height,
        background=config.background,
        horizontal_ppm=config.horizontal_ppm,
        vertical_ppm=config.vertical_ppm,
    )
    image.save(config.output)
    logger.info(f"Saved {config.output}")
    return image


def main():
    jsonargparse.set_parsing_settings(docstring_parse_attribute_docstrings=True)

    args = cast(
        "CanvasConfig",
        jsonargparse.auto_cli(CanvasConfig, as_positional=True),  # pyright: ignore[reportUnknownMemberType]
    )
    setup_logging(args.verbose)
    logger.debug(f"Config: {args}")
    render(args)


if __name__ == "__main__":
    main()
