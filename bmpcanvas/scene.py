from collections.abc import Iterable
from logging import getLogger
from pathlib import Path
from typing import Any, Literal, cast

import yaml

from .color import WHITE, channels, from_argb, parse_color
from .image import BmpImage

logger = getLogger(__name__)

Command = Literal["pixel", "line", "circle", "clear", "hgradient", "vgradient"]


class SceneError(ValueError):
    pass


def blend(c0: int, c1: int, pos: int, length: int) -> int:
    """Linear per-channel interpolation from c0 (pos 0) to c1 (pos length-1)."""
    if length <= 1:
        return c0
    return from_argb(
        *(a + (b - a) * pos // (length - 1) for a, b in zip(channels(c0), channels(c1)))
    )


class ScenePainter:
    """Applies text drawing commands such as `line 0 0 10 10 red` to an image."""

    def __init__(self, image: BmpImage):
        self.image: BmpImage = image

    def _args(self, cmd: str, parts: list[str], colors: int, count: int) -> list[int]:
        if len(parts) != count:
            raise SceneError(f"'{cmd}' takes {count} arguments, got {len(parts)}")
        try:
            coords = [int(p, 0) for p in parts[: count - colors]]
            return coords + [parse_color(p) for p in parts[count - colors :]]
        except ValueError as e:
            raise SceneError(f"bad arguments for '{cmd}': {e}") from e

    def add_text_command(self, s: str) -> bool:
        """Draw one command. Returns False if the command was not recognized."""
        parts = s.split()
        if not parts:
            return False
        cmd, args = cast("Command", parts[0]), parts[1:]
        image = self.image

        match cmd:
            case "pixel":
                image.set_pixel(*self._args(cmd, args, 1, 3))
            case "line":
                image.draw_line(*self._args(cmd, args, 1, 5))
            case "circle":
                cx, cy, r, col = self._args(cmd, args, 1, 4)
                if r < 0:
                    raise SceneError(f"negative radius in '{s}'")
                image.draw_circle(cx, cy, r, col)
            case "clear":
                image.canvas.clear(*self._args(cmd, args, 1, 1))
            case "hgradient":
                c0, c1 = self._args(cmd, args, 2, 2)
                w, h = image.width, image.height
                image.apply_on_x(
                    lambda x: ((y, blend(c0, c1, x, w)) for y in range(h))
                )
            case "vgradient":
                c0, c1 = self._args(cmd, args, 2, 2)
                w, h = image.width, image.height
                image.apply_on_y(
                    lambda y: ((x, blend(c0, c1, y, h)) for x in range(w))
                )
            case _:
                logger.warning(f"Unhandled cmd '{s}'")
                return False
        logger.debug(f"Painted '{s}'")
        return True

    def paint(self, commands: Iterable[str]) -> int:
        """Run all commands, returning how many were drawn."""
        return sum(1 for c in commands if self.add_text_command(c))


def load_scene(path: Path | str) -> dict[str, Any]:
    """Read a YAML scene. `#RRGGBB` colors must be quoted in the file."""
    with open(path) as f:
        scene = yaml.safe_load(f) or {}
    if not isinstance(scene, dict):
        raise SceneError(f"{path}: scene must be a mapping")
    return cast("dict[str, Any]", scene)


def render_scene(scene: dict[str, Any], **overrides: Any) -> BmpImage:
    """Build an image from a scene mapping. Non-None overrides win over the scene."""
    settings = dict(scene)
    settings.update({k: v for k, v in overrides.items() if v is not None})
    empty = [k for k, v in settings.items() if v is None and k != "commands"]
    if empty:
        # an unquoted #RRGGBB is a YAML comment and leaves the key empty
        raise SceneError(f"scene keys without a value: {', '.join(empty)}")
    try:
        image = BmpImage(
            int(settings["width"]),
            int(settings["height"]),
            int(settings.get("horizontal_ppm", 2835)),
            int(settings.get("vertical_ppm", 2835)),
            parse_color(settings.get("background", WHITE)),
        )
    except KeyError as e:
        raise SceneError(f"scene is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise SceneError(f"bad scene settings: {e}") from e

    commands = settings.get("commands") or []
    drawn = ScenePainter(image).paint(str(c) for c in commands)
    logger.info(f"Rendered {image.width}x{image.height} scene, {drawn} commands")
    return image
