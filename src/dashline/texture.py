from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)


class TextureCreationError(RuntimeError):
    """The dash tile image could not be created."""


@dataclass(frozen=True, slots=True)
class DashTexture:
    key: str
    dash: tuple[float, ...]
    image: Image.Image

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


TileFactory = Callable[[tuple[float, ...], float, float], Image.Image]


def tile_key(dash: tuple[float, ...], width: float, alpha: float) -> str:
    parts = ",".join(f"{v:g}" for v in dash)
    return f"{parts}|w{width:g}|a{alpha:g}"


def render_tile(dash: tuple[float, ...], width: float, alpha: float) -> Image.Image:
    """One cycle of ``dash``: white draw runs on a transparent background.

    The tile is as wide as the cycle and as tall as the stroke; alpha is baked
    into the draw runs and the surface supplies the colour.
    """
    tile_w = max(1, math.ceil(sum(dash)))
    tile_h = max(1, math.ceil(width))
    image = Image.new("RGBA", (tile_w, tile_h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    fill = (255, 255, 255, round(alpha * 255))
    x = 0.0
    for i in range(0, len(dash), 2):
        x0 = round(x)
        x += dash[i]
        x1 = round(x) - 1
        if x1 >= x0:
            draw.rectangle((x0, 0, x1, tile_h - 1), fill=fill)
        if i + 1 < len(dash):
            x += dash[i + 1]
    return image


class DashTextureCache:
    """Append-only mapping from tile key to rendered tile."""

    def __init__(self, factory: TileFactory = render_tile) -> None:
        self._factory = factory
        self._textures: dict[str, DashTexture] = {}

    def __len__(self) -> int:
        return len(self._textures)

    def __contains__(self, key: object) -> bool:
        return key in self._textures

    def get(self, dash: tuple[float, ...], width: float, alpha: float) -> DashTexture:
        key = tile_key(dash, width, alpha)
        texture = self._textures.get(key)
        if texture is not None:
            logger.debug("Dash tile %s served from cache", key)
            return texture
        try:
            image = self._factory(dash, width, alpha)
        except (ValueError, MemoryError, OSError) as exc:
            raise TextureCreationError(f"Cannot create dash tile {key}: {exc}") from exc
        texture = DashTexture(key=key, dash=tuple(dash), image=image)
        # Concurrent creators may race here; both tiles are equal.
        self._textures[key] = texture
        logger.debug("Dash tile %s created (%dx%d)", key, *image.size)
        return texture


_default_cache: DashTextureCache | None = None


def default_texture_cache() -> DashTextureCache:
    global _default_cache
    if _default_cache is None:
        _default_cache = DashTextureCache()
    return _default_cache
