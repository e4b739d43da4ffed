from __future__ import annotations

import cairo
from PIL import Image

from .geometry import invert_matrix
from .models import StrokeStyle
from .texture import DashTexture


class CairoSurface:
    """Strokes dashed paths onto a pycairo context.

    Path commands accumulate until the stroke style changes or :meth:`stroke`
    is called; the pending path is then stroked with the style it was built
    under. Textured styles stroke with a repeating tile pattern.
    """

    def __init__(self, context: cairo.Context) -> None:
        self.context = context
        self._style: StrokeStyle | None = None
        self._pending = False
        self._tiles: dict[tuple[str, int], cairo.ImageSurface] = {}

    @classmethod
    def for_image(cls, width: int, height: int) -> CairoSurface:
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
        return cls(cairo.Context(surface))

    @property
    def active_style(self) -> StrokeStyle | None:
        return self._style

    def set_stroke_style(self, style: StrokeStyle) -> None:
        self.stroke()
        self._style = style

    def move_to(self, x: float, y: float) -> None:
        self.context.move_to(x, y)

    def line_to(self, x: float, y: float) -> None:
        self.context.line_to(x, y)
        self._pending = True

    def stroke(self) -> None:
        ctx = self.context
        style = self._style
        if not self._pending or style is None:
            return

        ctx.set_line_width(style.width)
        ctx.set_line_cap(cairo.LINE_CAP_BUTT)
        if style.texture is not None and style.matrix is not None:
            pattern = cairo.SurfacePattern(self._tile_surface(style.texture, style))
            pattern.set_extend(cairo.EXTEND_REPEAT)
            pattern.set_filter(cairo.FILTER_NEAREST)
            # cairo pattern matrices map user space to pattern space
            pattern.set_matrix(cairo.Matrix(*invert_matrix(style.matrix)))
            ctx.set_source(pattern)
        else:
            r, g, b = style.rgb
            ctx.set_source_rgba(r / 255.0, g / 255.0, b / 255.0, style.alpha)
        ctx.stroke()
        self._pending = False

    def write_png(self, path: str) -> None:
        self.stroke()
        self.context.get_target().write_to_png(path)

    def _tile_surface(self, texture: DashTexture, style: StrokeStyle) -> cairo.ImageSurface:
        key = (texture.key, style.color)
        surface = self._tiles.get(key)
        if surface is not None:
            return surface
        tinted = Image.new("RGBA", texture.size, style.rgb + (255,))
        tinted.putalpha(texture.image.getchannel("A"))
        width, height = texture.size
        stride = cairo.ImageSurface.format_stride_for_width(cairo.FORMAT_ARGB32, width)
        # ARGB32 is premultiplied native-endian: BGRA byte order on little-endian hosts
        data = bytearray(tinted.tobytes("raw", "BGRa", stride))
        surface = cairo.ImageSurface.create_for_data(data, cairo.FORMAT_ARGB32, width, height, stride)
        self._tiles[key] = surface
        return surface
