from __future__ import annotations

import logging
from pathlib import Path

import ezdxf
from ezdxf import colors, units

from .geometry import matrix_scale
from .models import Point, StrokeStyle

logger = logging.getLogger(__name__)

_DXF_UNIT_MAP = {
    "mm": units.MM,
    "inch": units.IN,
    "px": 0,
}


class DxfSurface:
    """Writes each stroked step as a DXF LINE in modelspace.

    DXF cannot stroke with an image, so a textured style is approximated by a
    linetype built from the tile's dash pattern.
    """

    def __init__(self, *, layer: str = "0", unit: str = "px") -> None:
        self.doc = ezdxf.new("R2018")
        self.doc.units = _DXF_UNIT_MAP.get(unit.lower(), 0)
        self.msp = self.doc.modelspace()
        self.layer = layer
        _ensure_layer(self.doc, layer)
        self._pen: Point = (0.0, 0.0)
        self._style: StrokeStyle | None = None
        self._attribs: dict[str, object] = {"layer": layer}
        self._warned_texture = False

    @property
    def active_style(self) -> StrokeStyle | None:
        return self._style

    def set_stroke_style(self, style: StrokeStyle) -> None:
        self._style = style
        attribs: dict[str, object] = {
            "layer": self.layer,
            "true_color": colors.rgb2int(style.rgb),
        }
        if style.alpha < 1.0:
            attribs["transparency"] = colors.float2transparency(1.0 - style.alpha)
        if style.texture is not None:
            if not self._warned_texture:
                logger.warning("DXF output has no texture strokes; using linetype %s", _linetype_name(style.texture.dash))
                self._warned_texture = True
            attribs["linetype"] = _register_linetype(self.doc, style.texture.dash)
            if style.matrix is not None:
                attribs["ltscale"] = matrix_scale(style.matrix)
        self._attribs = attribs

    def move_to(self, x: float, y: float) -> None:
        self._pen = (x, y)

    def line_to(self, x: float, y: float) -> None:
        self.msp.add_line(
            (self._pen[0], self._pen[1], 0.0), (x, y, 0.0), dxfattribs=dict(self._attribs),
        )
        self._pen = (x, y)

    def save(self, path: str | Path) -> None:
        self.doc.saveas(str(path))


def _register_linetype(doc: ezdxf.document.Drawing, pattern: tuple[float, ...]) -> str:
    name = _linetype_name(pattern)
    if name in doc.linetypes:
        return name
    # DXF pattern: [total_length, dash, -gap, dash, -gap, ...]
    dxf_pattern: list[float] = [sum(pattern)]
    for i, v in enumerate(pattern):
        dxf_pattern.append(v if i % 2 == 0 else -v)
    doc.linetypes.add(name, pattern=dxf_pattern)
    return name


def _linetype_name(pattern: tuple[float, ...]) -> str:
    parts = []
    for v in pattern:
        s = f"{v:.2f}".replace(".", "p").rstrip("0").rstrip("p")
        parts.append(s)
    return "DASH_" + "_".join(parts)


def _ensure_layer(doc: ezdxf.document.Drawing, layer_name: str) -> None:
    if layer_name in doc.layers:
        return
    doc.layers.new(name=layer_name)
