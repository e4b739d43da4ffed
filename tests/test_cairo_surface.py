import pytest

cairo = pytest.importorskip("cairo")

from dashline.cairo_surface import CairoSurface  # noqa: E402
from dashline.dash_line import DashLine  # noqa: E402
from dashline.texture import DashTextureCache  # noqa: E402


def _pixel(surface: CairoSurface, x: int, y: int) -> tuple[int, int, int, int]:
    """(r, g, b, a) of a little-endian ARGB32 pixel."""
    target = surface.context.get_target()
    target.flush()
    data = target.get_data()
    offset = y * target.get_stride() + x * 4
    b, g, r, a = data[offset], data[offset + 1], data[offset + 2], data[offset + 3]
    return r, g, b, a


@pytest.mark.parametrize("use_texture", [False, True])
def test_dashes_reach_the_raster(use_texture: bool) -> None:
    surface = CairoSurface.for_image(60, 20)
    line = DashLine(
        surface, texture_cache=DashTextureCache(), use_texture=use_texture,
        dash=(10, 5), width=4.0, color=0xFF0000,
    )
    line.move_to(0.0, 10.0).line_to(60.0, 10.0)
    surface.stroke()

    assert _pixel(surface, 5, 10) == (255, 0, 0, 255)
    assert _pixel(surface, 20, 9) == (255, 0, 0, 255)
    assert _pixel(surface, 12, 10)[3] == 0
    assert _pixel(surface, 5, 2)[3] == 0


def test_stroke_without_style_or_path_is_noop() -> None:
    surface = CairoSurface.for_image(10, 10)
    surface.stroke()
    assert surface.active_style is None


def test_write_png(tmp_path) -> None:
    surface = CairoSurface.for_image(40, 40)
    DashLine(surface, width=2.0).draw_circle(20.0, 20.0, 15.0, points=24)
    out = tmp_path / "circle.png"
    surface.write_png(str(out))
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
