from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from .geometry import almost_equal_points, direction, distance, offset_point, texture_matrix
from .models import IDENTITY, DashLineOptions, DashPattern, PathState, Point, StrokeStyle
from .shapes import circle_vertices, ellipse_vertices, polygon_vertices, rect_vertices
from .stepper import iter_dash_steps
from .surfaces import Surface
from .texture import DashTexture, DashTextureCache, default_texture_cache

logger = logging.getLogger(__name__)


class DashLine:
    """Dashed path drawing session over a :class:`Surface`.

    Paths start with :meth:`move_to`; each :meth:`line_to` continues the dash
    pattern from where the previous segment left off. With ``use_texture`` the
    segment is stroked in one command using a repeating one-cycle tile whose
    transform is recomputed per segment; otherwise the segment is split into
    move/line commands, one per pattern entry.

    Calling :meth:`line_to` or :meth:`close_path` before any :meth:`move_to`
    starts the path at the origin.
    """

    def __init__(
        self,
        surface: Surface,
        options: DashLineOptions | None = None,
        *,
        texture_cache: DashTextureCache | None = None,
        **overrides: Any,
    ) -> None:
        options = options or DashLineOptions()
        if overrides:
            options = replace(options, **overrides)
        self.surface = surface
        self.options = options
        self.pattern: DashPattern = options.pattern()
        self.state = PathState()
        self.use_texture = options.use_texture

        self._texture: DashTexture | None = None
        if self.use_texture:
            cache = texture_cache if texture_cache is not None else default_texture_cache()
            self._texture = cache.get(options.dash, options.width, options.alpha)

        self.style = StrokeStyle(
            width=options.width * options.scale,
            color=options.color,
            alpha=options.alpha,
            texture=self._texture,
            matrix=IDENTITY if self._texture is not None else None,
        )
        self.surface.set_stroke_style(self.style)

    @property
    def scale(self) -> float:
        return self.pattern.scale

    @property
    def line_length(self) -> float:
        return self.state.line_length

    @property
    def cursor(self) -> Point:
        return self.state.cursor

    @property
    def texture(self) -> DashTexture | None:
        return self._texture

    def move_to(self, x: float, y: float) -> DashLine:
        self.state.begin(x, y)
        self.surface.move_to(x, y)
        return self

    def line_to(self, x: float, y: float, closing: bool = False) -> DashLine:
        self._ensure_started()
        cursor = self.state.cursor
        target = (x, y)
        length = distance(cursor, target)
        closed = closing and self.state.start is not None and almost_equal_points(target, self.state.start)

        if self.use_texture:
            angle = direction(cursor, target)
            self._adjust_texture(angle)
            self.surface.move_to(*cursor)
            if closed and len(self.pattern) % 2 == 0:
                # leave the trailing gap open so the wrap does not overdraw the start
                gap = self.pattern.last_entry
                if length > gap:
                    self.surface.line_to(*offset_point(target, angle, -gap))
            else:
                self.surface.line_to(x, y)
        else:
            for step in iter_dash_steps(self.pattern, cursor, target, self.state.line_length, closing=closed):
                if step.kind == "move":
                    self.surface.move_to(step.x, step.y)
                else:
                    self.surface.line_to(step.x, step.y)

        self.state.advance(x, y, length)
        return self

    def close_path(self) -> DashLine:
        self._ensure_started()
        x, y = self.state.start  # type: ignore[misc]
        return self.line_to(x, y, closing=True)

    def draw_circle(self, x: float, y: float, radius: float, points: int = 80) -> DashLine:
        return self._draw_closed(circle_vertices(x, y, radius, points))

    def draw_ellipse(
        self, x: float, y: float, radius_x: float, radius_y: float, points: int = 80,
    ) -> DashLine:
        return self._draw_closed(ellipse_vertices(x, y, radius_x, radius_y, points))

    def draw_polygon(self, points: Sequence[Any]) -> DashLine:
        """Draw through ``points`` in order; only the last edge may close.

        The closing treatment applies when the last vertex repeats the first.
        """
        vertices = polygon_vertices(points)
        self.move_to(*vertices[0])
        last = len(vertices) - 1
        for i in range(1, len(vertices)):
            self.line_to(*vertices[i], closing=i == last)
        return self

    def draw_rect(self, x: float, y: float, width: float, height: float) -> DashLine:
        return self._draw_closed(rect_vertices(x, y, width, height))

    def _draw_closed(self, vertices: list[Point]) -> DashLine:
        first = vertices[0]
        self.move_to(*first)
        for vertex in vertices[1:]:
            self.line_to(*vertex)
        return self.line_to(*first, closing=True)

    def _ensure_started(self) -> None:
        if not self.state.started:
            logger.debug("line drawn before move_to; starting the path at the origin")
            self.move_to(0.0, 0.0)

    def _adjust_texture(self, angle: float) -> None:
        active = self.surface.active_style
        if active is None or active.texture is not self._texture:
            logger.warning("Stroke style was changed between DashLine commands; the dash texture will not line up")
        matrix = texture_matrix(angle, self.pattern.scale, self.state.cursor, self.state.line_length)
        self.style = replace(self.style, matrix=matrix)
        self.surface.set_stroke_style(self.style)
