from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from .models import Point


def circle_vertices(x: float, y: float, radius: float, points: int = 80) -> list[Point]:
    """Perimeter samples starting at angle 0, without repeating the first."""
    if points < 3:
        raise ValueError(f"A circle needs at least 3 points, got {points}")
    interval = math.tau / points
    return [(x + math.cos(i * interval) * radius, y + math.sin(i * interval) * radius) for i in range(points)]


def ellipse_vertices(
    x: float, y: float, radius_x: float, radius_y: float, points: int = 80,
) -> list[Point]:
    """Perimeter samples starting at the top of the ellipse."""
    if points < 3:
        raise ValueError(f"An ellipse needs at least 3 points, got {points}")
    interval = math.tau / points
    return [
        (x - radius_x * math.sin(i * interval), y - radius_y * math.cos(i * interval))
        for i in range(points)
    ]


def rect_vertices(x: float, y: float, width: float, height: float) -> list[Point]:
    return [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]


def polygon_vertices(points: Sequence[Any]) -> list[Point]:
    """Normalise flat ``[x0, y0, x1, y1, ...]``, ``(x, y)`` pairs or ``.x``/``.y`` objects."""
    if not points:
        raise ValueError("A polygon needs at least 2 vertices")

    first = points[0]
    if isinstance(first, (int, float)):
        if len(points) % 2 == 1:
            raise ValueError("Flat polygon coordinates must come in x, y pairs")
        out = [(float(points[i]), float(points[i + 1])) for i in range(0, len(points), 2)]
    elif hasattr(first, "x") and hasattr(first, "y"):
        out = [(float(p.x), float(p.y)) for p in points]
    else:
        out = [(float(p[0]), float(p[1])) for p in points]

    if len(out) < 2:
        raise ValueError("A polygon needs at least 2 vertices")
    return out
