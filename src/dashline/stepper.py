from __future__ import annotations

import math
from typing import Iterator

from .geometry import direction, distance
from .models import DashPattern, DashStep, Point


def iter_dash_steps(
    pattern: DashPattern,
    cursor: Point,
    target: Point,
    line_length: float,
    *,
    closing: bool = False,
) -> Iterator[DashStep]:
    """Split the segment cursor -> target into draw ("line") and skip ("move") steps.

    ``line_length`` is the distance already travelled since the path started and
    fixes where in the pattern the segment begins. Each step ends exactly on a
    slot boundary or on the target.

    When ``closing`` is set the target is the path start: the walk stops at the
    slot that would reach it, and a final draw is cut one trailing entry short
    so it does not run into the first dash of the path.
    """
    remaining = distance(cursor, target)
    angle = direction(cursor, target)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    x0, y0 = cursor

    index, dash_start = pattern.slot_at(line_length)

    while remaining > 0:
        dash_size = pattern.scaled(index) - dash_start
        dist = remaining if remaining < dash_size else dash_size

        if closing:
            left = distance((x0 + cos_a * dist, y0 + sin_a * dist), target)
            if left <= dist:
                if index % 2 == 0:
                    last = distance((x0, y0), target) - pattern.last_entry
                    if last > 0:
                        yield DashStep("line", x0 + cos_a * last, y0 + sin_a * last)
                return

        x0 += cos_a * dist
        y0 += sin_a * dist
        yield DashStep("move" if index % 2 else "line", x0, y0)
        remaining -= dist

        index = pattern.next_index(index)
        dash_start = 0.0

