from __future__ import annotations

import math

from .models import IDENTITY, Matrix, Point


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def direction(a: Point, b: Point) -> float:
    """Angle of the segment a -> b in radians."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def offset_point(point: Point, angle: float, length: float) -> Point:
    return (point[0] + math.cos(angle) * length, point[1] + math.sin(angle) * length)


def almost_equal_points(a: Point, b: Point, eps: float = 1e-9) -> bool:
    return math.isclose(a[0], b[0], abs_tol=eps) and math.isclose(a[1], b[1], abs_tol=eps)


def rotation(angle: float) -> Matrix:
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return (cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)


def scaling(sx: float, sy: float | None = None) -> Matrix:
    return (sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)


def translation(tx: float, ty: float) -> Matrix:
    return (1.0, 0.0, 0.0, 1.0, tx, ty)


def multiply_matrices(m1: Matrix, m2: Matrix) -> Matrix:
    """Compose so that ``m2`` applies first, then ``m1``."""
    a1, b1, c1, d1, e1, f1 = m1
    a2, b2, c2, d2, e2, f2 = m2
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def invert_matrix(matrix: Matrix) -> Matrix:
    a, b, c, d, e, f = matrix
    det = a * d - b * c
    if abs(det) <= 1e-12:
        raise ValueError("Matrix is not invertible")
    ia = d / det
    ib = -b / det
    ic = -c / det
    id_ = a / det
    return (ia, ib, ic, id_, -(ia * e + ic * f), -(ib * e + id_ * f))


def matrix_scale(matrix: Matrix) -> float:
    a, b, _, _, _, _ = matrix
    return math.hypot(a, b)


def texture_matrix(angle: float, scale: float, cursor: Point, line_length: float) -> Matrix:
    """Map tile space onto a segment leaving ``cursor`` at ``angle``.

    The tile is rotated onto the segment, scaled, then shifted back along the
    segment by ``line_length`` so the pattern phase carries across segments.
    """
    matrix = IDENTITY
    if angle:
        matrix = multiply_matrices(rotation(angle), matrix)
    if scale != 1:
        matrix = multiply_matrices(scaling(scale), matrix)
    shift = offset_point(cursor, angle, -line_length)
    return multiply_matrices(translation(shift[0], shift[1]), matrix)
