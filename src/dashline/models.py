from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, NamedTuple, TypeAlias

if TYPE_CHECKING:
    from .texture import DashTexture

logger = logging.getLogger(__name__)

Point: TypeAlias = tuple[float, float]
Matrix: TypeAlias = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


class DashSlot(NamedTuple):
    index: int
    offset: float


class DashStep(NamedTuple):
    kind: Literal["move", "line"]
    x: float
    y: float


class DashPattern:
    """Repeating draw/gap lengths, starting with a draw entry.

    Entries are stored unscaled; ``scale`` multiplies every entry at use time.
    """

    __slots__ = ("entries", "scale")

    def __init__(self, entries: tuple[float, ...] | list[float], scale: float = 1.0) -> None:
        values = tuple(float(v) for v in entries)
        if not values:
            raise ValueError("Dash pattern must contain at least one entry")
        for v in values:
            if not math.isfinite(v) or v <= 0:
                raise ValueError(f"Dash pattern entries must be positive, got {v!r}")
        if not math.isfinite(scale) or scale <= 0:
            raise ValueError(f"Dash scale must be positive, got {scale!r}")
        if len(values) < 2:
            logger.warning("Dash pattern %r has fewer than two entries; the line is always drawn", values)
        self.entries = values
        self.scale = float(scale)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"DashPattern({list(self.entries)!r}, scale={self.scale!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DashPattern):
            return NotImplemented
        return self.entries == other.entries and self.scale == other.scale

    def __hash__(self) -> int:
        return hash((self.entries, self.scale))

    @property
    def raw_cycle_length(self) -> float:
        return sum(self.entries)

    def cycle_length(self) -> float:
        return self.raw_cycle_length * self.scale

    def scaled(self, index: int) -> float:
        return self.entries[index] * self.scale

    @property
    def last_entry(self) -> float:
        return self.scaled(len(self.entries) - 1)

    def slot_at(self, distance: float) -> DashSlot:
        place = distance % self.cycle_length()
        start = 0.0
        for i in range(len(self.entries)):
            size = self.scaled(i)
            if place < start + size:
                return DashSlot(i, place - start)
            start += size
        # place rounded up to the cycle length
        return DashSlot(0, 0.0)

    def next_index(self, index: int) -> int:
        index += 1
        return 0 if index == len(self.entries) else index


@dataclass(slots=True)
class PathState:
    cursor: Point = (0.0, 0.0)
    start: Point | None = None
    line_length: float = 0.0

    @property
    def started(self) -> bool:
        return self.start is not None

    def begin(self, x: float, y: float) -> None:
        self.cursor = (x, y)
        self.start = (x, y)
        self.line_length = 0.0

    def advance(self, x: float, y: float, length: float) -> None:
        self.cursor = (x, y)
        self.line_length += length


@dataclass(frozen=True, slots=True)
class StrokeStyle:
    width: float
    color: int
    alpha: float
    texture: DashTexture | None = None
    matrix: Matrix | None = None

    @property
    def rgb(self) -> tuple[int, int, int]:
        return ((self.color >> 16) & 0xFF, (self.color >> 8) & 0xFF, self.color & 0xFF)


@dataclass(frozen=True, slots=True)
class DashLineOptions:
    dash: tuple[float, ...] = field(default=(10.0, 5.0))
    width: float = 1.0
    color: int = 0xFFFFFF
    alpha: float = 1.0
    scale: float = 1.0
    use_texture: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "dash", tuple(float(v) for v in self.dash))
        if not self.width > 0:
            raise ValueError(f"Stroke width must be positive, got {self.width!r}")
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"Alpha must be within [0, 1], got {self.alpha!r}")
        if not self.scale > 0:
            raise ValueError(f"Scale must be positive, got {self.scale!r}")
        if not 0 <= self.color <= 0xFFFFFF:
            raise ValueError(f"Color must be a 24-bit RGB value, got {self.color!r}")

    def pattern(self) -> DashPattern:
        return DashPattern(self.dash, self.scale)
