from __future__ import annotations

from typing import Literal, Protocol, TypeAlias

from .models import StrokeStyle

Command: TypeAlias = tuple[Literal["move", "line"], float, float] | tuple[Literal["style"], StrokeStyle]


class Surface(Protocol):
    """Drawing target that accepts path commands and stroke styles."""

    @property
    def active_style(self) -> StrokeStyle | None: ...

    def set_stroke_style(self, style: StrokeStyle) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...


class RecordingSurface:
    """Keeps every command it receives, in order."""

    def __init__(self) -> None:
        self.commands: list[Command] = []
        self._style: StrokeStyle | None = None

    @property
    def active_style(self) -> StrokeStyle | None:
        return self._style

    def set_stroke_style(self, style: StrokeStyle) -> None:
        self._style = style
        self.commands.append(("style", style))

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(("move", x, y))

    def line_to(self, x: float, y: float) -> None:
        self.commands.append(("line", x, y))

    def path(self) -> list[tuple[str, float, float]]:
        return [c for c in self.commands if c[0] != "style"]  # type: ignore[misc]

    def clear(self) -> None:
        self.commands.clear()
