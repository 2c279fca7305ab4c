# watchface/core/draw.py
"""
Draw commands consumed by the host display surface, the Canvas protocol,
and a recording canvas that keeps the command stream (host adapter / test double).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Union

from watchface.core.types import Point2D

Justify = Literal["left", "center", "right"]


@dataclass(frozen=True)
class FillRect:
    x: int
    y: int
    w: int
    h: int
    color: str


@dataclass(frozen=True)
class FillPolygon:
    points: tuple[Point2D, ...]
    color: str


@dataclass(frozen=True)
class DrawLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: int = 1


@dataclass(frozen=True)
class FillCircle:
    cx: float
    cy: float
    r: float
    color: str


@dataclass(frozen=True)
class DrawCircle:
    cx: float
    cy: float
    r: float
    color: str
    width: int = 1


@dataclass(frozen=True)
class DrawText:
    """Text anchored at (x, y); vertically centred, horizontally per justify."""
    x: float
    y: float
    text: str
    color: str
    font_size: int
    justify: Justify = "center"


@dataclass(frozen=True)
class Blit:
    """Copy region (sx, sy, w, h) of source onto the target at (x, y)."""
    source: "Canvas"
    x: int
    y: int
    sx: int
    sy: int
    w: int
    h: int


@dataclass(frozen=True)
class SetClip:
    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class ClearClip:
    pass


DrawCommand = Union[FillRect, FillPolygon, DrawLine, FillCircle, DrawCircle, DrawText, Blit, SetClip, ClearClip]


class Canvas(Protocol):
    """A drawable surface: the physical display or an offscreen layer."""

    width: int
    height: int

    def execute(self, command: DrawCommand) -> None:
        ...


def draw_all(canvas: Canvas, commands: list[DrawCommand]) -> int:
    """Execute commands in order; returns how many were drawn."""
    for cmd in commands:
        canvas.execute(cmd)
    return len(commands)


def blit_region(source: Canvas, x: int, y: int, w: int, h: int) -> Blit:
    """Blit of the same region from source to target."""
    return Blit(source=source, x=x, y=y, sx=x, sy=y, w=w, h=h)


class RecordingCanvas:
    """Records every command; no pixels."""

    def __init__(self, width: int, height: int, name: str = "display") -> None:
        self.width = width
        self.height = height
        self.name = name
        self.commands: list[DrawCommand] = []

    def execute(self, command: DrawCommand) -> None:
        self.commands.append(command)

    def of_type(self, kind: type) -> list[DrawCommand]:
        return [c for c in self.commands if isinstance(c, kind)]

    def clear(self) -> None:
        self.commands.clear()

    def __repr__(self) -> str:
        return f"RecordingCanvas({self.name!r}, {self.width}x{self.height})"
