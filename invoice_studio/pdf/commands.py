"""Draw commands produced by the layout engine.

Coordinates are millimetres from the top-left corner of the page; `y` grows
downward and text `y` is the baseline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: RGB = BLACK
    # "left" | "right" | "center"; x is the anchor for the chosen alignment
    align: str = "left"
    tag: str = ""


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.1
    color: RGB = BLACK


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 0.1
    tag: str = ""

    @property
    def filled(self) -> bool:
        return self.fill is not None

    @property
    def stroked(self) -> bool:
        return self.stroke is not None


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 0.5


@dataclass(frozen=True)
class Image:
    x: float
    y: float
    w: float
    h: float
    data: bytes = field(repr=False, default=b"")


Command = Union[Text, Line, Rect, Circle, Image]


@dataclass
class Page:
    index: int
    commands: List[Command] = field(default_factory=list)

    def texts(self, tag: Optional[str] = None) -> List[Text]:
        return [c for c in self.commands if isinstance(c, Text) and (tag is None or c.tag == tag)]

    def tagged(self, tag: str) -> List[Command]:
        return [c for c in self.commands if getattr(c, "tag", "") == tag]


@dataclass
class RenderedPageSet:
    width: float
    height: float
    pages: List[Page] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)
