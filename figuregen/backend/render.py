"""Deterministic mapping from character attributes to vector drawing primitives.

Figures are drawn in a local frame with the origin at the shoulders' midpoint,
y growing downwards. Each figure fits in ``FIGURE_WIDTH`` x ``FIGURE_HEIGHT``
once translated by ``FIGURE_ORIGIN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from .models import CharacterAttributes, EyeConfig, Hat, HeldItem, ItemKind

FIGURE_WIDTH = 100
FIGURE_HEIGHT = 140
FIGURE_ORIGIN = (50.0, 70.0)

OUTLINE = "#222222"
SUIT = "#34495e"

HEAD_CENTER = (0.0, -22.0)
HEAD_RADIUS = 14.0
HAND_RADIUS = 4.5
FAR_HAND = (17.0, 16.0)
CLOSE_HAND = (-19.0, 20.0)
EYE_RADIUS = 1.8
FAR_EYE = (5.0, -24.0)
CLOSE_EYE = (-3.0, -24.0)
HAT_OFFSET = (0.0, HEAD_CENTER[1] - HEAD_RADIUS + 3.0)

BODY_PATH = "M -16 48 C -18 20 -14 -4 0 -6 C 14 -4 18 20 16 48 Z"


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: str = "none"
    stroke: str = OUTLINE


@dataclass(frozen=True)
class Path:
    d: str
    fill: str = "none"
    stroke: str = OUTLINE
    stroke_width: float = 1.5


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = OUTLINE
    stroke_width: float = 1.5


@dataclass(frozen=True)
class Group:
    children: tuple["Primitive", ...]
    translate: tuple[float, float] = (0.0, 0.0)
    rotate: float = 0.0


Primitive = Union[Circle, Path, Line, Group]


_ITEM_SHAPES: dict[ItemKind, tuple[Primitive, ...]] = {
    ItemKind.FLOWER: (
        Line(0, 0, 0, -18, stroke="#2e7d32", stroke_width=1.5),
        Path("M 0 -14 Q 5 -16 6 -12 Q 2 -11 0 -14 Z", fill="#43a047", stroke="#2e7d32", stroke_width=0.8),
        Circle(0, -21, 4.0, fill="#e91e63", stroke="#ad1457"),
        Circle(0, -21, 1.5, fill="#ffeb3b", stroke="#f9a825"),
    ),
    ItemKind.DAGGER: (
        Path("M -1.5 -6 L 0 -24 L 1.5 -6 Z", fill="#cfd8dc", stroke="#607d8b", stroke_width=0.8),
        Line(-5, -6, 5, -6, stroke="#795548", stroke_width=2.0),
        Line(0, -6, 0, 4, stroke="#5d4037", stroke_width=2.5),
    ),
    ItemKind.CANE: (
        Line(0, -4, 0, 34, stroke="#4e342e", stroke_width=2.5),
        Path("M 0 -4 Q 0 -11 -6 -11 Q -10 -11 -10 -6", stroke="#4e342e", stroke_width=2.5),
    ),
}

_HAT_SHAPES: dict[Hat, tuple[Primitive, ...]] = {
    Hat.BOWLER: (
        Path("M -11 0 C -11 -14 11 -14 11 0 Z", fill="#212121"),
        Line(-16, 0, 16, 0, stroke="#212121", stroke_width=3.0),
    ),
    Hat.TOP_HAT: (
        Path("M -9 0 L -9 -20 L 9 -20 L 9 0 Z", fill="#212121"),
        Path("M -9 -4 L 9 -4 L 9 -7 L -9 -7 Z", fill="#b71c1c", stroke="#b71c1c", stroke_width=0.5),
        Line(-15, 0, 15, 0, stroke="#212121", stroke_width=3.0),
    ),
}

_EYES: dict[EyeConfig, tuple[tuple[float, float], ...]] = {
    EyeConfig.BOTH: (FAR_EYE, CLOSE_EYE),
    EyeConfig.FAR_ONLY: (FAR_EYE,),
    EyeConfig.CLOSE_ONLY: (CLOSE_EYE,),
}


def _item(item: HeldItem, hand: tuple[float, float]) -> Group:
    return Group(children=_ITEM_SHAPES[item.kind], translate=hand, rotate=item.degrees)


def _hand(hand: tuple[float, float], skin: str) -> Circle:
    return Circle(hand[0], hand[1], HAND_RADIUS, fill=skin)


def _head(attributes: CharacterAttributes) -> Group:
    skin = attributes.skin_tone.value
    eyes = tuple(Circle(x, y, EYE_RADIUS, fill=OUTLINE, stroke="none") for x, y in _EYES[attributes.eyes])
    return Group(children=(Circle(HEAD_CENTER[0], HEAD_CENTER[1], HEAD_RADIUS, fill=skin),) + eyes)


def render(attributes: CharacterAttributes) -> tuple[Primitive, ...]:
    """Return the drawing primitives for one figure, back to front."""
    skin = attributes.skin_tone.value
    primitives: list[Primitive] = []
    if attributes.far_item is not None:
        primitives.append(_item(attributes.far_item, FAR_HAND))
    primitives.append(_hand(FAR_HAND, skin))
    primitives.append(Path(BODY_PATH, fill=SUIT))
    primitives.append(_head(attributes))
    if attributes.hat is not None:
        primitives.append(Group(children=_HAT_SHAPES[attributes.hat], translate=HAT_OFFSET))
    primitives.append(_hand(CLOSE_HAND, skin))
    if attributes.close_item is not None:
        primitives.append(_item(attributes.close_item, CLOSE_HAND))
    return tuple(primitives)


def batch_size(count: int, columns: int) -> tuple[int, int]:
    columns = max(1, columns)
    rows = (count + columns - 1) // columns
    return FIGURE_WIDTH * min(count, columns), FIGURE_HEIGHT * rows


def render_batch(samples: Sequence[CharacterAttributes], columns: int = 6) -> Group:
    """Lay figures out left to right, top to bottom."""
    columns = max(1, columns)
    figures: list[Primitive] = []
    for index, attributes in enumerate(samples):
        row, column = divmod(index, columns)
        origin = (
            column * FIGURE_WIDTH + FIGURE_ORIGIN[0],
            row * FIGURE_HEIGHT + FIGURE_ORIGIN[1],
        )
        figures.append(Group(children=render(attributes), translate=origin))
    return Group(children=tuple(figures))
