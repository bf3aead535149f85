"""Catalog enums and value objects for generated figures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SkinTone(str, Enum):
    UMBER = "#3d2314"
    ESPRESSO = "#5c3a21"
    WALNUT = "#6b4226"
    CHESTNUT = "#7a4a2a"
    BRONZE = "#8d5524"
    COCOA = "#9c6b43"
    SIENNA = "#a0522d"
    CARAMEL = "#b5835a"
    HONEY = "#c68642"
    TAWNY = "#cf9f77"
    SAND = "#d2a679"
    GOLDEN = "#e0ac69"
    BEIGE = "#e8b98f"
    WHEAT = "#f1c27d"
    PEACH = "#f5d0b0"
    IVORY = "#fce3cc"
    PORCELAIN = "#ffdbac"


class EyeConfig(str, Enum):
    BOTH = "both"
    FAR_ONLY = "far"
    CLOSE_ONLY = "close"


class Hat(str, Enum):
    BOWLER = "bowler"
    TOP_HAT = "top_hat"


class ItemKind(str, Enum):
    FLOWER = "flower"
    DAGGER = "dagger"
    CANE = "cane"


@dataclass(frozen=True)
class HeldItem:
    kind: ItemKind
    rotation: float

    @property
    def degrees(self) -> float:
        return self.rotation * 360.0

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "rotation": self.rotation}


@dataclass(frozen=True)
class CharacterAttributes:
    skin_tone: SkinTone
    eyes: EyeConfig
    hat: Hat | None = None
    far_item: HeldItem | None = None
    close_item: HeldItem | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "skinTone": self.skin_tone.value,
            "eyes": self.eyes.value,
            "hat": self.hat.value if self.hat is not None else None,
            "farItem": self.far_item.to_dict() if self.far_item is not None else None,
            "closeItem": self.close_item.to_dict() if self.close_item is not None else None,
        }


@dataclass(frozen=True)
class GenerationRequest:
    tag: int
    count: int


@dataclass(frozen=True)
class GenerationResult:
    tag: int
    samples: tuple[CharacterAttributes, ...]
