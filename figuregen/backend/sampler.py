"""Random sampling of character attributes from the fixed catalog."""

from __future__ import annotations

import random
from typing import Protocol, Sequence, TypeVar

from .models import CharacterAttributes, EyeConfig, Hat, HeldItem, ItemKind, SkinTone

T = TypeVar("T")

EYE_WEIGHTS: dict[EyeConfig, float] = {
    EyeConfig.BOTH: 1.0,
    EyeConfig.FAR_ONLY: 0.1,
    EyeConfig.CLOSE_ONLY: 0.1,
}

HAT_OPTIONS: tuple[Hat | None, ...] = (None, Hat.BOWLER, Hat.TOP_HAT)

ITEM_ROTATIONS: dict[ItemKind, tuple[float, ...]] = {
    ItemKind.FLOWER: (0.0, 0.25, 0.5, 0.75),
    ItemKind.DAGGER: (0.0, 0.25, 0.5, 0.75),
    ItemKind.CANE: (0.0, 0.3),
}


class RandomSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T:
        ...

    def choices(self, population: Sequence[T], weights: Sequence[float] | None = None, *, k: int = 1) -> list[T]:
        ...


_default_rng = random.Random()


def item_options() -> tuple[HeldItem | None, ...]:
    """Expanded held-item catalog: one entry per kind and rotation, plus no item."""
    options: list[HeldItem | None] = [
        HeldItem(kind=kind, rotation=rotation) for kind, rotations in ITEM_ROTATIONS.items() for rotation in rotations
    ]
    options.append(None)
    return tuple(options)


_ITEM_OPTIONS = item_options()
_SKIN_TONES = tuple(SkinTone)
_EYE_OPTIONS = tuple(EYE_WEIGHTS)
_EYE_WEIGHT_VALUES = tuple(EYE_WEIGHTS.values())


def sample_one(rng: RandomSource) -> CharacterAttributes:
    return CharacterAttributes(
        skin_tone=rng.choice(_SKIN_TONES),
        eyes=rng.choices(_EYE_OPTIONS, weights=_EYE_WEIGHT_VALUES, k=1)[0],
        hat=rng.choice(HAT_OPTIONS),
        far_item=rng.choice(_ITEM_OPTIONS),
        close_item=rng.choice(_ITEM_OPTIONS),
    )


def sample(count: int, rng: RandomSource | None = None) -> list[CharacterAttributes]:
    """Draw ``count`` independent attribute records from ``rng``."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    source = rng if rng is not None else _default_rng
    return [sample_one(source) for _ in range(count)]
