"""Application state record for the generation sequencer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import CharacterAttributes, GenerationRequest

MIN_COUNT = 1
MAX_COUNT = 30
INITIAL_COUNT = 10


@dataclass(frozen=True)
class AppState:
    committed_generation: int
    requested_generation: int
    desired_count: int
    samples: tuple[CharacterAttributes, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "committedGeneration": self.committed_generation,
            "requestedGeneration": self.requested_generation,
            "desiredCount": self.desired_count,
            "displayCount": display_count(self),
            "samples": [sample.to_dict() for sample in self.samples],
        }


def display_count(state: AppState) -> int:
    """Desired count clamped to the range control's domain."""
    return min(MAX_COUNT, max(MIN_COUNT, state.desired_count))


def build_initial_state() -> tuple[AppState, GenerationRequest]:
    """Return the start-up state together with the request already in flight."""
    state = AppState(committed_generation=0, requested_generation=1, desired_count=INITIAL_COUNT)
    return state, GenerationRequest(tag=1, count=INITIAL_COUNT)
