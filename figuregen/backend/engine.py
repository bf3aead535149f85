"""Reducer for generation sequencer events."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Any

from .models import GenerationRequest, GenerationResult
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    state: AppState
    requests: list[GenerationRequest] = field(default_factory=list)
    committed: bool = False


def apply_event(state: AppState, event: dict[str, Any]) -> TransitionResult:
    """Apply one sequencer event and return the next state plus any sampling requests."""
    event_type = str(event.get("type", "")).upper()
    if event_type == "REQUEST_REGENERATION":
        return _apply_request_regeneration(state=state)
    if event_type == "SET_DESIRED_COUNT":
        return _apply_set_desired_count(state=state, event=event)
    if event_type == "RESULT_ARRIVED":
        return _apply_result_arrived(state=state, event=event)
    return TransitionResult(state=state)


def parse_count(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return None
        value = int(raw)
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if value < 0:
        return None
    return value


def _apply_request_regeneration(state: AppState) -> TransitionResult:
    tag = state.requested_generation + 1
    next_state = replace(state, requested_generation=tag)
    return TransitionResult(
        state=next_state,
        requests=[GenerationRequest(tag=tag, count=state.desired_count)],
    )


def _apply_set_desired_count(state: AppState, event: dict[str, Any]) -> TransitionResult:
    count = parse_count(event.get("count"))
    if count is None:
        logger.debug("Ignoring malformed count %r", event.get("count"))
        return TransitionResult(state=state)

    tag = state.requested_generation + 1
    next_state = replace(state, requested_generation=tag, desired_count=count)
    return TransitionResult(state=next_state, requests=[GenerationRequest(tag=tag, count=count)])


def _apply_result_arrived(state: AppState, event: dict[str, Any]) -> TransitionResult:
    result = event.get("result")
    if not isinstance(result, GenerationResult):
        return TransitionResult(state=state)
    if result.tag != state.requested_generation:
        return TransitionResult(state=state)

    next_state = replace(state, committed_generation=result.tag, samples=tuple(result.samples))
    return TransitionResult(state=next_state, committed=True)
