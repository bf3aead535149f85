"""Owner of the application state; runs sampling requests and applies their results."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable

from .engine import TransitionResult, apply_event
from .models import CharacterAttributes, GenerationRequest, GenerationResult
from .sampler import RandomSource, sample
from .state import AppState, build_initial_state

logger = logging.getLogger(__name__)

Sampler = Callable[[int, RandomSource], list[CharacterAttributes]]
StateListener = Callable[[AppState], Awaitable[None]]


class GenerationSequencer:
    def __init__(self, rng: RandomSource | None = None, sampler: Sampler = sample) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._sampler = sampler
        self._state, initial_request = build_initial_state()
        self._pending: list[GenerationRequest] = [initial_request]
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def pending_requests(self) -> list[GenerationRequest]:
        pending, self._pending = self._pending, []
        return pending

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, event: dict[str, Any]) -> list[GenerationRequest]:
        """Apply an event to the owned state and return the sampling requests it emitted."""
        return list(self._apply(event).requests)

    def _apply(self, event: dict[str, Any]) -> TransitionResult:
        result = apply_event(state=self._state, event=event)
        self._state = result.state
        for request in result.requests:
            logger.debug("Requested generation tag=%s count=%s", request.tag, request.count)
        return result

    def fulfil(self, request: GenerationRequest) -> GenerationResult:
        samples = self._sampler(request.count, self._rng)
        return GenerationResult(tag=request.tag, samples=tuple(samples))

    async def run(self, request: GenerationRequest) -> bool:
        """Sample off the event loop, then apply the result; True when it was committed."""
        result = await asyncio.to_thread(self.fulfil, request)
        transition = self._apply({"type": "RESULT_ARRIVED", "result": result})
        if not transition.committed:
            logger.debug("Dropping stale result tag=%s (requested=%s)", result.tag, self._state.requested_generation)
            return False
        logger.debug("Committed generation tag=%s with %s samples", result.tag, len(result.samples))
        await self._notify()
        return True

    async def submit(self, event: dict[str, Any]) -> AppState:
        requests = self.dispatch(event)
        for request in requests:
            await self.run(request)
        return self._state

    async def drain(self) -> AppState:
        for request in self.pending_requests():
            await self.run(request)
        return self._state

    async def _notify(self) -> None:
        for listener in list(self._listeners):
            await listener(self._state)
