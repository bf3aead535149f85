import asyncio
import random

from figuregen.backend.models import GenerationRequest
from figuregen.backend.sequencer import GenerationSequencer


def test_sequencer_starts_with_initial_request_pending() -> None:
    sequencer = GenerationSequencer(rng=random.Random(1))

    assert sequencer.state.requested_generation == 1
    assert sequencer.pending_requests() == [GenerationRequest(tag=1, count=10)]
    assert sequencer.pending_requests() == []


def test_drain_commits_initial_batch() -> None:
    sequencer = GenerationSequencer(rng=random.Random(1))

    state = asyncio.run(sequencer.drain())

    assert state.committed_generation == 1
    assert len(state.samples) == 10


def test_submit_set_desired_count_commits_requested_size() -> None:
    sequencer = GenerationSequencer(rng=random.Random(2))

    state = asyncio.run(sequencer.submit({"type": "SET_DESIRED_COUNT", "count": "5"}))

    assert state.committed_generation == 2
    assert state.desired_count == 5
    assert len(state.samples) == 5


def test_submit_malformed_count_changes_nothing() -> None:
    sequencer = GenerationSequencer(rng=random.Random(2))
    before = sequencer.state

    after = asyncio.run(sequencer.submit({"type": "SET_DESIRED_COUNT", "count": "many"}))

    assert after == before


def test_superseded_request_is_not_committed() -> None:
    sequencer = GenerationSequencer(rng=random.Random(3))
    sequencer.pending_requests()

    (first,) = sequencer.dispatch({"type": "REQUEST_REGENERATION"})
    (second,) = sequencer.dispatch({"type": "SET_DESIRED_COUNT", "count": 3})

    async def scenario() -> tuple[bool, bool]:
        late_second = await sequencer.run(second)
        late_first = await sequencer.run(first)
        return late_second, late_first

    committed_second, committed_first = asyncio.run(scenario())

    assert committed_second is True
    assert committed_first is False
    assert sequencer.state.committed_generation == 3
    assert len(sequencer.state.samples) == 3


def test_results_delivered_out_of_order_keep_latest_payload() -> None:
    sequencer = GenerationSequencer(rng=random.Random(4))
    initial = sequencer.pending_requests()[0]
    second = sequencer.dispatch({"type": "SET_DESIRED_COUNT", "count": 2})[0]
    third = sequencer.dispatch({"type": "SET_DESIRED_COUNT", "count": 4})[0]

    results = {request.tag: sequencer.fulfil(request) for request in (initial, second, third)}
    for tag in (2, 1, 3):
        sequencer.dispatch({"type": "RESULT_ARRIVED", "result": results[tag]})

    assert sequencer.state.committed_generation == 3
    assert sequencer.state.samples == results[3].samples


def test_listeners_are_notified_only_on_commit() -> None:
    sequencer = GenerationSequencer(rng=random.Random(5))
    seen: list[int] = []

    async def listener(state) -> None:
        seen.append(state.committed_generation)

    sequencer.subscribe(listener)

    async def scenario() -> None:
        await sequencer.drain()
        stale = sequencer.dispatch({"type": "REQUEST_REGENERATION"})[0]
        await sequencer.submit({"type": "REQUEST_REGENERATION"})
        await sequencer.run(stale)

    asyncio.run(scenario())
    sequencer.unsubscribe(listener)

    assert seen == [1, 3]


def test_injected_sampler_receives_count_and_rng() -> None:
    rng = random.Random(6)
    calls: list[tuple[int, object]] = []

    def fake_sampler(count, source):
        calls.append((count, source))
        return []

    sequencer = GenerationSequencer(rng=rng, sampler=fake_sampler)

    result = sequencer.fulfil(GenerationRequest(tag=1, count=7))

    assert calls == [(7, rng)]
    assert result.tag == 1
    assert result.samples == ()
