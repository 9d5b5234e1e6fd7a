"""
Behaviour of the remove-duplicates stage, driven step by step through a
PassthroughSubject: default equality, comparison by key, and a comparator
that fails.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from pushstream import (
    Completed,
    ComparisonOutcome,
    Demand,
    Failed,
    NoValueError,
    PassthroughSubject,
    StagePhase,
    attach,
    catching,
    comparison_failed,
    equal_if,
    lift as L,
    record,
    remove_duplicates,
    remove_duplicates_by,
    try_remove_duplicates,
)


@dataclass(frozen=True, slots=True)
class Item:
    id: int


class Boom(Exception):
    pass


def boom_on_five(previous: Item, candidate: Item) -> ComparisonOutcome[Boom]:
    if previous.id == 5 or candidate.id == 5:
        return comparison_failed(Boom("id 5"))
    return equal_if(previous.id == candidate.id)


# ============================================================================
# Default equality
# ============================================================================


@pytest.mark.asyncio
async def test_adjacent_duplicates_collapse_and_earlier_values_return(subject):
    recorder = await record(remove_duplicates(subject))

    assert recorder.count == 0
    with pytest.raises(NoValueError):
        _ = recorder.latest

    await subject.send("onefish")
    assert (recorder.latest, recorder.count) == ("onefish", 1)

    await subject.send("onefish")
    assert (recorder.latest, recorder.count) == ("onefish", 1)

    await subject.send("twofish")
    assert (recorder.latest, recorder.count) == ("twofish", 2)

    await subject.send("twofish")
    assert (recorder.latest, recorder.count) == ("twofish", 2)

    # not the most recent emission, so it passes again
    await subject.send("onefish")
    assert (recorder.latest, recorder.count) == ("onefish", 3)

    await subject.send_completion()
    assert recorder.values == ["onefish", "twofish", "onefish"]
    assert recorder.completion == Completed()


@pytest.mark.asyncio
async def test_first_value_is_always_emitted():
    def always_duplicate(previous: int, candidate: int) -> bool:
        return True

    recorder = await record(remove_duplicates_by(L.up.just(7, 8, 9), equivalent=always_duplicate))

    assert recorder.values == [7]
    assert recorder.completion == Completed()


@pytest.mark.asyncio
async def test_none_is_an_ordinary_value():
    recorder = await record(remove_duplicates(L.up.just(None, None, 1, None)))

    assert recorder.values == [None, 1, None]


@pytest.mark.asyncio
async def test_last_accepted_tracks_last_emission_not_last_receipt(subject):
    stage = remove_duplicates(subject)
    await record(stage)

    assert not stage.has_last_accepted
    with pytest.raises(NoValueError):
        _ = stage.last_accepted

    await subject.send("a")
    await subject.send("a")
    assert stage.last_accepted == "a"

    await subject.send("b")
    assert stage.last_accepted == "b"


@pytest.mark.asyncio
async def test_value_rejected_by_downstream_does_not_become_last_accepted(subject):
    stage = remove_duplicates(subject)

    def picky(value: str) -> None:
        if value == "b":
            raise KeyError(value)

    await attach(stage, on_value=picky)
    await subject.send("a")

    with pytest.raises(KeyError):
        await subject.send("b")

    assert stage.last_accepted == "a"
    assert stage.phase is StagePhase.ACTIVE


# ============================================================================
# Custom comparator
# ============================================================================


@pytest.mark.asyncio
async def test_equivalence_by_id(subject):
    recorder = await record(remove_duplicates_by(subject, equivalent=lambda a, b: a.id == b.id))

    await subject.send(Item(1))
    assert (recorder.latest, recorder.count) == (Item(1), 1)

    await subject.send(Item(1))
    assert recorder.count == 1

    await subject.send(Item(2))
    assert (recorder.latest, recorder.count) == (Item(2), 2)

    await subject.send(Item(2))
    assert recorder.count == 2

    await subject.send(Item(1))
    assert (recorder.latest, recorder.count) == (Item(1), 3)

    await subject.send_completion()
    assert [item.id for item in recorder.values] == [1, 2, 1]
    assert recorder.completion == Completed()


# ============================================================================
# Fallible comparator
# ============================================================================


@pytest.mark.asyncio
async def test_comparator_failure_halts_stream(subject):
    stage = try_remove_duplicates(subject, compare=boom_on_five)
    recorder = await record(stage)

    for item in (Item(1), Item(1), Item(2), Item(2)):
        await subject.send(item)
    assert [item.id for item in recorder.values] == [1, 2]
    assert recorder.completion is None

    await subject.send(Item(5))
    assert [item.id for item in recorder.values] == [1, 2]
    assert isinstance(recorder.completion, Failed)
    assert isinstance(recorder.completion.reason, Boom)
    assert stage.phase is StagePhase.TERMINATED
    assert not stage.has_last_accepted

    # nothing after the failure is observable
    failure = recorder.completion
    await subject.send(Item(3))
    await subject.send_completion()
    assert [item.id for item in recorder.values] == [1, 2]
    assert recorder.completion is failure


@pytest.mark.asyncio
async def test_failure_cancels_upstream_subscription(subject):
    stage = try_remove_duplicates(subject, compare=boom_on_five)
    await record(stage)
    assert subject.subscriber_count == 1

    await subject.send(Item(2))
    await subject.send(Item(5))

    assert subject.subscriber_count == 0


@pytest.mark.asyncio
async def test_value_pushed_after_termination_is_ignored(subject):
    stage = try_remove_duplicates(subject, compare=boom_on_five)
    recorder = await record(stage)
    await subject.send(Item(1))
    await subject.send(Item(5))

    demand = await stage.on_value(Item(9))

    assert demand is Demand.CANCEL
    assert [item.id for item in recorder.values] == [1]


@pytest.mark.asyncio
async def test_raising_comparator_bridged_with_catching(subject):
    def same_id(previous: Item, candidate: Item) -> bool:
        if previous.id == 5 or candidate.id == 5:
            raise Boom("id 5")
        return previous.id == candidate.id

    recorder = await record(
        try_remove_duplicates(subject, compare=catching(same_id, on_error=lambda exc: exc))
    )
    for item in (Item(1), Item(1), Item(2), Item(2), Item(5)):
        await subject.send(item)

    assert [item.id for item in recorder.values] == [1, 2]
    assert isinstance(recorder.completion, Failed)
    assert isinstance(recorder.completion.reason, Boom)


@pytest.mark.asyncio
async def test_raising_comparator_propagates_to_sender(subject):
    def explode(previous: int, candidate: int) -> ComparisonOutcome[str]:
        raise RuntimeError("comparator bug")

    recorder = await record(try_remove_duplicates(subject, compare=explode))
    await subject.send(1)

    with pytest.raises(RuntimeError, match="comparator bug"):
        await subject.send(2)
    assert recorder.values == [1]


# ============================================================================
# Terminal signals
# ============================================================================


class CountingSubscriber:
    def __init__(self) -> None:
        self.values: list[object] = []
        self.completions: list[object] = []

    def on_subscribe(self, subscription) -> None:
        self.subscription = subscription

    async def on_value(self, value) -> Demand:
        self.values.append(value)
        return Demand.MORE

    async def on_completion(self, completion) -> None:
        self.completions.append(completion)


@pytest.mark.asyncio
async def test_completion_forwarded_exactly_once(subject):
    stage = remove_duplicates(subject)
    downstream = CountingSubscriber()
    await stage.subscribe(downstream)

    await subject.send(1)
    await subject.send_completion()
    await subject.send_completion()
    await stage.on_completion(Completed())
    await stage.on_value(2)

    assert downstream.values == [1]
    assert downstream.completions == [Completed()]
    assert stage.is_terminated
    assert not stage.has_last_accepted


@pytest.mark.asyncio
async def test_empty_input_completes_without_values(subject):
    recorder = await record(remove_duplicates(subject))

    await subject.send_completion()

    assert recorder.values == []
    assert recorder.completion == Completed()


@pytest.mark.asyncio
async def test_empty_sequence_completes_without_values():
    recorder = await record(remove_duplicates(L.up.empty()))

    assert recorder.values == []
    assert recorder.completion == Completed()


@pytest.mark.asyncio
async def test_upstream_failure_passes_through_unchanged():
    reason = ValueError("upstream broke")
    recorder = await record(remove_duplicates(L.up.from_iterable([1, 1, 2], then=Failed(reason))))

    assert recorder.values == [1, 2]
    assert isinstance(recorder.completion, Failed)
    assert recorder.completion.reason is reason


@pytest.mark.asyncio
async def test_upstream_failure_before_any_value():
    recorder = await record(remove_duplicates(L.up.fail("gone")))

    assert recorder.values == []
    assert recorder.completion == Failed("gone")


@pytest.mark.asyncio
async def test_stage_subscribes_upstream_only_when_subscribed():
    subject: PassthroughSubject[int, str] = PassthroughSubject()
    stage = remove_duplicates(subject)

    assert stage.phase is StagePhase.UNSTARTED
    assert subject.subscriber_count == 0

    await record(stage)

    assert stage.phase is StagePhase.ACTIVE
    assert subject.subscriber_count == 1


@pytest.mark.asyncio
async def test_cancel_before_subscribe_keeps_stage_terminated(subject):
    stage = remove_duplicates(subject)
    stage.cancel()

    recorder = await record(stage)
    await subject.send(1)

    assert stage.phase is StagePhase.TERMINATED
    assert subject.subscriber_count == 0
    assert recorder.values == []
    assert recorder.completion is None
