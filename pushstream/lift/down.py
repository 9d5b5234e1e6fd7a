"""
Lowering a stream into a single Result.

Subscribe, wait for the terminal signal, and fold what arrived into
``Result[list[T], E]``. Values received before a failure are not part of the
``Error``. Use ``to_writer_result`` on a traced stage to keep that history.
"""

from __future__ import annotations

from kungfu import LazyCoroResult, Result

from ..publisher.protocol import Publisher
from ..sink.recorder import record
from ..transform.dedup import DedupStage
from ..writer import WriterResult


def collect[T, E](publisher: Publisher[T, E]) -> LazyCoroResult[list[T], E]:
    """
    Lazy collection: nothing subscribes until the result is awaited.

    Example:
        from pushstream import lift as L

        result = await L.down.collect(stage)()
        # Ok(["onefish", "twofish"]) or Error(reason)

    NOTE: For an open-ended source (PassthroughSubject) this waits until
          someone sends the terminal signal.
    """
    async def run() -> Result[list[T], E]:
        recorder = await record(publisher)
        await recorder.wait()
        return recorder.result()

    return LazyCoroResult(run)


async def to_result[T, E](publisher: Publisher[T, E]) -> Result[list[T], E]:
    """Run collect() and return the Result."""
    return await collect(publisher)()


async def to_writer_result[T, E](
    stage: DedupStage[T, E],
) -> WriterResult[T, E]:
    """
    Collect a stage and pair the outcome with its trace.

    Example:
        stage = try_remove_duplicates_w(L.up.just(a, a, b), compare=cmp)
        wr = await L.down.to_writer_result(stage)
        wr.result  # Ok([a, b])
        wr.log     # [emitted a, suppressed a, emitted b, completed]
    """
    result = await to_result(stage)
    return WriterResult(result, stage.trace)


__all__ = ("collect", "to_result", "to_writer_result")
