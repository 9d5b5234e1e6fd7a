from __future__ import annotations

from _infra import banner, run
from kungfu import Error, Ok

from pushstream import TracePolicy, comparison_failed, equal_if, lift as L, try_remove_duplicates_w
from pushstream.writer import kinds_of


def reject_negative(previous: int, candidate: int):
    if candidate < 0:
        return comparison_failed(f"negative value {candidate}")
    return equal_if(previous == candidate)


async def main() -> None:
    banner("04_writer_trace: result + decision log")

    stage = try_remove_duplicates_w(
        L.up.just(1, 1, 2, 3, 3, -1, 4),
        compare=reject_negative,
        policy=TracePolicy.everything(max_events=50),
    )
    wr = await L.down.to_writer_result(stage)

    match wr.result:
        case Ok(values):
            print(f"ok: {values}")
        case Error(err):
            print(f"error: {err}")
    print(f"log: {kinds_of(wr.log)}")


if __name__ == "__main__":
    run(main)
