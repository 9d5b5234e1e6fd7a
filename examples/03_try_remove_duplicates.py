from __future__ import annotations

from _infra import Boom, Item, banner, run

from pushstream import Failed, PassthroughSubject, catching, record, try_remove_duplicates


def same_id(first: Item, second: Item) -> bool:
    if first.id == 5 or second.id == 5:
        # contrived: any comparison touching id 5 blows up
        raise Boom("id 5 is not comparable")
    return first.id == second.id


async def main() -> None:
    banner("03_try_remove_duplicates: comparator that can fail")

    subject: PassthroughSubject[Item, Exception] = PassthroughSubject()
    stage = try_remove_duplicates(subject, compare=catching(same_id, on_error=lambda exc: exc))
    recorder = await record(stage)

    for item in (Item(1), Item(1), Item(2), Item(2), Item(5), Item(6)):
        await subject.send(item)
        print(f"sent {item} -> count={recorder.count} phase={stage.phase.value}")

    match recorder.completion:
        case Failed(reason):
            print(f"failed with: {reason}")
        case other:
            print(f"ended with: {other!r}")


if __name__ == "__main__":
    run(main)
