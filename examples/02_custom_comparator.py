from __future__ import annotations

from _infra import Item, banner, run

from pushstream import lift as L, remove_duplicates_by
from kungfu import Error, Ok


async def main() -> None:
    banner("02_custom_comparator: values without equality, compared by id")

    source = L.up.just(Item(1), Item(1), Item(2), Item(2), Item(1))
    stage = remove_duplicates_by(source, equivalent=lambda a, b: a.id == b.id)

    match await L.down.to_result(stage):
        case Ok(items):
            print(f"emitted ids: {[item.id for item in items]}")
        case Error(err):
            print(f"error: {err!r}")


if __name__ == "__main__":
    run(main)
