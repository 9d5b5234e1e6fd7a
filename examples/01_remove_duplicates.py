from __future__ import annotations

from _infra import banner, run

from pushstream import PassthroughSubject, record, remove_duplicates


async def main() -> None:
    banner("01_remove_duplicates: default equality")

    subject: PassthroughSubject[str, Exception] = PassthroughSubject()
    recorder = await record(remove_duplicates(subject))

    for fish in ("onefish", "onefish", "twofish", "twofish", "onefish"):
        await subject.send(fish)
        print(f"sent {fish:<8} -> latest={recorder.latest!r} count={recorder.count}")

    await subject.send_completion()
    print(f"completion: {recorder.completion!r}")


if __name__ == "__main__":
    run(main)
