"""A writer and a reader thread sharing a queue guarded by a condition."""

from __future__ import annotations

import argparse
import threading
import time
from collections import deque
from typing import Callable

__all__ = ["produce_consume", "main"]


def produce_consume(
    count: int,
    consume: Callable[[int], object],
    write_delay: float = 0.0,
    read_delay: float = 0.0,
) -> int:
    """Write 0..count-1 from this thread while a reader thread consumes them.

    Every item is passed to ``consume`` in order; returns how many were consumed.
    An exception raised by ``consume`` is re-raised here.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    buffer: deque[int] = deque()
    cond = threading.Condition()
    done = False
    consumed = 0
    failure: list[BaseException] = []

    def reader() -> None:
        nonlocal consumed, done
        while True:
            with cond:
                cond.wait_for(lambda: bool(buffer) or done)
                if not buffer:
                    return
                item = buffer.popleft()
            if read_delay:
                time.sleep(read_delay)
            try:
                consume(item)
            except BaseException as exc:
                failure.append(exc)
                with cond:
                    done = True
                    buffer.clear()
                return
            consumed += 1

    thread = threading.Thread(target=reader, daemon=True)
    thread.start()
    for value in range(count):
        with cond:
            if failure:
                break
            buffer.append(value)
            cond.notify()
        if write_delay:
            time.sleep(write_delay)
    with cond:
        done = True
        cond.notify_all()
    thread.join()
    if failure:
        raise failure[0]
    return consumed


def main(argv: list[str] | None = None) -> int:
    """Print the numbers passed from the writer to the reader."""
    parser = argparse.ArgumentParser(description="Writer/reader threads demo.")
    parser.add_argument("--count", type=int, default=10000)
    parser.add_argument("--write-delay", type=float, default=0.001)
    parser.add_argument("--read-delay", type=float, default=0.003)
    args = parser.parse_args(argv)
    try:
        produce_consume(
            args.count,
            lambda value: print(value, end="  ", flush=True),
            args.write_delay,
            args.read_delay,
        )
    except ValueError as exc:
        parser.error(str(exc))
    print()
    return 0