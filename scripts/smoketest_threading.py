"""
Stress test for thread-safety of parsing and arithmetic.

Parsed UTC offsets go through a shared cache, and instants are shared
freely between threads. Neither should produce diverging results.

Note this isn't a unit test, because it relies on a clean cache
"""

import sys
import time
from threading import Thread

from chronos import CalendarInstant

if not hasattr(sys, "_is_gil_enabled") or sys._is_gil_enabled():
    # Running with GIL enabled can still be useful to compare performance,
    # but be sure to warn that threading hasn't been stress tested.
    print("WARNING: Running with GIL enabled. Threading not stress tested.")


SHARED = CalendarInstant.from_utc(2024, 1, 31, 12)
NUM_THREADS = 16
NUM_ITERATIONS = 500
OFFSET_SAMPLE = [
    "Z",
    "+01:00",
    "-03:00",
    "+05:30",
    "+0545",
    "-09",
    "+12:45",
    "-00:30",
    "+14:00",
    "-11:00",
    "+03:30",
    "+09:00",
    "-02:00",
    "+08:45",
    "-04:30",
    "+06",
    "+10:30",
    "-07:00",
    "+13:00",
    "-10:00",
    "+04:00",
]
assert (
    len(OFFSET_SAMPLE) % NUM_THREADS
), "Offset sample should not be evenly divisible by number of threads"
OFFSETS = OFFSET_SAMPLE * (NUM_THREADS * NUM_ITERATIONS)


def parse_offsets(offsets):
    """Parse strings with a variety of UTC offsets"""
    for offset in offsets:
        inst = CalendarInstant.parse(f"2024-01-31T12:00:00{offset}")
        del inst


def shift_shared(offsets):
    """Derive new values from one shared instant"""
    for n, _ in enumerate(offsets):
        result = SHARED.add_months(n % 13).sub_months(n % 13)
        assert result.day <= SHARED.day
        assert SHARED == CalendarInstant.from_utc(2024, 1, 31, 12)


def main(func):
    print(f"Starting test: {func.__name__}")
    threads = []

    start_time = time.time()

    for n in range(NUM_THREADS):
        thread = Thread(target=func, args=(OFFSETS[n::NUM_THREADS],))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    end_time = time.time()
    print(f"Execution time: {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    main(parse_offsets)
    main(shift_shared)
