"""Timing of index inserts, point lookup and sorted listing on a scratch index."""

import time

from contactbook.application.contact_index import OrderedContactIndex
from contactbook.application.dto import IndexTimings
from contactbook.domain import ContactFields


def _elapsed_ms(start_ns: int) -> float:
    return (time.perf_counter_ns() - start_ns) / 1e6


def benchmark_index(size: int = 100) -> IndexTimings:
    """Fill a fresh index with size generated contacts and time each phase."""
    if size < 1:
        raise ValueError("size must be positive")
    candidates = [
        ContactFields(
            id=str(i),
            first_name=f"Name{i}",
            last_name=f"Last{i}",
            phone="1234567890",
            email=f"email{i}@example.com",
            address=f"Addr{i}",
        )
        for i in range(size)
    ]
    index = OrderedContactIndex()

    start = time.perf_counter_ns()
    for candidate in candidates:
        index.add(candidate)
    insert_ms = _elapsed_ms(start)

    start = time.perf_counter_ns()
    index.get(str(size // 2))
    lookup_ms = _elapsed_ms(start)

    start = time.perf_counter_ns()
    index.list_all()
    list_ms = _elapsed_ms(start)

    return IndexTimings(size=size, insert_ms=insert_ms, lookup_ms=lookup_ms, list_ms=list_ms)
