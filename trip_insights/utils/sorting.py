"""Manual quicksort used by the outlier detector."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from trip_insights.errors import ConfigurationError


PIVOT_STRATEGIES = ("last", "random")


def _partition(items: list[float], left: int, right: int) -> tuple[int, int]:
    """
    Lomuto partition around items[right], then gather the pivot's duplicates.

    Returns (lt, gt) such that items[lt:gt + 1] all equal the pivot, everything
    before lt is smaller and everything after gt is larger.
    """
    pivot = items[right]
    i = left - 1

    for j in range(left, right):
        if items[j] <= pivot:
            i += 1
            items[i], items[j] = items[j], items[i]

    gt = i + 1
    items[gt], items[right] = items[right], items[gt]

    # Lomuto leaves equal keys mixed into the left side; pull them next to
    # the pivot so runs of duplicates are settled in one pass
    lt = gt
    for j in range(gt - 1, left - 1, -1):
        if items[j] == pivot:
            lt -= 1
            items[j], items[lt] = items[lt], items[j]

    return lt, gt


def quicksort(
    values: Iterable[float],
    pivot: str = "random",
    random_state: int | np.random.Generator | None = None,
) -> list[float]:
    """
    Return a new list with the values sorted ascending.

    Iterative, so already-sorted input cannot hit the recursion limit. The
    larger side of each partition is deferred on the stack and the smaller
    side is processed first, which keeps the stack at O(log n). Keys equal
    to the pivot are excluded from both sides, so inputs made mostly of
    duplicates stay near linear.

    Args:
        values: Numbers to sort (not modified)
        pivot: "last" uses the last element of the active partition;
            "random" first swaps a random element of the partition into
            the last slot
        random_state: Seed or Generator for the random pivot

    Returns:
        Sorted copy of the values
    """
    if pivot not in PIVOT_STRATEGIES:
        raise ConfigurationError(
            f"Unsupported pivot strategy: {pivot!r} (expected one of {PIVOT_STRATEGIES})"
        )

    items = list(values)
    rng = np.random.default_rng(random_state) if pivot == "random" else None
    stack = [(0, len(items) - 1)]

    while stack:
        left, right = stack.pop()
        while left < right:
            if rng is not None:
                k = int(rng.integers(left, right + 1))
                items[k], items[right] = items[right], items[k]

            lt, gt = _partition(items, left, right)

            if lt - left < right - gt:
                if gt + 1 < right:
                    stack.append((gt + 1, right))
                right = lt - 1
            else:
                if left < lt - 1:
                    stack.append((left, lt - 1))
                left = gt + 1

    return items
