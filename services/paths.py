"""
Path selection -- reduce a recipe index to one production chain.

Both selectors return the chain ordered from the finished piece back to
the root material (the emitter reverses it for step numbering).

    select_path           greedy: cheapest producing edge at each piece
    select_cheapest_path  global: cheapest end-to-end chain (Dijkstra)

The greedy walk is the default. It does not guarantee the cheapest
chain overall when cheap local choices lead to expensive ancestors;
set RESOLVER["PATH_STRATEGY"] = "cheapest" for the global optimum.
"""

from __future__ import annotations

import heapq
from collections.abc import Callable

from django.core.exceptions import ImproperlyConfigured

from resolver.conf import get_setting
from resolver.exceptions import ResolverError
from resolver.models import Transformation

Index = dict[int, list[Transformation]]
PathSelector = Callable[[int, Index], list[Transformation]]


def select_path(start_piece_id: int, index: Index) -> list[Transformation]:
    """
    Walk back from `start_piece_id` picking the cheapest producer each time.

    Equal costs keep the first candidate in index order. Stops at the first
    piece with no entry in the index (a root). Empty when `start_piece_id`
    itself is a root.

    Raises:
        ResolverError: CYCLIC_RECIPE if the walk comes back to a piece
    """
    chain: list[Transformation] = []
    visited = {start_piece_id}
    current = start_piece_id

    while current in index:
        # min() keeps the first of equal keys
        picked = min(index[current], key=lambda t: t.cost)
        chain.append(picked)
        current = picked.from_piece_id
        if current in visited:
            raise ResolverError("CYCLIC_RECIPE", piece=current)
        visited.add(current)

    return chain


def select_cheapest_path(start_piece_id: int, index: Index) -> list[Transformation]:
    """
    Cheapest chain from any root to `start_piece_id`.

    Dijkstra over the reversed edges, starting at the finished piece; the
    first root settled closes the cheapest chain (costs are non-negative).
    Equal totals keep the chain found first.
    """
    best: dict[int, int] = {start_piece_id: 0}
    via: dict[int, Transformation] = {}
    settled: set[int] = set()
    heap = [(0, start_piece_id)]

    while heap:
        cost, piece = heapq.heappop(heap)
        if piece in settled:
            continue
        settled.add(piece)

        if piece not in index:
            return _unwind(piece, start_piece_id, via)

        for transformation in index[piece]:
            source = transformation.from_piece_id
            candidate = cost + transformation.cost
            if source not in settled and candidate < best.get(source, candidate + 1):
                best[source] = candidate
                via[source] = transformation
                heapq.heappush(heap, (candidate, source))

    # Every reachable piece has a producer: only possible with a cycle
    raise ResolverError("CYCLIC_RECIPE", piece=start_piece_id)


def _unwind(root: int, start_piece_id: int, via: dict[int, Transformation]) -> list[Transformation]:
    """Follow `via` from the root up to the start piece, return finished -> root."""
    chain = []
    current = root
    while current != start_piece_id:
        transformation = via[current]
        chain.append(transformation)
        current = transformation.to_piece_id
    chain.reverse()
    return chain


SELECTORS: dict[str, PathSelector] = {
    "greedy": select_path,
    "cheapest": select_cheapest_path,
}


def get_path_selector(strategy: str | None = None) -> PathSelector:
    """Return the selector for `strategy` (default: RESOLVER["PATH_STRATEGY"])."""
    strategy = strategy or get_setting("PATH_STRATEGY")
    try:
        return SELECTORS[strategy]
    except KeyError:
        raise ImproperlyConfigured(
            f"Unknown PATH_STRATEGY '{strategy}'. Choose one of: {', '.join(SELECTORS)}"
        )
