"""
Recipe building -- from a finished piece back to its raw materials.

A recipe is the flat, unordered list of every transformation reachable
backward from a target piece. It is fetched generation by generation:

    frontier {9}  ->  edges producing 9        -> frontier {5}
    frontier {5}  ->  edges producing 5        -> frontier {2}
    frontier {2}  ->  edges producing 2        -> frontier {1}
    frontier {1}  ->  nothing                  -> done (1 is raw material)

Usage:
    recipe = build_recipe(piece_id)
    index = index_by_destination(recipe)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from resolver.exceptions import ResolverError
from resolver.models import Transformation
from resolver.services.store import get_immediate_transformations

logger = logging.getLogger(__name__)

Fetch = Callable[[Iterable[int]], list[Transformation]]


def build_recipe(final_piece_id: int, fetch: Fetch | None = None) -> list[Transformation]:
    """
    Collect every transformation reachable backward from `final_piece_id`.

    Args:
        final_piece_id: Piece the recipe should produce
        fetch: Returns the transformations producing a set of pieces
            (defaults to the database)

    Returns:
        Transformations, each exactly once, in discovery order

    Raises:
        ResolverError: CYCLIC_RECIPE if the edges loop back on themselves
    """
    fetch = fetch or get_immediate_transformations

    recipe: list[Transformation] = []
    seen: set[int] = set()
    frontier = {final_piece_id}

    while frontier:
        fetched = fetch(frontier)
        if not fetched:
            break

        new_edges = []
        for transformation in fetched:
            if transformation.pk in seen:
                continue
            seen.add(transformation.pk)
            new_edges.append(transformation)

        recipe.extend(new_edges)
        # Only unseen edges move the frontier, so the walk is finite
        # even over a cyclic table.
        frontier = {t.from_piece_id for t in new_edges}

    ensure_acyclic(recipe)

    logger.debug(
        f"Recipe for piece {final_piece_id}: {len(recipe)} transformations",
        extra={"piece": final_piece_id, "transformations": len(recipe)},
    )

    return recipe


def index_by_destination(recipe: Iterable[Transformation]) -> dict[int, list[Transformation]]:
    """
    Group transformations by the piece they produce.

    Order inside each group follows the recipe. A piece missing from the
    index has no producing transformation: it is a root.
    """
    index: dict[int, list[Transformation]] = {}
    for transformation in recipe:
        index.setdefault(transformation.to_piece_id, []).append(transformation)
    return index


def ensure_acyclic(recipe: Iterable[Transformation]) -> None:
    """Raise CYCLIC_RECIPE if following from_piece -> to_piece ever loops."""
    graph: dict[int, list[int]] = {}
    for transformation in recipe:
        graph.setdefault(transformation.from_piece_id, []).append(
            transformation.to_piece_id
        )

    # 1 = on the current DFS path, 2 = fully explored
    state: dict[int, int] = {}

    for root in graph:
        if root in state:
            continue
        state[root] = 1
        stack = [(root, iter(graph.get(root, ())))]
        while stack:
            piece, children = stack[-1]
            child = next(children, None)
            if child is None:
                state[piece] = 2
                stack.pop()
            elif state.get(child) == 1:
                raise ResolverError("CYCLIC_RECIPE", piece=child)
            elif child not in state:
                state[child] = 1
                stack.append((child, iter(graph.get(child, ()))))
