"""
Tests for path selection (resolver.services.paths).

Verifies that:
- select_path walks back greedily, cheapest producer first
- select_cheapest_path finds the cheapest end-to-end chain
- both return chains ordered finished -> root
- get_path_selector honours RESOLVER["PATH_STRATEGY"]
"""

import pytest

from django.core.exceptions import ImproperlyConfigured

from resolver.exceptions import ResolverError
from resolver.models import Piece, Tool, Transformation
from resolver.services.paths import (
    get_path_selector,
    select_cheapest_path,
    select_path,
)
from resolver.services.recipes import build_recipe, index_by_destination


def t(pk, source, target, cost):
    """Unsaved transformation (selectors never touch the database)."""
    return Transformation(pk=pk, from_piece_id=source, to_piece_id=target, cost=cost)


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def simple_index():
    """P1 -> P2 ($1), P2 -> P5 ($100 or $50), P5 -> P9 ($100)."""
    return index_by_destination([
        t(4, 5, 9, 100),
        t(2, 2, 5, 100),
        t(3, 2, 5, 50),
        t(1, 1, 2, 1),
    ])


@pytest.fixture
def trap_index():
    """
    Cheap last step, expensive ancestor:

        P1 --100--> P2 --1--> P4
        P1 ---1---> P3 --5--> P4
    """
    return index_by_destination([
        t(1, 2, 4, 1),
        t(2, 3, 4, 5),
        t(3, 1, 2, 100),
        t(4, 1, 3, 1),
    ])


# ═══════════════════════════════════════════════════════════════════
# select_path (greedy)
# ═══════════════════════════════════════════════════════════════════


class TestSelectPath:
    """Tests for the greedy selector."""

    def test_picks_cheapest_alternative(self, simple_index):
        """P2 -> P5 at $50 wins over $100."""
        chain = select_path(9, simple_index)

        assert [tr.pk for tr in chain] == [4, 3, 1]

    def test_chain_is_finished_to_root(self, simple_index):
        """First edge produces the start piece, last edge consumes a root."""
        chain = select_path(9, simple_index)

        assert chain[0].to_piece_id == 9
        assert chain[-1].from_piece_id not in simple_index

    def test_consecutive_edges_link(self, simple_index):
        chain = select_path(9, simple_index)

        for current, following in zip(chain, chain[1:]):
            assert current.from_piece_id == following.to_piece_id

    def test_root_start_gives_empty_chain(self, simple_index):
        """A start piece with no producer yields no chain."""
        assert select_path(1, simple_index) == []

    def test_equal_costs_keep_first_candidate(self):
        """Ties go to the first edge in index order."""
        index = index_by_destination([t(10, 1, 2, 5), t(11, 3, 2, 5)])

        chain = select_path(2, index)

        assert [tr.pk for tr in chain] == [10]

    def test_greedy_is_local(self, trap_index):
        """Greedy takes the $1 last step and pays $100 upstream."""
        chain = select_path(4, trap_index)

        assert [tr.pk for tr in chain] == [1, 3]
        assert sum(tr.cost for tr in chain) == 101

    def test_cycle_raises(self):
        index = index_by_destination([t(1, 2, 1, 1), t(2, 1, 2, 1)])

        with pytest.raises(ResolverError) as exc:
            select_path(1, index)

        assert exc.value.code == "CYCLIC_RECIPE"

    def test_against_database_recipe(self, db):
        """Same result when the index comes from stored transformations."""
        p = {name: Piece.objects.create(name=name) for name in ("P1", "P2", "P5", "P9")}
        Transformation.objects.create(from_piece=p["P1"], to_piece=p["P2"], tool=Tool.T1, cost=1)
        Transformation.objects.create(from_piece=p["P2"], to_piece=p["P5"], tool=Tool.T2, cost=100)
        cheap = Transformation.objects.create(
            from_piece=p["P2"], to_piece=p["P5"], tool=Tool.T3, cost=50
        )
        Transformation.objects.create(from_piece=p["P5"], to_piece=p["P9"], tool=Tool.T4, cost=100)

        chain = select_path(p["P9"].pk, index_by_destination(build_recipe(p["P9"].pk)))

        assert len(chain) == 3
        assert chain[1] == cheap


# ═══════════════════════════════════════════════════════════════════
# select_cheapest_path
# ═══════════════════════════════════════════════════════════════════


class TestSelectCheapestPath:
    """Tests for the global selector."""

    def test_avoids_expensive_ancestor(self, trap_index):
        """P1 -> P3 -> P4 costs 6, beating the greedy 101."""
        chain = select_cheapest_path(4, trap_index)

        assert [tr.pk for tr in chain] == [2, 4]
        assert sum(tr.cost for tr in chain) == 6

    def test_agrees_with_greedy_on_simple_table(self, simple_index):
        assert select_cheapest_path(9, simple_index) == select_path(9, simple_index)

    def test_chain_is_finished_to_root(self, trap_index):
        chain = select_cheapest_path(4, trap_index)

        assert chain[0].to_piece_id == 4
        assert chain[-1].from_piece_id not in trap_index

    def test_root_start_gives_empty_chain(self, simple_index):
        assert select_cheapest_path(1, simple_index) == []

    def test_shorter_root_wins(self):
        """A nearer raw material is preferred when it is cheaper."""
        index = index_by_destination([
            t(1, 2, 3, 10),
            t(2, 7, 3, 3),
            t(3, 1, 2, 1),
        ])

        chain = select_cheapest_path(3, index)

        assert [tr.pk for tr in chain] == [2]

    def test_cycle_without_root_raises(self):
        index = index_by_destination([t(1, 2, 1, 1), t(2, 1, 2, 1)])

        with pytest.raises(ResolverError) as exc:
            select_cheapest_path(1, index)

        assert exc.value.code == "CYCLIC_RECIPE"


# ═══════════════════════════════════════════════════════════════════
# get_path_selector
# ═══════════════════════════════════════════════════════════════════


class TestGetPathSelector:
    """Tests for strategy lookup."""

    def test_default_is_greedy(self):
        assert get_path_selector() is select_path

    def test_explicit_strategy(self):
        assert get_path_selector("cheapest") is select_cheapest_path

    def test_strategy_from_settings(self, settings):
        settings.RESOLVER = {"PATH_STRATEGY": "cheapest"}

        assert get_path_selector() is select_cheapest_path

    def test_unknown_strategy(self):
        with pytest.raises(ImproperlyConfigured, match="Unknown PATH_STRATEGY"):
            get_path_selector("fastest")
