"""
Resolver Service - Thin wrapper over the services.

Usage:
    from resolver import resolve, ResolverError

    # Intake
    order = resolve.place({
        "client": {"name_id": "Client AA"},
        "order": {"number": 1, "work_piece": "P5", "quantity": 2,
                  "due_date": 7, "late_pen": "$10", "early_pen": "$5"},
    })

    # Resolution (normally done by `manage.py run_resolver`)
    result = resolve.order(order.pk)
    result.entry_ids        # [1, 2, 3, ...]

    # Queries
    resolve.recipe(piece)   # flat recipe
    resolve.chain(piece)    # selected chain, finished -> root
    resolve.bom(order)      # persisted entries
"""

import logging

from resolver.models import BomEntry, Order, Piece, Transformation
from resolver.results import ResolutionResult
from resolver.services.intake import place_client_order
from resolver.services.loop import Resolver
from resolver.services.paths import get_path_selector
from resolver.services.recipes import build_recipe, index_by_destination

logger = logging.getLogger(__name__)


def _piece_id(piece: Piece | int) -> int:
    return piece.pk if isinstance(piece, Piece) else piece


class Resolve:
    """
    Main API for Resolver (thin wrapper).

    Every method is a @classmethod; `resolve` is the class itself.
    """

    # ══════════════════════════════════════════════════════════════
    # INTAKE
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def place(cls, document: dict, bus=None) -> Order:
        """Place a client order and announce it."""
        return place_client_order(document, bus=bus)

    # ══════════════════════════════════════════════════════════════
    # RESOLUTION
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def order(cls, order: Order | int, bus=None, strategy: str | None = None) -> ResolutionResult:
        """
        Resolve one order right away, outside the loop.

        Errors are raised (never swallowed) regardless of FAIL_FAST.
        """
        order_id = order.pk if isinstance(order, Order) else order
        resolver = Resolver(
            bus=bus, fail_fast=True, path_selector=get_path_selector(strategy)
        )
        return resolver.resolve_order(order_id)

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def recipe(cls, piece: Piece | int) -> list[Transformation]:
        """Flat recipe of a piece."""
        return build_recipe(_piece_id(piece))

    @classmethod
    def chain(cls, piece: Piece | int, strategy: str | None = None) -> list[Transformation]:
        """Chain the resolver would select for a piece, finished -> root."""
        piece_id = _piece_id(piece)
        index = index_by_destination(build_recipe(piece_id))
        return get_path_selector(strategy)(piece_id, index)

    @classmethod
    def bom(cls, order: Order | int) -> list[BomEntry]:
        """Persisted BOM entries of an order, by piece then step."""
        order_id = order.pk if isinstance(order, Order) else order
        return list(
            BomEntry.objects.filter(order_id=order_id)
            .select_related("transformation")
            .order_by("piece_number", "step_number", "id")
        )

    @classmethod
    def pending(cls) -> list[Order]:
        """Orders with no BOM entries yet."""
        return list(Order.objects.filter(bom_entries__isnull=True).order_by("id"))
