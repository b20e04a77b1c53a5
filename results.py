"""
Resolver Result Types.

Structured results for order resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resolver.models import Order, Transformation


@dataclass
class ResolutionResult:
    """
    Outcome of resolving one order into a BOM batch.

    chain is ordered finished -> root, as selected;
    entry_ids follow (piece_number, step_number) order.
    """

    order: Order
    chain: list[Transformation] = field(default_factory=list)
    entry_ids: list[int] = field(default_factory=list)

    @property
    def steps_total(self) -> int:
        return len(self.chain)

    @property
    def pieces_total(self) -> int:
        return self.order.quantity

    @property
    def total_cost(self) -> int:
        """Cost of one unit along the chain, in minor units."""
        return sum(t.cost for t in self.chain)
