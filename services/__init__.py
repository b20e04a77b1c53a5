"""
Resolver Services.

Business logic that doesn't belong in models:
- recipes: build the flat recipe of a piece and index it by destination
- paths: select one production chain from the index
- bom: number the chain per unit and emit the batch
- loop: the event-driven resolver process
- intake: place client orders
- store: the reads and writes the engine performs
"""

from resolver.services.bom import emit_bom, plan_bom_entries
from resolver.services.intake import parse_money_string, place_client_order, place_client_orders
from resolver.services.loop import Resolver
from resolver.services.paths import get_path_selector, select_cheapest_path, select_path
from resolver.services.recipes import build_recipe, index_by_destination

__all__ = [
    "build_recipe",
    "index_by_destination",
    "select_path",
    "select_cheapest_path",
    "get_path_selector",
    "plan_bom_entries",
    "emit_bom",
    "Resolver",
    "parse_money_string",
    "place_client_order",
    "place_client_orders",
]
