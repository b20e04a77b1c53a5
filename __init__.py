"""
Django Production Resolver - Order-to-BOM resolution engine.

Turns client orders into numbered bills of materials: the recipe of the
ordered piece is rebuilt from the transformation table, one production
chain is selected, and the chain is written once per ordered unit.

Usage:
    from resolver import resolve, ResolverError

    order = resolve.place(document)        # intake, announces new_order
    result = resolve.order(order.pk)       # what the loop does per event

    for entry in resolve.bom(order):
        print(entry.piece_number, entry.step_number, entry.transformation)

    # Long-running process
    python manage.py run_resolver
"""

from resolver.exceptions import ResolverError


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("resolve", "Resolve"):
        from resolver.service import Resolve

        return Resolve
    if name == "Resolver":
        from resolver.services.loop import Resolver

        return Resolver
    if name == "ResolutionResult":
        from resolver.results import ResolutionResult

        return ResolutionResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["resolve", "Resolve", "Resolver", "ResolverError", "ResolutionResult"]
__version__ = "0.1.0"
