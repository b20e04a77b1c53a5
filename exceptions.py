"""
Resolver Exceptions.

All resolver errors are wrapped in ResolverError for consistent handling.
"""

from typing import Any


class ResolverError(Exception):
    """
    Base exception for all Resolver errors.

    Usage:
        raise ResolverError('ORDER_NOT_FOUND', order_id=42)

    Attributes:
        code: Error code (ORDER_NOT_FOUND, EMPTY_CHAIN, etc.)
        details: Additional context as keyword arguments
    """

    def __init__(self, code: str, **details: Any):
        self.code = code
        self.details = details
        message = f"{code}: {details}" if details else code
        super().__init__(message)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {"code": self.code, **self.details}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"ResolverError({self.code}: {details_str})"
        return f"ResolverError({self.code})"


# Common error codes
# ORDER_NOT_FOUND: Order does not exist
# PIECE_NOT_FOUND: Piece name unknown (intake)
# EMPTY_CHAIN: Ordered piece has no producing transformation
# CYCLIC_RECIPE: Transformation graph loops back on itself
# INVALID_PAYLOAD: Notification payload could not be parsed
# BOM_ENTRY_NOT_FOUND: BomEntry does not exist
# INVALID_MONEY: Money string has no digits
# INVALID_QUANTITY: Order quantity below 1
# INVALID_DOCUMENT: Order document field missing, mistyped or out of range
