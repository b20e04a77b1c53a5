"""
Resolver Models.

Core models for order resolution:
- Piece: material / product identifier
- Client: who places orders
- Transformation: production edge from one piece to another (tool, quantity, cost)
- Order: client order for a finished piece
- BomEntry: one numbered production step of one unit of an order
"""

from resolver.models.bom import BomEntry
from resolver.models.order import Order
from resolver.models.piece import Client, Piece
from resolver.models.transformation import Tool, Transformation

__all__ = [
    "Piece",
    "Client",
    "Tool",
    "Transformation",
    "Order",
    "BomEntry",
]
