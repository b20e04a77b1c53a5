"""
Resolver REST API.

Provides DRF ViewSets for:
- Transformation (read-only)
- Order (intake + read-only)
- BomEntry (read-only)
"""
