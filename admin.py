"""
Resolver Admin -- Django admin for pieces, transformations, orders and BOMs.

BOM entries are written by the resolver only, so they are read-only here.
"""

from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from resolver.models import BomEntry, Client, Order, Piece, Transformation


# ── Piece / Client ──


@admin.register(Piece)
class PieceAdmin(admin.ModelAdmin):
    """Admin for pieces."""

    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """Admin for clients."""

    list_display = ("name", "created_at")
    search_fields = ("name",)
    readonly_fields = ("created_at",)


# ── Transformation ──


@admin.register(Transformation)
class TransformationAdmin(SimpleHistoryAdmin):
    """Admin for production edges (changes are tracked)."""

    list_display = ("id", "from_piece", "to_piece", "tool", "quantity", "cost")
    list_filter = ("tool", "to_piece")
    raw_id_fields = ("from_piece", "to_piece")
    readonly_fields = ("created_at", "updated_at")


# ── Order ──


class BomEntryInline(admin.TabularInline):
    """Inline for the BOM of an order."""

    model = BomEntry
    extra = 0
    can_delete = False
    fields = ("piece_number", "step_number", "steps_total", "transformation")
    readonly_fields = fields
    ordering = ("piece_number", "step_number", "id")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for client orders."""

    list_display = ("id", "number", "client", "piece", "quantity", "due_date", "created_at")
    list_filter = ("piece",)
    search_fields = ("client__name", "number")
    raw_id_fields = ("client", "piece")
    readonly_fields = ("created_at",)
    inlines = [BomEntryInline]


# ── BomEntry ──


@admin.register(BomEntry)
class BomEntryAdmin(admin.ModelAdmin):
    """Admin for BOM entries (read-only)."""

    list_display = ("id", "order", "piece_number", "pieces_total", "step_number", "steps_total", "transformation")
    list_filter = ("order__piece",)
    raw_id_fields = ("order", "transformation")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
