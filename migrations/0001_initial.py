"""
Initial migration for Resolver.

Creates:
- Piece, Client
- Transformation (+ history)
- Order
- BomEntry
"""

import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


TOOL_CHOICES = [
    ("T1", "Tool 1"),
    ("T2", "Tool 2"),
    ("T3", "Tool 3"),
    ("T4", "Tool 4"),
    ("T5", "Tool 5"),
    ("T6", "Tool 6"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # ══════════════════════════════════════════════════════════════
        # PIECE / CLIENT
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Piece",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Piece identifier, e.g. P5",
                        max_length=20,
                        unique=True,
                        verbose_name="Name",
                    ),
                ),
            ],
            options={
                "verbose_name": "Piece",
                "verbose_name_plural": "Pieces",
                "db_table": "resolver_piece",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Client",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Name")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "Client",
                "verbose_name_plural": "Clients",
                "db_table": "resolver_client",
                "ordering": ["name"],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # TRANSFORMATION
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Transformation",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "tool",
                    models.CharField(choices=TOOL_CHOICES, max_length=2, verbose_name="Tool"),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="Units of the input piece consumed per unit produced",
                        verbose_name="Quantity",
                    ),
                ),
                (
                    "cost",
                    models.PositiveBigIntegerField(
                        default=0,
                        help_text="Cost in minor units (cents)",
                        verbose_name="Cost",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "from_piece",
                    models.ForeignKey(
                        help_text="Piece consumed by this step",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="consumed_by",
                        to="resolver.piece",
                        verbose_name="From piece",
                    ),
                ),
                (
                    "to_piece",
                    models.ForeignKey(
                        help_text="Piece produced by this step",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="produced_by",
                        to="resolver.piece",
                        verbose_name="To piece",
                    ),
                ),
            ],
            options={
                "verbose_name": "Transformation",
                "verbose_name_plural": "Transformations",
                "db_table": "resolver_transformation",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["to_piece"], name="resolver_tr_to_piece_idx"),
                    models.Index(fields=["from_piece"], name="resolver_tr_from_piece_idx"),
                ],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # ORDER
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "number",
                    models.PositiveIntegerField(
                        help_text="Order number in the client's document",
                        verbose_name="Number",
                    ),
                ),
                ("quantity", models.PositiveIntegerField(verbose_name="Quantity")),
                (
                    "due_date",
                    models.PositiveIntegerField(
                        help_text="Production day the order is due",
                        verbose_name="Due date",
                    ),
                ),
                (
                    "late_pen",
                    models.BigIntegerField(
                        default=0,
                        help_text="Per-day penalty for late delivery, in cents",
                        verbose_name="Late penalty",
                    ),
                ),
                (
                    "early_pen",
                    models.BigIntegerField(
                        default=0,
                        help_text="Per-day penalty for early delivery, in cents",
                        verbose_name="Early penalty",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="resolver.client",
                        verbose_name="Client",
                    ),
                ),
                (
                    "piece",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="resolver.piece",
                        verbose_name="Piece",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "db_table": "resolver_order",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["client", "number"], name="resolver_or_client_num_idx"),
                ],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # BOM ENTRY
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="BomEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("piece_number", models.PositiveIntegerField(verbose_name="Piece number")),
                ("pieces_total", models.PositiveIntegerField(verbose_name="Pieces total")),
                ("step_number", models.PositiveIntegerField(verbose_name="Step number")),
                ("steps_total", models.PositiveIntegerField(verbose_name="Steps total")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bom_entries",
                        to="resolver.order",
                        verbose_name="Order",
                    ),
                ),
                (
                    "transformation",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bom_entries",
                        to="resolver.transformation",
                        verbose_name="Transformation",
                    ),
                ),
            ],
            options={
                "verbose_name": "BOM entry",
                "verbose_name_plural": "BOM entries",
                "db_table": "resolver_bom_entry",
                "ordering": ["order", "piece_number", "step_number", "id"],
                "indexes": [
                    models.Index(
                        fields=["order", "piece_number", "step_number"],
                        name="resolver_bom_order_pos_idx",
                    ),
                ],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # HISTORICAL RECORDS
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="HistoricalTransformation",
            fields=[
                (
                    "id",
                    models.BigIntegerField(
                        auto_created=True, blank=True, db_index=True, verbose_name="ID"
                    ),
                ),
                (
                    "tool",
                    models.CharField(choices=TOOL_CHOICES, max_length=2, verbose_name="Tool"),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="Units of the input piece consumed per unit produced",
                        verbose_name="Quantity",
                    ),
                ),
                (
                    "cost",
                    models.PositiveBigIntegerField(
                        default=0,
                        help_text="Cost in minor units (cents)",
                        verbose_name="Cost",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="updated at"),
                ),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "from_piece",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        help_text="Piece consumed by this step",
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="resolver.piece",
                        verbose_name="From piece",
                    ),
                ),
                (
                    "to_piece",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        help_text="Piece produced by this step",
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="resolver.piece",
                        verbose_name="To piece",
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Transformation",
                "verbose_name_plural": "historical Transformations",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
