"""
Load demo data for the resolver.

Creates a small factory:
- Pieces P1..P9 (P1 is the only raw material)
- Transformations between them, with alternatives for P5 and P9
- A few client orders (optional, announced on `new_order`)

Usage:
    python manage.py load_resolver_demo
    python manage.py load_resolver_demo --clear --orders 3
"""

from django.core.management.base import BaseCommand
from django.db import transaction


# (from, to, tool, quantity, cost in cents)
TRANSFORMATIONS = [
    ("P1", "P2", "T1", 1, 1000),
    ("P2", "P3", "T2", 1, 1500),
    ("P2", "P4", "T3", 1, 2000),
    ("P2", "P5", "T2", 1, 10000),
    ("P2", "P5", "T3", 1, 5000),
    ("P5", "P9", "T4", 1, 10000),
    ("P1", "P6", "T1", 1, 1000),
    ("P6", "P7", "T5", 1, 3000),
    ("P6", "P8", "T6", 2, 2500),
    ("P8", "P9", "T6", 1, 4000),
]

DEMO_CLIENTS = ["Client AA", "Client BB", "Client CC"]
DEMO_PIECES = ["P4", "P5", "P7", "P9"]


class Command(BaseCommand):
    help = "Loads demo pieces, transformations and orders for the resolver"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete existing resolver data before loading",
        )
        parser.add_argument(
            "--orders",
            type=int,
            default=0,
            help="Number of demo orders to place (each announced on new_order)",
        )

    def handle(self, *args, **options):
        from resolver.models import BomEntry, Client, Order, Piece, Transformation
        from resolver.conf import get_setting
        from resolver.services.intake import place_client_orders

        using = get_setting("DATABASE")

        self.stdout.write("=" * 60)
        self.stdout.write("Loading resolver demo data...")
        self.stdout.write("=" * 60)

        if options["clear"]:
            with transaction.atomic(using=using):
                BomEntry.objects.using(using).delete()
                Order.objects.using(using).delete()
                Client.objects.using(using).delete()
                Transformation.objects.using(using).delete()
                Piece.objects.using(using).delete()
            self.stdout.write(self.style.SUCCESS("   Cleared existing data"))

        with transaction.atomic(using=using):
            pieces = {}
            for i in range(1, 10):
                pieces[f"P{i}"], _ = Piece.objects.using(using).get_or_create(name=f"P{i}")

            created = 0
            for source, target, tool, quantity, cost in TRANSFORMATIONS:
                _, was_created = Transformation.objects.using(using).get_or_create(
                    from_piece=pieces[source],
                    to_piece=pieces[target],
                    tool=tool,
                    defaults={"quantity": quantity, "cost": cost},
                )
                created += was_created

        self.stdout.write(f"   Pieces: {len(pieces)}")
        self.stdout.write(f"   Transformations: {created} created")

        if options["orders"]:
            next_number = (Order.objects.using(using).order_by("-number").values_list("number", flat=True).first() or 0) + 1
            documents = [
                {
                    "client": {"name_id": DEMO_CLIENTS[i % len(DEMO_CLIENTS)]},
                    "order": {
                        "number": next_number + i,
                        "work_piece": DEMO_PIECES[i % len(DEMO_PIECES)],
                        "quantity": 1 + i % 4,
                        "due_date": 5 + i,
                        "late_pen": "$100.00",
                        "early_pen": "$10.00",
                    },
                }
                for i in range(options["orders"])
            ]
            placed = place_client_orders(documents)
            self.stdout.write(f"   Orders: {len(placed)} placed")

        self.stdout.write(self.style.SUCCESS("Demo data loaded"))
