"""
Run the order resolution loop.

Subscribes to `new_order` and `new_bom_entry` and resolves every new order
into a BOM batch. Runs until the event connection fails; restarting is left
to the process supervisor.

Usage:
    python manage.py run_resolver
    python manage.py run_resolver --backlog
    python manage.py run_resolver --fail-fast --strategy cheapest
"""

from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Runs the order resolution loop (blocks until the event connection drops)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--backlog",
            action="store_true",
            help=(
                "Resolve orders without BOM entries before listening. Orders "
                "placed after the backlog query and before listening starts "
                "are resolved only from their new_order notification"
            ),
        )
        parser.add_argument(
            "--fail-fast",
            action="store_true",
            default=None,
            help="Stop on the first bad payload or failed order",
        )
        parser.add_argument(
            "--strategy",
            choices=["greedy", "cheapest"],
            default=None,
            help="Path selection strategy (default: RESOLVER['PATH_STRATEGY'])",
        )

    def handle(self, *args, **options):
        from resolver.services.loop import Resolver
        from resolver.services.paths import get_path_selector

        resolver = Resolver(
            fail_fast=options["fail_fast"],
            path_selector=get_path_selector(options["strategy"]),
        )

        self.stdout.write(
            f"Resolver listening ({type(resolver.bus).__name__}, "
            f"fail_fast={resolver.fail_fast})"
        )
        resolver.run(resolve_backlog=options["backlog"])
        self.stdout.write(self.style.SUCCESS("Resolver stopped: event stream ended"))
