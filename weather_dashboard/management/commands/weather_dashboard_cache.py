from __future__ import annotations

import argparse

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from weather_dashboard.cities import format_cities
from weather_dashboard.conf import load_dashboard_options
from weather_dashboard.services import build_weather_cache


class Command(BaseCommand):
    help = (
        "Inspect, refresh or clear the shared weather dashboard snapshot."
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        action = parser.add_mutually_exclusive_group()
        action.add_argument(
            "--status",
            action="store_true",
            help="Show the cached snapshot state (default).",
        )
        action.add_argument(
            "--refresh",
            action="store_true",
            help="Fetch from upstream now and store the result.",
        )
        action.add_argument(
            "--clear",
            action="store_true",
            help="Drop the cached snapshot.",
        )

    def handle(self, *args: object, **options: object) -> None:
        dashboard = load_dashboard_options()
        cache = build_weather_cache(dashboard)

        if options.get("clear"):
            cache.invalidate()
            self.stdout.write(f"Cleared {cache.cache_key}.")
            return

        if options.get("refresh"):
            snapshot = async_to_sync(cache.get_or_refresh)()
            if not snapshot.upstream_ok:
                raise CommandError(
                    "Upstream request failed; an empty snapshot was cached."
                )
            self.stdout.write(
                f"Stored {len(snapshot.cities)}/{len(cache.cities)} cities "
                f"under {cache.cache_key} for {cache.ttl_seconds}s."
            )
            return

        stored = cache.store.get(cache.cache_key)
        if stored is None:
            self.stdout.write(f"{cache.cache_key}: no fresh snapshot.")
        else:
            remaining = int(stored.remaining.total_seconds())
            self.stdout.write(
                f"{cache.cache_key}: {len(stored.value.cities)} cities, "
                f"upstream_ok={stored.value.upstream_ok}, "
                f"expires in {remaining}s."
            )
        self.stdout.write("Cities:")
        self.stdout.write(format_cities(cache.cities))
