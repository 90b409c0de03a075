from __future__ import annotations

import logging
from collections.abc import Sequence

from django.utils.safestring import SafeString

from .conf import DashboardOptions
from .engines.base import WeatherFetcher
from .engines.open_meteo import OpenMeteoBatchFetcher
from .engines.types import City, WeatherSnapshot
from .metrics import (
    weather_dashboard_cache_hits_total,
    weather_dashboard_cache_misses_total,
    weather_dashboard_refresh_total,
)
from .rendering import render_embed, render_skeleton, render_weather
from .store import DjangoCacheStore, SnapshotStore

logger = logging.getLogger(__name__)


class WeatherUnavailableError(Exception):
    """Raised by the refresh path when the upstream call itself failed."""

    def __init__(self, message: str, *, code: str = "no_data") -> None:
        super().__init__(message)
        self.code = code


class WeatherCache:
    """One shared snapshot for the whole city list, bounded by a TTL.

    Refreshes are not serialised: concurrent callers may each fetch, and
    the last completed write wins. Every write is a complete snapshot.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        store: SnapshotStore[WeatherSnapshot],
        *,
        cities: Sequence[City],
        cache_key: str,
        ttl_seconds: int,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.cities = tuple(cities)
        self.cache_key = cache_key
        self.ttl_seconds = ttl_seconds

    def get_if_fresh(self) -> WeatherSnapshot | None:
        stored = self.store.get(self.cache_key)
        if stored is None:
            return None
        return stored.value

    async def get_or_refresh(self) -> WeatherSnapshot:
        """Fetch, store for the full TTL and return the new snapshot.

        Empty and failed snapshots are stored too, so an outage costs at
        most one upstream call per TTL window from the embed path.
        """

        snapshot = await self.fetcher.fetch(self.cities)
        self.store.set(self.cache_key, snapshot, self.ttl_seconds)
        logger.info(
            "weather_dashboard.cache.stored key=%s cities=%s ok=%s ttl=%s",
            self.cache_key,
            len(snapshot.cities),
            snapshot.upstream_ok,
            self.ttl_seconds,
        )
        return snapshot

    def invalidate(self) -> None:
        self.store.delete(self.cache_key)
        logger.info("weather_dashboard.cache.cleared key=%s", self.cache_key)


def build_weather_cache(options: DashboardOptions) -> WeatherCache:
    fetcher = OpenMeteoBatchFetcher(
        base_url=options.upstream_url,
        timeout=options.upstream_timeout,
    )
    store: DjangoCacheStore[WeatherSnapshot] = DjangoCacheStore(
        options.cache_alias
    )
    return WeatherCache(
        fetcher,
        store,
        cities=options.cities,
        cache_key=options.cache_key,
        ttl_seconds=options.ttl_seconds,
    )


def embed_fragment(
    options: DashboardOptions,
    *,
    refresh_url: str,
    cache: WeatherCache | None = None,
) -> SafeString:
    """Render the page fragment without touching the network.

    A fresh snapshot (even an empty one) is rendered directly; otherwise a
    skeleton is returned together with the script that calls the refresh
    endpoint and swaps the result in.
    """

    cache = cache or build_weather_cache(options)
    snapshot = cache.get_if_fresh()
    if snapshot is not None:
        weather_dashboard_cache_hits_total.inc()
        content = render_weather(
            snapshot,
            options.cities,
            icon_style=options.icon_style,
            icon_base_url=options.icon_base_url,
        )
        return render_embed(options, content)

    weather_dashboard_cache_misses_total.inc()
    logger.debug("weather_dashboard.embed.skeleton key=%s", cache.cache_key)
    return render_embed(
        options, render_skeleton(options.cities), refresh_url=refresh_url
    )


async def refresh_fragment(
    options: DashboardOptions,
    *,
    cache: WeatherCache | None = None,
) -> SafeString:
    """Refill the cache from upstream and render the cards.

    An empty but successful fetch renders as empty markup. Only an upstream
    transport failure raises `WeatherUnavailableError`.
    """

    cache = cache or build_weather_cache(options)
    snapshot = await cache.get_or_refresh()
    if not snapshot.upstream_ok:
        weather_dashboard_refresh_total.labels(outcome="unavailable").inc()
        raise WeatherUnavailableError("Weather data unavailable")

    outcome = "empty" if snapshot.is_empty() else "ok"
    weather_dashboard_refresh_total.labels(outcome=outcome).inc()
    return render_weather(
        snapshot,
        options.cities,
        icon_style=options.icon_style,
        icon_base_url=options.icon_base_url,
    )
