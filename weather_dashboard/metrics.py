from __future__ import annotations

from prometheus_client import Counter, Histogram

weather_dashboard_upstream_requests_total = Counter(
    "weather_dashboard_upstream_requests_total",
    "Batched upstream weather requests by outcome",
    labelnames=["outcome"],
)

weather_dashboard_upstream_latency_seconds = Histogram(
    "weather_dashboard_upstream_latency_seconds",
    "Latency of batched upstream weather requests",
    buckets=(0.1, 0.3, 0.5, 1, 2, 5, 10, 20, 30),
)

weather_dashboard_cache_hits_total = Counter(
    "weather_dashboard_cache_hits_total",
    "Embed renders served from a fresh snapshot",
)

weather_dashboard_cache_misses_total = Counter(
    "weather_dashboard_cache_misses_total",
    "Embed renders that fell back to the skeleton",
)

weather_dashboard_refresh_total = Counter(
    "weather_dashboard_refresh_total",
    "Refresh endpoint calls by outcome",
    labelnames=["outcome"],
)
