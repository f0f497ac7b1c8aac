"""
Metrics Collection
Prometheus metrics for render cache performance tracking
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for one engine.

    Each collector owns its registry unless one is passed in, so several
    engines can coexist in a process.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        self.cache_hits = Counter(
            "render_cache_hits_total",
            "Total number of cache hits",
            ["component"],
            registry=self.registry,
        )
        self.cache_misses = Counter(
            "render_cache_misses_total",
            "Total number of cache misses",
            ["component"],
            registry=self.registry,
        )
        self.cache_bypass = Counter(
            "render_cache_bypass_total",
            "Renders of cached components that skipped the cache",
            ["component", "reason"],
            registry=self.registry,
        )
        self.render_duration = Histogram(
            "render_cache_render_seconds",
            "Underlying render duration on a miss, in seconds",
            ["component"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=self.registry,
        )
        self.cache_entries = Gauge(
            "render_cache_entries",
            "Entries currently held by the store",
            registry=self.registry,
        )
        self.errors_total = Counter(
            "render_cache_errors_total",
            "Total number of errors raised during intercepted renders",
            ["error_type", "component"],
            registry=self.registry,
        )

    def record_cache_hit(self, component: str) -> None:
        """Record a cache hit."""
        self.cache_hits.labels(component=component).inc()

    def record_cache_miss(self, component: str, duration: Optional[float] = None) -> None:
        """Record a cache miss and, if measured, its render time."""
        self.cache_misses.labels(component=component).inc()
        if duration is not None:
            self.render_duration.labels(component=component).observe(duration)

    def record_bypass(self, component: str, reason: str) -> None:
        """Record a render that went around the cache."""
        self.cache_bypass.labels(component=component, reason=reason).inc()

    def set_cache_entries(self, count: int) -> None:
        """Set the store size."""
        self.cache_entries.set(count)

    def record_error(self, error_type: str, component: str) -> None:
        """Record an error."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)
