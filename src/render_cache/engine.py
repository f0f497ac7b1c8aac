"""Render cache engine."""

from collections.abc import Mapping
from typing import Any

from .core import Settings, get_logger, get_settings
from .events import EventReporter
from .interceptor import RenderInterceptor, Renderer
from .keys import resolve_key_generator
from .models import CacheConfig, ComponentCacheConfig, LRUCacheSettings
from .monitoring import MetricsCollector
from .store import CacheStore, LRUStore, store_dump, store_length, store_reset

logger = get_logger(__name__)


class RenderCache:
    """
    Caches component markup for the renderers it wraps.

    Configuration is resolved once, here: every registered component ends up
    with exactly one key generator. Outside production the engine is inert:
    ``wrap`` hands renderers back untouched and nothing is cached.

    Examples:
        >>> cache = RenderCache({"components": {"Greeter": {"cache_attrs": ["text"]}}})
        >>> render = cache.wrap(render_to_string)  # doctest: +SKIP
    """

    def __init__(
        self,
        config: CacheConfig | Mapping[str, Any] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.active = self.settings.is_production
        self.metrics = MetricsCollector()
        self._components: dict[str, ComponentCacheConfig] = {}

        if not self.active:
            logger.info("Caching is disabled in non-production environments.")
            self.config = None
            self.store: CacheStore | None = None
            self.reporter = EventReporter()
            self._enabled = False
            self.collect_load_time_stats = False
            self.root_id_attr = self.settings.root_id_attr
            return

        if config is None:
            config = CacheConfig()
        elif not isinstance(config, CacheConfig):
            config = CacheConfig.model_validate(dict(config))
        self.config = config

        for name, component in config.components.items():
            self._components[name] = component.model_copy(
                update={
                    "cache_key_gen": resolve_key_generator(
                        component.cache_key_gen, component.cache_attrs
                    )
                }
            )

        self.store = config.cache_impl if config.cache_impl is not None else self._default_store()
        self.reporter = EventReporter(config.event_callback)
        self._enabled = not config.disabled
        self.collect_load_time_stats = config.collect_load_time_stats
        self.root_id_attr = config.root_id_attr or self.settings.root_id_attr

        logger.info(
            "initialized",
            components=sorted(self._components),
            store=type(self.store).__name__,
            enabled=self._enabled,
        )

    def _default_store(self) -> LRUStore:
        lru_settings = self.config.lru_cache_settings or LRUCacheSettings(
            max=self.settings.cache_max_size, max_age=self.settings.cache_max_age_ms
        )
        return LRUStore.from_settings(lru_settings, hash_keys=self.settings.hash_keys)

    # Component registry

    @staticmethod
    def component_name(component: Any) -> str:
        """Declared ``display_name``, falling back to the type's own name."""
        name = getattr(component, "display_name", None)
        if isinstance(name, str) and name:
            return name
        return getattr(component, "__name__", type(component).__name__)

    def cache_config_for(self, component: Any) -> ComponentCacheConfig | None:
        if component is None or not self._components:
            return None
        return self._components.get(self.component_name(component))

    def is_cached_component(self, component: Any) -> bool:
        return self.cache_config_for(component) is not None

    # Interception

    def wrap(self, render: Renderer) -> Renderer:
        """
        Install caching around ``render``.

        Usable as a decorator. Returns ``render`` itself when the engine is
        not active.
        """
        if not self.active:
            return render
        if isinstance(render, RenderInterceptor) and render.engine is self:
            return render
        return RenderInterceptor(self, render)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self, enable_flag: bool = True) -> None:
        """
        Turn interception on or off at runtime.

        Re-enabling drops whatever the default store still holds, so the first
        render afterwards is a fresh miss. A substituted ``cache_impl`` may be
        shared with other code and is left alone; call ``cache_reset`` for it.
        """
        if not self.active:
            logger.info("enable_ignored", reason="non-production environment")
            return
        enable_flag = bool(enable_flag)
        if enable_flag and not self._enabled and isinstance(self.store, LRUStore):
            self.store.reset()
            self.track_store_size()
        self._enabled = enable_flag
        logger.info("caching_toggled", enabled=enable_flag)

    # Store operations

    def cache_dump(self) -> Any:
        if self.store is None:
            return []
        return store_dump(self.store)

    def cache_length(self) -> Any:
        if self.store is None:
            return 0
        return store_length(self.store)

    def cache_reset(self) -> Any:
        if self.store is None:
            return None
        result = store_reset(self.store)
        self.track_store_size()
        logger.info("cache_reset")
        return result

    def track_store_size(self) -> None:
        """Refresh the entry gauge (default store only)."""
        if isinstance(self.store, LRUStore):
            self.metrics.set_cache_entries(len(self.store))

    # Lifecycle

    def flush_events(self, timeout: float | None = None) -> bool:
        """Wait for queued event callbacks."""
        return self.reporter.flush(timeout)

    def close(self) -> None:
        self.reporter.close()


def create_render_cache(
    config: CacheConfig | Mapping[str, Any] | None = None,
    settings: Settings | None = None,
) -> RenderCache:
    """Build an engine from configuration."""
    return RenderCache(config, settings=settings)


__all__ = ["RenderCache", "create_render_cache"]
