"""Render interception.

``RenderInterceptor`` sits in front of a renderer with the signature
``render(element, root_id, *args, **kwargs) -> str`` and decides, per call,
whether to serve cached markup, render and store, or step aside.
"""

import functools
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .core import get_logger
from .keys import scoped_key
from .models import CacheEvent, ComponentCacheConfig, Element
from .store import CacheEntry
from .templating import InvalidTemplateAttribute, TemplateSlots, compile_template, extract

if TYPE_CHECKING:
    from .engine import RenderCache

logger = get_logger(__name__)

NANOSECONDS_IN_ONE_SECOND = 1_000_000_000

Renderer = Callable[..., str]


def rewrite_root_id(markup: str, cached_root_id: Any, root_id: Any, attr: str) -> str:
    """
    Point markup rendered under ``cached_root_id`` at ``root_id``.

    Every ``attr="<cached_root_id>`` prefix is replaced, so descendants whose
    ids extend the root (``.0`` -> ``.0.1``) follow along. Text that happens
    to contain the same prefix is rewritten too.

    Examples:
        >>> rewrite_root_id('<p data-root-id=".0">hi</p>', ".0", ".3", "data-root-id")
        '<p data-root-id=".3">hi</p>'
    """
    old, new = str(cached_root_id), str(root_id)
    if old == new:
        return markup
    return markup.replace(f'{attr}="{old}', f'{attr}="{new}')


class RenderInterceptor:
    """Caching wrapper around a renderer, bound to one engine."""

    def __init__(self, engine: "RenderCache", render: Renderer) -> None:
        self.engine = engine
        self.render = render
        functools.update_wrapper(self, render, updated=())

    def __call__(self, element: Element, root_id: Any, *args: Any, **kwargs: Any) -> str:
        engine = self.engine
        config = engine.cache_config_for(element.type)
        if config is None:
            return self.render(element, root_id, *args, **kwargs)

        name = engine.component_name(element.type)
        if not engine.enabled:
            engine.metrics.record_bypass(name, "disabled")
            return self.render(element, root_id, *args, **kwargs)

        slots = self._extract(config, element, name)
        try:
            key = config.cache_key_gen(element.props)
            if key is None:
                # Render the real props, uncached
                if slots is not None:
                    slots.restore_props()
                    slots = None
                engine.metrics.record_bypass(name, "null_key")
                logger.debug("cache_bypass", component=name, reason="null_key")
                return self.render(element, root_id, *args, **kwargs)

            cache_key = scoped_key(name, str(key))
            entry = engine.store.get(cache_key)
            if entry is not None:
                return self._hit(entry, root_id, name, slots)
            return self._miss(element, root_id, name, cache_key, config, slots, args, kwargs)
        finally:
            if slots is not None:
                slots.restore_props()

    def _extract(
        self, config: ComponentCacheConfig, element: Element, name: str
    ) -> TemplateSlots | None:
        if not config.template_attrs:
            return None
        try:
            return extract(config.template_attrs, element.props, name)
        except InvalidTemplateAttribute as e:
            self.engine.metrics.record_error(type(e).__name__, name)
            logger.error("invalid_template_attribute", component=name, path=e.path)
            raise

    def _hit(self, entry: CacheEntry, root_id: Any, name: str, slots: TemplateSlots | None) -> str:
        engine = self.engine
        engine.reporter.notify(CacheEvent(event="hit", component_name=name))
        engine.metrics.record_cache_hit(name)
        logger.debug("cache_hit", component=name)

        if slots is not None and entry.compiled_template is not None:
            markup = slots.render(entry.compiled_template)
        else:
            markup = entry.raw_markup
        return rewrite_root_id(markup, entry.root_id, root_id, engine.root_id_attr)

    def _miss(
        self,
        element: Element,
        root_id: Any,
        name: str,
        cache_key: str,
        config: ComponentCacheConfig,
        slots: TemplateSlots | None,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> str:
        engine = self.engine

        start = time.perf_counter_ns()
        markup = self.render(element, root_id, *args, **kwargs)
        elapsed_ns = time.perf_counter_ns() - start

        engine.reporter.notify(
            CacheEvent(
                event="miss",
                component_name=name,
                load_time_ns=elapsed_ns if engine.collect_load_time_stats else None,
            )
        )
        engine.metrics.record_cache_miss(name, elapsed_ns / NANOSECONDS_IN_ONE_SECOND)
        logger.debug("cache_miss", component=name, render_ns=elapsed_ns)

        compiled = compile_template(markup, config.template_attrs) if slots is not None else None
        engine.store.set(
            cache_key, CacheEntry(raw_markup=markup, compiled_template=compiled, root_id=root_id)
        )
        engine.track_store_size()

        if compiled is not None:
            return slots.render(compiled)  # type: ignore[union-attr]
        return markup


__all__ = ["RenderInterceptor", "Renderer", "rewrite_root_id"]
