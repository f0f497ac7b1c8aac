"""Pytest configuration and fixtures."""

import html
import os
from collections import Counter

import pytest

from render_cache import Element, RenderCache
from render_cache.core.config import Settings, get_settings


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    # Caching only runs in production
    os.environ['RENDER_CACHE_ENVIRONMENT'] = 'production'
    os.environ['RENDER_CACHE_LOG_LEVEL'] = 'DEBUG'
    get_settings.cache_clear()


# ============================================================================
# Renderer
# ============================================================================

class ToyRenderer:
    """
    Minimal string renderer standing in for a UI framework.

    Components are classes with a static ``render(props, child)`` returning
    inner markup; ``child(element, index)`` renders a nested element through
    whatever entry point is installed, under root id ``<root_id>.<index>``.
    """

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()
        self.entry = self.render_to_string

    def install(self, engine: RenderCache):
        self.entry = engine.wrap(self.render_to_string)
        return self.entry

    def render_to_string(self, element: Element, root_id) -> str:
        component = element.type
        self.calls[RenderCache.component_name(component)] += 1

        def child(el: Element, index: int = 0) -> str:
            return self.entry(el, f"{root_id}.{index}")

        body = component.render(element.props, child)
        tag = getattr(component, "tag", "div")
        return f'<{tag} data-root-id="{root_id}">{body}</{tag}>'

    def __call__(self, component, props, root_id=".0") -> str:
        return self.entry(Element(component, props), root_id)


class Greeter:
    @staticmethod
    def render(props, child):
        return html.escape(str(props["text"]))


class DeepGreeter:
    @staticmethod
    def render(props, child):
        return html.escape(str(props["data"]["text"]))


class Banner:
    display_name = "PromoBanner"

    @staticmethod
    def render(props, child):
        return html.escape(str(props["text"]))


class FlaggedGreeter:
    @staticmethod
    def render(props, child):
        text = html.escape(str(props["text"]))
        flags = props.get("flags") or {}
        return f"<h1>{text}</h1>" if flags.get("bold") else f"<span>{text}</span>"


class Page:
    tag = "main"

    @staticmethod
    def render(props, child):
        return child(Element(Greeter, {"text": props["title"]}), 0) + child(
            Element(DeepGreeter, {"data": {"text": props["body"]}}), 1
        )


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Production settings."""
    return Settings(environment="production")


@pytest.fixture
def renderer():
    """Fresh renderer with zeroed call counts."""
    return ToyRenderer()


@pytest.fixture
def make_cache(settings, renderer):
    """Build an engine from config and install it on the renderer."""
    engines = []

    def _make(config=None, **overrides):
        engine = RenderCache(config, settings=settings.model_copy(update=overrides))
        renderer.install(engine)
        engines.append(engine)
        return engine

    yield _make

    for engine in engines:
        engine.close()
