"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from render_cache.models import CacheConfig, ComponentCacheConfig, LRUCacheSettings


def key_fn(props):
    return props["text"]


@pytest.mark.unit
def test_function_shorthand():
    config = CacheConfig(components={"Greeter": key_fn})

    assert config.components["Greeter"].cache_key_gen is key_fn
    assert config.components["Greeter"].template_attrs == ()


@pytest.mark.unit
def test_camel_case_and_snake_case_are_equivalent():
    camel = CacheConfig.model_validate({
        "components": {"Greeter": {"cacheAttrs": ["text"], "templateAttrs": ["title"]}},
        "lruCacheSettings": {"max": 10, "maxAge": 1000},
        "collectLoadTimeStats": True,
    })
    snake = CacheConfig(
        components={"Greeter": {"cache_attrs": ["text"], "template_attrs": ["title"]}},
        lru_cache_settings={"max": 10, "max_age": 1000},
        collect_load_time_stats=True,
    )

    assert camel == snake
    assert camel.components["Greeter"].cache_attrs == ("text",)


@pytest.mark.unit
def test_component_config_instances_are_accepted():
    component = ComponentCacheConfig(template_attrs=["text"])

    config = CacheConfig(components={"Greeter": component})

    assert config.components["Greeter"] == component


@pytest.mark.unit
@pytest.mark.parametrize("paths", [[""], ["data..text"], [".text"], [3]])
def test_invalid_paths_rejected(paths):
    with pytest.raises(ValidationError):
        ComponentCacheConfig(cache_attrs=paths)


@pytest.mark.unit
def test_unknown_options_rejected():
    with pytest.raises(ValidationError):
        CacheConfig(compnents={})


@pytest.mark.unit
def test_lru_settings_validation():
    assert LRUCacheSettings().max == 500
    assert LRUCacheSettings().max_age is None

    with pytest.raises(ValidationError):
        LRUCacheSettings(max=0)
    with pytest.raises(ValidationError):
        LRUCacheSettings(max_age=0)


@pytest.mark.unit
def test_config_is_frozen():
    config = CacheConfig()

    with pytest.raises(ValidationError):
        config.disabled = True


@pytest.mark.unit
def test_key_generator_must_be_callable():
    with pytest.raises(ValidationError):
        ComponentCacheConfig(cache_key_gen="text")
