"""Render cache data models."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .core.paths import split_path


KeyGenerator = Callable[[Any], str | None]


@dataclass
class Element:
    """A component type plus the properties it is rendered with.

    ``props`` is handed to the renderer by identity; the cache may replace
    template attributes in it during a render but always puts them back.
    """

    type: Any
    props: dict[str, Any] = field(default_factory=dict)


class ConfigModel(BaseModel):
    """Base for user-facing configuration (accepts snake_case or camelCase)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        frozen=True,
    )


class ComponentCacheConfig(ConfigModel):
    """Caching rules for one component type."""

    cache_key_gen: KeyGenerator | None = Field(
        default=None, description="props -> key; None result skips the cache"
    )
    cache_attrs: tuple[str, ...] = Field(
        default=(), description="Dotted paths used to derive a key when no generator is given"
    )
    template_attrs: tuple[str, ...] = Field(
        default=(), description="Scalar dotted paths substituted fresh on every use"
    )

    @field_validator("cache_attrs", "template_attrs")
    @classmethod
    def validate_paths(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Every entry must be a non-empty dotted path."""
        for path in v:
            if any(not segment for segment in split_path(path)):
                raise ValueError(f"Invalid property path: {path!r}")
        return v


class LRUCacheSettings(ConfigModel):
    """Settings for the default store. ``max_age`` is in milliseconds."""

    max: int = Field(default=500, gt=0, description="Maximum number of entries")
    max_age: int | None = Field(default=None, gt=0, description="Entry lifetime (ms)")


class CacheEvent(BaseModel):
    """Notification emitted on every cache hit and miss."""

    model_config = ConfigDict(frozen=True)

    type: Literal["cache"] = "cache"
    event: Literal["hit", "miss"]
    component_name: str
    load_time_ns: int | None = None


class CacheConfig(ConfigModel):
    """Engine configuration, applied once at construction."""

    components: dict[str, ComponentCacheConfig] = Field(default_factory=dict)
    cache_impl: Any | None = Field(default=None, description="Store overriding the default LRU")
    lru_cache_settings: LRUCacheSettings | None = None
    disabled: bool = False
    event_callback: Callable[[CacheEvent], Any] | None = None
    collect_load_time_stats: bool = False
    root_id_attr: str | None = Field(default=None, min_length=1)

    @field_validator("components", mode="before")
    @classmethod
    def normalize_components(cls, v: Any) -> Any:
        """A bare function is shorthand for ``{"cache_key_gen": fn}``."""
        if not isinstance(v, dict):
            return v
        return {
            name: {"cache_key_gen": rule} if callable(rule) else rule
            for name, rule in v.items()
        }

    @model_validator(mode="after")
    def validate_cache_impl(self) -> "CacheConfig":
        """A substitute store must at least provide get and set."""
        impl = self.cache_impl
        if impl is not None and not (
            callable(getattr(impl, "get", None)) and callable(getattr(impl, "set", None))
        ):
            raise ValueError("cache_impl must provide get(key) and set(key, entry)")
        return self


__all__ = [
    "Element",
    "KeyGenerator",
    "ComponentCacheConfig",
    "LRUCacheSettings",
    "CacheConfig",
    "CacheEvent",
]
