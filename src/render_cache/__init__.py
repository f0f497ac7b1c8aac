"""Server-side render cache for UI components."""

from .engine import RenderCache, create_render_cache
from .errors import RenderCacheError
from .events import EventReporter
from .interceptor import RenderInterceptor, rewrite_root_id
from .keys import attribute_key, constant_key, resolve_key_generator
from .models import CacheConfig, CacheEvent, ComponentCacheConfig, Element, LRUCacheSettings
from .store import CacheEntry, CacheStore, LRUStore, UnsupportedStoreOperation
from .templating import CompiledTemplate, InvalidTemplateAttribute

__version__ = "0.1.0"

__all__ = [
    # Engine
    "RenderCache",
    "create_render_cache",
    "RenderInterceptor",
    "rewrite_root_id",
    # Configuration
    "CacheConfig",
    "ComponentCacheConfig",
    "LRUCacheSettings",
    # Models
    "Element",
    "CacheEvent",
    "CacheEntry",
    "CompiledTemplate",
    # Keys
    "attribute_key",
    "constant_key",
    "resolve_key_generator",
    # Store
    "CacheStore",
    "LRUStore",
    # Events
    "EventReporter",
    # Errors
    "RenderCacheError",
    "InvalidTemplateAttribute",
    "UnsupportedStoreOperation",
]
