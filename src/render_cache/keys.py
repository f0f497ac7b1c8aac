"""Cache key generation strategies."""

from collections.abc import Sequence
from typing import Any

from .core.json import stable_json_dumps
from .core.paths import MISSING, get_path
from .models import KeyGenerator

DEFAULT_KEY = "_defaultKey"


def constant_key(props: Any) -> str:
    """Every render of the component shares one slot."""
    return DEFAULT_KEY


# bool counts as int
_SCALARS = (str, bytes, int, float)


def is_structured(value: Any) -> bool:
    """Anything other than None or a plain scalar."""
    return not (value is None or value is MISSING or isinstance(value, _SCALARS))


def key_part(value: Any) -> str:
    """String form of one attribute value; structured values become sorted JSON."""
    if is_structured(value):
        return stable_json_dumps(value)
    return str(value)


def attribute_key(attrs: Sequence[str]) -> KeyGenerator:
    """
    Build a generator that concatenates the values at ``attrs``.

    Examples:
        >>> gen = attribute_key(["text", "data.id"])
        >>> gen({"text": "Hi", "data": {"id": 7}})
        'Hi7'
        >>> gen({"text": "Hi"})
        'HiNone'
    """
    paths = tuple(attrs)

    def generate(props: Any) -> str:
        return "".join(key_part(get_path(props, path, default=None)) for path in paths)

    generate.__qualname__ = f"attribute_key({', '.join(paths)})"
    return generate


def resolve_key_generator(
    cache_key_gen: KeyGenerator | None = None,
    cache_attrs: Sequence[str] = (),
) -> KeyGenerator:
    """Explicit function, then attribute-based, then the constant key."""
    if cache_key_gen is not None:
        return cache_key_gen
    if cache_attrs:
        return attribute_key(cache_attrs)
    return constant_key


def scoped_key(component_name: str, key: str) -> str:
    """Key under which an entry is stored."""
    return f"{component_name}:{key}"


__all__ = [
    "DEFAULT_KEY",
    "constant_key",
    "attribute_key",
    "resolve_key_generator",
    "scoped_key",
    "is_structured",
]
