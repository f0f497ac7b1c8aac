"""Templated attributes.

A template attribute is a scalar property that does not take part in the
cache key. Before the render its value is swapped for a ``${name}`` token, so
the markup produced on a miss carries the token verbatim. That markup is
compiled once and filled with the current, HTML-escaped values on every use.

Placeholder names replace each ``.`` of the path with ``__``. A property whose
own name contains ``__`` can collide with a nested path (``a.b`` and
``a__b`` both map to ``a__b``); such configurations are not detected.
"""

import html
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .core.paths import MISSING, SEPARATOR, get_path, restore_path, set_path
from .errors import RenderCacheError
from .keys import is_structured

PLACEHOLDER_SEPARATOR = "__"


class InvalidTemplateAttribute(RenderCacheError, ValueError):
    """A template attribute resolved to a structured value."""

    def __init__(self, path: str, component_name: str) -> None:
        super().__init__(f"Cannot templatize object at {path} for component {component_name}")
        self.path = path
        self.component_name = component_name


def placeholder_name(path: str) -> str:
    """``data.text`` -> ``data__text``."""
    return path.replace(SEPARATOR, PLACEHOLDER_SEPARATOR)


def placeholder_token(path: str) -> str:
    """``data.text`` -> ``${data__text}``."""
    return "${" + placeholder_name(path) + "}"


def escape_value(value: Any) -> str:
    """Escape a scalar for embedding in HTML text content."""
    if value is None or value is MISSING:
        return ""
    return html.escape(str(value))


class CompiledTemplate:
    """Markup split around known placeholder tokens.

    Only the tokens for the configured names are treated as slots; any other
    ``$`` text in the markup is kept as-is.
    """

    __slots__ = ("_parts", "names")

    def __init__(self, markup: str, names: Iterable[str]) -> None:
        self.names = tuple(dict.fromkeys(names))
        if self.names:
            pattern = re.compile(
                r"\$\{(" + "|".join(re.escape(name) for name in self.names) + r")\}"
            )
            # Odd indices hold slot names
            self._parts = tuple(pattern.split(markup))
        else:
            self._parts = (markup,)

    def __call__(self, values: Mapping[str, str]) -> str:
        parts = self._parts
        out = list(parts)
        for i in range(1, len(parts), 2):
            out[i] = values[parts[i]]
        return "".join(out)

    def __repr__(self) -> str:
        return f"CompiledTemplate(names={self.names!r}, slots={len(self._parts) // 2})"


def compile_template(markup: str, template_attrs: Sequence[str]) -> CompiledTemplate:
    """Compile markup rendered with placeholder tokens."""
    return CompiledTemplate(markup, (placeholder_name(path) for path in template_attrs))


@dataclass
class TemplateSlots:
    """Original values of template attributes pulled out of one props object."""

    props: Any
    originals: dict[str, Any] = field(default_factory=dict)
    # (replaced path, previous value) per write, in write order
    replaced: list[tuple[str, Any]] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return list(self.originals)

    def values(self) -> dict[str, str]:
        """Escaped values keyed by placeholder name."""
        return {placeholder_name(path): escape_value(value) for path, value in self.originals.items()}

    def restore_props(self) -> None:
        """Undo every placeholder write, newest first. Safe to call twice."""
        while self.replaced:
            path, previous = self.replaced.pop()
            restore_path(self.props, path, previous)

    def render(self, compiled: CompiledTemplate) -> str:
        return fill(compiled, self)


def fill(compiled: CompiledTemplate, slots: TemplateSlots) -> str:
    """Fill a compiled template with the escaped values captured in ``slots``."""
    return compiled(slots.values())


def extract(template_attrs: Sequence[str], props: Any, component_name: str) -> TemplateSlots:
    """
    Swap every template attribute in ``props`` for its placeholder token.

    A path running through an absent, ``None`` or scalar node is treated as
    absent: the node is replaced for the render and put back on restore.

    Raises:
        InvalidTemplateAttribute: If an attribute holds a structured value.

    Any error leaves ``props`` as it was found.
    """
    slots = TemplateSlots(props)
    try:
        for path in template_attrs:
            if path in slots.originals:
                continue
            value = get_path(props, path)
            if is_structured(value):
                raise InvalidTemplateAttribute(path, component_name)
            slots.originals[path] = value
            slots.replaced.append(set_path(props, path, placeholder_token(path)))
    except BaseException:
        slots.restore_props()
        raise
    return slots


__all__ = [
    "PLACEHOLDER_SEPARATOR",
    "InvalidTemplateAttribute",
    "CompiledTemplate",
    "TemplateSlots",
    "compile_template",
    "fill",
    "escape_value",
    "extract",
    "placeholder_name",
    "placeholder_token",
]
