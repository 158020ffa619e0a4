"""HTML components: small renderable fragments and the generic block templates."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

ClassItem = Union[str, Iterable[str], None]

_UNSAFE_PROPERTY_NAME = "zTemplUnsafeCSSPropertyName"
_UNSAFE_PROPERTY_VALUE = "zTemplUnsafeCSSPropertyValue"
_PROPERTY_NAME = re.compile(r"^-?[a-zA-Z_][-a-zA-Z0-9_]*$")
_FORBIDDEN_VALUE = re.compile(r"[;{}<>\"\\]|expression\s*\(|javascript:", re.IGNORECASE)

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
    }
)


def escape(text: str) -> str:
    """Escape text for use in HTML content or a quoted attribute."""
    return text.translate(_ESCAPES)


class Component:
    """A lazily rendered piece of HTML."""

    __slots__ = ("_producer",)

    def __init__(self, producer: Callable[[], str]) -> None:
        self._producer = producer

    def render(self) -> str:
        """Return the HTML for this component."""
        return self._producer()

    def __str__(self) -> str:
        return self.render()


@dataclass
class BlockParams:
    """Everything the generic block template needs to render one block."""

    id: str = ""
    block_type: str = ""
    classes: list[str] = field(default_factory=list)
    content_classes: list[str] = field(default_factory=list)
    additional_classes: list[str] = field(default_factory=list)
    content: Optional[Component] = None
    additional: Optional[Component] = None
    children_ids: list[str] = field(default_factory=list)
    width: str = ""


@dataclass
class BlockWrapperParams:
    """A div wrapping several components, with optional inline styles."""

    classes: list[str] = field(default_factory=list)
    styles: Optional[dict[str, str]] = None
    components: list[Optional[Component]] = field(default_factory=list)


def _flatten(items: Iterable[ClassItem]) -> Iterable[str]:
    for item in items:
        if item is None:
            continue
        if isinstance(item, str):
            yield item
        else:
            yield from _flatten(item)


def css_classes(*args: ClassItem) -> str:
    """Join class names and lists of class names into one class attribute value."""
    return " ".join(name for name in _flatten(args) if name)


def _sanitize_declaration(name: str, value: str) -> str:
    if not _PROPERTY_NAME.match(name):
        name = _UNSAFE_PROPERTY_NAME
    if _FORBIDDEN_VALUE.search(value):
        value = _UNSAFE_PROPERTY_VALUE
    return f"{name}:{value};"


def style_attribute(styles: Mapping[str, str]) -> str:
    """Build a sanitized style attribute value, properties sorted by name."""
    return "".join(_sanitize_declaration(name, styles[name]) for name in sorted(styles))


def raw(html: str) -> Component:
    """A component that emits the given HTML unescaped."""
    return Component(lambda: html)


def none_template(message: str) -> Component:
    """A component that renders nothing; the message explains why."""
    component = Component(lambda: "")
    return component


def basic_template(class_name: str, value: str) -> Component:
    """A div with one class holding escaped text."""

    def produce() -> str:
        return f'<div class="{escape(css_classes(class_name))}">{escape(value)}</div>'

    return Component(produce)


def image_with_source_template(image_src: str, class_name: str) -> Component:
    """An img element with a source and a class."""

    def produce() -> str:
        return f'<img src="{escape(image_src)}" class="{escape(css_classes(class_name))}">'

    return Component(produce)


def block_template(params: BlockParams, render_child: Callable[[str], Component]) -> Component:
    """The generic block: additional part, content, and rendered children."""

    def produce() -> str:
        classes = css_classes("block", "block" + params.block_type, params.classes)
        parts = [f'<div id="{escape(params.id)}" class="{escape(classes)}"']
        if params.width:
            parts.append(f' data-width="{escape(params.width)}"')
        parts.append(">")
        if params.additional is not None:
            additional = css_classes("additional", params.additional_classes)
            parts.append(f'<div class="{escape(additional)}">')
            parts.append(params.additional.render())
            parts.append("</div>")
        content = css_classes("content", params.content_classes)
        parts.append(f'<div class="{escape(content)}">')
        if params.content is not None:
            parts.append(params.content.render())
        parts.append('</div><div class="children">')
        parts.extend(render_child(child_id).render() for child_id in params.children_ids)
        parts.append("</div></div>")
        return "".join(parts)

    return Component(produce)


def blocks_wrapper(params: BlockWrapperParams) -> Component:
    """A div wrapping several components."""

    def produce() -> str:
        parts = [f'<div class="{escape(css_classes(params.classes))}"']
        if params.styles is not None:
            parts.append(f' style="{escape(style_attribute(params.styles))}"')
        parts.append(">")
        parts.extend(c.render() for c in params.components if c is not None)
        parts.append("</div>")
        return "".join(parts)

    return Component(produce)