"""Divider blocks: a line or three dots."""

from __future__ import annotations

from collections.abc import Callable

from .components import BlockParams, Component, block_template, raw
from .model import Block, DivContent, DivStyle, make_default_block_params

_STYLES = {
    DivStyle.LINE: "divLine",
    DivStyle.DOTS: "divDot",
}


def div_dot_template() -> Component:
    """Three dots."""
    return raw(
        '<div class="dots"><div class="dot"></div><div class="dot"></div>'
        '<div class="dot"></div></div>'
    )


def div_line_template() -> Component:
    """A horizontal line."""
    return raw('<div class="line"></div>')


def make_div_params(block: Block) -> BlockParams:
    """Block parameters for a divider block."""
    if not isinstance(block.content, DivContent):
        raise TypeError(f"block {block.id!r} has no div content")
    style = block.content.style
    params = make_default_block_params(block)
    params.classes.append(_STYLES.get(style, ""))
    params.content = div_dot_template() if style == DivStyle.DOTS else div_line_template()
    if block.background_color:
        params.classes.extend(["bgColor", "bgColor-" + block.background_color])
    return params


def render_div(block: Block, render_child: Callable[[str], Component]) -> Component:
    """Render a divider block."""
    return block_template(make_div_params(block), render_child)