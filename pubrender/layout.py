"""Layout blocks: rows, columns and plain containers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .components import BlockParams, Component, block_template
from .model import Block, LayoutContent, make_default_block_params


def _number(fields: Mapping[str, Any], key: str) -> float:
    value = fields.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def make_layout_params(block: Block) -> BlockParams:
    """Block parameters for a layout block, with its width and style class."""
    params = make_default_block_params(block)
    params.width = f"{_number(block.fields, 'width'):.2f}"
    content = block.content if isinstance(block.content, LayoutContent) else LayoutContent()
    params.classes.append("layout" + str(content.style))
    return params


def render_layout(block: Block, render_child: Callable[[str], Component]) -> Component:
    """Render a layout block and its children."""
    return block_template(make_layout_params(block), render_child)