"""Filling text blocks from object details."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .model import Block, TextContent

logger = logging.getLogger(__name__)

DETAILS_KEY_FIELD_NAME = "_detailsKey"


class HydrationError(ValueError):
    """Raised when a block cannot take values from details."""


@dataclass(frozen=True)
class DetailsKeys:
    """Which detail keys feed a block's text and its checkbox."""

    text: str = ""
    checked: str = ""


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


def details_keys(block: Block) -> DetailsKeys:
    """Read the detail keys a block is bound to from its fields."""
    keys = _string_list(block.fields.get(DETAILS_KEY_FIELD_NAME))
    if len(keys) > 1:
        return DetailsKeys(text=keys[0], checked=keys[1])
    if keys:
        return DetailsKeys(text=keys[0])
    return DetailsKeys()


def hydrate_block(block: Block, details: Mapping[str, Any]) -> None:
    """Copy bound detail values into a text block, in place."""
    keys = details_keys(block)
    content = block.content
    if not isinstance(content, TextContent):
        raise HydrationError("hydrate_block: expected block to have text content")
    if keys.text:
        text = details.get(keys.text)
        content.text = text if isinstance(text, str) else ""
        logger.debug("details: id=%s text=%s", block.id, content.text)
    if keys.checked:
        checked = details.get(keys.checked)
        content.checked = checked if isinstance(checked, bool) else False