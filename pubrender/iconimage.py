"""The large icon shown at the top of a published page."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional

from .components import BlockParams, Component, block_template, none_template
from .helpers import Renderer, SnapshotError, layout_of
from .iconobject import IconObjectProps, icon_object_template, make_icon_object_params
from .model import ObjectTypeLayout

logger = logging.getLogger(__name__)

_HUMAN_LAYOUTS = frozenset({ObjectTypeLayout.PROFILE, ObjectTypeLayout.PARTICIPANT})


def _string(details: Optional[Mapping[str, Any]], key: str) -> str:
    value = (details or {}).get(key)
    return value if isinstance(value, str) else ""


def _icon_image_url(renderer: Renderer, details: Optional[Mapping[str, Any]]) -> str:
    file_id = _string(details, "iconImage")
    if not file_id:
        return ""
    try:
        return renderer.get_file_url(file_id)
    except SnapshotError as exc:
        logger.error("failed to get file URL for icon: %s", exc)
        return ""


def page_icon_init_size(layout: ObjectTypeLayout) -> int:
    """Size of the page icon: larger for people."""
    return 128 if layout in _HUMAN_LAYOUTS else 96


def render_page_icon_image(
    renderer: Renderer,
    render_child: Callable[[str], Component],
) -> Component:
    """The page's icon block, or nothing when the page has no icon to show."""
    details = renderer.root.details
    layout = layout_of(details)
    if layout in (ObjectTypeLayout.TODO, ObjectTypeLayout.BOOKMARK):
        return none_template("")

    icon_emoji = renderer.emoji_url(_string(details, "iconEmoji"))
    icon_image = _icon_image_url(renderer, details)
    if not icon_emoji and not icon_image:
        return none_template("")

    params = make_icon_object_params(
        renderer,
        details,
        IconObjectProps(no_default=True, size=page_icon_init_size(layout)),
    )
    if not params.src:
        return none_template("")

    classes = ["isHuman"] if layout in _HUMAN_LAYOUTS else []
    block_params = BlockParams(
        block_type="Icon",
        classes=classes,
        content=icon_object_template(params),
    )
    return block_template(block_params, render_child)