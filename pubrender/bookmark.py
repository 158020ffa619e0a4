"""Bookmark blocks: a card linking to a web page."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, Optional
from urllib.parse import urlsplit

from .components import (
    BlockParams,
    BlockWrapperParams,
    Component,
    basic_template,
    block_template,
    blocks_wrapper,
    css_classes,
    escape,
    image_with_source_template,
    none_template,
    raw,
)
from .helpers import Renderer, SnapshotError
from .model import Block, BookmarkContent, make_default_block_params

logger = logging.getLogger(__name__)

FAILED_SANITIZATION_URL = "about:invalid#TemplFailedSanitizationURL"

_SAFE_SCHEMES = frozenset({"http", "https", "mailto", "tel", "ftp", "ftps"})
_CONTROL = re.compile(r"[\x00-\x1f\x7f]")


def _bookmark_content(block: Block) -> BookmarkContent:
    content = block.content
    return content if isinstance(content, BookmarkContent) else BookmarkContent()


def _string(details: Optional[Mapping[str, Any]], key: str) -> str:
    value = (details or {}).get(key)
    return value if isinstance(value, str) else ""


def _safe_url(url: str) -> str:
    colon = url.find(":")
    if colon >= 0 and "/" not in url[:colon]:
        if url[:colon].lower() not in _SAFE_SCHEMES:
            return FAILED_SANITIZATION_URL
    return url


def _host_of(url: str) -> str:
    """The host (with port) of a URL; raises ValueError for malformed URLs."""
    if url.startswith(":"):
        raise ValueError("missing protocol scheme")
    if _CONTROL.search(url):
        raise ValueError("invalid control character in URL")
    parts = urlsplit(url)
    parts.port  # raises ValueError on an invalid port
    return parts.netloc.rpartition("@")[2]


def _file_url(renderer: Renderer, details: Mapping[str, Any], key: str) -> str:
    file_id = _string(details, key)
    if not file_id:
        return ""
    try:
        return renderer.get_file_url(file_id)
    except SnapshotError as exc:
        logger.error("failed to get file URL: %s", exc)
        return ""


def _details_from_block(bookmark: BookmarkContent) -> dict[str, Any]:
    return {
        "iconImage": bookmark.favicon_hash,
        "picture": bookmark.image_hash,
        "description": bookmark.description,
        "name": bookmark.title,
        "source": bookmark.url,
    }


def bookmark_details(renderer: Renderer, bookmark: BookmarkContent) -> dict[str, Any]:
    """Details of the bookmarked page, from its object or else from the block."""
    target = renderer.get_object_snapshot(bookmark.target_object_id)
    if target is None or not target.details:
        return _details_from_block(bookmark)
    return target.details


def _side_left(renderer: Renderer, details: Mapping[str, Any], host: str) -> Component:
    link = BlockWrapperParams(classes=["link"])
    icon = _file_url(renderer, details, "iconImage")
    if icon:
        link.components.append(image_with_source_template(icon, "fav"))
    link.components.append(raw(host))
    return blocks_wrapper(
        BlockWrapperParams(
            classes=["side left"],
            components=[
                blocks_wrapper(link),
                basic_template("name", _string(details, "name")),
                basic_template("descr", _string(details, "description")),
            ],
        )
    )


def _side_right(
    renderer: Renderer, details: Mapping[str, Any], inner_classes: list[str]
) -> Component:
    side = BlockWrapperParams(classes=["side right"])
    image = _file_url(renderer, details, "picture")
    if image:
        inner_classes.append("withImage")
        side.components.append(image_with_source_template(image, "img"))
    return blocks_wrapper(side)


def make_bookmark_params(renderer: Renderer, block: Block) -> Optional[BlockParams]:
    """Block parameters for a bookmark, or None when it has no usable URL."""
    bookmark = _bookmark_content(block)
    details = bookmark_details(renderer, bookmark)

    url = _string(details, "source") if "source" in details else ""
    if not url:
        url = bookmark.url
    if not url:
        return None
    try:
        host = _host_of(url)
    except ValueError as exc:
        logger.error("failed to parse bookmark url: %s", exc)
        return None

    inner_classes = ["inner"]
    if block.background_color:
        inner_classes.extend(["bgColor", "bgColor-" + block.background_color])

    side_left = _side_left(renderer, details, host)
    side_right = _side_right(renderer, details, inner_classes)

    params = make_default_block_params(block)
    params.content = bookmark_link_template(_safe_url(url), inner_classes, [side_left, side_right])
    return params


def bookmark_link_template(
    url: str, classes: list[str], components: list[Optional[Component]]
) -> Component:
    """The bookmark card: a link opening in a new tab around its parts."""

    def produce() -> str:
        inner = "".join(c.render() for c in components if c is not None)
        return (
            f'<a href="{escape(url)}" target="_blank" class="{escape(css_classes(classes))}">'
            f"{inner}</a>"
        )

    return Component(produce)


def render_bookmark(
    renderer: Renderer,
    block: Block,
    render_child: Callable[[str], Component],
) -> Component:
    """Render a bookmark block, or nothing when it cannot be shown."""
    params = make_bookmark_params(renderer, block)
    if params is None:
        return none_template("")
    return block_template(params, render_child)