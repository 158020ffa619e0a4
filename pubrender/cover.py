"""Object covers: uploaded images, colours and gradients."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Any, Optional

from .components import Component, css_classes, escape, none_template, style_attribute
from .helpers import Renderer, SnapshotError

logger = logging.getLogger(__name__)

UNSPLASH_REFERRAL_URL = "https://unsplash.com/?utm_source=Anytype&amp;utm_medium=referral"
FAILED_SANITIZATION_URL = "about:invalid#TemplFailedSanitizationURL"

_SAFE_SCHEMES = frozenset({"http", "https", "mailto", "tel", "ftp", "ftps"})
_COVER_PARAM_FUNCTION = "__templ_coverParam_b07a"


class CoverType(IntEnum):
    IMAGE = 1
    COLOR = 2
    GRADIENT = 3
    PREBUILT_IMAGE = 4
    SOURCE = 5


class CoverError(ValueError):
    """Raised when a cover cannot be rendered."""


@dataclass
class CoverResizeParams:
    """Position and zoom of a cover image."""

    cover_x: float = 0.0
    cover_y: float = 0.0
    cover_scale: float = 0.0
    with_scale: bool = False


@dataclass
class CoverRenderParams:
    """What the cover templates need."""

    id: str = ""
    src: str = ""
    classes: str = ""
    cover_type: Optional[CoverType] = None
    resize_params: CoverResizeParams = None  # type: ignore[assignment]
    unsplash_component: Optional[Component] = None
    cover_template: Optional[Component] = None

    def __post_init__(self) -> None:
        if self.resize_params is None:
            self.resize_params = CoverResizeParams()


def _number(details: Optional[Mapping[str, Any]], key: str) -> float:
    value = (details or {}).get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def _string(details: Optional[Mapping[str, Any]], key: str) -> str:
    value = (details or {}).get(key)
    return value if isinstance(value, str) else ""


def _safe_url(url: str) -> str:
    colon = url.find(":")
    if colon >= 0 and "/" not in url[:colon]:
        if url[:colon].lower() not in _SAFE_SCHEMES:
            return FAILED_SANITIZATION_URL
    return url


def _format_g(value: float) -> str:
    """Shortest general float formatting with exponent from 1e+06 upward."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "0"
    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    point = len(digits) + int(exponent) - 1
    if point < -4 or point >= 6:
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(map(str, digits[1:]))
        exp_sign = "+" if point >= 0 else "-"
        return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(point):02d}"
    return format(number, "f")


def _json_number(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_cover_type(value: int) -> CoverType:
    """The cover type for a stored number; raises CoverError when unknown."""
    if value < 1 or value > 5:
        raise CoverError(f"unknown cover type: {value}")
    return CoverType(value)


def _unsplash_details(renderer: Renderer, cover_id: str) -> tuple[str, str]:
    snapshot = renderer.get_object_snapshot(cover_id)
    details = None if snapshot is None else snapshot.details
    return _string(details, "mediaArtistName"), _string(details, "mediaArtistURL")


def cover_params(
    renderer: Renderer,
    details: Optional[Mapping[str, Any]],
    as_image: bool,
    with_author: bool,
    with_scale: bool,
) -> CoverRenderParams:
    """Cover parameters from an object's details; raises CoverError on failure."""
    try:
        cover_type = to_cover_type(int(_number(details, "coverType")))
    except CoverError as exc:
        logger.warning("cover rendering failed: %s", exc)
        raise

    cover_id = _string(details, "coverId")
    params = CoverRenderParams(
        id=cover_id,
        cover_type=cover_type,
        classes=" ".join([f"type{int(cover_type)}", cover_id]),
        resize_params=CoverResizeParams(
            cover_x=_number(details, "coverX"),
            cover_y=_number(details, "coverY"),
            cover_scale=_number(details, "coverScale"),
            with_scale=with_scale,
        ),
    )

    if cover_type in (CoverType.IMAGE, CoverType.SOURCE):
        try:
            params.src = renderer.get_file_url(cover_id)
        except SnapshotError as exc:
            logger.warning("cover rendering failed: %s", exc)
            raise CoverError(str(exc)) from exc
        if with_author and cover_type == CoverType.SOURCE:
            author, author_url = _unsplash_details(renderer, cover_id)
            if author or author_url:
                params.unsplash_component = unsplash_referral(author, author_url)
        params.cover_template = (
            cover_image_template(params) if as_image else cover_default_template(params)
        )
        return params

    if cover_type in (CoverType.COLOR, CoverType.GRADIENT):
        params.cover_template = cover_default_template(params)
        return params

    message = f"unknown cover type: {int(cover_type)}"
    logger.warning("cover rendering failed: %s", message)
    raise CoverError(message)


def page_cover_params(renderer: Renderer) -> CoverRenderParams:
    """Cover parameters for the published page itself."""
    return cover_params(renderer, renderer.root.details, True, True, False)


def cover_style(params: CoverRenderParams) -> dict[str, str]:
    """Inline style properties for a cover drawn as a background."""
    resize = params.resize_params
    style: dict[str, str] = {}
    if params.src:
        style["background-image"] = f"url({params.src})"
    style["background-position"] = (
        f"{_format_g(abs(resize.cover_x * 100))}% {_format_g(abs(resize.cover_y * 100))}%"
    )
    style["background-size"] = f"{_format_g((resize.cover_scale + 1) * 100)}%"
    return style


def _cover_param_script(resize: CoverResizeParams) -> str:
    values = asdict(resize)
    payload = ",".join(
        [
            f'"CoverX":{_json_number(values["cover_x"])}',
            f'"CoverY":{_json_number(values["cover_y"])}',
            f'"CoverScale":{_json_number(values["cover_scale"])}',
            f'"WithScale":{json.dumps(values["with_scale"])}',
        ]
    )
    return (
        f"<script>function {_COVER_PARAM_FUNCTION}(p){{window.CoverParam = p;\n}}</script>"
        f"<script>{_COVER_PARAM_FUNCTION}({{{payload}}})</script>"
    )


def cover_image_template(params: CoverRenderParams) -> Component:
    """The cover as an img element, with an optional photo credit."""

    def produce() -> str:
        html = (
            f'<img id="cover" src="{escape(params.src)}" '
            f'class="{escape(css_classes("cover", params.classes))}"> '
        )
        if params.unsplash_component is not None:
            html += params.unsplash_component.render()
        return html

    return Component(produce)


def cover_default_template(params: CoverRenderParams) -> Component:
    """The cover as a div with a background."""

    def produce() -> str:
        return (
            f'<div class="{escape(css_classes("cover", params.classes))}" '
            f'style="{escape(style_attribute(cover_style(params)))}"></div>'
        )

    return Component(produce)


def unsplash_referral(author: str, author_url: str) -> Component:
    """A photo credit naming the author."""

    def produce() -> str:
        return (
            '<div class="author label">Photo by '
            f'<a href="{escape(_safe_url(author_url))}" target="_blank">{escape(author)}</a>'
            f' on  <a href="{UNSPLASH_REFERRAL_URL}" target="_blank">Unsplash</a></div>'
        )

    return Component(produce)


def cover_block_template(params: CoverRenderParams) -> Component:
    """The cover block wrapping the cover itself."""

    def produce() -> str:
        inner = params.cover_template.render() if params.cover_template is not None else ""
        return (
            _cover_param_script(params.resize_params)
            + f'<div id="{escape("block-" + params.id)}" class="block blockCover">'
            + '<div class="content"><div class="wrap">'
            + inner
            + "</div></div></div>"
        )

    return Component(produce)


def render_page_cover(renderer: Renderer) -> Component:
    """The page's cover block, or nothing when it has no usable cover."""
    try:
        params = page_cover_params(renderer)
    except CoverError:
        return none_template("")
    if params.cover_type in (
        CoverType.IMAGE,
        CoverType.SOURCE,
        CoverType.COLOR,
        CoverType.GRADIENT,
    ):
        return cover_block_template(params)
    logger.warning("cover rendering failed: unknown cover type %s", params.cover_type)
    return none_template("")