"""Object icons: emoji, uploaded images, default pictograms and letter avatars."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .components import Component, css_classes, escape
from .helpers import Renderer, SnapshotError, layout_of, relation_format_of
from .model import ObjectTypeLayout, RelationFormat

logger = logging.getLogger(__name__)

ICON_SIZE: dict[int, int] = {
    14: 14,
    16: 16,
    18: 16,
    20: 18,
    22: 18,
    24: 20,
    26: 22,
    28: 22,
    32: 28,
    36: 24,
    40: 24,
    42: 24,
    44: 24,
    48: 24,
    56: 32,
    64: 32,
    80: 56,
    96: 56,
    108: 64,
    112: 64,
    128: 64,
    160: 160,
    360: 360,
}

FONT_SIZE: dict[int, int] = {
    14: 10,
    16: 10,
    18: 11,
    20: 13,
    22: 14,
    24: 16,
    26: 16,
    30: 20,
    32: 20,
    36: 24,
    40: 24,
    42: 24,
    44: 24,
    48: 28,
    56: 40,
    64: 40,
    80: 64,
    96: 64,
    108: 64,
    128: 64,
}

FILE_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "image": ("jpg", "jpeg", "png", "gif", "svg", "webp"),
    "video": ("mp4", "m4v", "mov"),
    "audio": ("mp3", "m4a", "flac", "ogg", "wav"),
    "pdf": ("pdf",),
}

_HUMAN_LAYOUTS = frozenset({ObjectTypeLayout.PROFILE, ObjectTypeLayout.PARTICIPANT})
_FILE_LAYOUTS = frozenset(
    {
        ObjectTypeLayout.IMAGE,
        ObjectTypeLayout.VIDEO,
        ObjectTypeLayout.AUDIO,
        ObjectTypeLayout.PDF,
        ObjectTypeLayout.FILE,
    }
)
_ARCHIVE_NAMES = frozenset({"zip", "gzip", "tar", "gz", "rar"})
_TEXT_EXTENSIONS = frozenset(
    {"csv", "json", "txt", "doc", "docx", "md", "tsx", "scss", "html", "yml", "rtf"}
)


@dataclass
class IconObjectProps:
    """How an icon should be drawn; sizes of 0 mean unspecified."""

    no_default: bool = False
    class_name: str = ""
    icon_class: str = ""
    size: int = 0
    icon_size: int = 0
    force_letter: bool = False
    src: str = ""


@dataclass
class IconObjectParams:
    """Classes for the wrapper and the image, and the image source."""

    classes: list[str] = field(default_factory=list)
    icon_classes: list[str] = field(default_factory=list)
    src: str = ""


@dataclass(frozen=True)
class UserSvgProps:
    """Attributes of the letter avatar drawn for people without a picture."""

    size: str
    view_box: str
    font_weight: str
    font_size: str
    letter: str


def _string(details: Optional[Mapping[str, Any]], key: str) -> str:
    value = (details or {}).get(key)
    return value if isinstance(value, str) else ""


def _bool(details: Optional[Mapping[str, Any]], key: str) -> bool:
    value = (details or {}).get(key)
    return value if isinstance(value, bool) else False


def first_alnum_char(text: str, default_letter: str) -> str:
    """The first letter or digit of text, upper-cased, or the default."""
    for char in text:
        if char.isalpha() or char.isdigit():
            upper = char.upper()
            return upper if len(upper) == 1 else char
    return default_letter


def encode_svg_to_data_url(svg: str) -> str:
    """A base64 data URL holding the SVG document."""
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return "data:image/svg+xml;charset=utf-8;base64," + encoded


def make_user_svg_props(size: int, username: str) -> UserSvgProps:
    """Avatar attributes for a given pixel size and user name."""
    font_size = min(72, FONT_SIZE[size]) if size in FONT_SIZE else 72
    return UserSvgProps(
        size=f"{size}px",
        view_box=f"0 0 {size} {size}",
        font_weight="600" if size > 18 else "500",
        font_size=f"{font_size}px",
        # "U" stands for "Untitled"
        letter=first_alnum_char(username, "U"),
    )


def make_svg_string(props: UserSvgProps) -> str:
    """The avatar SVG: a grey circle with a centred letter."""
    return (
        "\n"
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
        f'version="1.1" id="Layer_1" x="0px" y="0px" viewBox="{props.view_box}" '
        f'xml:space="preserve" height="{props.size}" width="{props.size}">\n'
        '\t<circle cx="50%" cy="50%" r="50%" fill="#f2f2f2" />\n'
        '\t<text x="50%" y="50%" text-anchor="middle" dominant-baseline="central" '
        'fill="#b6b6b6" font-family="Inter, Helvetica" '
        f'font-weight="{props.font_weight}" font-size="{props.font_size}">{props.letter}</text>\n'
        "</svg>"
    )


def get_icon_size(
    props: IconObjectProps,
    layout: ObjectTypeLayout,
    has_icon_image: bool,
    has_icon_emoji: bool,
    is_deleted: bool,
) -> int:
    """Pixel size of the inner image for an icon of the requested size."""
    size = ICON_SIZE.get(props.size, props.size)
    if is_deleted:
        return size

    if props.size == 18 and layout == ObjectTypeLayout.TODO:
        size = 16
    elif props.size == 48 and layout == ObjectTypeLayout.RELATION:
        size = 28
    elif props.size >= 40:
        if layout in _HUMAN_LAYOUTS:
            size = props.size
        if layout in (ObjectTypeLayout.SET, ObjectTypeLayout.SPACE_VIEW) and has_icon_image:
            size = props.size
        if not has_icon_image and not has_icon_emoji:
            if layout in (ObjectTypeLayout.SET, ObjectTypeLayout.OBJECT_TYPE):
                size = props.size

    if props.icon_size != 0:
        size = props.icon_size
    return size


def file_icon_name(details: Optional[Mapping[str, Any]]) -> str:
    """Name of the file pictogram for a file object: image, pdf, archive and so on."""
    name = _string(details, "name")
    mime = _string(details, "fileMimeType")
    file_ext = _string(details, "fileExt")

    name_parts = name.split(".")
    if file_ext:
        ext = file_ext.lower()
    elif len(name_parts) > 1:
        ext = name_parts[-1].lower()
    else:
        ext = ""

    icon = "other"
    if mime:
        mime_parts = mime.split(";")[0].split("/")
        if mime_parts[0] in ("image", "video", "text", "audio"):
            icon = mime_parts[0]
        if len(mime_parts) > 1:
            subtype = mime_parts[1]
            if subtype == "pdf":
                icon = "pdf"
            elif subtype in _ARCHIVE_NAMES:
                icon = "archive"
            elif subtype == "vnd.ms-powerpoint":
                icon = "presentation"
            elif subtype == "vnd.openxmlformats-officedocument.spreadsheetml.sheet":
                icon = "table"

    if ext == "m4v":
        icon = "video"
    elif ext in _TEXT_EXTENSIONS:
        icon = "text"
    elif ext in _ARCHIVE_NAMES:
        icon = "archive"
    elif ext in ("xls", "xlsx", "sqlite"):
        icon = "table"
    elif ext in ("ppt", "pptx", "key"):
        icon = "presentation"
    elif ext == "aif":
        icon = "audio"
    elif ext == "ai":
        icon = "image"
    elif ext == "dwg":
        icon = "other"

    for kind, extensions in FILE_EXTENSIONS.items():
        if ext in extensions:
            icon = kind
            break
    return icon


def _emoji_src(renderer: Renderer, details: Optional[Mapping[str, Any]]) -> str:
    return renderer.emoji_url(_string(details, "iconEmoji"))


def _image_src(renderer: Renderer, details: Optional[Mapping[str, Any]]) -> str:
    file_id = _string(details, "iconImage")
    if not file_id:
        return ""
    try:
        return renderer.get_file_url(file_id)
    except SnapshotError as exc:
        logger.error("failed to get file URL for icon: %s", exc)
        return ""


def _default_icon_path(renderer: Renderer, name: str) -> str:
    return renderer.static_url(f"/img/icon/default/{name}.svg")


def make_icon_object_params(
    renderer: Renderer,
    details: Optional[Mapping[str, Any]],
    props: IconObjectProps,
) -> IconObjectParams:
    """Work out classes and image source for an object's icon."""
    src = ""
    classes = ["iconObject"]
    icon_classes: list[str] = []
    is_deleted = not details or _bool(details, "isDeleted")

    layout = layout_of(details)
    icon_emoji = _emoji_src(renderer, details)
    icon_image = _image_src(renderer, details)
    has_icon_emoji = icon_emoji != ""
    has_icon_image = icon_image != ""

    if has_icon_image:
        src = icon_image

    def use_default(name: str) -> str:
        classes.append("withDefault")
        icon_classes.append("iconCommon")
        return _default_icon_path(renderer, name)

    if layout in _HUMAN_LAYOUTS:
        classes.append("isHuman")
        icon_classes.append("iconImage")
        if has_icon_image:
            classes.append("withImage")
        else:
            name = _string(details, "name") or "Untitled"
            svg = make_svg_string(make_user_svg_props(props.size, name))
            src = encode_svg_to_data_url(svg)
    elif layout == ObjectTypeLayout.DATE:
        src = use_default("date")
    elif layout == ObjectTypeLayout.TODO:
        done = 1 if _bool(details, "done") else 0
        src = renderer.static_url(f"/img/icon/object/checkbox{done}.svg")
        icon_classes.append("iconCheckbox")
    elif layout == ObjectTypeLayout.NOTE:
        if not props.no_default:
            src = use_default("page")
    elif layout == ObjectTypeLayout.OBJECT_TYPE:
        if has_icon_emoji:
            icon_classes.append("smileImage")
            src = icon_emoji
        elif not props.no_default:
            src = use_default("type")
    elif layout == ObjectTypeLayout.RELATION:
        relation_format = relation_format_of(details)
        if relation_format not in (RelationFormat.RELATIONS, RelationFormat.EMOJI):
            icon_classes.append("iconCommon")
            type_name = relation_format.name.lower().capitalize()
            src = renderer.static_url(f"/img/icon/relation/{type_name}.svg")
    elif layout == ObjectTypeLayout.BOOKMARK:
        src = use_default("bookmark")
    elif layout in _FILE_LAYOUTS:
        icon_classes.append("iconFile")
        src = renderer.static_url(f"/img/icon/file/{file_icon_name(details)}.svg")
    elif layout in (ObjectTypeLayout.SPACE_VIEW, ObjectTypeLayout.DASHBOARD):
        pass
    else:
        default_icon = "page" if layout == ObjectTypeLayout.BASIC else "set"
        if has_icon_emoji:
            icon_classes.append("smileImage")
            src = icon_emoji
        elif has_icon_image:
            classes.append("withImage")
            icon_classes.append("iconImage")
        elif not props.no_default:
            src = use_default(default_icon)
        if props.force_letter:
            classes.append("withLetter")

    if props.size != 0:
        classes.append(f"c{props.size}")

    icon_size = get_icon_size(props, layout, has_icon_image, has_icon_emoji, is_deleted)
    if icon_size != 0:
        icon_classes.append(f"c{icon_size}")

    if is_deleted:
        src = renderer.static_url("/img/icon/ghost.svg")
        icon_classes = ["iconCommon"]
        if icon_size != 0:
            icon_classes.append(f"c{icon_size}")

    return IconObjectParams(classes=classes, icon_classes=icon_classes, src=src)


def icon_object_template(params: IconObjectParams) -> Component:
    """The icon's wrapper and image; nothing when there is no image source."""

    def produce() -> str:
        if not params.src:
            return ""
        return (
            f'<div class="{escape(css_classes(params.classes))}">'
            f'<img src="{escape(params.src)}" class="{escape(css_classes(params.icon_classes))}">'
            "</div>"
        )

    return Component(produce)