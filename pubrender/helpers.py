"""The renderer's object store and lookup helpers shared by block renderers."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional

from .model import (
    Block,
    BookmarkContent,
    DivContent,
    DivStyle,
    FeaturedRelationsContent,
    FileContent,
    FileStyle,
    FileType,
    LatexContent,
    LayoutContent,
    LayoutStyle,
    LinkContent,
    ObjectTypeLayout,
    RelationContent,
    RelationFormat,
    SmartBlockType,
    Snapshot,
    TableContent,
    TableOfContentsContent,
    TextContent,
)

logger = logging.getLogger(__name__)

DATE_PREFIX = "_date_"
LINK_TEMPLATE = "anytype://object?objectId={}&spaceId={}"

_OBJECT_DIRS = ("objects", "relations", "types", "filesObjects")
_FILE_LAYOUTS = frozenset(
    {
        ObjectTypeLayout.FILE,
        ObjectTypeLayout.IMAGE,
        ObjectTypeLayout.PDF,
        ObjectTypeLayout.AUDIO,
        ObjectTypeLayout.VIDEO,
    }
)
_LAYOUT_CLASSES = {
    ObjectTypeLayout.PARTICIPANT: "isParticipant",
    ObjectTypeLayout.PROFILE: "isHuman",
    ObjectTypeLayout.TODO: "isTask",
    ObjectTypeLayout.COLLECTION: "isCollection",
    ObjectTypeLayout.SET: "isSet",
}
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_ALIGNS = {"AlignLeft": 0, "AlignCenter": 1, "AlignRight": 2, "AlignJustify": 3}
_CARD_STYLES = {"Text": 0, "Card": 1, "Inline": 2}
_ICON_SIZES = {"SizeNone": 0, "SizeSmall": 1, "SizeMedium": 2}
_LINK_DESCRIPTIONS = {"None": 0, "Added": 1, "Content": 2}


class SnapshotError(Exception):
    """Raised when a stored object is missing, malformed or of the wrong kind."""


@dataclass
class RenderConfig:
    """Where static assets, published files and CDNs live."""

    static_files_path: str = ""
    publish_files_path: str = ""
    prism_js_cdn_url: str = ""
    anytype_cdn_url: str = ""
    analytics_code: str = ""


def _named_int(value: Any, names: Mapping[str, int]) -> int:
    if isinstance(value, str):
        return names[value]
    return int(value or 0)


def _link_from_json(data: Mapping[str, Any]) -> LinkContent:
    return LinkContent(
        target_block_id=data.get("targetBlockId", ""),
        card_style=_named_int(data.get("cardStyle", 0), _CARD_STYLES),
        icon_size=_named_int(data.get("iconSize", 0), _ICON_SIZES),
        description=_named_int(data.get("description", 0), _LINK_DESCRIPTIONS),
        relations=list(data.get("relations") or []),
    )


_CONTENT_PARSERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "text": lambda d: TextContent(text=d.get("text", ""), checked=bool(d.get("checked", False))),
    "layout": lambda d: LayoutContent(style=LayoutStyle(d.get("style", 0))),
    "div": lambda d: DivContent(style=DivStyle(d.get("style", 0))),
    "file": lambda d: FileContent(
        target_object_id=d.get("targetObjectId", ""),
        type=FileType(d.get("type", 0)),
        style=FileStyle(d.get("style", 0)),
        name=d.get("name", ""),
    ),
    "latex": lambda d: LatexContent(text=d.get("text", ""), processor=d.get("processor", 0)),
    "bookmark": lambda d: BookmarkContent(
        url=d.get("url", ""),
        title=d.get("title", ""),
        description=d.get("description", ""),
        image_hash=d.get("imageHash", ""),
        favicon_hash=d.get("faviconHash", ""),
        target_object_id=d.get("targetObjectId", ""),
    ),
    "link": _link_from_json,
    "featuredRelations": lambda d: FeaturedRelationsContent(),
    "table": lambda d: TableContent(),
    "relation": lambda d: RelationContent(key=d.get("key", "")),
    "tableOfContents": lambda d: TableOfContentsContent(),
}


def _block_from_json(data: Mapping[str, Any]) -> Block:
    content = next(
        (parse(data[key] or {}) for key, parse in _CONTENT_PARSERS.items() if key in data),
        None,
    )
    return Block(
        id=data.get("id", ""),
        content=content,
        children_ids=list(data.get("childrenIds") or []),
        fields=dict(data.get("fields") or {}),
        align=_named_int(data.get("align", 0), _ALIGNS),
        background_color=data.get("backgroundColor", ""),
    )


def _snapshot_from_json(text: str) -> Snapshot:
    try:
        data = json.loads(text)
        inner = (data.get("snapshot") or {}).get("data") or {}
        return Snapshot(
            sb_type=SmartBlockType(data.get("sbType", 0)),
            details=dict(inner.get("details") or {}),
            blocks=[_block_from_json(block) for block in inner.get("blocks") or []],
        )
    except (ValueError, TypeError, AttributeError, KeyError) as exc:
        raise SnapshotError(f"invalid snapshot: {exc}") from exc


def layout_of(details: Optional[Mapping[str, Any]]) -> ObjectTypeLayout:
    """The object layout named in details, basic when absent or unknown."""
    value = (details or {}).get("layout")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return ObjectTypeLayout(int(value))
        except ValueError:
            return ObjectTypeLayout.BASIC
    return ObjectTypeLayout.BASIC


def relation_format_of(details: Optional[Mapping[str, Any]]) -> RelationFormat:
    """The relation format named in details, long text when absent or unknown."""
    value = (details or {}).get("relationFormat")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return RelationFormat(int(value))
        except ValueError:
            return RelationFormat.LONGTEXT
    return RelationFormat.LONGTEXT


def get_layout_class(layout: ObjectTypeLayout) -> str:
    """The CSS class for an object layout in link cards."""
    return _LAYOUT_CLASSES.get(layout, "isPage")


def date_name(value: date, now: Optional[date] = None) -> str:
    """Today, Yesterday, Tomorrow, or the date spelt out in English."""
    if isinstance(value, datetime):
        value = value.date()
    today = now.date() if isinstance(now, datetime) else (now or date.today())
    if value == today:
        return "Today"
    if value == today - timedelta(days=1):
        return "Yesterday"
    if value == today + timedelta(days=1):
        return "Tomorrow"
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


@dataclass
class Renderer:
    """Holds the published object and everything it links to."""

    config: RenderConfig = field(default_factory=RenderConfig)
    root: Snapshot = field(default_factory=Snapshot)
    blocks_by_id: dict[str, Block] = field(default_factory=dict)
    cached_pb_files: dict[str, Snapshot] = field(default_factory=dict)
    pb_files: dict[str, str] = field(default_factory=dict)

    def _read_snapshot(self, path: str) -> Snapshot:
        cached = self.cached_pb_files.get(path)
        if cached is not None:
            return cached
        text = self.pb_files.get(path)
        if text is None:
            raise SnapshotError(f"file {path} not exists")
        snapshot = _snapshot_from_json(text)
        self.cached_pb_files[path] = snapshot
        return snapshot

    def get_object_snapshot(self, object_id: str) -> Optional[Snapshot]:
        """Find a linked object by id, or None when it is not in the package."""
        if object_id.startswith(DATE_PREFIX):
            return self.get_date_snapshot(object_id)
        for directory in _OBJECT_DIRS:
            try:
                return self._read_snapshot(f"{directory}/{object_id}.pb")
            except SnapshotError as exc:
                logger.debug("object %s not in %s: %s", object_id, directory, exc)
        return None

    def find_target_details(self, target_object_id: str) -> Optional[dict[str, Any]]:
        """Details of a linked object, or None when it is not in the package."""
        snapshot = self.get_object_snapshot(target_object_id)
        return None if snapshot is None else snapshot.details

    def _file_object(self, file_id: str) -> Snapshot:
        path = f"filesObjects/{file_id}.pb"
        snapshot = self._read_snapshot(path)
        if snapshot.sb_type != SmartBlockType.FILE_OBJECT:
            raise SnapshotError(f"snapshot {path} is not FileObjects, {int(snapshot.sb_type)}")
        return snapshot

    def get_file_url(self, file_id: str) -> str:
        """The published URL of a file object."""
        snapshot = self._file_object(file_id)
        source = snapshot.details.get("source")
        if not isinstance(source, str) or not source:
            raise SnapshotError(f"FileObject {file_id} 'source' is empty")
        source = source.replace("\\", "%5C")
        return f"{self.config.publish_files_path}/{source}"

    def get_file_block(self, file_id: str) -> Optional[Block]:
        """The first file block of a file object, or None when it has none."""
        snapshot = self._file_object(file_id)
        return next((b for b in snapshot.blocks if isinstance(b.content, FileContent)), None)

    def emoji_url(self, emoji: str) -> str:
        """URL of the image for the first character of an emoji."""
        if not emoji:
            return ""
        return f"{self.config.anytype_cdn_url}/emojies/{ord(emoji[0]):x}.png"

    def static_url(self, path: str) -> str:
        """URL of a bundled static asset."""
        return f"{self.config.static_files_path}{path}"

    def make_anytype_link(self, target_details: Optional[Mapping[str, Any]], target_object_id: str) -> str:
        """A link to a target: the file URL for files, an app link otherwise."""
        if layout_of(target_details) in _FILE_LAYOUTS:
            try:
                return self.get_file_url(target_object_id)
            except SnapshotError as exc:
                logger.error("failed to get file url: %s", exc)
                return ""
        space_id = (target_details or {}).get("spaceId")
        return LINK_TEMPLATE.format(target_object_id, space_id if isinstance(space_id, str) else "")

    def get_date_snapshot(self, object_id: str) -> Optional[Snapshot]:
        """A synthetic snapshot for a date object id, or None if the date is invalid."""
        text = object_id[len(DATE_PREFIX):] if object_id.startswith(DATE_PREFIX) else object_id
        if not _DATE_PATTERN.fullmatch(text):
            logger.error("failed to parse date %r", text)
            return None
        try:
            day = date.fromisoformat(text)
        except ValueError as exc:
            logger.error("failed to parse date: %s", exc)
            return None
        details: dict[str, Any] = {
            "name": date_name(day),
            "id": object_id,
            "layout": float(ObjectTypeLayout.DATE),
        }
        if "spaceId" in self.root.details:
            details["spaceId"] = self.root.details["spaceId"]
        return Snapshot(sb_type=SmartBlockType.DATE, details=details)