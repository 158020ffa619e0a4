"""Block and snapshot data model, plus block classification helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Union

from .components import BlockParams

logger = logging.getLogger(__name__)


class _NamedEnum(IntEnum):
    """Integer enum that prints its camel-case name and accepts that name on lookup."""

    def __str__(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def _missing_(cls, value: object) -> Optional[_NamedEnum]:
        if isinstance(value, str):
            wanted = value.replace("_", "").lower()
            for member in cls:
                if member.name.replace("_", "").lower() == wanted:
                    return member
        return None


class ObjectTypeLayout(_NamedEnum):
    BASIC = 0
    PROFILE = 1
    TODO = 2
    SET = 3
    OBJECT_TYPE = 4
    RELATION = 5
    FILE = 6
    DASHBOARD = 7
    IMAGE = 8
    NOTE = 9
    SPACE = 10
    BOOKMARK = 11
    RELATION_OPTIONS_LIST = 12
    RELATION_OPTION = 13
    COLLECTION = 14
    AUDIO = 15
    VIDEO = 16
    DATE = 17
    SPACE_VIEW = 18
    PARTICIPANT = 19
    PDF = 20
    CHAT = 21
    CHAT_DERIVED = 22
    TAG = 23


class RelationFormat(_NamedEnum):
    LONGTEXT = 0
    SHORTTEXT = 1
    NUMBER = 2
    STATUS = 3
    DATE = 4
    FILE = 5
    CHECKBOX = 6
    URL = 7
    EMAIL = 8
    PHONE = 9
    EMOJI = 10
    TAG = 11
    OBJECT = 100
    RELATIONS = 101


class SmartBlockType(_NamedEnum):
    ACCOUNT_OLD = 0x0
    PAGE = 0x10
    PROFILE_PAGE = 0x11
    HOME = 0x20
    ARCHIVE = 0x30
    WIDGET = 0x70
    FILE = 0x100
    TEMPLATE = 0x120
    BUNDLED_TEMPLATE = 0x121
    BUNDLED_RELATION = 0x200
    SUB_OBJECT = 0x201
    BUNDLED_OBJECT_TYPE = 0x202
    ANYTYPE_PROFILE = 0x203
    DATE = 0x204
    WORKSPACE = 0x206
    MISSING_OBJECT = 0x207
    ST_RELATION = 0x209
    ST_TYPE = 0x210
    ST_RELATION_OPTION = 0x211
    SPACE_VIEW = 0x212
    IDENTITY = 0x214
    FILE_OBJECT = 0x215
    PARTICIPANT = 0x216


class DivStyle(_NamedEnum):
    LINE = 0
    DOTS = 1


class FileType(_NamedEnum):
    NONE = 0
    FILE = 1
    IMAGE = 2
    VIDEO = 3
    AUDIO = 4
    PDF = 5


class FileStyle(_NamedEnum):
    AUTO = 0
    LINK = 1
    EMBED = 2


class LayoutStyle(_NamedEnum):
    ROW = 0
    COLUMN = 1
    DIV = 2
    HEADER = 3
    TABLE_ROWS = 4
    TABLE_COLUMNS = 5


@dataclass
class TextContent:
    text: str = ""
    checked: bool = False


@dataclass
class LayoutContent:
    style: LayoutStyle = LayoutStyle.ROW


@dataclass
class DivContent:
    style: DivStyle = DivStyle.LINE


@dataclass
class FileContent:
    target_object_id: str = ""
    type: FileType = FileType.NONE
    style: FileStyle = FileStyle.AUTO
    name: str = ""


@dataclass
class LatexContent:
    text: str = ""
    processor: Union[int, str] = 0


@dataclass
class BookmarkContent:
    url: str = ""
    title: str = ""
    description: str = ""
    image_hash: str = ""
    favicon_hash: str = ""
    target_object_id: str = ""


@dataclass
class LinkContent:
    target_block_id: str = ""
    card_style: int = 0
    icon_size: int = 0
    description: int = 0
    relations: list[str] = field(default_factory=list)


@dataclass
class FeaturedRelationsContent:
    pass


@dataclass
class TableContent:
    pass


@dataclass
class RelationContent:
    key: str = ""


@dataclass
class TableOfContentsContent:
    pass


Content = Union[
    TextContent,
    LayoutContent,
    DivContent,
    FileContent,
    LatexContent,
    BookmarkContent,
    LinkContent,
    FeaturedRelationsContent,
    TableContent,
    RelationContent,
    TableOfContentsContent,
]


@dataclass
class Block:
    """One block of a published object."""

    id: str = ""
    content: Optional[Content] = None
    children_ids: list[str] = field(default_factory=list)
    fields: dict[str, Any] = field(default_factory=dict)
    align: int = 0
    background_color: str = ""


@dataclass
class Snapshot:
    """A stored object: its kind, details and blocks."""

    sb_type: SmartBlockType = SmartBlockType.ACCOUNT_OLD
    details: dict[str, Any] = field(default_factory=dict)
    blocks: list[Block] = field(default_factory=list)


_CONTENT_NAMES: dict[type, str] = {
    TextContent: "Text",
    LayoutContent: "Layout",
    FeaturedRelationsContent: "Featured",
    DivContent: "Div",
    TableContent: "Table",
    LatexContent: "Latex",
    BookmarkContent: "Bookmark",
    LinkContent: "Link",
    RelationContent: "Relation",
    TableOfContentsContent: "TableOfContents",
}


def _file_content(block: Block) -> FileContent:
    content = block.content
    return content if isinstance(content, FileContent) else FileContent()


def is_inline_link(block: Block) -> bool:
    """Whether a file block is shown as an inline link rather than as media."""
    file = _file_content(block)
    return file.type == FileType.FILE or file.style == FileStyle.LINK


def file_class(block: Block) -> str:
    """The CSS class naming a file block's file type, such as isImage."""
    return "is" + str(_file_content(block).type).lower().capitalize()


def block_content_type_name(block: Optional[Block]) -> str:
    """The name used in the block's CSS class; empty for unknown content."""
    if block is None:
        logger.error("block_content_type_name: block is None")
        return ""
    content = block.content
    if isinstance(content, FileContent):
        if is_inline_link(block):
            return "File"
        return "Media " + file_class(block)
    name = _CONTENT_NAMES.get(type(content))
    if name is None:
        logger.error("block_content_type_name: unknown block type %s", type(content).__name__)
        return ""
    return name


def make_default_block_params(block: Block) -> BlockParams:
    """Block parameters with the classes every block carries."""
    classes = ["block", f"align{block.align}"]
    block_type = block_content_type_name(block)
    if block_type:
        classes.append(f"block{block_type}")
    return BlockParams(id=block.id, classes=classes, children_ids=list(block.children_ids))