"""File blocks: inline file links, images, audio, video and PDF viewers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from .components import (
    BlockWrapperParams,
    Component,
    block_template,
    blocks_wrapper,
    none_template,
)
from .filetemplates import (
    FileMediaRenderParams,
    audio_template,
    file_pdf_template,
    image_template,
    name_link_template,
    size_span_template,
    video_template,
)
from .helpers import Renderer, SnapshotError
from .iconobject import IconObjectProps, icon_object_template, make_icon_object_params
from .model import (
    Block,
    FileContent,
    FileType,
    file_class,
    is_inline_link,
    make_default_block_params,
)

logger = logging.getLogger(__name__)

_BYTE_UNITS = ("", "K", "M", "G", "T", "P", "E", "Z")


@dataclass
class FileRenderParams:
    """A file's id, published URL, name and human-readable size."""

    id: str = ""
    src: str = ""
    name: str = ""
    size: str = ""

    def to_media(self, width: str, classes: list[str]) -> FileMediaRenderParams:
        """Media template parameters for this file."""
        return FileMediaRenderParams(
            id=self.id,
            src=self.src,
            classes=list(classes),
            width=width,
            name=self.name,
            size=self.size,
        )


def _file_content(block: Block) -> FileContent:
    content = block.content
    return content if isinstance(content, FileContent) else FileContent()


def _number(details: Optional[Mapping[str, Any]], key: str) -> float:
    value = (details or {}).get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def _string(details: Optional[Mapping[str, Any]], key: str) -> str:
    value = (details or {}).get(key)
    return value if isinstance(value, str) else ""


def get_width(fields: Optional[Mapping[str, Any]]) -> str:
    """The block's width as a percentage, or empty when unset."""
    width = _number(fields, "width")
    logger.debug("image width %s", width)
    percent = int(width * 100)
    return f"{percent}%" if percent != 0 else ""


def get_align_string(block: Block) -> str:
    """The alignment class of a block, such as align0."""
    return f"align{int(block.align)}"


def pretty_byte_size(size: int) -> str:
    """A size in bytes written with binary units, such as 1.5KB."""
    value = float(size)
    for unit in _BYTE_UNITS:
        if abs(value) < 1024.0:
            return f"{value:3.1f}{unit}B"
        value /= 1024.0
    return f"{value:.1f}YiB"


def make_file_params(renderer: Renderer, block: Block) -> FileRenderParams:
    """Parameters for a file block; raises SnapshotError when the file is missing."""
    target = _file_content(block).target_object_id
    try:
        src = renderer.get_file_url(target)
    except SnapshotError as exc:
        raise SnapshotError(f"file not found {target}") from exc

    details = renderer.find_target_details(target)
    size = int(_number(details, "sizeInBytes"))
    return FileRenderParams(
        id=block.id,
        src=src,
        name=_string(details, "name"),
        size=pretty_byte_size(size),
    )


def file_icon(renderer: Renderer, block: Block) -> Component:
    """The icon of the file a block points at."""
    details = renderer.find_target_details(_file_content(block).target_object_id)
    params = make_icon_object_params(renderer, details, IconObjectProps())
    params.classes.append(file_class(block))
    return icon_object_template(params)


def inline_file_block(
    renderer: Renderer,
    block: Block,
    params: FileRenderParams,
    render_child: Callable[[str], Component],
) -> Component:
    """A file shown as an icon, a link with its name and its size."""
    inner = blocks_wrapper(
        BlockWrapperParams(
            classes=["inner"],
            components=[
                file_icon(renderer, block),
                name_link_template(params.name, params.src),
                size_span_template(params.size),
            ],
        )
    )
    block_params = make_default_block_params(block)
    block_params.content = inner
    return block_template(block_params, render_child)


def render_file(
    renderer: Renderer,
    block: Block,
    render_child: Callable[[str], Component],
) -> Component:
    """Render a file block as an inline link or as embedded media."""
    try:
        params = make_file_params(renderer, block)
    except SnapshotError as exc:
        return none_template(str(exc))

    if is_inline_link(block):
        return inline_file_block(renderer, block, params, render_child)

    width = get_width(block.fields)
    media = params.to_media(width, [get_align_string(block)])
    file_type = _file_content(block).type

    if file_type == FileType.PDF:
        block_params = make_default_block_params(block)
        block_params.content = file_pdf_template(media)
        return block_template(block_params, render_child)

    templates = {
        FileType.IMAGE: image_template,
        FileType.AUDIO: audio_template,
        FileType.VIDEO: video_template,
    }
    template = templates.get(file_type)
    if template is None:
        logger.warning("file type is not supported: %s", file_type)
        return none_template(f"file type is not supported: {file_type}")

    inner = blocks_wrapper(
        BlockWrapperParams(
            classes=["wrap"],
            styles={"width": width} if width else None,
            components=[template(media)],
        )
    )
    block_params = make_default_block_params(block)
    block_params.content = inner
    return block_template(block_params, render_child)