"""HTML templates for file blocks: media elements, PDF viewers and inline links."""

from __future__ import annotations

from dataclasses import dataclass, field

from .components import Component, escape, style_attribute

_PDF_PAGER = (
    '<div class="pager">'
    '<div class="icon arrow end left"></div>'
    '<div class="icon arrow left"></div>'
    '<div class="number"></div>'
    '<div class="icon arrow right"></div>'
    '<div class="icon arrow end right"></div>'
    "</div>"
)


@dataclass
class FileMediaRenderParams:
    """What the media templates need to show one file."""

    id: str = ""
    src: str = ""
    classes: list[str] = field(default_factory=list)
    width: str = ""
    name: str = ""
    size: str = ""


def _media_image(src: str) -> Component:
    return Component(lambda: f'<img src="{escape(src)}" class="media">')


def image_template(params: FileMediaRenderParams) -> Component:
    """An image shown as media."""
    return _media_image(params.src)


def audio_template(params: FileMediaRenderParams) -> Component:
    """An audio player."""
    return Component(lambda: f'<audio controls src="{escape(params.src)}"></audio>')


def video_template(params: FileMediaRenderParams) -> Component:
    """A video player."""
    return Component(lambda: f'<video controls src="{escape(params.src)}"></video>')


def file_image_template(params: FileMediaRenderParams) -> Component:
    """An image file shown as media."""
    return _media_image(params.src)


def file_pdf_template(params: FileMediaRenderParams) -> Component:
    """A PDF viewer: a link with name and size, a canvas and a pager."""

    def produce() -> str:
        style = style_attribute({"width": params.width})
        return (
            f'<div class="wrap" style="{escape(style)}" data-id="{escape(params.id)}" '
            f'data-src="{escape(params.src)}">'
            f'<a href="{escape(params.src)}" target="_blank" class="info">'
            f'<span class="name">{escape(params.name)}</span> '
            f'<span class="size">{escape(params.size)}</span></a>'
            f'<canvas id="{escape("pdfCanvas-" + params.id)}"></canvas>'
            f"{_PDF_PAGER}</div>"
        )

    return Component(produce)


def size_span_template(size: str) -> Component:
    """A span holding a human-readable file size."""
    return Component(lambda: f'<span class="size">{escape(size)}</span>')


def name_link_template(name: str, src: str) -> Component:
    """A link to a file, labelled with its name."""
    return Component(lambda: f'<a href="{escape(src)}" class="name">{escape(name)}</a>')