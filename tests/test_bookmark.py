import pytest

from pubrender.bookmark import (
    FAILED_SANITIZATION_URL,
    bookmark_details,
    bookmark_link_template,
    make_bookmark_params,
    render_bookmark,
)
from pubrender.components import raw
from pubrender.helpers import Renderer
from pubrender.model import Block, BookmarkContent, SmartBlockType, Snapshot


def _no_children(child_id):
    return raw("")


def _page(details):
    return Snapshot(sb_type=SmartBlockType.PAGE, details=details)


def _full_details(source, n):
    return {
        "iconImage": f"favicon{n}",
        "picture": f"image{n}",
        "description": f"description{n}",
        "name": f"name{n}",
        "source": source,
    }


def test_valid_bookmark():
    renderer = Renderer(
        cached_pb_files={"objects/object1.pb": _page(_full_details("https://example.com", 1))}
    )
    block = Block(
        id="block1",
        content=BookmarkContent(url="https://example.com", target_object_id="object1"),
    )
    result = make_bookmark_params(renderer, block)
    assert result.id == "block1"
    assert result.classes == ["block", "align0", "blockBookmark"]
    assert result.content.render() == (
        '<a href="https://example.com" target="_blank" class="inner">'
        '<div class="side left"><div class="link">example.com</div>'
        '<div class="name">name1</div><div class="descr">description1</div></div>'
        '<div class="side right"></div></a>'
    )


@pytest.mark.parametrize(
    "files, block_id, target",
    [
        ({"objects/object12.pb": _page({})}, "block2", "object12"),
        ({}, "block2", "object12"),
        ({"objects/object3.pb": _page(_full_details("::::", 3))}, "block3", "object3"),
        ({"objects/object3.pb": _page(_full_details("", 3))}, "block3", "object3"),
    ],
    ids=["missing details", "missing bookmark", "invalid URL", "empty URL"],
)
def test_bookmark_without_usable_url(files, block_id, target):
    renderer = Renderer(cached_pb_files=files)
    block = Block(id=block_id, content=BookmarkContent(target_object_id=target))
    assert make_bookmark_params(renderer, block) is None


def test_empty_source_falls_back_to_block_url():
    renderer = Renderer(cached_pb_files={"objects/object3.pb": _page({"source": ""})})
    block = Block(
        id="block3",
        content=BookmarkContent(target_object_id="object3", url="https://example.com"),
    )
    result = make_bookmark_params(renderer, block)
    assert result.id == "block3"
    assert result.classes == ["block", "align0", "blockBookmark"]
    html = result.content.render()
    assert html.startswith('<a href="https://example.com" target="_blank"')
    assert '<div class="link">example.com</div>' in html


def test_details_from_block_when_no_object():
    bookmark = BookmarkContent(
        url="https://example.com", title="Title", description="Descr",
        image_hash="img", favicon_hash="fav",
    )
    assert bookmark_details(Renderer(), bookmark) == {
        "iconImage": "fav",
        "picture": "img",
        "description": "Descr",
        "name": "Title",
        "source": "https://example.com",
    }


def test_images_and_background_color():
    files = {
        "objects/o1.pb": _page(_full_details("https://example.com:8080/page", 1)),
        "filesObjects/favicon1.pb": Snapshot(
            sb_type=SmartBlockType.FILE_OBJECT, details={"source": "fav.png"}
        ),
        "filesObjects/image1.pb": Snapshot(
            sb_type=SmartBlockType.FILE_OBJECT, details={"source": "pic.png"}
        ),
    }
    renderer = Renderer(cached_pb_files=files)
    block = Block(id="b", background_color="red", content=BookmarkContent(target_object_id="o1"))
    html = make_bookmark_params(renderer, block).content.render()
    assert 'class="inner bgColor bgColor-red withImage"' in html
    assert '<img src="/fav.png" class="fav">example.com:8080' in html
    assert '<div class="side right"><img src="/pic.png" class="img"></div>' in html


def test_unsafe_scheme_is_sanitized():
    renderer = Renderer()
    block = Block(id="b", content=BookmarkContent(url="javascript:alert(1)"))
    html = make_bookmark_params(renderer, block).content.render()
    assert f'href="{FAILED_SANITIZATION_URL}"' in html


def test_bookmark_link_template_skips_none():
    html = bookmark_link_template("https://example.com", ["inner"], [raw("<b>x</b>"), None]).render()
    assert html == '<a href="https://example.com" target="_blank" class="inner"><b>x</b></a>'


def test_render_bookmark_without_url_is_empty():
    block = Block(id="b", content=BookmarkContent())
    assert render_bookmark(Renderer(), block, _no_children).render() == ""


def test_render_bookmark_block():
    block = Block(id="bk", content=BookmarkContent(url="https://example.com", title="T"))
    html = render_bookmark(Renderer(), block, _no_children).render()
    assert html.startswith('<div id="bk"')
    assert "blockBookmark" in html
    assert '<div class="name">T</div>' in html