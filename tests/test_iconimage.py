import pytest

from pubrender.components import raw
from pubrender.helpers import Renderer
from pubrender.iconimage import page_icon_init_size, render_page_icon_image
from pubrender.iconobject import IconObjectProps, make_icon_object_params
from pubrender.model import ObjectTypeLayout, SmartBlockType, Snapshot


def _no_children(child_id):
    return raw("")


def _with_icon_file():
    return {
        "filesObjects/iconImage.pb": Snapshot(
            sb_type=SmartBlockType.FILE_OBJECT, details={"source": "test.jpg"}
        )
    }


def test_icon_image_emoji():
    renderer = Renderer(root=Snapshot(details={"iconEmoji": "😃"}))
    actual = make_icon_object_params(
        renderer,
        renderer.root.details,
        IconObjectProps(no_default=True, size=page_icon_init_size(ObjectTypeLayout.BASIC)),
    )
    assert actual.src == "/emojies/1f603.png"


def test_icon_image_uploaded():
    renderer = Renderer(
        root=Snapshot(details={"iconImage": "iconImage"}),
        cached_pb_files=_with_icon_file(),
    )
    actual = make_icon_object_params(
        renderer,
        renderer.root.details,
        IconObjectProps(no_default=True, size=page_icon_init_size(ObjectTypeLayout.BASIC)),
    )
    assert actual.src == "/test.jpg"


@pytest.mark.parametrize(
    "layout, expected",
    [
        (ObjectTypeLayout.BASIC, 96),
        (ObjectTypeLayout.PROFILE, 128),
        (ObjectTypeLayout.PARTICIPANT, 128),
        (ObjectTypeLayout.SET, 96),
    ],
)
def test_page_icon_init_size(layout, expected):
    assert page_icon_init_size(layout) == expected


def test_render_emoji_icon_block():
    renderer = Renderer(root=Snapshot(details={"iconEmoji": "😃"}))
    html = render_page_icon_image(renderer, _no_children).render()
    assert 'class="block blockIcon"' in html
    assert 'src="/emojies/1f603.png"' in html
    assert "smileImage" in html


def test_render_uploaded_icon_block():
    renderer = Renderer(
        root=Snapshot(details={"iconImage": "iconImage"}),
        cached_pb_files=_with_icon_file(),
    )
    html = render_page_icon_image(renderer, _no_children).render()
    assert 'src="/test.jpg"' in html
    assert "withImage" in html


def test_render_without_icon_is_empty():
    renderer = Renderer(root=Snapshot(details={"name": "Page"}))
    assert render_page_icon_image(renderer, _no_children).render() == ""


def test_render_missing_icon_file_is_empty():
    renderer = Renderer(root=Snapshot(details={"iconImage": "absent"}))
    assert render_page_icon_image(renderer, _no_children).render() == ""


@pytest.mark.parametrize("layout", [ObjectTypeLayout.TODO, ObjectTypeLayout.BOOKMARK])
def test_todo_and_bookmark_have_no_page_icon(layout):
    renderer = Renderer(root=Snapshot(details={"iconEmoji": "😃", "layout": float(layout)}))
    assert render_page_icon_image(renderer, _no_children).render() == ""


def test_human_page_icon_is_marked():
    renderer = Renderer(
        root=Snapshot(
            details={
                "iconEmoji": "😃",
                "layout": float(ObjectTypeLayout.PROFILE),
                "name": "Alice",
            }
        )
    )
    html = render_page_icon_image(renderer, _no_children).render()
    assert 'class="block blockIcon isHuman"' in html
    assert "data:image/svg+xml;charset=utf-8;base64," in html