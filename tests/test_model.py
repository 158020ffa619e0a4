import pytest

from pubrender.model import (
    Block,
    BookmarkContent,
    DivContent,
    FileContent,
    FileStyle,
    FileType,
    LayoutContent,
    LayoutStyle,
    LinkContent,
    SmartBlockType,
    TextContent,
    block_content_type_name,
    file_class,
    is_inline_link,
    make_default_block_params,
)


@pytest.mark.parametrize(
    "content, expected",
    [
        (TextContent(), "Text"),
        (LayoutContent(), "Layout"),
        (DivContent(), "Div"),
        (BookmarkContent(), "Bookmark"),
        (LinkContent(), "Link"),
    ],
)
def test_content_type_names(content, expected):
    assert block_content_type_name(Block(content=content)) == expected


def test_content_type_name_for_missing_block_and_content():
    assert block_content_type_name(None) == ""
    assert block_content_type_name(Block()) == ""


def test_inline_file_is_named_file():
    block = Block(content=FileContent(type=FileType.FILE))
    assert is_inline_link(block) is True
    assert block_content_type_name(block) == "File"


def test_link_style_file_is_inline():
    block = Block(content=FileContent(type=FileType.IMAGE, style=FileStyle.LINK))
    assert is_inline_link(block) is True


def test_media_file_name_uses_file_class():
    block = Block(content=FileContent(type=FileType.IMAGE))
    assert is_inline_link(block) is False
    assert file_class(block) == "isImage"
    assert block_content_type_name(block) == "Media " + file_class(block)


def test_pdf_file_class():
    assert file_class(Block(content=FileContent(type=FileType.PDF))) == "isPdf"


def test_enum_accepts_camel_case_names():
    assert FileType("Image") is FileType.IMAGE
    assert SmartBlockType("FileObject") is SmartBlockType.FILE_OBJECT
    assert LayoutStyle(str(LayoutStyle.TABLE_ROWS)) is LayoutStyle.TABLE_ROWS
    with pytest.raises(ValueError):
        FileType("nonsense")


def test_default_block_params():
    block = Block(id="b1", content=DivContent(), children_ids=["c1"])
    params = make_default_block_params(block)
    assert params.id == "b1"
    assert params.classes == ["block", "align0", "blockDiv"]
    assert params.children_ids == ["c1"]
    params.children_ids.append("c2")
    assert block.children_ids == ["c1"]


def test_default_block_params_without_known_type():
    params = make_default_block_params(Block(id="x"))
    assert params.classes == ["block", "align0"]