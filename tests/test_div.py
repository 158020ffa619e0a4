import pytest

from pubrender.components import raw
from pubrender.div import div_dot_template, div_line_template, make_div_params, render_div
from pubrender.model import Block, DivContent, DivStyle, TextContent

BLOCK_ID = "66c5b61a7e4bcd764b24c213"


def test_make_div_params_dots():
    block = Block(id=BLOCK_ID, content=DivContent(style=DivStyle.DOTS))
    params = make_div_params(block)
    assert params.id == BLOCK_ID
    assert params.classes == ["block", "align0", "blockDiv", "divDot"]
    assert params.content.render() == div_dot_template().render()


def test_make_div_params_line_with_background():
    block = Block(id="d", content=DivContent(style=DivStyle.LINE), background_color="red")
    params = make_div_params(block)
    assert params.classes == ["block", "align0", "blockDiv", "divLine", "bgColor", "bgColor-red"]
    assert params.content.render() == '<div class="line"></div>'


def test_make_div_params_rejects_other_content():
    with pytest.raises(TypeError):
        make_div_params(Block(content=TextContent()))


def test_dot_template_has_three_dots():
    assert div_dot_template().render().count('<div class="dot"></div>') == 3
    assert div_line_template().render() == '<div class="line"></div>'