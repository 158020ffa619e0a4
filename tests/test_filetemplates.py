import pytest

from pubrender.filetemplates import (
    FileMediaRenderParams,
    audio_template,
    file_image_template,
    file_pdf_template,
    image_template,
    name_link_template,
    size_span_template,
    video_template,
)


def _params(**kwargs):
    base = dict(id="blk1", src="/files/a.bin", width="50%", name="a.bin", size="1.0KB")
    base.update(kwargs)
    return FileMediaRenderParams(**base)


def test_image_template_markup():
    html = image_template(_params(src="/test.jpg")).render()
    assert html == '<img src="/test.jpg" class="media">'


def test_file_image_template_matches_image_template():
    params = _params(src="/pic.png")
    assert file_image_template(params).render() == image_template(params).render()


def test_audio_template_markup():
    html = audio_template(_params(src="/song.mp3")).render()
    assert html == '<audio controls src="/song.mp3"></audio>'


def test_video_template_markup():
    html = video_template(_params(src="/clip.mp4")).render()
    assert html == '<video controls src="/clip.mp4"></video>'


@pytest.mark.parametrize("template", [image_template, audio_template, video_template])
def test_media_templates_escape_src(template):
    html = template(_params(src='/a"b<c')).render()
    assert '/a"b' not in html
    assert "&lt;c" in html


def test_pdf_template_contains_parts():
    params = _params(id="p1", src="/doc.pdf", width="75%", name="doc.pdf", size="2.0MB")
    html = file_pdf_template(params).render()
    assert html.startswith('<div class="wrap" style="width:75%;" data-id="p1" data-src="/doc.pdf">')
    assert '<a href="/doc.pdf" target="_blank" class="info">' in html
    assert '<span class="name">doc.pdf</span> <span class="size">2.0MB</span></a>' in html
    assert '<canvas id="pdfCanvas-p1"></canvas>' in html
    assert '<div class="number"></div>' in html
    assert html.endswith("</div></div>")


def test_pdf_template_empty_width_keeps_property():
    html = file_pdf_template(_params(width="")).render()
    assert 'style="width:;"' in html


def test_pdf_template_escapes_name():
    html = file_pdf_template(_params(name="<b>")).render()
    assert "<b>" not in html
    assert "&lt;b&gt;" in html


def test_size_span_template():
    assert size_span_template("3.5KB").render() == '<span class="size">3.5KB</span>'


def test_name_link_template():
    html = name_link_template("report.txt", "/files/report.txt").render()
    assert html == '<a href="/files/report.txt" class="name">report.txt</a>'


def test_name_link_template_escapes_name():
    html = name_link_template("a&b", "/x").render()
    assert ">a&amp;b</a>" in html


def test_params_defaults():
    params = FileMediaRenderParams()
    assert params.classes == []
    assert params.id == ""
    other = FileMediaRenderParams()
    params.classes.append("align0")
    assert other.classes == []