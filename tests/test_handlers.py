import base64

import pytest
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE
from pptx.enum.shapes import MSO_SHAPE, MSO_SHAPE_TYPE
from pptx.oxml.ns import qn
from pptx.util import Inches, Pt

from deckexport.core.config import ExportSettings, use_settings
from deckexport.core.errors import ComponentRenderError
from deckexport.core.render import handlers
from deckexport.core.render.handlers import TRANSPARENT_GIF, chart_type_for, load_image_bytes

GIF_URI = "data:image/gif;base64," + base64.b64encode(TRANSPARENT_GIF).decode("ascii")


def _only(slide):
    shapes = list(slide.shapes)
    assert len(shapes) == 1
    return shapes[0]


def _first_run(shape):
    return shape.text_frame.paragraphs[0].runs[0]


# --- text -------------------------------------------------------------------


def test_heading_uses_variant_size_and_heading_font(slide, theme, make_component):
    handlers.handle_text(slide, make_component("text", {"text": "Title", "variant": "heading"}), theme)
    run = _first_run(_only(slide))
    assert run.text == "Title"
    assert run.font.size == Pt(28)
    assert run.font.name == "Georgia"
    assert run.font.color.rgb == RGBColor.from_string("222222")


def test_text_style_overrides(slide, theme, make_component):
    style = {"fontSize": "20px", "fontWeight": 700, "fontStyle": "italic", "color": "#FF0000", "lineHeight": "24px"}
    handlers.handle_text(slide, make_component("text", {"text": "Body"}, style=style), theme)
    shape = _only(slide)
    para = shape.text_frame.paragraphs[0]
    font = para.runs[0].font
    assert font.size == Pt(20)
    assert font.bold and font.italic
    assert font.name == "Inter"
    assert font.color.rgb == RGBColor.from_string("FF0000")
    assert para.line_spacing == Pt(18)


def test_text_is_positioned_from_pixels(slide, theme, make_component):
    handlers.handle_text(slide, make_component("text", {"text": "x"}), theme)
    shape = _only(slide)
    assert (shape.left, shape.top, shape.width, shape.height) == (Inches(1), Inches(0.5), Inches(2), Inches(1))


@pytest.mark.parametrize("data,expected", [({"variant": "subheading"}, "[subheading]"), ({}, "[Empty Text Block]")])
def test_empty_text_labels(slide, theme, make_component, data, expected):
    handlers.handle_text(slide, make_component("text", data), theme)
    assert _only(slide).text_frame.text == expected


def test_multiline_text_becomes_paragraphs(slide, theme, make_component):
    handlers.handle_text(slide, make_component("text", {"text": "a\nb"}), theme)
    assert len(_only(slide).text_frame.paragraphs) == 2


# --- lists ------------------------------------------------------------------


def test_ordered_list_uses_auto_numbering(slide, theme, make_component):
    handlers.handle_list(slide, make_component("list", {"items": ["One", {"text": "Two"}], "ordered": True}), theme)
    paras = _only(slide).text_frame.paragraphs
    assert [p.text for p in paras] == ["One", "Two"]
    assert all(p._p.pPr.find(qn("a:buAutoNum")) is not None for p in paras)


def test_unordered_list_uses_bullet_char(slide, theme, make_component):
    handlers.handle_list(slide, make_component("list", {"items": ["One"]}), theme)
    bu = _only(slide).text_frame.paragraphs[0]._p.pPr.find(qn("a:buChar"))
    assert bu is not None and bu.get("char") == "•"


def test_list_item_style_overrides_component_style(slide, theme, make_component):
    data = {"items": [{"text": "Big", "style": {"fontSize": 30}}, "Small"]}
    handlers.handle_list(slide, make_component("list", data, style={"fontSize": 12}), theme)
    paras = _only(slide).text_frame.paragraphs
    assert paras[0].runs[0].font.size == Pt(30)
    assert paras[1].runs[0].font.size == Pt(12)


def test_empty_list_placeholder(slide, theme, make_component):
    handlers.handle_list(slide, make_component("list", {"items": []}), theme)
    shape = _only(slide)
    assert shape.text_frame.text == "[Unsupported Component: List (No Items)]"
    assert shape.name == "Placeholder: List (No Items)"


def test_checklist_prefixes(slide, theme, make_component, texts):
    data = {"items": [{"text": "Ship", "checked": True}, {"text": "Fund"}]}
    handlers.handle_checklist(slide, make_component("checklist", data), theme)
    assert texts(slide) == ["☑ Ship\n☐ Fund"]


# --- quote ------------------------------------------------------------------


def test_quote_with_author_splits_height(slide, theme, make_component, texts):
    handlers.handle_quote(slide, make_component("quote", {"text": "Hi", "author": "Ann"}), theme)
    assert texts(slide) == ["“Hi”", "— Ann"]
    quote, author = list(slide.shapes)
    assert quote.height == Inches(0.75)
    assert author.top == Inches(1.25)


def test_quote_without_author_takes_full_height(slide, theme, make_component):
    handlers.handle_quote(slide, make_component("testimonialCard", {"quote": "Great"}), theme)
    shape = _only(slide)
    assert shape.text_frame.text == "“Great”"
    assert shape.height == Inches(1)


# --- chart ------------------------------------------------------------------


def test_chart_type_lookup():
    assert chart_type_for("bar") == XL_CHART_TYPE.COLUMN_CLUSTERED
    assert chart_type_for("Doughnut") == XL_CHART_TYPE.DOUGHNUT
    assert chart_type_for("polarArea") == XL_CHART_TYPE.RADAR_FILLED
    assert chart_type_for("bar3d") == XL_CHART_TYPE.COLUMN_CLUSTERED
    assert chart_type_for("sunburst") == XL_CHART_TYPE.COLUMN_CLUSTERED


def test_bar_chart_uses_theme_colors(slide, theme, make_component):
    data = {
        "chartType": "bar",
        "data": {"labels": ["Q1", "Q2"], "datasets": [{"label": "A", "data": [1, 2]}, {"label": "B", "data": ["3", None]}]},
        "options": {"title": {"text": "Revenue"}},
    }
    handlers.handle_chart(slide, make_component("chart", data), theme)
    chart = _only(slide).chart
    assert chart.chart_type == XL_CHART_TYPE.COLUMN_CLUSTERED
    assert chart.has_legend
    assert chart.chart_title.text_frame.text == "Revenue"
    series = list(chart.plots[0].series)
    assert [s.name for s in series] == ["A", "B"]
    assert series[0].format.fill.fore_color.rgb == RGBColor.from_string("112233")
    assert series[1].format.fill.fore_color.rgb == RGBColor.from_string("445566")


def test_pie_chart_colors_points(slide, theme, make_component):
    data = {"chartType": "pie", "data": {"labels": ["a", "b", "c"], "datasets": [{"data": [1, 2, 3]}]}}
    handlers.handle_chart(slide, make_component("chart", data), theme)
    chart = _only(slide).chart
    points = chart.plots[0].series[0].points
    assert points[2].format.fill.fore_color.rgb == RGBColor.from_string("778899")


def test_scatter_chart_accepts_xy_points(slide, theme, make_component):
    data = {"chartType": "scatter", "data": {"datasets": [{"label": "s", "data": [{"x": 1, "y": 2}, {"x": 3, "y": 5}]}]}}
    handlers.handle_chart(slide, make_component("chart", data), theme)
    assert _only(slide).chart.chart_type == XL_CHART_TYPE.XY_SCATTER


def test_chart_legend_can_be_hidden(slide, theme, make_component):
    data = {"data": {"labels": ["a"], "datasets": [{"data": [1]}]}, "options": {"legend": {"display": False}}}
    handlers.handle_chart(slide, make_component("chart", data), theme)
    assert not _only(slide).chart.has_legend


@pytest.mark.parametrize(
    "data",
    [
        {"chartType": "bar", "data": {"labels": ["a"], "datasets": []}},
        {"chartType": "line", "data": {"datasets": [{"data": [1]}]}},
        {"chartType": "bar"},
    ],
)
def test_chart_invalid_data_placeholder(slide, theme, make_component, data):
    handlers.handle_chart(slide, make_component("chart", data), theme)
    assert _only(slide).text_frame.text == "[Unsupported Component: Chart (Invalid Data)]"


# --- shapes -----------------------------------------------------------------


def test_circle_is_square_and_filled_with_primary(slide, theme, make_component):
    handlers.handle_shape(slide, make_component("shape", {"shape": "circle"}), theme)
    shape = _only(slide)
    assert shape.auto_shape_type == MSO_SHAPE.OVAL
    assert shape.width == shape.height == Inches(1)
    assert shape.fill.fore_color.rgb == RGBColor.from_string("112233")


def test_shape_border_only_when_requested(slide, theme, make_component):
    style = {"backgroundColor": "#00FF00", "borderColor": "#0000FF", "borderWidth": 3}
    handlers.handle_shape(slide, make_component("shape", {"shape": "rounded-rectangle"}, style=style), theme)
    shape = _only(slide)
    assert shape.auto_shape_type == MSO_SHAPE.ROUNDED_RECTANGLE
    assert shape.line.color.rgb == RGBColor.from_string("0000FF")
    assert shape.line.width == Pt(3)


def test_unknown_shape_kind_placeholder(slide, theme, make_component):
    handlers.handle_shape(slide, make_component("shape", {"shape": "hexagon"}), theme)
    assert _only(slide).text_frame.text == "[Unsupported Component: Shape (hexagon)]"


def test_vertical_divider(slide, theme, make_component):
    layout = {"x": 0, "y": 0, "width": 10, "height": 200}
    handlers.handle_divider(slide, make_component("divider", {}, layout=layout, style={"borderWidth": 4}), theme)
    shape = _only(slide)
    assert shape.height > shape.width
    assert shape.width == Inches(4 / 96)


def test_button_links_label(slide, theme, make_component):
    handlers.handle_button(slide, make_component("button", {"label": "Buy", "url": "https://example.com"}), theme)
    shape = _only(slide)
    run = _first_run(shape)
    assert run.text == "Buy"
    assert run.hyperlink.address == "https://example.com"
    assert shape.fill.fore_color.rgb == RGBColor.from_string("112233")


def test_icon_is_labeled_circle(slide, theme, make_component):
    handlers.handle_icon(slide, make_component("icon", {"iconName": "Star"}), theme)
    shape = _only(slide)
    assert shape.auto_shape_type == MSO_SHAPE.OVAL
    assert shape.text_frame.text == "Star"


def test_callout_variant_fill_and_title(slide, theme, make_component):
    handlers.handle_callout(slide, make_component("calloutBox", {"text": "Careful", "title": "Note", "variant": "warning"}), theme)
    shape = _only(slide)
    assert shape.fill.fore_color.rgb == RGBColor.from_string("FFF3CD")
    paras = shape.text_frame.paragraphs
    assert [p.text for p in paras] == ["Note", "Careful"]
    assert paras[0].runs[0].font.bold


def test_code_uses_monospace(slide, theme, make_component):
    handlers.handle_code(slide, make_component("code", {"code": "print(1)"}), theme)
    run = _first_run(_only(slide))
    assert run.font.name == "Courier New"
    assert run.font.size == Pt(10)


def test_citation_is_small_italic(slide, theme, make_component):
    handlers.handle_citation(slide, make_component("citation", {"author": "Doe", "year": "2020", "source": "Nature"}), theme)
    run = _first_run(_only(slide))
    assert run.text == "Doe (2020). Nature."
    assert run.font.italic
    assert run.font.size == Pt(10)


def test_video_link(slide, theme, make_component):
    handlers.handle_video(slide, make_component("video", {"src": "https://v.example/1"}), theme)
    run = _first_run(_only(slide))
    assert run.text == "Click to view video"
    assert run.hyperlink.address == "https://v.example/1"
    assert run.font.underline


def test_video_without_source_placeholder(slide, theme, make_component):
    handlers.handle_video(slide, make_component("video", {}), theme)
    assert _only(slide).name.startswith("Placeholder")


def test_embed_truncates_url(slide, theme, make_component):
    url = "https://embed.example/" + "x" * 80
    handlers.handle_embed(slide, make_component("embed", {"url": url}), theme)
    run = _first_run(_only(slide))
    assert run.text == f"View Embedded Content: {url[:50]}..."
    assert run.hyperlink.address == url


# --- images -----------------------------------------------------------------


def test_image_from_data_uri(slide, theme, make_component):
    handlers.handle_image(slide, make_component("image", {"src": GIF_URI}), theme)
    assert _only(slide).shape_type == MSO_SHAPE_TYPE.PICTURE


def test_missing_image_source_embeds_transparent_pixel(slide, theme, make_component):
    handlers.handle_image(slide, make_component("heroImage", {}), theme)
    shape = _only(slide)
    assert shape.shape_type == MSO_SHAPE_TYPE.PICTURE
    assert shape.image.blob == TRANSPARENT_GIF


def test_blocked_image_pattern_is_not_fetched(monkeypatch):
    def fail(*a, **kw):
        raise AssertionError("should not fetch")

    monkeypatch.setattr(handlers.requests, "get", fail)
    assert load_image_bytes("https://placehold.co/600x400") == TRANSPARENT_GIF
    with use_settings(ExportSettings(blocked_image_patterns=("cdn.example",))):
        assert load_image_bytes("https://cdn.example/a.png") == TRANSPARENT_GIF


def test_remote_image_is_fetched_with_timeout(monkeypatch):
    calls = {}

    class FakeResponse:
        content = b"bytes"

        def raise_for_status(self):
            return None

    def fake_get(url, timeout, headers):
        calls.update(url=url, timeout=timeout, headers=headers)
        return FakeResponse()

    monkeypatch.setattr(handlers.requests, "get", fake_get)
    with use_settings(ExportSettings(image_timeout_s=2.5, user_agent="ua-test")):
        assert load_image_bytes("https://img.example/a.png") == b"bytes"
    assert calls["timeout"] == 2.5
    assert calls["headers"]["User-Agent"] == "ua-test"


def test_local_image_missing_raises(tmp_path):
    with pytest.raises(ComponentRenderError):
        load_image_bytes(str(tmp_path / "missing.png"))


def test_local_image_is_read(tmp_path, slide, theme, make_component):
    path = tmp_path / "pixel.gif"
    path.write_bytes(TRANSPARENT_GIF)
    handlers.handle_image(slide, make_component("image", {"src": str(path)}, style={"objectFit": "contain"}), theme)
    assert _only(slide).shape_type == MSO_SHAPE_TYPE.PICTURE


def test_image_contain_keeps_aspect_centered(slide, theme, make_component):
    handlers.handle_image(slide, make_component("image", {"src": GIF_URI}, style={"objectFit": "contain"}), theme)
    pic = _only(slide)
    assert pic.shape_type == MSO_SHAPE_TYPE.PICTURE
    assert (pic.width, pic.height) == (Inches(1), Inches(1))
    assert (pic.left, pic.top) == (Inches(1.5), Inches(0.5))


def test_image_cover_crops_overflow(slide, theme, make_component):
    handlers.handle_image(slide, make_component("image", {"src": GIF_URI}, style={"objectFit": "cover"}), theme)
    pic = _only(slide)
    assert pic.shape_type == MSO_SHAPE_TYPE.PICTURE
    assert (pic.width, pic.height) == (Inches(2), Inches(1))
    assert pic.crop_top == pytest.approx(0.25)
    assert pic.crop_bottom == pytest.approx(0.25)
    assert pic.crop_left == 0


def test_image_with_caption(slide, theme, make_component, texts):
    handlers.handle_image(slide, make_component("imageWithCaption", {"src": GIF_URI, "caption": "Our office"}), theme)
    assert texts(slide) == ["Our office"]
    assert len(slide.shapes) == 2
