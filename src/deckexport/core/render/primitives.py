from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from io import BytesIO
from typing import Any, Sequence

from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.enum.text import MSO_VERTICAL_ANCHOR, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.parts.image import Image as PptxImage
from pptx.util import Inches, Pt

from deckexport.core.render.sanitize import Layout
from deckexport.core.render.units import px_to_inch, rgb_from_any

logger = logging.getLogger(__name__)

PLACEHOLDER_FILL = "F0F0F0"
PLACEHOLDER_TEXT = "A0A0A0"
PLACEHOLDER_PREFIX = "Placeholder"


@dataclass(frozen=True)
class Box:
    """Geometry in inches."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_layout(cls, layout: Layout) -> "Box":
        return cls(
            x=px_to_inch(layout.x),
            y=px_to_inch(layout.y),
            w=px_to_inch(layout.width),
            h=px_to_inch(layout.height),
        )

    @classmethod
    def from_px(cls, x: float, y: float, w: float, h: float) -> "Box":
        return cls(x=px_to_inch(x), y=px_to_inch(y), w=px_to_inch(max(w, 1.0)), h=px_to_inch(max(h, 1.0)))

    def emu(self) -> tuple[int, int, int, int]:
        return (Inches(self.x), Inches(self.y), Inches(max(self.w, 0.01)), Inches(max(self.h, 0.01)))


@dataclass(frozen=True)
class TextStyle:
    size: float = 18
    face: str | None = None
    color: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    align: PP_ALIGN | None = None
    valign: MSO_VERTICAL_ANCHOR | None = None
    fill: str | None = None
    fill_alpha: float | None = None
    line_spacing: Any = None
    space_before_pt: float | None = None
    margin_in: float | None = None
    hyperlink: str | None = None

    def but(self, **changes: Any) -> "TextStyle":
        return replace(self, **changes)


# One paragraph = (text, style). Multi-line text becomes several paragraphs.
Paragraph = tuple[str, TextStyle]


def apply_font(font: Any, style: TextStyle) -> None:
    font.size = Pt(max(style.size, 1))
    if style.face:
        font.name = style.face
    if style.bold:
        font.bold = True
    if style.italic:
        font.italic = True
    if style.underline:
        font.underline = True
    rgb = rgb_from_any(style.color)
    if rgb is not None:
        font.color.rgb = rgb


def write_paragraphs(tf: Any, paragraphs: Sequence[Paragraph], *, bullets: str | None = None) -> None:
    """Replace the frame's content with one run per line.

    bullets: None, "bullet" or "number" (native DrawingML bullets).
    """
    tf.clear()
    first = True
    for text, style in paragraphs:
        for line in (text or " ").split("\n"):
            para = tf.paragraphs[0] if first else tf.add_paragraph()
            first = False
            if style.align is not None:
                para.alignment = style.align
            if style.line_spacing is not None:
                para.line_spacing = style.line_spacing
            if style.space_before_pt:
                para.space_before = Pt(style.space_before_pt)
            if bullets is not None:
                set_bullet(para, ordered=bullets == "number")
            run = para.add_run()
            run.text = line
            apply_font(run.font, style)
            if style.hyperlink:
                run.hyperlink.address = style.hyperlink


def _frame_setup(shape: Any, style: TextStyle) -> Any:
    tf = shape.text_frame
    tf.word_wrap = True
    if style.valign is not None:
        tf.vertical_anchor = style.valign
    if style.margin_in is not None:
        m = Inches(style.margin_in)
        tf.margin_left = tf.margin_right = tf.margin_top = tf.margin_bottom = m
    return tf


def add_text(
    slide: Any,
    content: str | Sequence[Paragraph],
    box: Box,
    style: TextStyle,
    *,
    bullets: str | None = None,
) -> Any:
    shape = slide.shapes.add_textbox(*box.emu())
    tf = _frame_setup(shape, style)
    paragraphs = [(content, style)] if isinstance(content, str) else list(content)
    write_paragraphs(tf, paragraphs, bullets=bullets)
    if style.fill:
        fill_solid(shape, style.fill, style.fill_alpha)
    return shape


def fill_solid(shape: Any, color: Any, alpha: float | None = None) -> None:
    rgb = rgb_from_any(color)
    if rgb is None:
        return
    shape.fill.solid()
    shape.fill.fore_color.rgb = rgb
    if alpha is not None and alpha < 1.0:
        set_solid_fill_alpha_xml(shape, alpha)


def set_solid_fill_alpha_xml(shape: Any, alpha: float) -> None:
    """Set opacity (0..1) on the shape's solid fill via DrawingML."""
    a = min(max(float(alpha), 0.0), 1.0)
    solid = shape._element.spPr.find(qn("a:solidFill"))
    if solid is None:
        return
    clr = solid.find(qn("a:srgbClr"))
    if clr is None:
        return
    for tag in ("a:alpha", "a:alphaMod", "a:alphaOff"):
        el = clr.find(qn(tag))
        if el is not None:
            clr.remove(el)
    ael = OxmlElement("a:alpha")
    ael.set("val", str(int(round(a * 100000))))
    clr.append(ael)


def set_no_line(shape: Any) -> None:
    """Remove the outline auto shapes inherit from the theme."""
    shape.line.fill.background()
    # p:style requires lnRef; idx=0 means "no theme line".
    st_el = shape._element.find(qn("p:style"))
    if st_el is not None:
        ln_ref = st_el.find(qn("a:lnRef"))
        if ln_ref is not None:
            ln_ref.set("idx", "0")
        eff_ref = st_el.find(qn("a:effectRef"))
        if eff_ref is not None:
            eff_ref.set("idx", "0")


def add_autoshape(
    slide: Any,
    kind: MSO_AUTO_SHAPE_TYPE,
    box: Box,
    *,
    fill: Any = None,
    line_color: Any = None,
    line_width_pt: float | None = None,
) -> Any:
    shape = slide.shapes.add_shape(kind, *box.emu())
    if fill is not None:
        fill_solid(shape, fill)
    else:
        shape.fill.background()
    line_rgb = rgb_from_any(line_color)
    if line_rgb is None and line_width_pt is None:
        set_no_line(shape)
    else:
        if line_rgb is not None:
            shape.line.color.rgb = line_rgb
        shape.line.width = Pt(line_width_pt if line_width_pt and line_width_pt > 0 else 1.0)
    return shape


def set_shape_text(shape: Any, content: str | Sequence[Paragraph], style: TextStyle) -> None:
    tf = _frame_setup(shape, style)
    paragraphs = [(content, style)] if isinstance(content, str) else list(content)
    write_paragraphs(tf, paragraphs)


def set_bullet(para: Any, *, ordered: bool) -> None:
    pPr = para._p.get_or_add_pPr()
    for tag in ("a:buNone", "a:buChar", "a:buAutoNum"):
        el = pPr.find(qn(tag))
        if el is not None:
            pPr.remove(el)
    pPr.set("marL", str(Inches(0.25)))
    pPr.set("indent", str(-Inches(0.25)))
    if ordered:
        bu = OxmlElement("a:buAutoNum")
        bu.set("type", "arabicPeriod")
    else:
        bu = OxmlElement("a:buChar")
        bu.set("char", "•")
    pPr.append(bu)


def add_picture_with_fit(slide: Any, blob: bytes, box: Box, fit: str = "stretch") -> Any:
    """Add an image into a box with a fit policy.

    - stretch: force to the box (may distort)
    - contain: preserve aspect, fit inside the box (letterbox)
    - cover: preserve aspect, fill the box (crop the overflow equally)
    """
    left, top, box_w, box_h = box.emu()

    iw, ih = 1.0, 1.0
    fit_n = (fit or "stretch").lower().strip()
    if fit_n not in ("stretch", "contain", "cover"):
        fit_n = "stretch"
    if fit_n != "stretch":
        im = PptxImage.from_blob(blob)
        iw, ih = map(float, im.size)
        if iw <= 0 or ih <= 0:
            fit_n = "stretch"

    if fit_n == "stretch":
        return slide.shapes.add_picture(BytesIO(blob), left, top, width=box_w, height=box_h)

    if fit_n == "contain":
        scale = min(box_w / iw, box_h / ih)
        w, h = int(iw * scale), int(ih * scale)
        return slide.shapes.add_picture(
            BytesIO(blob), left + (box_w - w) // 2, top + (box_h - h) // 2, width=w, height=h
        )

    pic = slide.shapes.add_picture(BytesIO(blob), left, top, width=box_w, height=box_h)
    img_ratio = iw / ih
    box_ratio = box_w / box_h
    if box_ratio >= img_ratio:
        # box is wider -> crop top/bottom
        frac = 1.0 - (img_ratio / box_ratio)
        pic.crop_top = frac / 2.0
        pic.crop_bottom = frac / 2.0
    else:
        frac = 1.0 - (box_ratio / img_ratio)
        pic.crop_left = frac / 2.0
        pic.crop_right = frac / 2.0
    return pic


def add_table(
    slide: Any,
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    box: Box,
    style: TextStyle,
    *,
    header_fill: Any = None,
) -> Any:
    body = [list(r) for r in rows]
    all_rows = ([list(header)] if header else []) + body
    n_rows = len(all_rows)
    n_cols = max(1, max(len(r) for r in all_rows))
    shape = slide.shapes.add_table(n_rows, n_cols, *box.emu())
    table = shape.table
    for r, row in enumerate(all_rows):
        is_header = bool(header) and r == 0
        for c in range(n_cols):
            text = row[c] if c < len(row) else ""
            cell = table.cell(r, c)
            cell_style = style.but(bold=True) if is_header else style
            write_paragraphs(cell.text_frame, [(text, cell_style)])
            if is_header and header_fill is not None:
                rgb = rgb_from_any(header_fill)
                if rgb is not None:
                    cell.fill.solid()
                    cell.fill.fore_color.rgb = rgb
    return shape


def add_placeholder(slide: Any, component_type: str, layout: Layout, message: str | None = None) -> Any:
    """Labeled grey stand-in for a component that could not be drawn."""
    label = message or f"[Unsupported Component: {component_type or 'Unknown'}]"
    box = Box.from_layout(layout)
    style = TextStyle(
        size=min(12.0, box.h * 12),
        color=PLACEHOLDER_TEXT,
        align=PP_ALIGN.CENTER,
        valign=MSO_VERTICAL_ANCHOR.MIDDLE,
        fill=PLACEHOLDER_FILL,
        margin_in=px_to_inch(5),
    )
    shape = add_text(slide, label, box, style)
    shape.name = f"{PLACEHOLDER_PREFIX}: {component_type or 'Unknown'}"
    logger.warning("added placeholder for %s component", component_type or "Unknown")
    return shape


def add_slide_number(slide: Any, box: Box, style: TextStyle, number: int) -> Any:
    """Text box holding a native slide-number field (updates when slides move)."""
    shape = slide.shapes.add_textbox(*box.emu())
    tf = _frame_setup(shape, style)
    tf.clear()
    para = tf.paragraphs[0]
    if style.align is not None:
        para.alignment = style.align

    fld = OxmlElement("a:fld")
    fld.set("id", "{" + str(uuid.uuid4()).upper() + "}")
    fld.set("type", "slidenum")
    rPr = OxmlElement("a:rPr")
    rPr.set("lang", "en-US")
    rPr.set("sz", str(int(round(style.size * 100))))
    rgb = rgb_from_any(style.color)
    if rgb is not None:
        solid = OxmlElement("a:solidFill")
        clr = OxmlElement("a:srgbClr")
        clr.set("val", str(rgb))
        solid.append(clr)
        rPr.append(solid)
    if style.face:
        latin = OxmlElement("a:latin")
        latin.set("typeface", style.face)
        rPr.append(latin)
    fld.append(rPr)
    t = OxmlElement("a:t")
    t.text = str(number)
    fld.append(t)

    # a:fld must precede a:endParaRPr
    end = para._p.find(qn("a:endParaRPr"))
    if end is not None:
        end.addprevious(fld)
    else:
        para._p.append(fld)
    shape.name = "Slide Number"
    return shape
