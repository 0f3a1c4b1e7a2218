from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE

from deckexport.core.render.primitives import PLACEHOLDER_PREFIX


@dataclass
class SlideSummary:
    index: int
    text_shapes: int = 0
    pictures: int = 0
    charts: int = 0
    tables: int = 0
    other: int = 0
    placeholders: int = 0
    text_chars: int = 0


def summarize_pptx(path: Path) -> list[SlideSummary]:
    """Per-slide shape counts of an exported deck."""
    prs = Presentation(str(path))
    out: list[SlideSummary] = []
    for si, slide in enumerate(prs.slides, start=1):
        s = SlideSummary(index=si)
        for shp in slide.shapes:
            if shp.name.startswith(PLACEHOLDER_PREFIX):
                s.placeholders += 1
            if shp.shape_type == MSO_SHAPE_TYPE.PICTURE:
                s.pictures += 1
            elif getattr(shp, "has_chart", False) and shp.has_chart:
                s.charts += 1
            elif getattr(shp, "has_table", False) and shp.has_table:
                s.tables += 1
            elif getattr(shp, "has_text_frame", False) and shp.has_text_frame:
                s.text_shapes += 1
                s.text_chars += len((shp.text_frame.text or "").strip())
            else:
                s.other += 1
        out.append(s)
    return out


def format_summary(summaries: list[SlideSummary]) -> list[str]:
    lines = [f"slides: {len(summaries)}"]
    for s in summaries:
        lines.append(
            f"  slide {s.index:>3}: text={s.text_shapes:>2}, pictures={s.pictures:>2}, charts={s.charts:>2}, "
            f"tables={s.tables:>2}, other={s.other:>2}, placeholders={s.placeholders:>2}, text_chars={s.text_chars}"
        )
    return lines
