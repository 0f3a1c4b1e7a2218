"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from typing import Any, Dict

import pytest
from pptx import Presentation

from deckexport.core.model.deck import DeckTheme, VisualComponent


@pytest.fixture
def theme_dict() -> Dict[str, Any]:
    return {
        "colors": {
            "primary": "#112233",
            "secondary": "#445566",
            "accent": "#778899",
            "background": "#FAFAFA",
            "text": "#222222",
        },
        "fonts": {"heading": "Georgia", "body": "Inter"},
    }


@pytest.fixture
def theme(theme_dict: Dict[str, Any]) -> DeckTheme:
    return DeckTheme.from_dict(theme_dict)


@pytest.fixture
def deck_dict(theme_dict: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": "deck-1",
        "title": "Seed Round",
        "userId": "user-1",
        "theme": theme_dict,
        "sections": [
            {
                "id": "s1",
                "title": "Why now",
                "components": [
                    {
                        "id": "c1",
                        "type": "text",
                        "data": {"text": "Markets are shifting", "variant": "paragraph"},
                        "layout": {"x": 50, "y": 120, "width": 400, "height": 80},
                    },
                    {
                        "id": "c2",
                        "type": "chart",
                        "data": {
                            "chartType": "bar",
                            "data": {"labels": ["Q1", "Q2"], "datasets": [{"label": "Revenue", "data": [10, 20]}]},
                        },
                        "layout": {"x": 480, "y": 120, "width": 400, "height": 300},
                    },
                ],
            },
            {"id": "s2", "title": "", "components": []},
        ],
    }


@pytest.fixture
def slide():
    """A blank 16:9 slide to draw on."""
    prs = Presentation()
    return prs.slides.add_slide(prs.slide_layouts[6])


@pytest.fixture
def make_component():
    def _make(type_: str, data: Any = None, layout: Any = None, style: Any = None, **kw: Any) -> VisualComponent:
        return VisualComponent.from_dict(
            {
                "id": kw.pop("id", f"{type_}-1"),
                "type": type_,
                "data": data,
                "layout": layout if layout is not None else {"x": 96, "y": 48, "width": 192, "height": 96},
                "style": style,
                **kw,
            }
        )

    return _make


@pytest.fixture
def texts():
    """All text frame contents on a slide, in paint order."""

    def _texts(slide) -> list:
        return [shp.text_frame.text for shp in slide.shapes if shp.has_text_frame]

    return _texts


@pytest.fixture
def read_back():
    def _read(path: Path):
        return Presentation(str(path))

    return _read
