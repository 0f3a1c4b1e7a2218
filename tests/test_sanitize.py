from deckexport.core.model.deck import Deck, DeckTheme, VisualComponent
from deckexport.core.model.payloads import ChartPayload, CitationPayload, ImagePayload, ListPayload, TablePayload, TextPayload
from deckexport.core.render.sanitize import Layout, flatten_rich_text, get_safe, is_valid_deck_data, sanitize_layout


def test_sanitize_layout_defaults_and_coercion():
    layout = sanitize_layout({"x": "10px", "y": None, "width": -5, "height": "abc"})
    assert layout == Layout(x=10.0, y=0.0, width=300.0, height=150.0, z_index=None)


def test_sanitize_layout_handles_non_mappings():
    assert sanitize_layout(None) == Layout()
    assert sanitize_layout("garbage") == Layout()


def test_sanitize_layout_keeps_numeric_z_index_only():
    assert sanitize_layout({"zIndex": 3}).z_index == 3.0
    assert sanitize_layout({"zIndex": "3"}).z_index is None
    assert sanitize_layout({"zIndex": True}).z_index is None


def test_sanitize_layout_is_idempotent():
    raw = {"x": "12", "y": 4, "width": 0, "height": 90, "zIndex": 2}
    once = sanitize_layout(raw)
    assert sanitize_layout(once) == once


def test_get_safe():
    obj = {"a": {"b": {"c": 1}, "n": None}, "l": [1]}
    assert get_safe(obj, "a.b.c") == 1
    assert get_safe(obj, "a.n", "d") == "d"
    assert get_safe(obj, "a.x.y", 0) == 0
    assert get_safe(obj, "l.0") is None
    assert get_safe(None, "a", "d") == "d"


def test_is_valid_deck_data():
    assert is_valid_deck_data({"id": "d", "sections": []})
    assert is_valid_deck_data(Deck(id="d"))
    assert not is_valid_deck_data(None)
    assert not is_valid_deck_data("deck")
    assert not is_valid_deck_data([{"id": "d"}])


def test_flatten_rich_text_document():
    doc = {
        "type": "doc",
        "content": [
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "Hello"},
                    {"type": "hardBreak"},
                    {"type": "text", "text": "World"},
                ],
            },
            {
                "type": "bulletList",
                "content": [
                    {"type": "listItem", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "one"}]}]}
                ],
            },
        ],
    }
    assert flatten_rich_text(doc) == "Hello\nWorld\none"


def test_flatten_rich_text_fallbacks():
    assert flatten_rich_text(None) == ""
    assert flatten_rich_text({"text": "plain"}) == "plain"
    assert flatten_rich_text({"foo": 1}) == '{"foo":1}'


def test_deck_from_dict_accepts_camel_case(deck_dict):
    deck = Deck.from_dict(deck_dict)
    assert deck.user_id == "user-1"
    assert [s.id for s in deck.sections] == ["s1", "s2"]
    assert deck.sections[0].components[1].type == "chart"
    assert deck.theme.chart_colors() == ["#112233", "#445566", "#778899", "#222222"]


def test_component_without_string_type():
    comp = VisualComponent.from_dict({"id": "x", "type": 5, "style": "bold"})
    assert comp.type == ""
    assert comp.style is None
    assert DeckTheme.from_dict("dark") is None


def test_text_payload_flattens_rich_text():
    payload = TextPayload.from_data({"text": {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Hi"}]}]}})
    assert payload.text == "Hi"
    assert TextPayload.from_data({"textContent": "Body"}).text == "Body"


def test_image_payload_variants():
    assert ImagePayload.from_data({"src": " https://a/b.png "}).src == "https://a/b.png"
    assert ImagePayload.from_data({"images": [{"src": "g.png"}]}).src == "g.png"
    assert ImagePayload.from_data({"imageUrl": "u.png"}).src == "u.png"
    assert ImagePayload.from_data({"src": 3}).src is None


def test_list_payload_placeholders_and_flags():
    payload = ListPayload.from_data({"items": ["", {"text": "Done", "completed": True}], "ordered": True})
    assert [i.text for i in payload.items] == ["Item 1", "Done"]
    assert payload.items[1].checked
    assert payload.ordered


def test_chart_payload_reads_nested_and_flat_data():
    nested = ChartPayload.from_data(
        {"chartType": "pie", "data": {"labels": ["a"], "datasets": [{"data": [1]}]}, "options": {"title": {"text": "T"}}}
    )
    assert nested.labels == ("a",)
    assert nested.datasets[0].label == "Dataset 1"
    assert nested.title == "T"
    flat = ChartPayload.from_data({"labels": ["x"], "datasets": [{"label": "L", "data": [2]}]})
    assert flat.chart_type == "bar"
    assert flat.datasets[0].values == (2,)


def test_citation_composes_from_parts():
    assert CitationPayload.from_data({"author": "Doe", "year": 2020, "source": "Nature"}).text == "Doe (2020). Nature."
    assert CitationPayload.from_data({}).text == "[Citation text missing]"


def test_competitor_table_marks():
    payload = TablePayload.from_competitors(
        {"featureList": ["API", "SSO"], "competitors": [{"name": "Acme", "features": {"API": True}}]}
    )
    assert payload.header == ("Competitor", "API", "SSO")
    assert payload.rows == (("Acme", "✓", "✗"),)
