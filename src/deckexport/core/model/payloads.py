"""Typed component payloads.

Each handler turns `component.data` into one of these before drawing. The
`from_data` constructors read through `get_safe`/`safe_*` so any shape of
input produces a payload; emptiness is then decided by the handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from deckexport.core.render.sanitize import flatten_rich_text, get_safe, safe_list, safe_mapping, safe_str
from deckexport.core.render.units import parse_float


def _num(v: Any) -> float | None:
    return parse_float(v)


@dataclass(frozen=True)
class TextPayload:
    text: str
    variant: str | None

    @classmethod
    def from_data(cls, data: Any) -> "TextPayload":
        raw = get_safe(data, "text")
        if raw in (None, ""):
            raw = get_safe(data, "textContent")
        if raw is not None and not isinstance(raw, str):
            raw = flatten_rich_text(raw)
        variant = get_safe(data, "variant")
        return cls(text=safe_str(raw), variant=variant if isinstance(variant, str) and variant else None)


@dataclass(frozen=True)
class ImagePayload:
    src: str | None
    alt: str
    caption: str

    @classmethod
    def from_data(cls, data: Any) -> "ImagePayload":
        src = get_safe(data, "src")
        if not isinstance(src, str) or not src.strip():
            # Gallery-style variants keep their sources in a list.
            first = next(iter(safe_list(get_safe(data, "images"))), None)
            src = first if isinstance(first, str) else get_safe(first, "src")
        if not isinstance(src, str) or not src.strip():
            src = get_safe(data, "imageUrl")
        return cls(
            src=src.strip() if isinstance(src, str) and src.strip() else None,
            alt=safe_str(get_safe(data, "alt")),
            caption=safe_str(get_safe(data, "caption")),
        )


@dataclass(frozen=True)
class ListItem:
    text: str
    style: dict[str, Any]
    checked: bool = False


@dataclass(frozen=True)
class ListPayload:
    items: tuple[ListItem, ...]
    ordered: bool

    @classmethod
    def from_data(cls, data: Any, *, key: str = "items", placeholder: str = "Item") -> "ListPayload":
        items: list[ListItem] = []
        for i, raw in enumerate(safe_list(get_safe(data, key))):
            if isinstance(raw, str):
                items.append(ListItem(text=raw or f"{placeholder} {i + 1}", style={}))
                continue
            text = safe_str(get_safe(raw, "text")) or safe_str(get_safe(raw, "label"))
            items.append(
                ListItem(
                    text=text or f"{placeholder} {i + 1}",
                    style=dict(safe_mapping(get_safe(raw, "style"))),
                    checked=get_safe(raw, "checked", False) is True or get_safe(raw, "completed", False) is True,
                )
            )
        return cls(items=tuple(items), ordered=get_safe(data, "ordered", False) is True)


@dataclass(frozen=True)
class QuotePayload:
    text: str
    author: str

    @classmethod
    def from_data(cls, data: Any) -> "QuotePayload":
        text = safe_str(get_safe(data, "text")) or safe_str(get_safe(data, "quote"))
        return cls(text=text or "[Quote Text Missing]", author=safe_str(get_safe(data, "author")))


@dataclass(frozen=True)
class ChartDataset:
    label: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class ChartPayload:
    chart_type: str
    labels: tuple[str, ...]
    datasets: tuple[ChartDataset, ...]
    title: str
    title_size: Any
    title_color: Any
    show_legend: bool

    @classmethod
    def from_data(cls, data: Any) -> "ChartPayload":
        source = get_safe(data, "data")
        if not isinstance(source, Mapping):
            source = data if isinstance(get_safe(data, "datasets"), list) else {}
        datasets = []
        for i, ds in enumerate(safe_list(get_safe(source, "datasets"))):
            datasets.append(
                ChartDataset(
                    label=safe_str(get_safe(ds, "label")) or f"Dataset {i + 1}",
                    values=tuple(safe_list(get_safe(ds, "data"))),
                )
            )
        title = get_safe(data, "options.title.text") or get_safe(data, "title")
        return cls(
            chart_type=safe_str(get_safe(data, "chartType"), "bar") or "bar",
            labels=tuple(safe_str(lbl, str(lbl)) for lbl in safe_list(get_safe(source, "labels"))),
            datasets=tuple(datasets),
            title=safe_str(title),
            title_size=get_safe(data, "options.title.font.size"),
            title_color=get_safe(data, "options.title.color"),
            show_legend=get_safe(data, "options.legend.display", True) is not False,
        )


@dataclass(frozen=True)
class ButtonPayload:
    label: str
    url: str | None

    @classmethod
    def from_data(cls, data: Any, *, label_key: str = "label", url_key: str = "url") -> "ButtonPayload":
        url = get_safe(data, url_key)
        return cls(
            label=safe_str(get_safe(data, label_key)) or "Button",
            url=url if isinstance(url, str) and url.strip() else None,
        )


@dataclass(frozen=True)
class CalloutPayload:
    text: str
    title: str
    variant: str
    background_color: str | None
    text_color: str | None
    border_color: str | None

    @classmethod
    def from_data(cls, data: Any) -> "CalloutPayload":
        return cls(
            text=safe_str(get_safe(data, "text")) or "[Callout text missing]",
            title=safe_str(get_safe(data, "title")),
            variant=safe_str(get_safe(data, "variant"), "info") or "info",
            background_color=get_safe(data, "backgroundColor"),
            text_color=get_safe(data, "textColor"),
            border_color=get_safe(data, "borderColor"),
        )


@dataclass(frozen=True)
class CitationPayload:
    text: str

    @classmethod
    def from_data(cls, data: Any) -> "CitationPayload":
        text = safe_str(get_safe(data, "text"))
        source = safe_str(get_safe(data, "source"))
        if not text and source:
            author = safe_str(get_safe(data, "author"))
            year = safe_str(get_safe(data, "year"))
            text = f"{author} ({year}). {source}."
        return cls(text=text or "[Citation text missing]")


@dataclass(frozen=True)
class TablePayload:
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @classmethod
    def from_data(cls, data: Any) -> "TablePayload":
        rows = []
        for r in safe_list(get_safe(data, "rows")):
            rows.append(tuple(safe_str(c, str(c)) for c in safe_list(r)))
        header = tuple(safe_str(c, str(c)) for c in safe_list(get_safe(data, "headers")))
        return cls(header=header, rows=tuple(rows))

    @classmethod
    def from_competitors(cls, data: Any) -> "TablePayload":
        features = [safe_str(f) for f in safe_list(get_safe(data, "featureList")) if safe_str(f)]
        rows = []
        for comp in safe_list(get_safe(data, "competitors")):
            flags = safe_mapping(get_safe(comp, "features"))
            row = [safe_str(get_safe(comp, "name")) or "?"]
            row.extend("✓" if flags.get(f) is True else "✗" for f in features)
            rows.append(tuple(row))
        return cls(header=tuple(["Competitor", *features]), rows=tuple(rows))


@dataclass(frozen=True)
class Metric:
    label: str
    value: str
    trend: str | None = None
    description: str = ""


@dataclass(frozen=True)
class MetricsPayload:
    metrics: tuple[Metric, ...]

    @classmethod
    def from_data(cls, data: Any) -> "MetricsPayload":
        metrics = []
        for m in safe_list(get_safe(data, "metrics")):
            trend = get_safe(m, "trend")
            metrics.append(
                Metric(
                    label=safe_str(get_safe(m, "label")),
                    value=safe_str(get_safe(m, "value")),
                    trend=trend if trend in ("up", "down", "flat") else None,
                    description=safe_str(get_safe(m, "description")),
                )
            )
        return cls(metrics=tuple(metrics))

    @classmethod
    def from_counter(cls, data: Any) -> "MetricsPayload":
        trend = get_safe(data, "trend")
        value = f"{safe_str(get_safe(data, 'prefix'))}{safe_str(get_safe(data, 'value'))}{safe_str(get_safe(data, 'suffix'))}"
        if not value:
            return cls(metrics=())
        return cls(
            metrics=(
                Metric(
                    label=safe_str(get_safe(data, "label")),
                    value=value,
                    trend=trend if trend in ("up", "down", "flat") else None,
                ),
            )
        )


@dataclass(frozen=True)
class ProblemSolutionPayload:
    problem: str
    solution: str

    @classmethod
    def from_data(cls, data: Any) -> "ProblemSolutionPayload":
        return cls(
            problem=safe_str(get_safe(data, "problem")),
            solution=safe_str(get_safe(data, "solution")),
        )


@dataclass(frozen=True)
class InvestmentAskPayload:
    amount: str
    equity: str
    terms: str

    @classmethod
    def from_data(cls, data: Any) -> "InvestmentAskPayload":
        return cls(
            amount=safe_str(get_safe(data, "amount")),
            equity=safe_str(get_safe(data, "equity")),
            terms=safe_str(get_safe(data, "terms")),
        )


@dataclass(frozen=True)
class TeamMember:
    name: str
    title: str


@dataclass(frozen=True)
class TeamPayload:
    members: tuple[TeamMember, ...]

    @classmethod
    def from_data(cls, data: Any) -> "TeamPayload":
        members = []
        for m in safe_list(get_safe(data, "members")):
            name = safe_str(get_safe(m, "name"))
            if name:
                members.append(TeamMember(name=name, title=safe_str(get_safe(m, "title"))))
        return cls(members=tuple(members))


@dataclass(frozen=True)
class MarketMapPayload:
    tam: float | None
    sam: float | None
    som: float | None
    notes: str

    @classmethod
    def from_data(cls, data: Any) -> "MarketMapPayload":
        return cls(
            tam=_num(get_safe(data, "tam")),
            sam=_num(get_safe(data, "sam")),
            som=_num(get_safe(data, "som")),
            notes=safe_str(get_safe(data, "notes")),
        )


@dataclass(frozen=True)
class FundsPayload:
    labels: tuple[str, ...]
    percents: tuple[float, ...]

    @classmethod
    def from_data(cls, data: Any) -> "FundsPayload":
        labels, percents = [], []
        for c in safe_list(get_safe(data, "categories")):
            pct = _num(get_safe(c, "percent"))
            if pct is None:
                continue
            labels.append(safe_str(get_safe(c, "label")) or f"Category {len(labels) + 1}")
            percents.append(pct)
        return cls(labels=tuple(labels), percents=tuple(percents))


@dataclass(frozen=True)
class Milestone:
    date: str
    label: str


@dataclass(frozen=True)
class TimelinePayload:
    milestones: tuple[Milestone, ...]

    @classmethod
    def from_data(cls, data: Any) -> "TimelinePayload":
        out = []
        for m in safe_list(get_safe(data, "milestones")):
            label = safe_str(get_safe(m, "label"))
            date = safe_str(get_safe(m, "date"))
            if label or date:
                out.append(Milestone(date=date, label=label))
        return cls(milestones=tuple(out))
