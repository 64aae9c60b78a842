"""Derived dashboard figures.

Everything here is a pure function of a :class:`DashboardState`. Nothing is
cached; callers rebuild the view after every import or ignore-set change.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from spending_dashboard.domain.amounts import flip_display_sign, format_currency, parse_amount, sum_amounts
from spending_dashboard.domain.categories import category_label
from spending_dashboard.domain.dates import month_key, record_date
from spending_dashboard.models import CategoryDatum, DashboardView, TimeDatum, TransactionRecord

CHART_COLORS: tuple[str, ...] = (
    "#8884d8", "#82ca9d", "#ffc658", "#ff8042", "#0088fe",
    "#00C49F", "#FFBB28", "#FF8042", "#a4de6c", "#d0ed57",
)

DEFAULT_TOP_CATEGORIES = 10


@dataclass(frozen=True)
class DashboardState:
    transactions: tuple[TransactionRecord, ...] = ()
    ignored_categories: tuple[str, ...] = ()


def filter_transactions(
    records: Iterable[TransactionRecord],
    ignored: Iterable[str],
) -> list[TransactionRecord]:
    ignored_set = set(ignored)
    return [r for r in records if r.category not in ignored_set]


def to_display(record: TransactionRecord) -> TransactionRecord:
    return record.model_copy(update={"amount": flip_display_sign(record.amount)})


def sort_newest_first(records: Iterable[TransactionRecord]) -> list[TransactionRecord]:
    """Newest first; records without a readable date go last, in input order."""
    def sort_key(record: TransactionRecord) -> tuple[bool, int]:
        value = record_date(record)
        if value is None:
            return (True, 0)
        return (False, -value.toordinal())

    return sorted(records, key=sort_key)


def category_totals(
    records: Iterable[TransactionRecord],
    limit: int = DEFAULT_TOP_CATEGORIES,
) -> list[CategoryDatum]:
    totals: dict[str, Decimal] = {}
    for record in records:
        amount = parse_amount(record.amount)
        if amount is None:
            continue
        label = category_label(record.category)
        totals[label] = totals.get(label, Decimal(0)) + abs(amount)

    # sorted() is stable, so ties keep first-seen order.
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryDatum(name=name, value=float(value)) for name, value in ranked[:limit]]


def monthly_totals(records: Iterable[TransactionRecord]) -> list[TimeDatum]:
    totals: dict[tuple[int, int], Decimal] = {}
    for record in records:
        amount = parse_amount(record.amount)
        if amount is None:
            continue
        when = record_date(record)
        if when is None:
            continue
        bucket = (when.year, when.month)
        totals[bucket] = totals.get(bucket, Decimal(0)) + amount

    return [
        TimeDatum(date=month_key(date(year, month, 1)), value=float(value))
        for (year, month), value in sorted(totals.items())
    ]


def assign_colors(
    records: Iterable[TransactionRecord],
    palette: Sequence[str] = CHART_COLORS,
) -> dict[str, str]:
    color_map: dict[str, str] = {}
    for record in records:
        if parse_amount(record.amount) is None:
            continue
        label = category_label(record.category)
        if label not in color_map:
            color_map[label] = palette[len(color_map) % len(palette)]
    return color_map


def distinct_categories(records: Iterable[TransactionRecord]) -> list[str]:
    return sorted({r.category for r in records if r.category})


def hidden_share(total: int, shown: int) -> tuple[int, float]:
    hidden = total - shown
    if total == 0:
        return hidden, 0.0
    return hidden, round(hidden / total * 100, 1)


def build_view(
    state: DashboardState,
    *,
    top_categories: int = DEFAULT_TOP_CATEGORIES,
) -> DashboardView:
    records = state.transactions
    # Charts read the stored amounts in import order; only the table is flipped and sorted.
    filtered = filter_transactions(records, state.ignored_categories)
    shown = sort_newest_first(to_display(r) for r in filtered)
    hidden_count, hidden_percent = hidden_share(len(records), len(shown))

    return DashboardView(
        filtered_transactions=shown,
        category_data=category_totals(filtered, limit=top_categories),
        time_data=monthly_totals(filtered),
        color_map=assign_colors(filtered),
        total_amount=format_currency(sum_amounts(r.amount for r in records)),
        filtered_total_amount=format_currency(sum_amounts(r.amount for r in shown)),
        all_categories=distinct_categories(records),
        ignored_categories=list(state.ignored_categories),
        transaction_count=len(records),
        hidden_count=hidden_count,
        hidden_percent=hidden_percent,
    )
