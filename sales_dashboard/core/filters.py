"""Partner and date-range filtering of the sales frame."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import FrozenSet, Iterable, Optional

import pandas as pd

from .dates import parse_sale_dates
from .text_cleaning import EXCLUDED_PARTNER_KEY, normalize_partner_name, partner_keys


class DateRange(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


DATE_RANGE_LABELS = {
    DateRange.ALL: "Período Completo",
    DateRange.WEEK: "Esta Semana",
    DateRange.MONTH: "Este Mês",
    DateRange.CUSTOM: "Personalizado",
}


@dataclass(frozen=True)
class FilterState:
    """User-selected filters. Empty partner selection means every partner."""

    selected_partner_names: FrozenSet[str] = field(default_factory=frozenset)
    date_range: DateRange = DateRange.MONTH
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None

    def with_partners(self, names: Iterable[str]) -> "FilterState":
        return replace(self, selected_partner_names=frozenset(names))

    def with_range(
        self,
        date_range: DateRange,
        custom_start: Optional[date] = None,
        custom_end: Optional[date] = None,
    ) -> "FilterState":
        return replace(
            self, date_range=DateRange(date_range), custom_start=custom_start, custom_end=custom_end
        )


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def week_start(today: date) -> date:
    """Monday of the week containing ``today`` (Sunday belongs to the week before it)."""
    return today - timedelta(days=today.weekday())


def month_start(today: date) -> date:
    return today.replace(day=1)


def date_range_label(filters: FilterState) -> str:
    if filters.date_range is DateRange.CUSTOM:
        start = filters.custom_start.strftime("%d/%m/%Y") if filters.custom_start else "…"
        end = filters.custom_end.strftime("%d/%m/%Y") if filters.custom_end else "…"
        return f"{start} a {end}"
    return DATE_RANGE_LABELS[filters.date_range]


def _day_bounds(filters: FilterState, today: date) -> tuple[Optional[date], Optional[date]]:
    """Inclusive first and last day kept by ``filters``."""
    if filters.date_range is DateRange.WEEK:
        start = week_start(today)
        return start, start + timedelta(days=6)
    if filters.date_range is DateRange.MONTH:
        return month_start(today), None
    if filters.date_range is DateRange.CUSTOM:
        return filters.custom_start, filters.custom_end
    return None, None


def date_mask(sale_ts: pd.Series, filters: FilterState, today: Optional[date] = None) -> pd.Series:
    """Boolean mask of rows whose sale day falls inside the selected range."""
    today = today or utc_today()
    if filters.date_range is DateRange.ALL:
        return pd.Series(True, index=sale_ts.index)
    start, end = _day_bounds(filters, today)
    if filters.date_range is DateRange.CUSTOM and start is None and end is None:
        return pd.Series(True, index=sale_ts.index)

    days = sale_ts.dt.floor("D")
    mask = sale_ts.notna()
    if start is not None:
        mask &= days >= pd.Timestamp(start.isoformat(), tz="UTC")
    if end is not None:
        mask &= days <= pd.Timestamp(end.isoformat(), tz="UTC")
    return mask.fillna(False).astype(bool)


def add_derived_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of ``df`` with ``partner_key`` and ``sale_ts`` columns."""
    out = df.copy()
    out["partner_key"] = partner_keys(out["partner_name"]) if len(out) else pd.Series(dtype=str)
    out["sale_ts"] = parse_sale_dates(out["sale_date"]) if len(out) else pd.Series(
        dtype="datetime64[ns, UTC]"
    )
    return out


def sort_by_date_desc(df: pd.DataFrame) -> pd.DataFrame:
    """Newest first, unparseable dates last, ties in input order."""
    return df.sort_values("sale_ts", ascending=False, na_position="last", kind="mergesort")


def filter_sales(
    df: pd.DataFrame,
    filters: FilterState,
    today: Optional[date] = None,
    excluded: Optional[str] = EXCLUDED_PARTNER_KEY,
) -> pd.DataFrame:
    """Apply exclusion, partner selection and date range, then sort.

    ``excluded=None`` keeps every partner, including the internal one.

    ``df`` is left untouched. The result carries ``partner_key`` and
    ``sale_ts`` so downstream aggregations do not parse dates again.
    """
    out = add_derived_columns(df)
    if out.empty:
        return out

    mask = pd.Series(True, index=out.index)
    if excluded is not None:
        mask &= out["partner_key"] != excluded
    if filters.selected_partner_names:
        selected = {normalize_partner_name(name) for name in filters.selected_partner_names}
        mask &= out["partner_key"].isin(selected)
    mask &= date_mask(out["sale_ts"], filters, today)

    return sort_by_date_desc(out.loc[mask])
