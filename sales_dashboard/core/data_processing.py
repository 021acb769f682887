"""Core data processing utilities: KPIs and chart datasets."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

import pandas as pd

from .classification import (
    NON_EQUIPMENT,
    classify_brand,
    classify_machine_type,
    classify_payment_method,
)
from .dates import MIN_PLAUSIBLE_YEAR, PT_MONTHS_SHORT, PT_WEEKDAYS_SHORT, parse_sale_dates
from .filters import DateRange, FilterState, filter_sales, month_start, utc_today, week_start

NO_PARTNER = "N/A"
UNKNOWN_ITEM = "Desconhecido"


def _sale_ts(df: pd.DataFrame) -> pd.Series:
    if "sale_ts" in df.columns:
        return df["sale_ts"]
    return parse_sale_dates(df["sale_date"])


def compute_main_kpis(df: pd.DataFrame) -> dict[str, float]:
    """Total revenue, number of sales and average ticket."""
    if df.empty:
        return {"total_revenue": 0.0, "total_sales": 0, "avg_ticket": 0.0}
    total_revenue = float(df["value"].sum())
    total_sales = int(len(df))
    return {
        "total_revenue": total_revenue,
        "total_sales": total_sales,
        "avg_ticket": total_revenue / total_sales if total_sales else 0.0,
    }


def sales_by_partner(df: pd.DataFrame) -> pd.DataFrame:
    """Summed value per partner name, highest first."""
    if df.empty:
        return pd.DataFrame(columns=["partner_name", "total_value"])
    names = df["partner_name"].fillna("").astype(str)
    names = names.where(names.str.strip() != "", NO_PARTNER)
    summary = (
        df.assign(partner_name=names)
        .groupby("partner_name", as_index=False, sort=False)["value"]
        .sum()
        .rename(columns={"value": "total_value"})
    )
    return summary.sort_values("total_value", ascending=False, kind="mergesort").reset_index(drop=True)


def top_items(df: pd.DataFrame, limit: int = 10) -> pd.DataFrame:
    """Best selling items by value, with unit counts."""
    if df.empty:
        return pd.DataFrame(columns=["item_name", "total_value", "units"])
    names = df["item_name"].fillna("").astype(str)
    names = names.where(names != "", UNKNOWN_ITEM)
    summary = (
        df.assign(item_name=names)
        .groupby("item_name", as_index=False, sort=False)
        .agg(total_value=("value", "sum"), units=("value", "size"))
    )
    summary = summary.sort_values("total_value", ascending=False, kind="mergesort")
    return summary.head(limit).reset_index(drop=True)


def active_partners(df: pd.DataFrame) -> pd.DataFrame:
    """Partners with at least one sale in ``df``.

    Counts every non-empty partner name, including the partner that the
    filter pipeline excludes from the other views.
    """
    columns = ["partner_name", "total_value", "sales", "share"]
    if df.empty:
        return pd.DataFrame(columns=columns)
    names = df["partner_name"].fillna("").astype(str).str.strip()
    present = df.assign(partner_name=names).loc[names != ""]
    if present.empty:
        return pd.DataFrame(columns=columns)
    summary = present.groupby("partner_name", as_index=False, sort=False).agg(
        total_value=("value", "sum"), sales=("value", "size")
    )
    grand_total = summary["total_value"].sum()
    summary["share"] = summary["total_value"] / grand_total if grand_total else 0.0
    summary = summary.sort_values("total_value", ascending=False, kind="mergesort")
    return summary[columns].reset_index(drop=True)


def active_partners_in_range(
    df: pd.DataFrame, filters: FilterState, today: Optional[date] = None
) -> pd.DataFrame:
    """:func:`active_partners` over the selected partners and period of ``df``.

    ``df`` is the unfiltered sales frame: the excluded partner is kept.
    """
    return active_partners(filter_sales(df, filters, today=today, excluded=None))


def _tag_summary(df: pd.DataFrame, tags: pd.Series, column: str) -> pd.DataFrame:
    tagged = df.assign(**{column: tags}).dropna(subset=[column])
    if tagged.empty:
        return pd.DataFrame(columns=[column, "sales", "total_value"])
    summary = tagged.groupby(column, as_index=False, sort=False).agg(
        sales=("value", "size"), total_value=("value", "sum")
    )
    return summary.sort_values("sales", ascending=False, kind="mergesort").reset_index(drop=True)


def brand_tags(df: pd.DataFrame) -> pd.Series:
    return df["item_name"].map(classify_brand)


def machine_type_tags(df: pd.DataFrame) -> pd.Series:
    return df["item_name"].map(classify_machine_type)


def sales_by_brand(df: pd.DataFrame, limit: int = 10) -> pd.DataFrame:
    """Air-conditioning sales per brand, most sold first."""
    if df.empty:
        return pd.DataFrame(columns=["brand", "sales", "total_value"])
    return _tag_summary(df, brand_tags(df), "brand").head(limit)


def sales_by_machine_type(df: pd.DataFrame) -> pd.DataFrame:
    """Air-conditioning sales per machine type, most sold first."""
    if df.empty:
        return pd.DataFrame(columns=["machine_type", "sales", "total_value"])
    tags = machine_type_tags(df)
    return _tag_summary(df, tags.where(tags != NON_EQUIPMENT), "machine_type")


def sales_by_payment_method(df: pd.DataFrame) -> pd.DataFrame:
    """Number of sales per payment method bucket."""
    if df.empty:
        return pd.DataFrame(columns=["payment_method", "sales"])
    methods = df["payment_detail"].map(classify_payment_method)
    summary = methods.value_counts(sort=False).rename_axis("payment_method").reset_index(name="sales")
    return summary.sort_values("sales", ascending=False, kind="mergesort").reset_index(drop=True)


def sales_by_hour(df: pd.DataFrame) -> pd.DataFrame:
    """Number of sales for each UTC hour of the day (always 24 rows)."""
    hours = pd.Series(range(24), name="hour")
    counts = pd.Series(0, index=hours)
    if not df.empty:
        ts = _sale_ts(df).dropna()
        counts = counts.add(ts.dt.hour.value_counts(), fill_value=0).astype(int)
    return pd.DataFrame(
        {
            "hour": hours,
            "label": [f"{h:02d}h" for h in hours],
            "sales": counts.reindex(hours).to_numpy(),
        }
    )


def _daily_totals(df: pd.DataFrame) -> pd.Series:
    if df.empty:
        return pd.Series(dtype=float)
    ts = _sale_ts(df)
    valid = ts.notna() & (ts.dt.year >= MIN_PLAUSIBLE_YEAR)
    days = ts[valid].dt.date
    return df.loc[valid, "value"].groupby(days).sum()


def sales_timeline(
    df: pd.DataFrame, filters: FilterState, today: Optional[date] = None
) -> pd.DataFrame:
    """Chart points ``label``/``value`` for the sales-over-time area chart.

    Month view: every day of the current month. Week view: Monday to Sunday of
    the current week. Otherwise: one point per month with sales.
    """
    today = today or utc_today()
    daily = _daily_totals(df)

    if filters.date_range is DateRange.MONTH:
        first = month_start(today)
        days_in_month = calendar.monthrange(first.year, first.month)[1]
        days = [first + timedelta(days=i) for i in range(days_in_month)]
        labels = [f"{d.day:02d} {PT_MONTHS_SHORT[d.month]}" for d in days]
    elif filters.date_range is DateRange.WEEK:
        first = week_start(today)
        days = [first + timedelta(days=i) for i in range(7)]
        labels = [f"{PT_WEEKDAYS_SHORT[d.weekday()]} {d.day:02d}" for d in days]
    else:
        if daily.empty:
            return pd.DataFrame(columns=["label", "value"])
        monthly = daily.groupby(lambda d: d.year * 100 + d.month).sum().sort_index()
        return pd.DataFrame(
            {
                "label": [f"{PT_MONTHS_SHORT[k % 100]}/{str(k // 100)[-2:]}" for k in monthly.index],
                "value": monthly.to_numpy(dtype=float),
            }
        )

    values = [float(daily.get(d, 0.0)) for d in days]
    return pd.DataFrame({"label": labels, "value": values})


def recent_sales(df: pd.DataFrame, limit: int = 10) -> pd.DataFrame:
    """First ``limit`` rows of an already date-sorted frame."""
    return df.head(limit)


def _detail(rows: pd.DataFrame) -> dict:
    products = top_items(rows, limit=len(rows) or 1).rename(
        columns={"item_name": "product", "units": "sales"}
    )
    products = products.sort_values("sales", ascending=False, kind="mergesort").reset_index(drop=True)
    return {"kpis": compute_main_kpis(rows), "products": products, "sales": rows}


def brand_detail(df: pd.DataFrame, brand: str) -> dict:
    """Drill-down data for one bar of the brand chart."""
    rows = df.loc[brand_tags(df) == brand] if not df.empty else df
    return _detail(rows)


def machine_type_detail(df: pd.DataFrame, machine_type: str) -> dict:
    """Drill-down data for one bar of the machine-type chart."""
    rows = df.loc[machine_type_tags(df) == machine_type] if not df.empty else df
    return _detail(rows)
