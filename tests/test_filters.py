from __future__ import annotations

from datetime import date

import pandas as pd

from sales_dashboard.core.filters import (
    DateRange,
    FilterState,
    date_range_label,
    filter_sales,
    week_start,
)
from sales_dashboard.models import SALES_COLUMNS


def _sales(*rows: tuple) -> pd.DataFrame:
    """Frame from ``(id, sale_date, partner_name)`` tuples."""
    records = [
        {
            "id": sale_id,
            "value": 10.0,
            "sale_date": sale_date,
            "payment_detail": "PIX",
            "partner_id": 1,
            "partner_name": partner,
            "item_name": "Item",
        }
        for sale_id, sale_date, partner in rows
    ]
    return pd.DataFrame(records, columns=SALES_COLUMNS)


ALL = FilterState(date_range=DateRange.ALL)


def test_all_keeps_every_row_newest_first() -> None:
    df = _sales(
        (1, "2025-01-01 10:00:00", "A"),
        (2, "garbage", "A"),
        (3, "2025-03-01 10:00:00", "B"),
        (4, None, "B"),
        (5, "15-02-2025 08:00:00", "A"),
    )
    out = filter_sales(df, ALL)
    assert out["id"].tolist() == [3, 5, 1, 2, 4]


def test_filter_is_idempotent() -> None:
    df = _sales(
        (1, "2025-01-01", "A"),
        (2, "2025-01-03", "B"),
        (3, "bad", "A"),
    )
    filters = FilterState(date_range=DateRange.ALL).with_partners(["a"])
    once = filter_sales(df, filters)
    twice = filter_sales(once[SALES_COLUMNS], filters)
    assert once["id"].tolist() == twice["id"].tolist()


def test_input_frame_is_not_mutated() -> None:
    df = _sales((1, "2025-01-01", "A"), (2, "2025-01-03", "B"))
    before = df.copy()
    filter_sales(df, ALL)
    pd.testing.assert_frame_equal(df, before)


def test_excluded_partner_is_always_removed() -> None:
    df = _sales(
        (1, "2025-01-01", "Conecta E Commerce Teste"),
        (2, "2025-01-01", "Loja"),
    )
    assert filter_sales(df, ALL)["id"].tolist() == [2]
    assert filter_sales(df, ALL, excluded="LOJA")["id"].tolist() == [1]


def test_partner_selection_uses_normalized_names() -> None:
    df = _sales(
        (1, "2025-01-01", "Café Ação"),
        (2, "2025-01-02", "CAFE ACAO "),
        (3, "2025-01-03", "Outra Loja"),
    )
    out = filter_sales(df, ALL.with_partners(["cafe acao"]))
    assert out["id"].tolist() == [2, 1]


def test_week_starts_on_monday() -> None:
    assert week_start(date(2025, 1, 6)) == date(2025, 1, 6)
    assert week_start(date(2025, 1, 5)) == date(2024, 12, 30)
    assert week_start(date(2025, 1, 8)) == date(2025, 1, 6)


def test_this_week() -> None:
    df = _sales(
        (1, "2025-01-05", "A"),
        (2, "2025-02-01", "A"),
        (3, "2025-01-33", "A"),
        (4, "2024-12-29 23:59:59", "A"),
    )
    out = filter_sales(df, FilterState(date_range=DateRange.WEEK), today=date(2025, 1, 5))
    assert out["id"].tolist() == [1]


def test_this_month() -> None:
    df = _sales(
        (1, "2024-12-31 23:59:59", "A"),
        (2, "2025-01-01 00:00:00", "A"),
        (3, "2025-01-25", "A"),
        (4, "invalid", "A"),
    )
    out = filter_sales(df, FilterState(date_range=DateRange.MONTH), today=date(2025, 1, 20))
    assert out["id"].tolist() == [3, 2]


def test_custom_bounds_are_inclusive_days() -> None:
    df = _sales(
        (1, "2025-01-01 23:59:59", "A"),
        (2, "2025-01-02 00:00:00", "A"),
        (3, "2025-01-03 23:59:59", "A"),
        (4, "2025-01-04 00:00:00", "A"),
    )
    filters = FilterState().with_range(DateRange.CUSTOM, date(2025, 1, 2), date(2025, 1, 3))
    assert filter_sales(df, filters)["id"].tolist() == [3, 2]


def test_custom_open_ended() -> None:
    df = _sales(
        (1, "2025-01-01", "A"),
        (2, "2025-01-10", "A"),
        (3, "bad", "A"),
    )
    start_only = FilterState().with_range(DateRange.CUSTOM, date(2025, 1, 5), None)
    end_only = FilterState().with_range(DateRange.CUSTOM, None, date(2025, 1, 5))
    neither = FilterState().with_range(DateRange.CUSTOM)
    assert filter_sales(df, start_only)["id"].tolist() == [2]
    assert filter_sales(df, end_only)["id"].tolist() == [1]
    assert filter_sales(df, neither)["id"].tolist() == [2, 1, 3]


def test_empty_frame() -> None:
    out = filter_sales(_sales(), ALL)
    assert out.empty
    assert "sale_ts" in out.columns


def test_date_range_label() -> None:
    assert date_range_label(FilterState(date_range=DateRange.MONTH)) == "Este Mês"
    custom = FilterState().with_range(DateRange.CUSTOM, date(2025, 1, 2), None)
    assert date_range_label(custom) == "02/01/2025 a …"


def test_exclusion_can_be_disabled() -> None:
    df = _sales(
        (1, "2025-01-01", "Conecta E Commerce Teste"),
        (2, "2025-01-02", "Loja"),
    )
    assert filter_sales(df, ALL, excluded=None)["id"].tolist() == [2, 1]
