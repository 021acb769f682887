from __future__ import annotations

from datetime import datetime, timezone

import pandas as pd
import pytest

from sales_dashboard.core.dates import (
    INCONSISTENT_DATE,
    INVALID_DATE,
    display_date,
    display_long_date,
    format_sale_date,
    parse_sale_date,
    parse_sale_dates,
)


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_parse_year_first_with_time_and_offset() -> None:
    assert parse_sale_date("2025-10-27 16:22:12+00") == _utc(2025, 10, 27, 16, 22, 12)


def test_parse_day_first_with_time() -> None:
    assert parse_sale_date("31-05-2025 21:05:51+00") == _utc(2025, 5, 31, 21, 5, 51)


def test_parse_iso_t_separator() -> None:
    assert parse_sale_date("2025-01-05T08:09:10.123Z") == _utc(2025, 1, 5, 8, 9, 10)


def test_missing_time_defaults_to_midnight() -> None:
    assert parse_sale_date("2025-01-05") == _utc(2025, 1, 5)
    assert parse_sale_date("05-01-2025") == _utc(2025, 1, 5)


def test_calendar_overflow_is_rejected() -> None:
    assert parse_sale_date("2024-02-30 10:00:00") is None
    assert parse_sale_date("2025-01-33") is None
    assert parse_sale_date("30-02-2024") is None


def test_leap_day_is_accepted() -> None:
    assert parse_sale_date("2024-02-29 10:00:00") == _utc(2024, 2, 29, 10)


def test_generic_fallback() -> None:
    assert parse_sale_date("2025/03/04 10:30") == _utc(2025, 3, 4, 10, 30)


@pytest.mark.parametrize("value", [None, "", 20250105, "not a date"])
def test_unparseable_values_return_none(value) -> None:
    assert parse_sale_date(value) is None


@pytest.mark.parametrize("style", ["ymd", "dmy"])
def test_format_then_parse_keeps_calendar_fields(style: str) -> None:
    for value in [_utc(2024, 2, 29), _utc(2025, 12, 31, 23, 59, 59), _utc(2001, 1, 1, 7, 5, 3)]:
        parsed = parse_sale_date(format_sale_date(value, style))
        assert parsed == value
        assert parsed.date() == value.date()


def test_format_unknown_style() -> None:
    with pytest.raises(ValueError):
        format_sale_date(_utc(2025, 1, 1), "mdy")


def test_parse_series_uses_nat_for_failures() -> None:
    parsed = parse_sale_dates(pd.Series(["2025-01-05", "2025-01-33", None]))
    assert parsed.iloc[0] == pd.Timestamp("2025-01-05", tz="UTC")
    assert parsed.iloc[1:].isna().all()


def test_display_date() -> None:
    assert display_date("2025-01-05 10:00:00") == "05/01/2025"
    assert display_date("garbage") == INVALID_DATE
    assert display_date("1999-12-31") == INCONSISTENT_DATE


def test_display_long_date() -> None:
    assert display_long_date("05-01-2025") == "5 de Janeiro de 2025"
    assert display_long_date("0999-01-01") == INCONSISTENT_DATE
