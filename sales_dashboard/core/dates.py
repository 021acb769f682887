"""Parsing of the free-text ``data_venda`` column.

The backend stores sale dates as text, written by different integrations:
``2025-10-27 16:22:12+00``, ``31-05-2025 21:05:51+00``, plain ISO dates and
the occasional RFC-style string. Everything is interpreted in UTC so that the
result never depends on the server's local timezone.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

_YMD = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[ T](\d{2}):(\d{2}):(\d{2}))?.*$")
_DMY = re.compile(r"^(\d{2})-(\d{2})-(\d{4})(?:[ T](\d{2}):(\d{2}):(\d{2}))?.*$")

MIN_PLAUSIBLE_YEAR = 2000
INVALID_DATE = "Data Inválida"
INCONSISTENT_DATE = "Data Inconsistente"

PT_MONTHS = {
    1: "Janeiro", 2: "Fevereiro", 3: "Março", 4: "Abril",
    5: "Maio", 6: "Junho", 7: "Julho", 8: "Agosto",
    9: "Setembro", 10: "Outubro", 11: "Novembro", 12: "Dezembro",
}
PT_MONTHS_SHORT = {
    1: "Jan", 2: "Fev", 3: "Mar", 4: "Abr", 5: "Mai", 6: "Jun",
    7: "Jul", 8: "Ago", 9: "Set", 10: "Out", 11: "Nov", 12: "Dez",
}
# datetime.weekday() order
PT_WEEKDAYS_SHORT = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]


def _fallback_parse(value: str) -> Optional[datetime]:
    try:
        parsed = pd.to_datetime(value, utc=True, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def parse_sale_date(value: Any) -> Optional[datetime]:
    """Parse ``value`` into a UTC-aware datetime, or return ``None``.

    Never raises. ``YYYY-MM-DD`` is tried first, then ``DD-MM-YYYY``; a time
    part ``HH:MM:SS`` is optional and anything after it is ignored. Strings
    matching neither are handed to pandas' generic parser. Calendar fields
    that do not form a real date (``2024-02-30``) are rejected instead of
    rolling over into the next month.
    """
    if not isinstance(value, str) or not value:
        return None

    match = _YMD.match(value)
    if match:
        year, month, day = int(match.group(1)), int(match.group(2)), int(match.group(3))
    else:
        match = _DMY.match(value)
        if match:
            day, month, year = int(match.group(1)), int(match.group(2)), int(match.group(3))

    if not match:
        parsed = _fallback_parse(value)
        if parsed is None:
            logger.warning("Date string did not match any expected format: %r", value)
        return parsed

    hours = int(match.group(4) or 0)
    minutes = int(match.group(5) or 0)
    seconds = int(match.group(6) or 0)
    try:
        return datetime(year, month, day, hours, minutes, seconds, tzinfo=timezone.utc)
    except ValueError:
        logger.warning("Invalid calendar fields in date string: %r", value)
        return None


def parse_sale_dates(series: pd.Series) -> pd.Series:
    """Vectorised :func:`parse_sale_date`; failures become ``NaT``."""
    parsed = series.map(parse_sale_date)
    return pd.to_datetime(parsed, utc=True, errors="coerce")


def format_sale_date(value: datetime, style: str = "ymd") -> str:
    """Render ``value`` in one of the two formats :func:`parse_sale_date` reads."""
    if style == "ymd":
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if style == "dmy":
        return value.strftime("%d-%m-%Y %H:%M:%S")
    raise ValueError(f"Unknown date style: {style!r}")


def _checked(value: Any) -> tuple[Optional[datetime], Optional[str]]:
    parsed = parse_sale_date(value)
    if parsed is None:
        return None, INVALID_DATE
    if parsed.year < MIN_PLAUSIBLE_YEAR:
        return None, INCONSISTENT_DATE
    return parsed, None


def display_date(value: Any) -> str:
    """``dd/mm/YYYY`` for tables, or one of the two error strings."""
    parsed, error = _checked(value)
    if error:
        return error
    return parsed.strftime("%d/%m/%Y")


def display_long_date(value: Any) -> str:
    """``5 de Janeiro de 2025`` for the sale detail view."""
    parsed, error = _checked(value)
    if error:
        return error
    return f"{parsed.day} de {PT_MONTHS[parsed.month]} de {parsed.year}"
