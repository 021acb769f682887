"""Utilities for cleaning text data and canonicalizing partner names."""

from __future__ import annotations

import re
import unicodedata

import pandas as pd

# Internal test partner; hidden everywhere except the active-partner view.
EXCLUDED_PARTNER_KEY = "CONECTA E COMMERCE TESTE"

# Only Ł and Đ lack an NFD decomposition. The other letters are already folded
# by the NFD step and stay listed as the set of expected variants.
_CONSONANT_VARIANTS = str.maketrans(
    {
        "Ç": "C",
        "Ñ": "N",
        "Ł": "L",
        "Đ": "D",
        "Ś": "S",
        "Š": "S",
        "Ź": "Z",
        "Ž": "Z",
        "Č": "C",
    }
)
_WHITESPACE = re.compile(r"\s+")


def normalize_partner_name(name: object) -> str:
    """Return the canonical key used to group, select and exclude partners.

    >>> normalize_partner_name("  café Ação  ")
    'CAFE ACAO'
    """
    if not isinstance(name, str):
        return ""
    text = _WHITESPACE.sub(" ", name.upper().strip())
    decomposed = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    text = text.translate(_CONSONANT_VARIANTS)
    text = "".join(ch for ch in text if ch.isalnum() or ch.isspace())
    return _WHITESPACE.sub(" ", text).strip()


def partner_keys(series: pd.Series) -> pd.Series:
    """Vectorised :func:`normalize_partner_name`."""
    return series.map(normalize_partner_name)


def partner_options(df: pd.DataFrame, excluded: str = EXCLUDED_PARTNER_KEY) -> list[str]:
    """Selectable partner names: one spelling per canonical key, sorted."""
    if df.empty or "partner_name" not in df.columns:
        return []
    seen: dict[str, str] = {}
    for name in df["partner_name"].dropna().astype(str):
        key = normalize_partner_name(name)
        if not key or key == excluded or key in seen:
            continue
        seen[key] = name.strip()
    return sorted(seen.values(), key=lambda n: (normalize_partner_name(n), n))
