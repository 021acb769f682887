"""Data access layer for sales."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from ..config import get_settings
from ..errors import ConfigurationError, DataLoadError
from ..models import BACKEND_COLUMNS, SALES_COLUMNS, SaleRecord
from .supabase_client import get_supabase

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000

SCHEMA: Dict[str, str] = {
    "id": "int64",
    "value": "float64",
    "partner_id": "Int64",
}
TEXT_COLUMNS = ["sale_date", "payment_detail", "partner_name"]

GENERIC_LOAD_ERROR = (
    "Falha ao carregar os dados. Verifique sua conexão e se as políticas de RLS "
    "(Row Level Security) estão habilitadas para leitura nas tabelas."
)
CREDENTIAL_LOAD_ERROR = (
    "Chave de API do Supabase ausente ou inválida. "
    "Verifique as variáveis SUPABASE_URL e SUPABASE_KEY."
)


def empty_sales_frame() -> pd.DataFrame:
    return coerce_sales_frame(pd.DataFrame(columns=SALES_COLUMNS))


def coerce_sales_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Apply the sales column types to a frame with :data:`SALES_COLUMNS`."""
    df = df.reindex(columns=SALES_COLUMNS)
    df["value"] = pd.to_numeric(df["value"], errors="coerce").fillna(0.0)
    df["partner_id"] = pd.to_numeric(df["partner_id"], errors="coerce")
    for col, dtype in SCHEMA.items():
        df[col] = df[col].astype(dtype)
    for col in TEXT_COLUMNS:
        df[col] = df[col].fillna("").astype(str)
    df["item_name"] = df["item_name"].astype(object).where(df["item_name"].notna(), None)
    return df


def rows_to_frame(rows: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """Map backend rows (Portuguese column names) to a typed sales frame."""
    df = pd.DataFrame(list(rows))
    if df.empty:
        return empty_sales_frame()
    df = df.rename(columns=BACKEND_COLUMNS)
    return coerce_sales_frame(df)


def records_to_frame(records: Iterable[SaleRecord]) -> pd.DataFrame:
    df = pd.DataFrame([record.to_row() for record in records])
    if df.empty:
        return empty_sales_frame()
    return coerce_sales_frame(df)


def _is_credential_error(exc: Exception) -> bool:
    if isinstance(exc, ConfigurationError):
        return True
    text = str(exc)
    return "JWT" in text or "API key" in text or "apikey" in text.lower()


def fetch_sales(client: Optional[Any] = None, table: Optional[str] = None) -> pd.DataFrame:
    """Fetch every sale row, paginating ``PAGE_SIZE`` rows at a time.

    Raises :class:`DataLoadError` with a user-facing message on failure.
    """
    table = table or get_settings().sales_table
    all_rows: list[dict] = []
    offset = 0
    try:
        client = client or get_supabase()
        while True:
            query = (
                client.table(table)
                .select("*")
                .order("data_venda", desc=True)
                .range(offset, offset + PAGE_SIZE - 1)
            )
            response = query.execute()
            data = response.data or []
            all_rows.extend(data)
            if len(data) < PAGE_SIZE:
                break
            offset += PAGE_SIZE
    except Exception as exc:
        logger.exception("Failed to load sales from %s", table)
        if _is_credential_error(exc):
            raise DataLoadError(CREDENTIAL_LOAD_ERROR, credential_problem=True) from exc
        raise DataLoadError(GENERIC_LOAD_ERROR) from exc

    df = rows_to_frame(all_rows)
    missing_partner = df["partner_name"].str.strip() == ""
    if missing_partner.any():
        logger.warning(
            "%d sales without partner name: ids=%s",
            int(missing_partner.sum()),
            df.loc[missing_partner, "id"].tolist(),
        )
    logger.info("Loaded %d sales from %s", len(df), table)
    return df
