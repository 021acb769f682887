"""Exportable sales report (CSV and printable HTML)."""

from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pandas as pd

from .data_processing import compute_main_kpis
from .dates import parse_sale_date
from .filters import FilterState, date_range_label


@dataclass(frozen=True)
class SalesReport:
    generated_at: datetime
    period_label: str
    partner_label: str
    kpis: dict
    rows: pd.DataFrame


def format_brl(value: float) -> str:
    """Format ``value`` as Brazilian reais: ``R$ 1.234,56``."""
    text = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def partner_filter_label(selected: frozenset) -> str:
    if not selected:
        return "Todos os Parceiros"
    if len(selected) > 2:
        return f"{len(selected)} parceiros selecionados"
    return ", ".join(sorted(selected))


def _report_date(value: object) -> str:
    parsed = parse_sale_date(value)
    return parsed.strftime("%d/%m/%Y") if parsed else "N/A"


def build_report(
    df: pd.DataFrame, filters: FilterState, generated_at: Optional[datetime] = None
) -> SalesReport:
    """Assemble the report for an already filtered, date-sorted frame."""
    rows = pd.DataFrame(
        {
            "Data": df["sale_date"].map(_report_date) if not df.empty else pd.Series(dtype=str),
            "Parceiro": df["partner_name"] if not df.empty else pd.Series(dtype=str),
            "Item Vendido": (
                df["item_name"].fillna("N/A").replace("", "N/A")
                if not df.empty
                else pd.Series(dtype=str)
            ),
            "Valor": df["value"].astype(float) if not df.empty else pd.Series(dtype=float),
        }
    ).reset_index(drop=True)
    # A single selected partner is already in the header.
    if len(filters.selected_partner_names) == 1:
        rows = rows.drop(columns=["Parceiro"])
    return SalesReport(
        generated_at=generated_at or datetime.now(),
        period_label=date_range_label(filters),
        partner_label=partner_filter_label(filters.selected_partner_names),
        kpis=compute_main_kpis(df),
        rows=rows,
    )


def report_to_csv(report: SalesReport) -> bytes:
    return report.rows.to_csv(index=False, sep=";", decimal=",").encode("utf-8-sig")


def report_to_html(report: SalesReport) -> str:
    """Standalone printable page; the browser's print dialog saves it as PDF."""
    table = report.rows.copy()
    table["Valor"] = table["Valor"].map(format_brl)
    if table.empty:
        body = "<p class='empty'>Nenhuma venda encontrada para os filtros selecionados.</p>"
    else:
        body = table.to_html(index=False, border=0, classes="sales", escape=True)
    kpis = report.kpis
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head>
<meta charset="utf-8">
<title>Relatório de Vendas</title>
<style>
  @page {{ size: A4; margin: 12mm; }}
  body {{ font-family: sans-serif; color: #1a202c; }}
  header {{ display: flex; justify-content: space-between; }}
  .kpis {{ display: flex; gap: 2rem; border-top: 1px solid #e2e8f0;
           border-bottom: 1px solid #e2e8f0; padding: 1rem 0; margin: 1.5rem 0; }}
  .kpis div {{ flex: 1; text-align: center; }}
  .kpis strong {{ display: block; font-size: 1.6rem; }}
  table.sales {{ width: 100%; border-collapse: collapse; }}
  table.sales th, table.sales td {{ padding: 6px 8px; border-bottom: 1px solid #e2e8f0; text-align: left; }}
  footer {{ margin-top: 3rem; text-align: center; font-size: 0.75rem; color: #a0aec0; }}
</style>
</head>
<body>
<header>
  <div>
    <h1>Relatório de Vendas</h1>
    <p>Gerado em: {report.generated_at.strftime("%d/%m/%Y")} às {report.generated_at.strftime("%H:%M:%S")}</p>
  </div>
  <div>
    <h4>Filtros Aplicados</h4>
    <p><strong>Período:</strong> {html.escape(report.period_label)}</p>
    <p><strong>Parceiros:</strong> {html.escape(report.partner_label)}</p>
  </div>
</header>
<section class="kpis">
  <div>Valor Total<strong>{format_brl(kpis["total_revenue"])}</strong></div>
  <div>Ticket Médio<strong>{format_brl(kpis["avg_ticket"])}</strong></div>
  <div>Total de Vendas<strong>{kpis["total_sales"]}</strong></div>
</section>
<h3>Detalhes das Vendas</h3>
{body}
<footer>Relatório gerado por Conecta_E-commerce Dashboard</footer>
</body>
</html>
"""
