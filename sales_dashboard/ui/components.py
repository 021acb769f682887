"""Reusable UI components."""

from __future__ import annotations

from typing import Iterable

import pandas as pd
import streamlit as st

from ..core.dates import display_date, display_long_date
from ..core.filters import DATE_RANGE_LABELS, DateRange, FilterState, date_range_label
from ..core.report import format_brl
from ..models import SaleRecord


def render_kpis(kpis: dict, active_partner_count: int, filters: FilterState) -> None:
    """Render the KPI cards."""
    cols = st.columns(4)
    cols[0].metric("Valor Total", format_brl(kpis["total_revenue"]))
    cols[1].metric("Ticket Médio", format_brl(kpis["avg_ticket"]))
    cols[2].metric("Total de Vendas", f"{kpis['total_sales']}")
    cols[3].metric("Parceiros Ativos", f"{active_partner_count}", help=date_range_label(filters))


def filter_bar(partners: Iterable[str], filters: FilterState) -> FilterState:
    """Render partner and period filters and return the new selection."""
    options = list(partners)
    cols = st.columns([2, 2, 2])
    with cols[0]:
        selected = st.multiselect(
            "Parceiros",
            options,
            default=[p for p in options if p in filters.selected_partner_names],
            placeholder="Todos os Parceiros",
        )
    ranges = list(DateRange)
    with cols[1]:
        date_range = st.radio(
            "Período",
            ranges,
            index=ranges.index(filters.date_range),
            format_func=lambda r: DATE_RANGE_LABELS[r],
            horizontal=True,
        )
    start, end = filters.custom_start, filters.custom_end
    if date_range == DateRange.CUSTOM:
        with cols[2]:
            left, right = st.columns(2)
            start = left.date_input("De:", value=start, format="DD/MM/YYYY")
            end = right.date_input("Até:", value=end, format="DD/MM/YYYY")
    return filters.with_partners(selected).with_range(date_range, start, end)


def sales_table(df: pd.DataFrame) -> None:
    """Display the recent sales table."""
    if df.empty:
        st.info("Nenhuma venda encontrada para os filtros selecionados.")
        return
    table = pd.DataFrame(
        {
            "#": df["id"],
            "Parceiro": df["partner_name"],
            "Valor": df["value"].map(format_brl),
            "Data": df["sale_date"].map(display_date),
        }
    )
    st.dataframe(table, use_container_width=True, hide_index=True)


def sale_detail(row: pd.Series) -> None:
    with st.expander(f"Detalhes da Venda #{row['id']}", expanded=True):
        st.caption("Informações completas sobre a transação.")
        st.markdown(f"**Parceiro:** {row['partner_name'] or 'N/A'}")
        st.markdown(f"**Valor da Venda:** {format_brl(row['value'])}")
        st.markdown(f"**Data da Venda:** {display_long_date(row['sale_date'])}")
        st.markdown(f"**Forma de Pagamento:** {row['payment_detail'] or 'N/A'}")
        st.markdown(f"**Item:** {row['item_name'] or 'N/A'}")


def active_partners_panel(summary: pd.DataFrame, filters: FilterState) -> None:
    total = summary["total_value"].sum() if not summary.empty else 0.0
    st.caption(f"{date_range_label(filters)} • Total: {format_brl(total)}")
    if summary.empty:
        st.info("Nenhum parceiro com vendas no período.")
        return
    table = pd.DataFrame(
        {
            "Parceiro": summary["partner_name"],
            "Vendas": summary["sales"],
            "Valor": summary["total_value"].map(format_brl),
            "% do total": summary["share"] * 100,
        }
    )
    st.dataframe(
        table,
        column_config={
            "% do total": st.column_config.ProgressColumn("% do total", format="%.1f%%", min_value=0, max_value=100)
        },
        use_container_width=True,
        hide_index=True,
    )


def tag_detail(title: str, detail: dict) -> None:
    """Drill-down of one brand or machine-type bucket."""
    kpis = detail["kpis"]
    st.markdown(f"**{title}** • {kpis['total_sales']} vendas • Valor total: {format_brl(kpis['total_revenue'])}")
    st.caption(f"Ticket médio: {format_brl(kpis['avg_ticket'])}")
    products = detail["products"]
    if not products.empty:
        st.dataframe(
            products.assign(total_value=products["total_value"].map(format_brl)).rename(
                columns={"product": "Produto", "sales": "Vendas", "total_value": "Valor"}
            ),
            use_container_width=True,
            hide_index=True,
        )
    sales = detail["sales"]
    if not sales.empty:
        history = pd.DataFrame(
            {
                "Data": sales["sale_date"].map(display_date),
                "Produto": sales["item_name"].fillna("N/A"),
                "Parceiro": sales["partner_name"].replace("", "N/A"),
                "Pagamento": sales["payment_detail"].replace("", "N/A"),
                "Valor": sales["value"].map(format_brl),
            }
        )
        st.dataframe(history, use_container_width=True, hide_index=True)


def new_sale_toast(sale: SaleRecord) -> None:
    st.toast(f"Nova Venda! {sale.partner_name or 'N/A'} • {format_brl(sale.value)}", icon="✨")
