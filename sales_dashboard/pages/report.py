"""Sales report export page."""

from __future__ import annotations

import streamlit as st
import streamlit.components.v1 as components

from ..config import get_settings
from ..core.filters import filter_sales
from ..core.report import build_report, format_brl, report_to_csv, report_to_html
from ..state import get_state


def render() -> None:
    """Render the report preview with CSV and HTML downloads."""
    st.title("Relatório de Vendas")
    state = get_state()
    if not state.loaded:
        st.info("Carregue o dashboard antes de gerar o relatório.")
        return

    filtered = filter_sales(state.sales, state.filters, excluded=get_settings().excluded_partner)
    report = build_report(filtered, state.filters)

    st.markdown(f"**Período:** {report.period_label}  \n**Parceiros:** {report.partner_label}")
    cols = st.columns(3)
    cols[0].metric("Valor Total", format_brl(report.kpis["total_revenue"]))
    cols[1].metric("Ticket Médio", format_brl(report.kpis["avg_ticket"]))
    cols[2].metric("Total de Vendas", report.kpis["total_sales"])

    stamp = report.generated_at.strftime("%Y%m%d_%H%M")
    html = report_to_html(report)
    left, right = st.columns(2)
    left.download_button(
        "Baixar CSV",
        data=report_to_csv(report),
        file_name=f"relatorio_vendas_{stamp}.csv",
        mime="text/csv",
        use_container_width=True,
    )
    right.download_button(
        "Baixar HTML (imprimir como PDF)",
        data=html.encode("utf-8"),
        file_name=f"relatorio_vendas_{stamp}.html",
        mime="text/html",
        use_container_width=True,
    )
    st.subheader("Pré-visualização do Relatório")
    components.html(html, height=800, scrolling=True)
