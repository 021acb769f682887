"""Sales dashboard page."""

from __future__ import annotations

from datetime import timedelta

import streamlit as st

from ..config import get_settings
from ..core import data_processing as dp
from ..core.classification import MACHINE_TYPES
from ..core.filters import filter_sales
from ..core.text_cleaning import partner_options
from ..errors import DataLoadError
from ..services import sales_repo
from ..services.realtime import RealtimeFeed
from ..state import AppState, get_state
from ..ui import charts
from ..ui.components import (
    active_partners_panel,
    filter_bar,
    new_sale_toast,
    render_kpis,
    sale_detail,
    sales_table,
    tag_detail,
)


REFRESH_INTERVAL = timedelta(seconds=5)


def load_sales(state: AppState) -> None:
    """Initial bulk load, then start the insert subscription."""
    settings = get_settings()
    with st.spinner("Carregando Dashboard..."):
        try:
            state.set_sales(sales_repo.fetch_sales())
        except DataLoadError as exc:
            state.load_error = str(exc)
            return
    if settings.realtime_enabled and state.feed is None:
        state.feed = RealtimeFeed(settings.supabase_url, settings.supabase_key, settings.sales_table)
        state.feed.start()


@st.fragment(run_every=REFRESH_INTERVAL)
def _watch_new_sales() -> None:
    state = get_state()
    if state.feed is None:
        return
    if state.apply_new_sales(state.feed.drain()):
        new_sale_toast(state.latest_sale)
        st.rerun(scope="app")


def render() -> None:
    """Render the sales dashboard page."""
    state = get_state()
    if not state.loaded and state.load_error is None:
        load_sales(state)
    if state.load_error:
        st.error(f"Ocorreu um Erro ao Carregar o Dashboard\n\n{state.load_error}")
        if st.button("Tentar novamente"):
            state.load_error = None
            st.rerun()
        return

    _watch_new_sales()

    settings = get_settings()
    sales = state.sales
    state.filters = filter_bar(partner_options(sales, settings.excluded_partner), state.filters)
    filtered = filter_sales(sales, state.filters, excluded=settings.excluded_partner)

    partners_in_range = dp.active_partners_in_range(sales, state.filters)
    render_kpis(dp.compute_main_kpis(filtered), len(partners_in_range), state.filters)
    with st.expander("Parceiros Ativos"):
        active_partners_panel(partners_in_range, state.filters)

    st.subheader("Vendas ao Longo do Tempo")
    st.plotly_chart(charts.sales_timeline_chart(dp.sales_timeline(filtered, state.filters)), use_container_width=True)

    left, right = st.columns([2, 1])
    with left:
        st.subheader("Top Parceiros por Valor")
        partners = dp.sales_by_partner(filtered)
        if partners.empty:
            st.info("Sem vendas no período.")
        else:
            st.plotly_chart(charts.partners_chart(partners), use_container_width=True)
    with right:
        st.subheader("Vendas por Pagamento")
        payments = dp.sales_by_payment_method(filtered)
        if not payments.empty:
            st.plotly_chart(charts.payment_chart(payments), use_container_width=True)

    st.subheader("Top Itens Vendidos")
    items = dp.top_items(filtered)
    if not items.empty:
        st.plotly_chart(charts.top_items_chart(items), use_container_width=True)

    brand_col, type_col = st.columns(2)
    with brand_col:
        st.subheader("Top Marcas")
        brands = dp.sales_by_brand(filtered)
        if brands.empty:
            st.info("Nenhum equipamento de ar-condicionado no período.")
        else:
            st.plotly_chart(charts.tag_chart(brands, "brand", "Marca"), use_container_width=True)
            brand = st.selectbox("Detalhes da marca", ["", *brands["brand"]], key="brand_detail")
            if brand:
                tag_detail(f"Marca {brand}", dp.brand_detail(filtered, brand))
        st.caption("* Apenas equipamentos de ar-condicionado.")
    with type_col:
        st.subheader("Vendas por Tipo de Máquina")
        types = dp.sales_by_machine_type(filtered)
        if types.empty:
            st.info("Nenhum equipamento de ar-condicionado no período.")
        else:
            st.plotly_chart(charts.tag_chart(types, "machine_type", "Tipo"), use_container_width=True)
            options = [t for t in MACHINE_TYPES if t in set(types["machine_type"])]
            machine_type = st.selectbox("Detalhes do tipo", ["", *options], key="type_detail")
            if machine_type:
                tag_detail(machine_type, dp.machine_type_detail(filtered, machine_type))
        st.caption("* Apenas equipamentos de ar-condicionado.")

    st.subheader("Vendas por Horário")
    st.plotly_chart(charts.sales_by_hour_chart(dp.sales_by_hour(filtered)), use_container_width=True)

    st.subheader("Vendas Recentes")
    recent = dp.recent_sales(filtered)
    sales_table(recent)
    if not recent.empty:
        sale_id = st.selectbox("Ver detalhes da venda", ["", *recent["id"].tolist()], key="sale_detail")
        if sale_id != "":
            sale_detail(recent.loc[recent["id"] == sale_id].iloc[0])
