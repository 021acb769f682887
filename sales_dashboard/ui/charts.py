"""Charts with a unified theme."""

from __future__ import annotations

import pandas as pd
import plotly.express as px

_theme = {"template": "plotly_white", "colorway": ["#3182ce", "#63b3ed", "#4299e1", "#90cdf4", "#a0aec0"]}
ACCENT = "#3182ce"


def _finish(fig, height: int = 400):
    fig.update_layout(
        height=height,
        showlegend=False,
        xaxis_title=None,
        yaxis_title=None,
        margin=dict(l=10, r=30, t=30, b=10),
    )
    return fig


def sales_timeline_chart(df: pd.DataFrame):
    """Area chart of sale value over time."""
    fig = px.area(
        df,
        x="label",
        y="value",
        markers=True,
        template=_theme["template"],
        color_discrete_sequence=[ACCENT],
        labels={"label": "", "value": "Valor"},
    )
    fig.update_xaxes(type="category")
    fig.update_yaxes(tickprefix="R$ ")
    return _finish(fig, height=350)


def partners_chart(df: pd.DataFrame, limit: int = 15):
    """Horizontal bars of the top partners by value."""
    data = df.head(limit).iloc[::-1]
    fig = px.bar(
        data,
        x="total_value",
        y="partner_name",
        orientation="h",
        text="total_value",
        template=_theme["template"],
        color_discrete_sequence=_theme["colorway"],
        labels={"partner_name": "Parceiro", "total_value": "Valor Total"},
    )
    fig.update_traces(texttemplate="R$ %{text:,.2s}", textposition="auto")
    return _finish(fig, height=450)


def payment_chart(df: pd.DataFrame):
    fig = px.bar(
        df.iloc[::-1],
        x="sales",
        y="payment_method",
        orientation="h",
        text="sales",
        template=_theme["template"],
        color_discrete_sequence=_theme["colorway"],
        labels={"payment_method": "Pagamento", "sales": "Nº de Vendas"},
    )
    fig.update_traces(textposition="outside")
    return _finish(fig, height=350)


def top_items_chart(df: pd.DataFrame):
    data = df.iloc[::-1].assign(
        short_name=lambda d: d["item_name"].map(lambda n: n if len(n) <= 20 else n[:20] + "...")
    )
    fig = px.bar(
        data,
        x="total_value",
        y="short_name",
        orientation="h",
        text="total_value",
        hover_data={"item_name": True, "units": True, "short_name": False},
        template=_theme["template"],
        color_discrete_sequence=_theme["colorway"],
        labels={"short_name": "Item", "total_value": "Valor Total", "units": "Unidades Vendidas"},
    )
    fig.update_traces(texttemplate="R$ %{text:,.2s}", textposition="outside")
    return _finish(fig, height=450)


def tag_chart(df: pd.DataFrame, column: str, label: str):
    """Vertical bars of sale counts per brand or machine type."""
    fig = px.bar(
        df,
        x=column,
        y="sales",
        text="sales",
        hover_data={"total_value": ":,.2f"},
        template=_theme["template"],
        color_discrete_sequence=[ACCENT],
        labels={column: label, "sales": "Quantidade", "total_value": "Valor Total"},
    )
    fig.update_traces(textposition="outside")
    return _finish(fig, height=380)


def sales_by_hour_chart(df: pd.DataFrame):
    fig = px.bar(
        df,
        x="label",
        y="sales",
        text=df["sales"].where(df["sales"] > 0, None),
        template=_theme["template"],
        color_discrete_sequence=[ACCENT],
        labels={"label": "Hora", "sales": "Nº de Vendas"},
    )
    fig.update_traces(textposition="outside")
    return _finish(fig, height=400)
