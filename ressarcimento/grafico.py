import plotly.graph_objects as go

from ressarcimento.formatacao import formatar_mes_ano, formatar_moeda
from ressarcimento.models import DetalheMensal


def criar_grafico_correcao(detalhes: list[DetalheMensal]) -> go.Figure:
    """Grouped bars per month: base value (dark green) vs IPCA-corrected (light green)."""
    periodos = [formatar_mes_ano(d.mes_ano) for d in detalhes]
    bases = [float(d.valor_base) for d in detalhes]
    corrigidos = [float(d.valor_corrigido) for d in detalhes]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        name="Valor Base",
        x=periodos,
        y=bases,
        marker_color="#148c73",
        hovertemplate="Valor Base: %{customdata}<extra></extra>",
        customdata=[formatar_moeda(d.valor_base) for d in detalhes],
    ))

    fig.add_trace(go.Bar(
        name="Valor Corrigido (IPCA)",
        x=periodos,
        y=corrigidos,
        marker_color="#80c739",
        hovertemplate="Valor Corrigido: %{customdata}<extra></extra>",
        customdata=[formatar_moeda(d.valor_corrigido) for d in detalhes],
    ))

    fig.update_layout(
        barmode="group",
        title="Valor Base e Valor Corrigido por Mês",
        xaxis_title="Mês",
        yaxis_title="R$",
        yaxis_tickprefix="R$ ",
        yaxis_tickformat=",.2f",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        plot_bgcolor="white",
        height=420,
    )

    # Show a subset of x-axis labels to avoid clutter
    if len(periodos) > 24:
        tick_step = max(1, len(periodos) // 12)
        fig.update_xaxes(
            tickmode="array",
            tickvals=periodos[::tick_step],
        )

    return fig
