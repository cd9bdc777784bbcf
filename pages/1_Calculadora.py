from datetime import date

import pandas as pd
import streamlit as st

from ressarcimento.config import settings
from ressarcimento.constantes import TIPO_FORNECIMENTO
from ressarcimento.estatisticas import AgregadorEstatisticas
from ressarcimento.exceptions import ErroRessarcimento
from ressarcimento.formatacao import formatar_mes_ano, formatar_moeda, formatar_percentual
from ressarcimento.grafico import criar_grafico_correcao
from ressarcimento.relatorio_pdf import gerar_relatorio
from ressarcimento.servico import criar_servico

st.set_page_config(page_title="Calculadora", page_icon="🧮", layout="wide")
st.title("🧮 Calculadora de Ressarcimento")


@st.cache_resource
def obter_agregador() -> AgregadorEstatisticas:
    return AgregadorEstatisticas()


@st.cache_resource
def obter_servico():
    return criar_servico(settings, ouvintes=[obter_agregador()])


servico = obter_servico()

# ---------------------------------------------------------------------------
# Layout: Form (left) | Results (right)
# ---------------------------------------------------------------------------
col_form, col_result = st.columns([1, 1.6])

with col_form:
    with st.form("form_calculadora"):
        st.subheader("Dados do Sistema")

        tipo_label = st.selectbox("Tipo de Fornecimento", list(TIPO_FORNECIMENTO.keys()))

        c1, c2 = st.columns(2)
        with c1:
            injetada = st.number_input("Energia Injetada (kWh)", min_value=0, value=0, step=10)
        with c2:
            consumo = st.number_input("Consumo (kWh)", min_value=0, value=0, step=10)

        data_instalacao = st.date_input(
            "Data de Instalação do Sistema",
            value=date.today(),
            format="DD/MM/YYYY",
        )

        st.markdown("**Cliente (opcional)**")
        nome_cliente = st.text_input("Nome do Cliente")

        submitted = st.form_submit_button("💰 VERIFICAR VALOR DISPONÍVEL", use_container_width=True)

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
with col_result:
    if submitted:
        try:
            resultado = servico.calcular({
                "tipo_fornecimento": TIPO_FORNECIMENTO[tipo_label],
                "energia_injetada_kwh": injetada,
                "consumo_kwh": consumo,
                "data_instalacao": data_instalacao,
                "nome_cliente": nome_cliente or None,
            })
        except ErroRessarcimento as e:
            st.error(f"Erro ao calcular: {e}")
            st.stop()

        st.session_state["ultimo_resultado"] = resultado

        st.subheader("Ressarcimento Disponível")
        m1, m2, m3 = st.columns(3)
        m1.metric("Total de Meses", resultado.quantidade_meses)
        m2.metric("Valor Corrigido", formatar_moeda(resultado.valor_corrigido_total))
        m3.metric("Indenização Final", formatar_moeda(resultado.indenizacao_final))

        if resultado.quantidade_meses == 0:
            st.info("Ainda não há meses elegíveis para ressarcimento.")
            st.stop()

        st.plotly_chart(criar_grafico_correcao(list(resultado.detalhes)), use_container_width=True)

        df_mensal = pd.DataFrame([
            {
                "Mês/Ano": formatar_mes_ano(d.mes_ano),
                "Compensada (kWh)": d.energia_compensada_kwh,
                "Valor Base": formatar_moeda(d.valor_base),
                "Taxa IPCA": formatar_percentual(d.taxa_efetiva, casas=4),
                "Valor Corrigido": formatar_moeda(d.valor_corrigido),
                "Diferença": formatar_moeda(d.diferenca),
            }
            for d in resultado.detalhes
        ])
        st.dataframe(df_mensal, hide_index=True, use_container_width=True)

        st.caption(
            "* Valores corrigidos pelo IPCA (Índice Nacional de Preços ao Consumidor Amplo). "
            "O valor final da indenização é dobrado conforme legislação aplicável."
        )

        # --- Downloads ---
        st.divider()
        dl1, dl2 = st.columns(2)

        with dl1:
            st.download_button(
                "📄 Baixar Relatório PDF",
                data=gerar_relatorio(resultado),
                file_name="relatorio-icms.pdf",
                mime="application/pdf",
                use_container_width=True,
            )

        with dl2:
            df_csv = pd.DataFrame([
                {
                    "mes_ano": d.mes_ano.isoformat(),
                    "energia_compensada_kwh": d.energia_compensada_kwh,
                    "valor_base": float(d.valor_base),
                    "taxa_efetiva": float(d.taxa_efetiva),
                    "valor_corrigido": float(d.valor_corrigido),
                }
                for d in resultado.detalhes
            ])
            csv_bytes = df_csv.to_csv(index=False, sep=";", decimal=",").encode("utf-8-sig")
            st.download_button(
                "📊 Baixar Detalhamento CSV",
                data=csv_bytes,
                file_name="detalhamento-icms.csv",
                mime="text/csv",
                use_container_width=True,
            )
    else:
        st.info("Preencha os dados no formulário e clique em **Verificar Valor Disponível**.")

# ---------------------------------------------------------------------------
# Session statistics
# ---------------------------------------------------------------------------
resumo = obter_agregador().resumo()
if resumo.total_analises:
    st.divider()
    s1, s2, s3 = st.columns(3)
    s1.metric("Análises realizadas", resumo.total_analises)
    s2.metric("Valor corrigido das análises", formatar_moeda(resumo.total_corrigido))
    s3.metric("Valor total da indenização", formatar_moeda(resumo.total_indenizacao))
