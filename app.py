from datetime import date

import streamlit as st

from ressarcimento.config import settings
from ressarcimento.correcao import verificar_elegibilidade
from ressarcimento.logging_config import setup_logging
from ressarcimento.models import Elegibilidade

setup_logging(settings.log_level, settings.log_json)

st.set_page_config(
    page_title="Ressarcimento ICMS Solar",
    page_icon="☀️",
    layout="centered",
)

st.title("☀️ Ressarcimento de ICMS - Energia Solar")

st.markdown(
    """
    Verifique se você tem direito ao ressarcimento do ICMS cobrado sobre a
    energia compensada do seu sistema solar. Os valores são corrigidos
    mês a mês pelo IPCA e a indenização final é calculada em dobro.
    """
)

st.divider()

st.subheader("Verificação de Elegibilidade")

with st.form("form_elegibilidade"):
    data_instalacao = st.date_input(
        "Data de instalação do sistema solar",
        value=date.today(),
        format="DD/MM/YYYY",
    )
    verificar = st.form_submit_button("Verificar Elegibilidade", use_container_width=True)

if verificar:
    resultado = verificar_elegibilidade(data_instalacao, settings.data_marco_legal)
    if resultado == Elegibilidade.ELEGIVEL:
        st.success("Você pode ter valores a receber!")
        st.page_link("pages/1_Calculadora.py", label="Ir para Calculadora", icon="🧮")
    else:
        st.warning("Você é GD1 e não deve se preocupar AINDA!")
