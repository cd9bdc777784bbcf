"""Eligibility window and IPCA monetary correction.

Only the year and month of a date matter here: an installation on the
last day of a month counts the same as one on the first day.
"""

from datetime import date
from decimal import Decimal
from typing import List

from dateutil.relativedelta import relativedelta

from ressarcimento.constantes import DATA_MARCO_LEGAL
from ressarcimento.models import Elegibilidade
from ressarcimento.tabela_ipca import TabelaIPCA


def inicio_mes(d: date) -> date:
    return date(d.year, d.month, 1)


def somar_meses(d: date, meses: int) -> date:
    return inicio_mes(d) + relativedelta(months=meses)


def diferenca_meses(inicio: date, fim: date) -> int:
    """Whole months from inicio to fim, ignoring the day. May be negative."""
    return (fim.year - inicio.year) * 12 + (fim.month - inicio.month)


def inicio_elegibilidade(data_instalacao: date, data_referencia: date) -> date:
    """Eligibility starts at the later of installation and the reference date."""
    return inicio_mes(max(data_instalacao, data_referencia))


def meses_elegiveis(data_instalacao: date, data_referencia: date, data_atual: date) -> int:
    inicio = inicio_elegibilidade(data_instalacao, data_referencia)
    return max(0, diferenca_meses(inicio, data_atual))


def serie_meses(inicio: date, quantidade: int) -> List[date]:
    """First-of-month dates inicio, inicio+1, ... (quantidade items)."""
    return [somar_meses(inicio, i) for i in range(quantidade)]


def corrigir_valor(valor_base: Decimal, mes_inicial: date, data_final: date,
                   tabela: TabelaIPCA) -> Decimal:
    """Compound valor_base by each month's IPCA from mes_inicial up to,
    but not including, the month of data_final.

    valor[m+1] = valor[m] * (1 + ipca[m])
    """
    corrigido = Decimal(valor_base)
    atual = inicio_mes(mes_inicial)
    fim = inicio_mes(data_final)

    while atual < fim:
        corrigido = corrigido * (1 + tabela.taxa(atual.year, atual.month))
        atual = atual + relativedelta(months=1)

    return corrigido


def verificar_elegibilidade(data_instalacao: date,
                            data_marco: date = DATA_MARCO_LEGAL) -> Elegibilidade:
    """Upstream policy check: systems installed before the legal milestone
    (GD1) are not entitled yet."""
    if data_instalacao < data_marco:
        return Elegibilidade.NAO_ELEGIVEL
    return Elegibilidade.ELEGIVEL
