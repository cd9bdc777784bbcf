import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

import numpy as np

from ressarcimento.correcao import corrigir_valor, inicio_elegibilidade, meses_elegiveis, serie_meses
from ressarcimento.models import DadosCalculo, DetalheMensal, ParametrosRegulatorios, ResultadoCalculo
from ressarcimento.tabela_ipca import TabelaIPCA
from ressarcimento.validacao import validar_entrada

logger = logging.getLogger(__name__)

PARAMETROS_PADRAO = ParametrosRegulatorios()


def energia_compensada(injetada_kwh: int, consumo_kwh: int) -> int:
    """CC = min(injected, consumed); compensation never exceeds either."""
    return min(injetada_kwh, consumo_kwh)


def valor_base(injetada_kwh: int, consumo_kwh: int,
               parametros: ParametrosRegulatorios = PARAMETROS_PADRAO) -> Decimal:
    """ICMS improperly charged on one month of compensated energy.

    CC   = min(injetada, consumo)
    BTB  = CC * 0.73          (gross tariff benefit)
    IBTB = BTB * 0.2215       (ICMS on BTB)
    FB   = CC * 0.27          (Fio B)
    IFB  = FB * 0.2215        (ICMS on Fio B)
    base = IBTB + IFB
    """
    cc = Decimal(energia_compensada(injetada_kwh, consumo_kwh))

    btb = cc * parametros.fator_beneficio_tarifario
    ibtb = btb * parametros.aliquota_icms

    fb = cc * parametros.fator_fio_b
    ifb = fb * parametros.aliquota_icms

    return ibtb + ifb


class LogicaCalculadora:
    """Reimbursement for one prosumer: eligible months, per-month ICMS
    base value, IPCA correction to data_atual, sum and indemnification.

    When parametros.variacao_estocastica is on, injected and consumed
    kWh are perturbed independently each month by a uniform factor in
    [1 - amplitude, 1 + amplitude]. Results are then non-deterministic
    unless a seed or a seeded ``gerador`` is given.
    """

    def __init__(self, dados: DadosCalculo, tabela: TabelaIPCA,
                 parametros: ParametrosRegulatorios = PARAMETROS_PADRAO,
                 data_atual: Optional[date] = None,
                 gerador: Optional[np.random.Generator] = None):
        self.dados = dados
        self.tabela = tabela
        self.parametros = parametros
        if isinstance(data_atual, datetime):
            data_atual = data_atual.date()
        self.data_atual = data_atual or date.today()
        self.gerador = gerador

    def calcular(self) -> ResultadoCalculo:
        self._preparar_dados()
        if self.quantidade_meses == 0:
            logger.info(
                "No eligible months",
                extra={"data_instalacao": self.dados.data_instalacao.isoformat(),
                       "data_atual": self.data_atual.isoformat()},
            )
            return ResultadoCalculo(data_calculo=self.data_atual, entrada=self.dados)
        self._calcular_mensal()
        return self._montar_resultado()

    def _preparar_dados(self):
        p = self.parametros

        self.inicio = inicio_elegibilidade(self.dados.data_instalacao, p.data_referencia)
        self.quantidade_meses = meses_elegiveis(
            self.dados.data_instalacao, p.data_referencia, self.data_atual
        )

        if p.variacao_estocastica and self.gerador is None:
            self.gerador = np.random.default_rng(p.semente_variacao)

    def _energia_do_mes(self, kwh: int) -> int:
        if not self.parametros.variacao_estocastica:
            return kwh
        amp = self.parametros.amplitude_variacao
        fator = self.gerador.uniform(1 - amp, 1 + amp)
        return max(0, int(round(kwh * fator)))

    def _calcular_mensal(self):
        self.detalhes = []

        for mes_ano in serie_meses(self.inicio, self.quantidade_meses):
            injetada = self._energia_do_mes(self.dados.energia_injetada_kwh)
            consumo = self._energia_do_mes(self.dados.consumo_kwh)

            base = valor_base(injetada, consumo, self.parametros)
            corrigido = corrigir_valor(base, mes_ano, self.data_atual, self.tabela)

            # Realized multiplier over the whole correction span
            taxa_efetiva = corrigido / base - 1 if base != 0 else Decimal("0")

            logger.debug(
                "Month corrected",
                extra={"mes_ano": mes_ano.isoformat(), "valor_base": str(base),
                       "valor_corrigido": str(corrigido)},
            )

            self.detalhes.append(DetalheMensal(
                mes_ano=mes_ano,
                valor_base=base,
                valor_corrigido=corrigido,
                taxa_efetiva=taxa_efetiva,
                energia_compensada_kwh=min(injetada, consumo),
                energia_injetada_kwh=injetada,
                consumo_kwh=consumo,
            ))

    def _montar_resultado(self) -> ResultadoCalculo:
        valor_base_total = sum((d.valor_base for d in self.detalhes), Decimal("0"))
        valor_corrigido_total = sum((d.valor_corrigido for d in self.detalhes), Decimal("0"))
        indenizacao = valor_corrigido_total * self.parametros.fator_indenizacao

        logger.info(
            "Reimbursement calculated",
            extra={
                "meses": len(self.detalhes),
                "inicio": self.inicio.isoformat(),
                "valor_corrigido_total": str(valor_corrigido_total),
                "indenizacao_final": str(indenizacao),
            },
        )

        return ResultadoCalculo(
            valor_base_total=valor_base_total,
            valor_corrigido_total=valor_corrigido_total,
            indenizacao_final=indenizacao,
            quantidade_meses=len(self.detalhes),
            detalhes=tuple(self.detalhes),
            data_calculo=self.data_atual,
            entrada=self.dados,
        )


def calcular_ressarcimento(entrada: Union[DadosCalculo, Mapping[str, Any]],
                           tabela: TabelaIPCA,
                           parametros: ParametrosRegulatorios = PARAMETROS_PADRAO,
                           data_atual: Optional[date] = None,
                           gerador: Optional[np.random.Generator] = None) -> ResultadoCalculo:
    """Validate raw input and run the calculation. Raises EntradaInvalida."""
    dados = validar_entrada(entrada)
    return LogicaCalculadora(dados, tabela, parametros, data_atual, gerador).calcular()
