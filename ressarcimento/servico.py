import logging
import time
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, Union

import numpy as np

from ressarcimento.config import Settings
from ressarcimento.logica_calculadora import PARAMETROS_PADRAO, LogicaCalculadora
from ressarcimento.models import DadosCalculo, ParametrosRegulatorios, ResultadoCalculo
from ressarcimento.tabela_ipca import TabelaIPCA, carregar_csv_ipca, tabela_padrao
from ressarcimento.validacao import validar_entrada

logger = logging.getLogger(__name__)

Ouvinte = Callable[[ResultadoCalculo], None]


class ServicoRessarcimento:
    """Entry point for callers: validates input, runs the engine and
    publishes each completed result to the subscribed listeners."""

    def __init__(self, tabela: TabelaIPCA,
                 parametros: ParametrosRegulatorios = PARAMETROS_PADRAO,
                 ouvintes: Iterable[Ouvinte] = ()):
        self.tabela = tabela
        self.parametros = parametros
        self._ouvintes = list(ouvintes)

    def inscrever(self, ouvinte: Ouvinte) -> None:
        self._ouvintes.append(ouvinte)

    def calcular(self, entrada: Union[DadosCalculo, Mapping[str, Any]],
                 data_atual: Optional[date] = None,
                 gerador: Optional[np.random.Generator] = None) -> ResultadoCalculo:
        inicio = time.perf_counter()
        dados = validar_entrada(entrada)

        resultado = LogicaCalculadora(
            dados, self.tabela, self.parametros, data_atual, gerador
        ).calcular()

        logger.info(
            "Calculation completed",
            extra={
                "cliente": dados.nome_cliente or "",
                "meses": resultado.quantidade_meses,
                "indenizacao_final": str(resultado.indenizacao_final),
                "duration_ms": round((time.perf_counter() - inicio) * 1000, 2),
            },
        )

        for ouvinte in self._ouvintes:
            ouvinte(resultado)

        return resultado


def criar_servico(config: Settings, ouvintes: Iterable[Ouvinte] = ()) -> ServicoRessarcimento:
    """Build the service from settings (IPCA CSV when configured, else bundled table)."""
    if config.caminho_csv_ipca:
        tabela = carregar_csv_ipca(config.caminho_csv_ipca, politica=config.politica_taxa_ausente)
    else:
        tabela = tabela_padrao(politica=config.politica_taxa_ausente)
    return ServicoRessarcimento(tabela, config.parametros(), ouvintes)
