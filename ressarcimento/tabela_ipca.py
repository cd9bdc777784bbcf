import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ressarcimento.constantes import POLITICA_FAIL_CLOSED, POLITICA_FAIL_OPEN
from ressarcimento.exceptions import EntradaInvalida, TaxaNaoEncontrada
from ressarcimento.formatacao import parse_valor_br

logger = logging.getLogger(__name__)

# IPCA monthly variation (%), IBGE. One list per year, Jan..Dec.
IPCA_MENSAL = {
    2020: ["0.21", "0.25", "0.07", "-0.31", "-0.38", "0.26",
           "0.36", "0.24", "0.64", "0.86", "0.89", "1.35"],
    2021: ["0.25", "0.86", "0.93", "0.31", "0.83", "0.53",
           "0.96", "0.87", "1.16", "1.25", "0.95", "0.73"],
    2022: ["0.54", "1.01", "1.62", "1.06", "0.47", "0.67",
           "-0.68", "-0.36", "-0.29", "0.59", "0.41", "0.62"],
    2023: ["0.53", "0.84", "0.71", "0.61", "0.23", "0.08",
           "0.12", "0.23", "0.26", "0.24", "0.28", "0.56"],
    2024: ["0.42", "0.83", "0.16", "0.38", "0.46", "0.21",
           "0.38", "0.02", "0.44", "0.56", "0.39", "0.52"],
}


class TaxaMensal(BaseModel):
    model_config = ConfigDict(frozen=True)

    ano: int
    mes: int = Field(..., ge=1, le=12)
    taxa: Decimal  # percent, e.g. 0.21 for 0.21%


class TabelaIPCA:
    """Immutable (year, month) -> IPCA rate lookup.

    Rates are stored as published (percent) and returned as a decimal
    fraction. A missing month yields zero under the ``fail-open`` policy
    and raises TaxaNaoEncontrada under ``fail-closed``.
    """

    def __init__(self, taxas: Iterable[TaxaMensal], politica: str = POLITICA_FAIL_OPEN):
        if politica not in (POLITICA_FAIL_OPEN, POLITICA_FAIL_CLOSED):
            raise ValueError(f"Política de taxa ausente inválida: '{politica}'")

        dados = {}
        for t in taxas:
            chave = (t.ano, t.mes)
            if chave in dados:
                raise EntradaInvalida(f"Taxa IPCA duplicada para {t.mes:02d}/{t.ano}")
            dados[chave] = t.taxa

        self._taxas = MappingProxyType(dados)
        self.politica = politica

    def taxa(self, ano: int, mes: int) -> Decimal:
        percentual = self._taxas.get((ano, mes))
        if percentual is None:
            if self.politica == POLITICA_FAIL_CLOSED:
                logger.warning("IPCA rate missing", extra={"ano": ano, "mes": mes})
                raise TaxaNaoEncontrada(ano, mes)
            logger.debug("IPCA rate missing, applying zero", extra={"ano": ano, "mes": mes})
            return Decimal("0")
        return percentual / 100

    def cobertura(self) -> Optional[tuple[tuple[int, int], tuple[int, int]]]:
        """First and last covered (year, month), or None when empty."""
        if not self._taxas:
            return None
        chaves = sorted(self._taxas)
        return chaves[0], chaves[-1]

    def __contains__(self, chave) -> bool:
        return chave in self._taxas

    def __len__(self) -> int:
        return len(self._taxas)


def tabela_padrao(politica: str = POLITICA_FAIL_OPEN) -> TabelaIPCA:
    """Bundled IPCA series (Jan/2020 to Dec/2024)."""
    taxas = [
        TaxaMensal(ano=ano, mes=i + 1, taxa=Decimal(valor))
        for ano, valores in IPCA_MENSAL.items()
        for i, valor in enumerate(valores)
    ]
    return TabelaIPCA(taxas, politica=politica)


def carregar_csv_ipca(caminho: str, politica: str = POLITICA_FAIL_OPEN) -> TabelaIPCA:
    """Load a versioned IPCA CSV into a TabelaIPCA.

    Read:  sep=';', columns ano, mes, taxa (percent)
    Convert:
        taxa → Decimal via parse_valor_br ('0,21' and '0.21' both accepted)
    """
    df = pd.read_csv(caminho, sep=";", dtype=str, encoding="utf-8")
    df.columns = [c.strip().lower() for c in df.columns]

    faltando = {"ano", "mes", "taxa"} - set(df.columns)
    if faltando:
        raise EntradaInvalida(f"Colunas ausentes no CSV do IPCA: {', '.join(sorted(faltando))}")

    taxas = []
    for idx, row in df.iterrows():
        try:
            taxas.append(TaxaMensal(
                ano=int(row["ano"]),
                mes=int(row["mes"]),
                taxa=parse_valor_br(row["taxa"]),
            ))
        except (ValueError, ValidationError) as e:
            raise EntradaInvalida(f"Linha {idx + 2} do CSV do IPCA inválida: {e}") from e

    logger.info("IPCA table loaded", extra={"caminho": caminho, "meses": len(taxas)})
    return TabelaIPCA(taxas, politica=politica)
