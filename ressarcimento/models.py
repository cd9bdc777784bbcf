from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ressarcimento.constantes import (
    ALIQUOTA_ICMS,
    AMPLITUDE_VARIACAO,
    DATA_REFERENCIA,
    FATOR_BENEFICIO_TARIFARIO,
    FATOR_FIO_B,
    FATOR_INDENIZACAO,
)


class Elegibilidade(str, Enum):
    ELEGIVEL = "elegivel"
    NAO_ELEGIVEL = "nao_elegivel"  # GD1: installed before the legal milestone


class DadosCalculo(BaseModel):
    model_config = ConfigDict(frozen=True)

    tipo_fornecimento: Literal["monofasico", "bifasico", "trifasico"]
    energia_injetada_kwh: int = Field(..., ge=0)
    consumo_kwh: int = Field(..., ge=0)
    data_instalacao: date
    nome_cliente: Optional[str] = None

    @field_validator("energia_injetada_kwh", "consumo_kwh", mode="before")
    @classmethod
    def _rejeitar_booleano(cls, valor):
        # True/False are not kWh quantities
        if isinstance(valor, bool):
            raise ValueError("energia deve ser um número inteiro de kWh, não booleano")
        return valor


class ParametrosRegulatorios(BaseModel):
    model_config = ConfigDict(frozen=True)

    aliquota_icms: Decimal = Field(default=ALIQUOTA_ICMS, ge=0, le=1)
    fator_beneficio_tarifario: Decimal = Field(default=FATOR_BENEFICIO_TARIFARIO, ge=0)
    fator_fio_b: Decimal = Field(default=FATOR_FIO_B, ge=0)
    fator_indenizacao: Decimal = Field(default=FATOR_INDENIZACAO, ge=0)
    data_referencia: date = DATA_REFERENCIA
    variacao_estocastica: bool = False
    amplitude_variacao: float = Field(default=AMPLITUDE_VARIACAO, ge=0, le=1)
    semente_variacao: Optional[int] = None


class DetalheMensal(BaseModel):
    model_config = ConfigDict(frozen=True)

    mes_ano: date                  # first day of the billing month
    valor_base: Decimal
    valor_corrigido: Decimal
    taxa_efetiva: Decimal          # valor_corrigido / valor_base - 1
    energia_compensada_kwh: int
    energia_injetada_kwh: int      # figures used for this month (after variance)
    consumo_kwh: int

    @property
    def diferenca(self) -> Decimal:
        return self.valor_corrigido - self.valor_base


class ResultadoCalculo(BaseModel):
    model_config = ConfigDict(frozen=True)

    valor_base_total: Decimal = Decimal("0")
    valor_corrigido_total: Decimal = Decimal("0")
    indenizacao_final: Decimal = Decimal("0")
    quantidade_meses: int = 0
    detalhes: tuple[DetalheMensal, ...] = ()
    data_calculo: Optional[date] = None
    entrada: Optional[DadosCalculo] = None
