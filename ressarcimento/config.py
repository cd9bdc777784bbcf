"""Configuration management using Pydantic Settings"""

from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from ressarcimento.constantes import (
    ALIQUOTA_ICMS,
    AMPLITUDE_VARIACAO,
    DATA_MARCO_LEGAL,
    DATA_REFERENCIA,
    FATOR_BENEFICIO_TARIFARIO,
    FATOR_FIO_B,
    FATOR_INDENIZACAO,
    POLITICA_FAIL_OPEN,
)
from ressarcimento.models import ParametrosRegulatorios


class Settings(BaseSettings):
    """Regulatory parameters and runtime options loaded from the environment.

    Every field can be overridden with a ``RESSARCIMENTO_`` prefixed
    variable, e.g. ``RESSARCIMENTO_ALIQUOTA_ICMS=0.18``.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESSARCIMENTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Regulatory
    aliquota_icms: Decimal = ALIQUOTA_ICMS
    fator_beneficio_tarifario: Decimal = FATOR_BENEFICIO_TARIFARIO
    fator_fio_b: Decimal = FATOR_FIO_B
    fator_indenizacao: Decimal = FATOR_INDENIZACAO
    data_referencia: date = DATA_REFERENCIA
    data_marco_legal: date = DATA_MARCO_LEGAL

    # IPCA table
    politica_taxa_ausente: Literal["fail-open", "fail-closed"] = POLITICA_FAIL_OPEN
    caminho_csv_ipca: Optional[str] = None

    # Monthly usage variance
    variacao_estocastica: bool = False
    amplitude_variacao: float = AMPLITUDE_VARIACAO
    semente_variacao: Optional[int] = None

    # Service
    service_name: str = "ressarcimento-icms"
    log_level: str = "INFO"
    log_json: bool = True

    def parametros(self) -> ParametrosRegulatorios:
        return ParametrosRegulatorios(
            aliquota_icms=self.aliquota_icms,
            fator_beneficio_tarifario=self.fator_beneficio_tarifario,
            fator_fio_b=self.fator_fio_b,
            fator_indenizacao=self.fator_indenizacao,
            data_referencia=self.data_referencia,
            variacao_estocastica=self.variacao_estocastica,
            amplitude_variacao=self.amplitude_variacao,
            semente_variacao=self.semente_variacao,
        )


settings = Settings()
