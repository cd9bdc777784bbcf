"""Unit tests for settings and logging setup"""

import json
import logging
from datetime import date
from decimal import Decimal

from pythonjsonlogger.json import JsonFormatter

from ressarcimento.config import Settings
from ressarcimento.logging_config import CustomJsonFormatter, setup_logging


def test_settings_defaults():
    parametros = Settings().parametros()

    assert parametros.aliquota_icms == Decimal("0.2215")
    assert parametros.fator_beneficio_tarifario == Decimal("0.73")
    assert parametros.fator_fio_b == Decimal("0.27")
    assert parametros.fator_indenizacao == 2
    assert parametros.data_referencia == date(2024, 6, 1)
    assert parametros.variacao_estocastica is False


def test_settings_from_environment(monkeypatch):
    """Regulatory parameters change without code edits"""
    monkeypatch.setenv("RESSARCIMENTO_ALIQUOTA_ICMS", "0.18")
    monkeypatch.setenv("RESSARCIMENTO_DATA_REFERENCIA", "2024-01-01")
    monkeypatch.setenv("RESSARCIMENTO_POLITICA_TAXA_AUSENTE", "fail-closed")

    config = Settings()

    assert config.parametros().aliquota_icms == Decimal("0.18")
    assert config.parametros().data_referencia == date(2024, 1, 1)
    assert config.politica_taxa_ausente == "fail-closed"


def test_setup_logging_json(capsys):
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        setup_logging("INFO", json=True)
        logging.getLogger("ressarcimento.teste").info("Calculation completed", extra={"meses": 6})

        linha = capsys.readouterr().out.strip().splitlines()[-1]
        registro = json.loads(linha)
        assert registro["message"] == "Calculation completed"
        assert registro["service"] == "ressarcimento-icms"
        assert registro["level"] == "INFO"
        assert registro["meses"] == 6
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_json_formatter_uses_current_module():
    """Formatter builds on pythonjsonlogger.json, not the deprecated jsonlogger"""
    assert issubclass(CustomJsonFormatter, JsonFormatter)
