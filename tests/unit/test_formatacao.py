"""Unit tests for Brazilian formatting helpers"""

from datetime import date
from decimal import Decimal

import pytest

from ressarcimento.formatacao import formatar_mes_ano, formatar_moeda, formatar_percentual, parse_valor_br


def test_formatar_moeda():
    assert formatar_moeda(Decimal("2126.4")) == "R$ 2.126,40"
    assert formatar_moeda(1234567.891) == "R$ 1.234.567,89"
    assert formatar_moeda(Decimal("-0.5")) == "-R$ 0,50"
    assert formatar_moeda(0) == "R$ 0,00"


def test_formatar_percentual():
    assert formatar_percentual(0.2534) == "25,34%"
    assert formatar_percentual(Decimal("0.0021"), casas=4) == "0,2100%"


def test_formatar_mes_ano():
    assert formatar_mes_ano(date(2024, 6, 1)) == "Jun/2024"
    assert formatar_mes_ano(date(2025, 12, 31)) == "Dez/2025"


def test_parse_valor_br():
    assert parse_valor_br("0,21") == Decimal("0.21")
    assert parse_valor_br("1.234,5") == Decimal("1234.5")
    assert parse_valor_br(" -0.38 ") == Decimal("-0.38")


@pytest.mark.parametrize("valor", ["", "  ", None, "abc"])
def test_parse_valor_br_invalid(valor):
    with pytest.raises(ValueError):
        parse_valor_br(valor)
