"""Pytest fixtures for testing"""

from datetime import date
from decimal import Decimal

import pytest

from ressarcimento.models import DadosCalculo, ParametrosRegulatorios
from ressarcimento.tabela_ipca import TabelaIPCA, TaxaMensal, tabela_padrao


@pytest.fixture
def tabela_zero() -> TabelaIPCA:
    """Empty table: every lookup yields 0% under fail-open"""
    return TabelaIPCA([])


@pytest.fixture
def tabela_ipca() -> TabelaIPCA:
    """Bundled IPCA series 2020-2024"""
    return tabela_padrao()


@pytest.fixture
def tabela_um_por_cento() -> TabelaIPCA:
    """Single 1% rate in Mar/2024"""
    return TabelaIPCA([TaxaMensal(ano=2024, mes=3, taxa=Decimal("1"))])


@pytest.fixture
def parametros() -> ParametrosRegulatorios:
    """Default regulatory parameters (reference date 2024-06-01)"""
    return ParametrosRegulatorios()


@pytest.fixture
def dados_exemplo() -> DadosCalculo:
    """Prosumer installed before the reference date"""
    return DadosCalculo(
        tipo_fornecimento="monofasico",
        energia_injetada_kwh=1000,
        consumo_kwh=800,
        data_instalacao=date(2023, 3, 10),
        nome_cliente="Cliente Teste",
    )
