"""Unit tests for the IPCA rate table"""

from decimal import Decimal

import pytest

from ressarcimento.exceptions import EntradaInvalida, TaxaNaoEncontrada
from ressarcimento.tabela_ipca import TabelaIPCA, TaxaMensal, carregar_csv_ipca, tabela_padrao


def test_taxa_returns_decimal_fraction(tabela_ipca):
    """Published percentages are returned divided by 100"""
    assert tabela_ipca.taxa(2020, 1) == Decimal("0.0021")
    assert tabela_ipca.taxa(2022, 7) == Decimal("-0.0068")
    assert tabela_ipca.taxa(2024, 12) == Decimal("0.0052")


def test_taxa_missing_is_zero_when_fail_open(tabela_ipca):
    """Outside coverage or invalid month yields 0"""
    assert tabela_ipca.taxa(2019, 12) == 0
    assert tabela_ipca.taxa(2030, 1) == 0
    assert tabela_ipca.taxa(2024, 13) == 0


def test_taxa_missing_raises_when_fail_closed():
    """Strict policy raises with the missing key"""
    tabela = tabela_padrao(politica="fail-closed")

    assert tabela.taxa(2023, 5) == Decimal("0.0023")
    with pytest.raises(TaxaNaoEncontrada) as exc:
        tabela.taxa(2025, 3)
    assert exc.value.ano == 2025
    assert exc.value.mes == 3


def test_invalid_policy_rejected():
    with pytest.raises(ValueError):
        TabelaIPCA([], politica="ignore")


def test_cobertura(tabela_ipca):
    """Bundled table covers Jan/2020 to Dec/2024"""
    assert len(tabela_ipca) == 60
    assert tabela_ipca.cobertura() == ((2020, 1), (2024, 12))
    assert (2021, 6) in tabela_ipca
    assert TabelaIPCA([]).cobertura() is None


def test_duplicate_month_rejected():
    with pytest.raises(EntradaInvalida):
        TabelaIPCA([
            TaxaMensal(ano=2024, mes=1, taxa=Decimal("0.42")),
            TaxaMensal(ano=2024, mes=1, taxa=Decimal("0.50")),
        ])


def test_carregar_csv_ipca(tmp_path):
    """CSV accepts decimal comma and dot"""
    caminho = tmp_path / "ipca.csv"
    caminho.write_text("ano;mes;taxa\n2025;1;0,16\n2025;2;1.31\n2025;3;-0,05\n", encoding="utf-8")

    tabela = carregar_csv_ipca(str(caminho))

    assert len(tabela) == 3
    assert tabela.taxa(2025, 1) == Decimal("0.0016")
    assert tabela.taxa(2025, 2) == Decimal("0.0131")
    assert tabela.taxa(2025, 3) == Decimal("-0.0005")
    assert tabela.taxa(2025, 4) == 0


def test_carregar_csv_ipca_invalid_month(tmp_path):
    caminho = tmp_path / "ipca.csv"
    caminho.write_text("ano;mes;taxa\n2025;13;0,16\n", encoding="utf-8")

    with pytest.raises(EntradaInvalida):
        carregar_csv_ipca(str(caminho))


def test_carregar_csv_ipca_missing_column(tmp_path):
    caminho = tmp_path / "ipca.csv"
    caminho.write_text("ano;taxa\n2025;0,16\n", encoding="utf-8")

    with pytest.raises(EntradaInvalida):
        carregar_csv_ipca(str(caminho))
