from datetime import date
from decimal import Decimal, InvalidOperation

from ressarcimento.constantes import MESES_PT


def formatar_moeda(valor) -> str:
    """1234.56 → 'R$ 1.234,56'"""
    if valor < 0:
        return f"-R$ {_formatar_numero_br(abs(valor))}"
    return f"R$ {_formatar_numero_br(valor)}"


def formatar_percentual(valor, casas: int = 2) -> str:
    """0.2534 → '25,34%' | casas=4: 0.0021 → '0,2100%'"""
    pct = Decimal(str(valor)) * 100
    return f"{pct:.{casas}f}".replace('.', ',') + "%"


def formatar_mes_ano(mes_ano: date) -> str:
    """date(2024, 6, 1) → 'Jun/2024'"""
    return f"{MESES_PT[mes_ano.month - 1]}/{mes_ano.year}"


def parse_valor_br(valor_str) -> Decimal:
    """'0,21' → Decimal('0.21') | '1.234,5' → Decimal('1234.5') | '-0.38' → Decimal('-0.38')

    Raises ValueError for empty or unparseable values.
    """
    if not isinstance(valor_str, str) or not valor_str.strip():
        raise ValueError(f"Valor numérico ausente: {valor_str!r}")
    valor_str = valor_str.strip()
    if ',' in valor_str:
        valor_str = valor_str.replace('.', '').replace(',', '.')
    try:
        return Decimal(valor_str)
    except InvalidOperation:
        raise ValueError(f"Valor numérico inválido: {valor_str!r}") from None


def _formatar_numero_br(valor) -> str:
    """1234.56 → '1.234,56'"""
    texto = f"{valor:,.2f}"  # '1,234.56'
    return texto.replace(',', '_').replace('.', ',').replace('_', '.')
