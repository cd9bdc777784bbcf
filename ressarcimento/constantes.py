from datetime import date
from decimal import Decimal

TIPO_FORNECIMENTO = {
    "Monofásico": "monofasico",
    "Bifásico": "bifasico",
    "Trifásico": "trifasico",
}

MESES_PT = ['Jan', 'Fev', 'Mar', 'Abr', 'Mai', 'Jun',
            'Jul', 'Ago', 'Set', 'Out', 'Nov', 'Dez']

# Regulatory parameters (defaults for Settings)
ALIQUOTA_ICMS = Decimal("0.2215")
FATOR_BENEFICIO_TARIFARIO = Decimal("0.73")  # BTB share of compensated kWh
FATOR_FIO_B = Decimal("0.27")                # Fio B share of compensated kWh
FATOR_INDENIZACAO = Decimal("2")

DATA_REFERENCIA = date(2024, 6, 1)   # reimbursement accrues from here
DATA_MARCO_LEGAL = date(2023, 1, 6)  # installations before it are GD1

AMPLITUDE_VARIACAO = 0.20  # ±20% monthly usage variance

POLITICA_FAIL_OPEN = "fail-open"
POLITICA_FAIL_CLOSED = "fail-closed"
