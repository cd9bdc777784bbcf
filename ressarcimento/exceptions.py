"""Domain-specific exceptions"""

from typing import Optional


class ErroRessarcimento(Exception):
    """Base exception for the reimbursement engine"""

    pass


class EntradaInvalida(ErroRessarcimento):
    """Calculation input is missing a field, negative or unparseable"""

    def __init__(self, mensagem: str, erros: Optional[list] = None):
        super().__init__(mensagem)
        self.erros = erros or []


class TaxaNaoEncontrada(ErroRessarcimento):
    """No IPCA rate for a month under the fail-closed policy"""

    def __init__(self, ano: int, mes: int):
        super().__init__(f"Taxa IPCA não encontrada para {mes:02d}/{ano}")
        self.ano = ano
        self.mes = mes
