import threading
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from ressarcimento.models import ResultadoCalculo


class ResumoEstatisticas(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_analises: int = 0
    total_corrigido: Decimal = Decimal("0")
    total_indenizacao: Decimal = Decimal("0")


class AgregadorEstatisticas:
    """Running totals across completed calculations.

    Subscribe ``registrar`` to a ServicoRessarcimento; the engine itself
    keeps no state between calculations.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._resumo = ResumoEstatisticas()

    def registrar(self, resultado: ResultadoCalculo) -> None:
        with self._lock:
            r = self._resumo
            self._resumo = ResumoEstatisticas(
                total_analises=r.total_analises + 1,
                total_corrigido=r.total_corrigido + resultado.valor_corrigido_total,
                total_indenizacao=r.total_indenizacao + resultado.indenizacao_final,
            )

    def resumo(self) -> ResumoEstatisticas:
        with self._lock:
            return self._resumo

    def __call__(self, resultado: ResultadoCalculo) -> None:
        self.registrar(resultado)
