from typing import Any, Mapping, Union

from pydantic import ValidationError

from ressarcimento.exceptions import EntradaInvalida
from ressarcimento.models import DadosCalculo


def validar_entrada(entrada: Union[DadosCalculo, Mapping[str, Any]]) -> DadosCalculo:
    """Build a DadosCalculo from raw form/API fields.

    Raises EntradaInvalida with a Portuguese message on missing fields,
    negative or non-integer energy, or an unparseable date.
    """
    if isinstance(entrada, DadosCalculo):
        return entrada
    if entrada is None:
        raise EntradaInvalida("Dados do cálculo não informados")
    try:
        return DadosCalculo.model_validate(dict(entrada))
    except ValidationError as e:
        raise EntradaInvalida(_traduzir_erro_validacao(e), e.errors()) from e


def _traduzir_erro_validacao(e: ValidationError) -> str:
    """Convert Pydantic ValidationError to a Portuguese message."""
    mensagens = []
    for err in e.errors():
        campo = " > ".join(str(loc) for loc in err["loc"])
        tipo = err["type"]
        if "greater_than_equal" in tipo:
            mensagens.append(f"Campo '{campo}': valor deve ser >= {err.get('ctx', {}).get('ge', 0)}")
        elif "missing" in tipo:
            mensagens.append(f"Campo '{campo}': obrigatório, mas não foi preenchido")
        elif tipo.startswith("date") or tipo.startswith("datetime"):
            mensagens.append(f"Campo '{campo}': data inválida")
        elif tipo.startswith("int"):
            mensagens.append(f"Campo '{campo}': deve ser um número inteiro de kWh")
        elif tipo == "literal_error":
            mensagens.append(f"Campo '{campo}': tipo de fornecimento inválido")
        else:
            mensagens.append(f"Campo '{campo}': {err['msg']}")
    return "; ".join(mensagens)
