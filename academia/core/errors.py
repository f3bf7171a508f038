# academia/core/errors.py
"""
Erros de checkout/precificação.

Todos carregam o status HTTP com que são devolvidos ao cliente; o handler em
`academia.main` serializa como {"error": mensagem}.
"""
from __future__ import annotations

from typing import Any


class CheckoutError(Exception):
    status_code: int = 400
    default_message: str = "Erro no checkout"

    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidInput(CheckoutError, ValueError):
    default_message = "Dados inválidos"


class InvalidDiscount(CheckoutError, ValueError):
    default_message = "O desconto deve estar entre 0% e 99.99%"


class CourseNotAvailable(CheckoutError):
    default_message = "Curso não disponível"

    @classmethod
    def not_found(cls) -> "CourseNotAvailable":
        return cls("Curso não encontrado", status_code=404)

    @classmethod
    def unpublished(cls) -> "CourseNotAvailable":
        return cls("O curso não está publicado", status_code=400)


class InvalidUser(CheckoutError):
    default_message = "Usuário inválido"


class UpstreamPaymentError(CheckoutError):
    status_code = 500
    default_message = "Erro ao criar pagamento no processador"

    def __init__(self, message: str | None = None, *, data: Any = None):
        super().__init__(message)
        self.data = data


class FreeCourse(CheckoutError):
    default_message = "Curso gratuito: use a inscrição direta"
