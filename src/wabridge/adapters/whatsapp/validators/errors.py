"""Erros de validação para templates e mensagens WhatsApp/Meta."""

from __future__ import annotations


class ValidationError(Exception):
    """Erro de validação de mensagem.

    Contém mensagem descritiva do erro de validação.
    """

    pass


class TemplateDefinitionError(ValidationError):
    """Definição de template em formato irreconhecível."""

    pass


class TemplateVariablesError(ValidationError):
    """Mapa de variáveis não atende ao template.

    Levantado apenas quando o chamador pede validação obrigatória.
    """

    def __init__(self, missing_variables: list[str], errors: list[str]) -> None:
        self.missing_variables = list(missing_variables)
        self.errors = list(errors)
        detail = "; ".join(self.errors) or "missing variables"
        if self.missing_variables:
            detail = f"{detail} (missing: {', '.join(self.missing_variables)})"
        super().__init__(detail)
