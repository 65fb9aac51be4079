"""
Jerarquía de excepciones del motor de formularios.

Los errores de validación de campos y la navegación bloqueada NO son
excepciones: se representan como datos (ValidationOutcome, AdvanceResult).
Aquí solo viven los errores estructurales y de uso indebido.
"""

from typing import Iterable, Optional


class FormWizardError(Exception):
    """Error base de formwizard."""


class ConfigError(FormWizardError):
    """Archivo de configuración ilegible o mal formado."""


class SchemaIntegrityError(FormWizardError):
    """
    Esquema mal formado: faltan campos estructurales, una sección sin campos,
    un campo de opción sin opciones o ids duplicados.

    Es fatal para el inicio de la sesión y no se reintenta.
    """

    def __init__(self, problems: Iterable[str]):
        self.problems = list(problems)
        if len(self.problems) == 1:
            message = f"Invalid form schema: {self.problems[0]}"
        else:
            message = "Invalid form schema:\n" + "\n".join(f"  - {p}" for p in self.problems)
        super().__init__(message)


class SchemaSourceError(FormWizardError):
    """Fallo de transporte o de formato al obtener el esquema."""


class UnsupportedFieldType(FormWizardError):
    """Tipo de campo fuera del conjunto cerrado de variantes."""

    def __init__(self, field_type: str, field_id: Optional[str] = None):
        self.field_type = field_type
        self.field_id = field_id
        super().__init__(f"Unsupported field type: {field_type}")


class UnknownFieldError(FormWizardError, KeyError):
    """Se referenció un id de campo que no existe en el esquema."""

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"Unknown field id: {field_id}")

    def __str__(self) -> str:
        return self.args[0]


class StoreAlreadyInitialized(FormWizardError):
    """initialize() se llamó más de una vez para el mismo esquema."""


class IncompleteAnswersError(FormWizardError):
    """Las respuestas no cubren todos los campos del esquema."""

    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(f"Answers missing for fields: {', '.join(self.missing)}")


class SessionNotReady(FormWizardError):
    """La sesión todavía no tiene un esquema cargado (o la carga falló)."""


class SessionClosedError(FormWizardError):
    """La sesión ya fue enviada o abandonada."""


class SubmissionStoreError(FormWizardError):
    """El destino no pudo recibir o leer un registro de envío."""
