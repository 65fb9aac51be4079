"""
Compilador de reglas de validación.

Convierte los metadatos declarativos de un FormField en una regla ejecutable.
La compilación es determinista y sin efectos secundarios; la regla se
regenera cada vez que se carga un esquema.

Orden de chequeos (gana el primero que falla):
1. Requerido
2. Longitud mínima
3. Longitud máxima
4. Formato email
5. Formato teléfono
6. Opción declarada (dropdown, radio)
7. Fecha válida (date)

Los chequeos 2-7 se omiten si el valor está vacío y el campo es opcional.
"""

from dataclasses import dataclass
from typing import Optional

from formwizard.errors import UnsupportedFieldType
from formwizard.models.schema import AnswerValue, FormField, FormSchema
from formwizard.core.checks import Check, max_length, min_length
from formwizard.core.registry import resolve


def is_empty(value: AnswerValue) -> bool:
    """Valor ausente: None, string vacío o False."""
    return value is None or value == "" or value is False


@dataclass(frozen=True)
class CompiledRule:
    """Regla ejecutable derivada de un FormField."""
    field_id: str
    required_message: Optional[str]  # None si el campo es opcional
    checks: tuple[Check, ...] = ()
    fixed_error: Optional[str] = None  # Campo que nunca puede validar

    @property
    def required(self) -> bool:
        return self.required_message is not None

    def __call__(self, value: AnswerValue) -> tuple[bool, str]:
        """
        Evalúa la regla.

        Returns:
            Tupla (es_valido, mensaje_error)
        """
        if self.fixed_error:
            return False, self.fixed_error

        if is_empty(value):
            if self.required_message is not None:
                return False, self.required_message
            return True, ""

        for check in self.checks:
            error = check(value)
            if error:
                return False, error

        return True, ""


# =============================================================================
# COMPILACIÓN
# =============================================================================

def compile_rule(field: FormField) -> CompiledRule:
    """
    Compila la regla de validación de un campo.

    Los chequeos de longitud aplican a valores de texto; los chequeos propios
    del tipo los aporta su FieldBehavior.
    """
    try:
        behavior = resolve(field.type)
    except UnsupportedFieldType as exc:
        return CompiledRule(
            field_id=field.id,
            required_message=None,
            fixed_error=str(exc),
        )

    checks: list[Check] = []
    if behavior.value_kind == "text":
        if field.min_length is not None:
            checks.append(min_length(field.label, field.min_length))
        if field.max_length is not None:
            checks.append(max_length(field.label, field.max_length))
    checks.extend(behavior.extra_checks(field))

    return CompiledRule(
        field_id=field.id,
        required_message=field.required_message if field.required else None,
        checks=tuple(checks),
    )


def compile_rules(schema: FormSchema) -> dict[str, CompiledRule]:
    """Compila las reglas de todos los campos del esquema."""
    return {fld.id: compile_rule(fld) for fld in schema.iter_fields()}
