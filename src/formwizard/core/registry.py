"""
Registro de tipos de campo y despachador.

Cada variante de FieldType tiene exactamente un FieldBehavior registrado que
define la forma del valor que maneja, si requiere opciones, sus chequeos de
formato y cómo una interacción del usuario se traduce en un valor para el
FormStateStore.

Este es el único punto de polimorfismo sobre tipos de campo: el resto del
código nunca compara strings de tipo.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Union

from formwizard.errors import UnsupportedFieldType
from formwizard.models.schema import AnswerValue, FieldType, FormField
from formwizard.core.checks import (
    EMAIL_MESSAGE,
    EMAIL_PATTERN,
    PHONE_MESSAGE,
    PHONE_PATTERN,
    Check,
    declared_option,
    pattern,
    valid_date,
)

logger = logging.getLogger(__name__)


TRUE_TOKENS = frozenset({"y", "yes", "s", "si", "sí", "true", "1", "on", "x"})
FALSE_TOKENS = frozenset({"n", "no", "false", "0", "off", ""})


class FieldBehavior(ABC):
    """Comportamiento de entrada de una variante de campo."""

    #: Forma del valor: "text", "boolean" o "date"
    value_kind: str = "text"
    #: Estrategia de interacción: "text", "multiline", "date", "select", "radio", "confirm"
    input_kind: str = "text"
    #: Si el campo debe declarar una lista de opciones
    requires_options: bool = False

    @abstractmethod
    def default(self) -> AnswerValue:
        """Valor inicial del campo."""

    @abstractmethod
    def coerce(self, fld: FormField, raw: Any) -> AnswerValue:
        """
        Traduce una entrada cruda del usuario a un AnswerValue.

        Raises:
            ValueError: si la entrada no puede interpretarse
        """

    def display(self, fld: FormField, value: AnswerValue) -> str:
        """Formatea el valor para mostrar."""
        if value is None or value == "":
            return "-"
        return str(value)

    def extra_checks(self, fld: FormField) -> list[Check]:
        """Chequeos propios del tipo, aplicados después de los de longitud."""
        return []


class TextBehavior(FieldBehavior):
    """Texto corto (text, email, tel), con formato opcional."""

    def __init__(
        self,
        input_type: str = "text",
        regex: Optional[re.Pattern] = None,
        message: str = "",
    ):
        self.input_type = input_type
        self.regex = regex
        self.message = message

    def default(self) -> AnswerValue:
        return ""

    def coerce(self, fld: FormField, raw: Any) -> AnswerValue:
        if raw is None:
            return ""
        if isinstance(raw, str):
            return raw
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return str(raw)
        raise ValueError(f"{fld.label} expects text")

    def extra_checks(self, fld: FormField) -> list[Check]:
        if self.regex is None:
            return []
        return [pattern(self.regex, self.message)]


class LongTextBehavior(TextBehavior):
    """Texto largo (textarea)."""
    input_kind = "multiline"

    def __init__(self):
        super().__init__(input_type="textarea")

    def display(self, fld: FormField, value: AnswerValue) -> str:
        lines = super().display(fld, value).splitlines() or ["-"]
        short = lines[0]
        if len(short) > 40:
            return short[:40] + "..."
        if len(lines) > 1:
            return short + " ..."
        return short


class DateBehavior(FieldBehavior):
    """Fecha (date). Acepta objetos date o strings ISO YYYY-MM-DD."""
    value_kind = "date"
    input_kind = "date"

    def default(self) -> AnswerValue:
        return None

    def coerce(self, fld: FormField, raw: Any) -> AnswerValue:
        if raw is None or raw == "":
            return None
        if isinstance(raw, datetime):
            return raw.date()
        if isinstance(raw, date):
            return raw
        if isinstance(raw, str):
            try:
                return date.fromisoformat(raw.strip())
            except ValueError:
                raise ValueError(f"{fld.label}: '{raw}' is not a date (expected YYYY-MM-DD)") from None
        raise ValueError(f"{fld.label} expects a date")

    def extra_checks(self, fld: FormField) -> list[Check]:
        return [valid_date(fld.label)]

    def display(self, fld: FormField, value: AnswerValue) -> str:
        if isinstance(value, date):
            return value.strftime("%B %d, %Y")
        return super().display(fld, value)


class ChoiceBehavior(FieldBehavior):
    """Selección única (dropdown, radio). El valor es el id de la opción."""
    requires_options = True

    def __init__(self, input_kind: str):
        self.input_kind = input_kind

    def default(self) -> AnswerValue:
        return ""

    def coerce(self, fld: FormField, raw: Any) -> AnswerValue:
        if raw is None or raw == "":
            return ""
        if not isinstance(raw, str):
            raise ValueError(f"{fld.label} expects an option id")
        if raw in fld.option_ids():
            return raw
        # Permitir elegir por etiqueta (sin distinguir mayúsculas)
        wanted = raw.strip().casefold()
        for opt in fld.options:
            if opt.label.casefold() == wanted or opt.id.casefold() == wanted:
                return opt.id
        raise ValueError(f"{fld.label}: '{raw}' is not one of the options")

    def extra_checks(self, fld: FormField) -> list[Check]:
        return [declared_option(fld.label, fld.option_ids())]

    def display(self, fld: FormField, value: AnswerValue) -> str:
        if isinstance(value, str) and value:
            return fld.option_label(value) or value
        return super().display(fld, value)


class CheckboxBehavior(FieldBehavior):
    """Casilla booleana (checkbox). Por defecto False."""
    value_kind = "boolean"
    input_kind = "confirm"

    def default(self) -> AnswerValue:
        return False

    def coerce(self, fld: FormField, raw: Any) -> AnswerValue:
        if raw is None:
            return False
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            token = raw.strip().casefold()
            if token in TRUE_TOKENS:
                return True
            if token in FALSE_TOKENS:
                return False
        raise ValueError(f"{fld.label} expects yes or no")

    def display(self, fld: FormField, value: AnswerValue) -> str:
        return "Yes" if value is True else "No"


# =============================================================================
# REGISTRO
# =============================================================================

_REGISTRY: dict[FieldType, FieldBehavior] = {}


def register_behavior(field_type: FieldType, behavior: FieldBehavior) -> None:
    """Registra (o reemplaza) el comportamiento de una variante."""
    if not isinstance(field_type, FieldType):
        raise TypeError(f"field_type must be a FieldType, got {field_type!r}")
    _REGISTRY[field_type] = behavior


def resolve(field_type: Union[str, FieldType]) -> FieldBehavior:
    """
    Obtiene el comportamiento de un tipo de campo.

    Raises:
        UnsupportedFieldType: si el tipo no pertenece al conjunto cerrado
    """
    kind = field_type if isinstance(field_type, FieldType) else FieldType.parse(field_type)
    if kind is None or kind not in _REGISTRY:
        raise UnsupportedFieldType(str(getattr(field_type, "value", field_type)))
    return _REGISTRY[kind]


def registered_types() -> list[FieldType]:
    """Tipos con comportamiento registrado."""
    return list(_REGISTRY)


register_behavior(FieldType.TEXT, TextBehavior("text"))
register_behavior(FieldType.EMAIL, TextBehavior("email", EMAIL_PATTERN, EMAIL_MESSAGE))
register_behavior(FieldType.TEL, TextBehavior("tel", PHONE_PATTERN, PHONE_MESSAGE))
register_behavior(FieldType.TEXTAREA, LongTextBehavior())
register_behavior(FieldType.DATE, DateBehavior())
register_behavior(FieldType.DROPDOWN, ChoiceBehavior("select"))
register_behavior(FieldType.RADIO, ChoiceBehavior("radio"))
register_behavior(FieldType.CHECKBOX, CheckboxBehavior())

_missing = set(FieldType) - set(_REGISTRY)
if _missing:
    raise RuntimeError(f"Field types without behavior: {sorted(t.value for t in _missing)}")


# =============================================================================
# DESPACHO
# =============================================================================

@dataclass
class FieldView:
    """Vista de un campo lista para que una capa de presentación la muestre."""
    field: FormField
    behavior: Optional[FieldBehavior]
    value: AnswerValue
    error: Optional[str] = None
    display_value: str = "-"
    options: list[tuple[str, str]] = field(default_factory=list)  # (id, etiqueta)

    @property
    def unsupported(self) -> bool:
        """True si el tipo no tiene comportamiento (se muestra como error)."""
        return self.behavior is None

    @property
    def input_kind(self) -> Optional[str]:
        return self.behavior.input_kind if self.behavior else None


def dispatch(fld: FormField, value: AnswerValue, error: Optional[str] = None) -> FieldView:
    """
    Selecciona la estrategia de interacción para un campo.

    Un tipo no soportado no lanza: produce una vista marcada como no
    soportada con el mensaje de error visible, para que el resto de la
    sección siga siendo editable.
    """
    try:
        behavior = resolve(fld.type)
    except UnsupportedFieldType as exc:
        logger.warning("Field %s has unsupported type %r", fld.id, fld.type)
        return FieldView(
            field=fld,
            behavior=None,
            value=value,
            error=error or str(exc),
        )

    return FieldView(
        field=fld,
        behavior=behavior,
        value=value,
        error=error,
        display_value=behavior.display(fld, value),
        options=[(opt.id, opt.label) for opt in fld.options],
    )
