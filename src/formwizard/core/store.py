"""
Almacén de estado del formulario.

Es el único dueño de FormAnswers (valores de todos los campos de todas las
secciones) y FieldErrors (error actual por campo). Las demás piezas solo
leen o piden mutaciones a través de él.

Asignar un valor no revalida: la validación se ejecuta solo cuando se pide
explícitamente con validate().
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from formwizard.errors import StoreAlreadyInitialized, UnknownFieldError, UnsupportedFieldType
from formwizard.models.schema import AnswerValue, FormSchema
from formwizard.core.registry import resolve
from formwizard.core.rules import CompiledRule, compile_rules

logger = logging.getLogger(__name__)


@dataclass
class ValidationOutcome:
    """Resultado de validar un conjunto de campos."""
    all_valid: bool
    errors: dict[str, Optional[str]] = field(default_factory=dict)  # En orden de esquema

    def __bool__(self) -> bool:
        return self.all_valid

    @property
    def failing(self) -> list[str]:
        """Ids con error, en orden de esquema."""
        return [fid for fid, msg in self.errors.items() if msg]

    @property
    def first_error(self) -> Optional[str]:
        """Primer id con error, o None."""
        failing = self.failing
        return failing[0] if failing else None


class FormStateStore:
    """Valores y errores de todos los campos de una sesión."""

    def __init__(self, schema: FormSchema):
        self.schema = schema
        self._rules: dict[str, CompiledRule] = compile_rules(schema)
        self._order: dict[str, int] = {fid: i for i, fid in enumerate(schema.field_ids())}
        self._answers: Optional[dict[str, AnswerValue]] = None
        self._errors: dict[str, Optional[str]] = {}

    # -------------------------------------------------------------------------
    # Inicialización
    # -------------------------------------------------------------------------

    def initialize(self) -> dict[str, AnswerValue]:
        """
        Siembra el valor por defecto de cada campo según su tipo.

        Debe llamarse exactamente una vez por esquema cargado.

        Returns:
            Copia de las respuestas iniciales
        """
        if self._answers is not None:
            raise StoreAlreadyInitialized(
                f"Store for form '{self.schema.identifier}' is already initialized"
            )

        answers: dict[str, AnswerValue] = {}
        for fld in self.schema.iter_fields():
            try:
                answers[fld.id] = resolve(fld.type).default()
            except UnsupportedFieldType:
                answers[fld.id] = None

        self._answers = answers
        self._errors = {fid: None for fid in answers}
        logger.debug("Initialized %d fields for form %s", len(answers), self.schema.identifier)
        return dict(answers)

    @property
    def initialized(self) -> bool:
        return self._answers is not None

    def _require(self, field_id: str) -> None:
        if self._answers is None:
            raise RuntimeError("FormStateStore.initialize() has not been called")
        if field_id not in self._answers:
            raise UnknownFieldError(field_id)

    # -------------------------------------------------------------------------
    # Mutaciones
    # -------------------------------------------------------------------------

    def set_value(self, field_id: str, value: AnswerValue) -> None:
        """Sobrescribe el valor de un campo sin revalidar."""
        self._require(field_id)
        self._answers[field_id] = value

    def set_raw(self, field_id: str, raw: Any) -> AnswerValue:
        """
        Traduce una entrada cruda con el comportamiento del campo y la guarda.

        Raises:
            UnsupportedFieldType: si el campo no tiene comportamiento
            ValueError: si la entrada no puede interpretarse
        """
        self._require(field_id)
        fld = self.schema.get_field(field_id)
        value = resolve(fld.type).coerce(fld, raw)
        self.set_value(field_id, value)
        return value

    def validate(self, field_ids: Iterable[str]) -> ValidationOutcome:
        """
        Ejecuta las reglas de los campos indicados y actualiza sus errores.

        Solo se modifican los errores de los ids recibidos; el resto queda
        intacto.
        """
        ids = sorted(set(field_ids), key=lambda fid: self._order.get(fid, len(self._order)))
        for fid in ids:
            self._require(fid)

        results: dict[str, Optional[str]] = {}
        for fid in ids:
            valid, message = self._rules[fid](self._answers[fid])
            results[fid] = None if valid else message
            self._errors[fid] = results[fid]

        outcome = ValidationOutcome(
            all_valid=all(msg is None for msg in results.values()),
            errors=results,
        )
        logger.debug("Validated %s -> %s", ids, "ok" if outcome.all_valid else outcome.failing)
        return outcome

    # -------------------------------------------------------------------------
    # Lectura
    # -------------------------------------------------------------------------

    def errors_for(self, field_ids: Iterable[str]) -> list[str]:
        """Ids con error entre los indicados, en orden de esquema."""
        ids = [fid for fid in set(field_ids) if self._errors.get(fid)]
        return sorted(ids, key=lambda fid: self._order[fid])

    def value(self, field_id: str) -> AnswerValue:
        """Valor actual de un campo."""
        self._require(field_id)
        return self._answers[field_id]

    def error(self, field_id: str) -> Optional[str]:
        """Error actual de un campo (None si es válido o no se validó)."""
        self._require(field_id)
        return self._errors.get(field_id)

    @property
    def answers(self) -> dict[str, AnswerValue]:
        """Copia de todas las respuestas."""
        if self._answers is None:
            return {}
        return dict(self._answers)

    @property
    def errors(self) -> dict[str, Optional[str]]:
        """Copia de todos los errores."""
        return dict(self._errors)
