"""
Modelos del esquema de formulario.

Un FormSchema contiene secciones ordenadas y cada sección contiene campos
tipados con metadatos de validación. El esquema es inmutable una vez cargado.

Los nombres aceptan tanto snake_case como los alias camelCase del formato
de transporte (formTitle, fieldId, minLength, dataTestId, ...).
"""

from datetime import date
from enum import Enum
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from formwizard.errors import SchemaIntegrityError, UnknownFieldError


# Valor de una respuesta: ausente, texto, booleano o fecha
AnswerValue = Union[None, str, bool, date]


class FieldType(str, Enum):
    """Variantes de campo soportadas (conjunto cerrado)."""
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    TEXTAREA = "textarea"
    DATE = "date"
    DROPDOWN = "dropdown"
    RADIO = "radio"
    CHECKBOX = "checkbox"

    @classmethod
    def parse(cls, value: str) -> Optional["FieldType"]:
        """Convierte un string al tipo, o None si está fuera del conjunto."""
        try:
            return cls(value)
        except ValueError:
            return None


class _SchemaModel(BaseModel):
    """Base común: inmutable y con alias del formato de transporte."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class FieldOption(_SchemaModel):
    """Opción de un campo de selección (id + etiqueta)."""
    id: str = Field(..., alias="value", min_length=1)
    label: str
    test_id: Optional[str] = Field(None, alias="dataTestId")


class FieldValidation(_SchemaModel):
    """Metadatos de validación adicionales."""
    message: Optional[str] = None  # Mensaje personalizado para "requerido"


class FormField(_SchemaModel):
    """Un espacio de respuesta dentro de una sección."""
    id: str = Field(..., alias="fieldId", min_length=1)
    type: str  # Se valida contra FieldType en el registro, no aquí
    label: str
    placeholder: Optional[str] = None
    required: bool = False
    test_id: Optional[str] = Field(None, alias="dataTestId")
    validation: Optional[FieldValidation] = None
    options: tuple[FieldOption, ...] = ()
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)

    @property
    def kind(self) -> Optional[FieldType]:
        """Tipo normalizado, None si no pertenece al conjunto soportado."""
        return FieldType.parse(self.type)

    @property
    def required_message(self) -> str:
        """Mensaje de campo requerido (personalizado o por defecto)."""
        if self.validation and self.validation.message:
            return self.validation.message
        return f"{self.label} is required"

    def option_ids(self) -> list[str]:
        """Ids de las opciones declaradas, en orden."""
        return [opt.id for opt in self.options]

    def option_label(self, option_id: str) -> Optional[str]:
        """Etiqueta de una opción por su id."""
        for opt in self.options:
            if opt.id == option_id:
                return opt.label
        return None


class FormSection(_SchemaModel):
    """Grupo ordenado de campos que se valida como un paso."""
    id: Union[int, str] = Field(..., alias="sectionId")
    title: str
    description: Optional[str] = None
    fields: tuple[FormField, ...]

    @property
    def field_ids(self) -> list[str]:
        """Ids de los campos de la sección en orden declarado."""
        return [f.id for f in self.fields]


class FormSchema(_SchemaModel):
    """Descriptor raíz del formulario."""
    title: str = Field(..., alias="formTitle", min_length=1)
    identifier: str = Field(..., alias="formId")
    version: str = ""
    sections: tuple[FormSection, ...]

    @model_validator(mode="after")
    def _check_integrity(self) -> "FormSchema":
        problems = collect_integrity_problems(self)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    @property
    def n_sections(self) -> int:
        """Número de secciones del formulario."""
        return len(self.sections)

    def iter_fields(self) -> Iterator[FormField]:
        """Recorre todos los campos en orden de esquema."""
        for section in self.sections:
            yield from section.fields

    def field_ids(self) -> list[str]:
        """Todos los ids de campo en orden de esquema."""
        return [f.id for f in self.iter_fields()]

    def get_field(self, field_id: str) -> FormField:
        """Obtiene un campo por id."""
        for fld in self.iter_fields():
            if fld.id == field_id:
                return fld
        raise UnknownFieldError(field_id)


def collect_integrity_problems(schema: FormSchema) -> list[str]:
    """
    Revisa las invariantes estructurales del esquema.

    Returns:
        Lista de problemas encontrados (vacía si el esquema es válido)
    """
    # Import diferido: el registro depende de este módulo
    from formwizard.core.registry import resolve

    problems = []

    if not schema.sections:
        problems.append("form has no sections")

    seen: set[str] = set()
    for section in schema.sections:
        if not section.fields:
            problems.append(f"section '{section.title}' has no fields")

        for fld in section.fields:
            if fld.id in seen:
                problems.append(f"duplicate field id '{fld.id}'")
            seen.add(fld.id)

            kind = fld.kind
            requires_options = kind is not None and resolve(kind).requires_options
            if requires_options and not fld.options:
                problems.append(f"field '{fld.id}' of type '{fld.type}' has no options")
            elif kind is not None and not requires_options and fld.options:
                problems.append(f"field '{fld.id}' of type '{fld.type}' must not declare options")

            option_ids = fld.option_ids()
            if len(option_ids) != len(set(option_ids)):
                problems.append(f"field '{fld.id}' has duplicate option ids")

            if (
                fld.min_length is not None
                and fld.max_length is not None
                and fld.min_length > fld.max_length
            ):
                problems.append(f"field '{fld.id}' has minLength greater than maxLength")

    return problems


def _describe_validation_error(exc: ValidationError) -> list[str]:
    """Convierte errores de Pydantic en mensajes legibles."""
    problems = []
    for err in exc.errors():
        if err["type"] == "value_error" and not err["loc"]:
            problems.extend(str(err["ctx"]["error"]).split("; "))
            continue
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return problems


def load_schema(payload: Any) -> FormSchema:
    """
    Construye un FormSchema desde un payload deserializado.

    Acepta el objeto de formulario directamente o envuelto en
    {"message": ..., "form": {...}}.

    Raises:
        SchemaIntegrityError: si el payload no es un esquema bien formado
    """
    if isinstance(payload, FormSchema):
        return payload
    if not isinstance(payload, dict):
        raise SchemaIntegrityError([f"expected a mapping, got {type(payload).__name__}"])
    if "form" in payload and isinstance(payload["form"], dict):
        payload = payload["form"]

    try:
        return FormSchema.model_validate(payload)
    except ValidationError as exc:
        raise SchemaIntegrityError(_describe_validation_error(exc)) from exc
