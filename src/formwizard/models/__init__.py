"""
Modelos de datos de formwizard.

Este módulo contiene todos los modelos Pydantic utilizados por el motor.
"""

from formwizard.models.base import (
    IdentifiedModel,
    generate_id,
    generate_timestamp,
)
from formwizard.models.schema import (
    AnswerValue,
    FieldType,
    FieldOption,
    FieldValidation,
    FormField,
    FormSection,
    FormSchema,
    collect_integrity_problems,
    load_schema,
)
from formwizard.models.identity import Identity
from formwizard.models.submission import SubmissionRecord

__all__ = [
    # Clases base
    "IdentifiedModel",
    "generate_id",
    "generate_timestamp",
    # Esquema
    "AnswerValue",
    "FieldType",
    "FieldOption",
    "FieldValidation",
    "FormField",
    "FormSection",
    "FormSchema",
    "collect_integrity_problems",
    "load_schema",
    # Identidad y envío
    "Identity",
    "SubmissionRecord",
]
