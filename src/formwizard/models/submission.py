"""
Registro final de envío de un formulario.
"""

from typing import Any, Optional

from pydantic import Field

from formwizard.models.base import IdentifiedModel
from formwizard.models.identity import Identity
from formwizard.models.schema import AnswerValue


class SubmissionRecord(IdentifiedModel):
    """
    Mapa plano id de campo -> valor final, más metadatos del formulario.

    Cubre todos los campos del esquema, incluidos los opcionales que el
    usuario nunca tocó (con su valor por defecto).
    """

    form_id: str
    form_title: str = ""
    version: str = ""
    answers: dict[str, AnswerValue] = Field(default_factory=dict)
    identity: Optional[Identity] = None

    def to_payload(self) -> dict[str, Any]:
        """Diccionario serializable a JSON (fechas en ISO 8601)."""
        return self.model_dump(mode="json")

    @property
    def n_answers(self) -> int:
        """Número de campos en el registro."""
        return len(self.answers)
