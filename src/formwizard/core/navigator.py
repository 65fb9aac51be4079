"""
Navegador de secciones.

Máquina de estados sobre el índice de sección actual (0..N-1). Avanzar
exige que la sección actual valide; retroceder siempre se permite. Avanzar
desde la última sección no incrementa el índice: dispara el ensamblado del
registro de envío y cierra la navegación.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from formwizard.errors import SessionClosedError
from formwizard.models.identity import Identity
from formwizard.models.schema import FormSchema, FormSection
from formwizard.models.submission import SubmissionRecord
from formwizard.core.progress import progress
from formwizard.core.store import FormStateStore
from formwizard.core.submission import assemble

logger = logging.getLogger(__name__)


class AdvanceStatus(Enum):
    """Resultado de un intento de avance."""
    ADVANCED = "advanced"    # Se pasó a la siguiente sección
    BLOCKED = "blocked"      # La sección actual tiene errores
    SUBMITTED = "submitted"  # Última sección válida: registro ensamblado


@dataclass
class AdvanceResult:
    """Detalle de un intento de avance."""
    status: AdvanceStatus
    index: int  # Índice actual después del intento
    section_title: str
    error_ids: list[str] = field(default_factory=list)  # En orden declarado
    errors: dict[str, str] = field(default_factory=dict)
    message: str = ""
    record: Optional[SubmissionRecord] = None

    @property
    def blocked(self) -> bool:
        return self.status == AdvanceStatus.BLOCKED

    @property
    def first_error_id(self) -> Optional[str]:
        """Campo que debe recibir el foco para corregir."""
        return self.error_ids[0] if self.error_ids else None


class SectionNavigator:
    """Controlador de navegación entre secciones."""

    def __init__(
        self,
        schema: FormSchema,
        store: FormStateStore,
        identity: Optional[Identity] = None,
    ):
        self.schema = schema
        self.store = store
        self.identity = identity
        self._index = 0
        self._submitted = False

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return self.schema.n_sections

    @property
    def current_section(self) -> FormSection:
        return self.schema.sections[self._index]

    @property
    def is_terminal(self) -> bool:
        return self._index == self.total - 1

    @property
    def can_retreat(self) -> bool:
        return self._index > 0 and not self._submitted

    @property
    def submitted(self) -> bool:
        return self._submitted

    @property
    def progress(self) -> float:
        return progress(self._index, self.total)

    def advance(self) -> AdvanceResult:
        """
        Intenta avanzar validando exactamente los campos de la sección actual.

        Returns:
            AdvanceResult con estado ADVANCED, BLOCKED o SUBMITTED
        """
        if self._submitted:
            raise SessionClosedError("Form has already been submitted")

        section = self.current_section
        outcome = self.store.validate(section.field_ids)

        if not outcome.all_valid:
            error_ids = self.store.errors_for(section.field_ids)
            logger.warning(
                "Advance blocked in section %r: %s", section.title, ", ".join(error_ids)
            )
            return AdvanceResult(
                status=AdvanceStatus.BLOCKED,
                index=self._index,
                section_title=section.title,
                error_ids=error_ids,
                errors={fid: outcome.errors[fid] for fid in error_ids},
                message=f"Please fix the errors in the '{section.title}' section before proceeding.",
            )

        if not self.is_terminal:
            self._index += 1
            logger.debug("Advanced to section %d/%d", self._index + 1, self.total)
            return AdvanceResult(
                status=AdvanceStatus.ADVANCED,
                index=self._index,
                section_title=self.current_section.title,
            )

        record = assemble(self.schema, self.store.answers, self.identity)
        self._submitted = True
        return AdvanceResult(
            status=AdvanceStatus.SUBMITTED,
            index=self._index,
            section_title=section.title,
            message="Form submitted",
            record=record,
        )

    def retreat(self) -> bool:
        """
        Vuelve a la sección anterior sin validar.

        Returns:
            True si retrocedió, False si ya estaba en la primera sección
        """
        if self._submitted:
            raise SessionClosedError("Form has already been submitted")
        if self._index == 0:
            logger.debug("Retreat ignored: already at first section")
            return False
        self._index -= 1
        logger.debug("Retreated to section %d/%d", self._index + 1, self.total)
        return True
