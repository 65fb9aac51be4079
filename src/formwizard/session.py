"""
Sesión de llenado de un formulario.

Une la carga asíncrona del esquema con el motor (store + navegador) y expone
a la capa de presentación instantáneas de solo lectura y los puntos de
entrada advance / retreat / set_value.

La carga es la única operación que suspende. Mientras carga, la sesión no
acepta mutaciones ni navegación. Si la sesión se abandona durante la carga,
el esquema que llegue después se descarta.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from formwizard.errors import (
    FormWizardError,
    SchemaSourceError,
    SessionClosedError,
    SessionNotReady,
    SubmissionStoreError,
)
from formwizard.models.identity import Identity
from formwizard.models.schema import AnswerValue, FormSchema, FormSection
from formwizard.models.submission import SubmissionRecord
from formwizard.core.navigator import AdvanceResult, AdvanceStatus, SectionNavigator
from formwizard.core.registry import FieldView, dispatch
from formwizard.core.store import FormStateStore
from formwizard.sources import SchemaSource
from formwizard.storage import SubmissionSink

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Estado de la sesión."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    SUBMITTED = "submitted"
    ABANDONED = "abandoned"


@dataclass
class SessionSnapshot:
    """Vista de solo lectura de la sección actual."""
    form_title: str
    version: str
    section: FormSection
    section_index: int
    section_count: int
    fields: list[FieldView] = field(default_factory=list)
    answers: dict[str, AnswerValue] = field(default_factory=dict)
    errors: dict[str, Optional[str]] = field(default_factory=dict)
    progress: float = 0.0
    can_retreat: bool = False
    is_terminal: bool = False


class FormSession:
    """Sesión de un usuario completando un formulario."""

    def __init__(
        self,
        source: SchemaSource,
        identity: Optional[Identity] = None,
        sink: Optional[SubmissionSink] = None,
    ):
        self.source = source
        self.identity = identity
        self.sink = sink
        self.schema: Optional[FormSchema] = None
        self.store: Optional[FormStateStore] = None
        self.navigator: Optional[SectionNavigator] = None
        self.record: Optional[SubmissionRecord] = None
        self.load_error: Optional[FormWizardError] = None
        self._pending: Optional[AdvanceResult] = None  # Envío ensamblado sin entregar
        self._state = SessionState.IDLE
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state == SessionState.LOADING

    @property
    def submission_pending(self) -> bool:
        """True si el registro se ensambló pero el destino no lo recibió."""
        return self._pending is not None

    # -------------------------------------------------------------------------
    # Ciclo de vida
    # -------------------------------------------------------------------------

    async def load(self) -> Optional[FormSchema]:
        """
        Obtiene el esquema e inicializa el motor.

        Returns:
            El esquema cargado, o None si la sesión se abandonó mientras
            se esperaba la respuesta

        Raises:
            SchemaSourceError, SchemaIntegrityError: la carga falló (estado FAILED)
            asyncio.CancelledError: la carga se canceló (estado IDLE)
        """
        if self._state in (SessionState.SUBMITTED, SessionState.ABANDONED):
            raise SessionClosedError(f"Cannot load a session in state {self._state.value}")

        self._generation += 1
        generation = self._generation
        self._reset_engine()
        self._state = SessionState.LOADING

        try:
            schema = await self.source.fetch_schema(self.identity)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._state = SessionState.IDLE
                logger.info("Schema load cancelled")
            raise
        except Exception as exc:
            if generation != self._generation:
                logger.info("Ignoring schema load failure for an abandoned session: %s", exc)
                return None
            self._state = SessionState.FAILED
            logger.error("Schema load failed: %s", exc)
            if isinstance(exc, FormWizardError):
                self.load_error = exc
                raise
            self.load_error = SchemaSourceError(f"Schema source failed: {exc}")
            raise self.load_error from exc

        if generation != self._generation:
            logger.info("Discarding schema %s: session was abandoned", schema.identifier)
            return None

        self._start(schema)
        return schema

    def _start(self, schema: FormSchema) -> None:
        store = FormStateStore(schema)
        store.initialize()
        self.schema = schema
        self.store = store
        self.navigator = SectionNavigator(schema, store, self.identity)
        self.load_error = None
        self._state = SessionState.READY
        logger.info("Form %r v%s ready (%d sections)", schema.title, schema.version, schema.n_sections)

    def _reset_engine(self) -> None:
        self.schema = None
        self.store = None
        self.navigator = None
        self.record = None
        self._pending = None

    def abandon(self) -> None:
        """Termina la sesión (ej: logout); descarta cualquier carga en curso."""
        self._generation += 1
        self._reset_engine()
        self._state = SessionState.ABANDONED
        logger.info("Session abandoned")

    def _require_ready(self) -> None:
        if self._state == SessionState.READY:
            return
        if self._state in (SessionState.SUBMITTED, SessionState.ABANDONED):
            raise SessionClosedError(f"Session is {self._state.value}")
        raise SessionNotReady(f"Session is {self._state.value}; no form schema is loaded")

    def _require_editable(self) -> None:
        self._require_ready()
        if self._pending is not None:
            raise SessionClosedError("Form is submitted; retry advance() to deliver it")

    # -------------------------------------------------------------------------
    # Puntos de entrada
    # -------------------------------------------------------------------------

    def set_value(self, field_id: str, value: AnswerValue) -> None:
        """Asigna el valor de un campo (sin validar)."""
        self._require_editable()
        self.store.set_value(field_id, value)

    def set_raw(self, field_id: str, raw: Any) -> AnswerValue:
        """Asigna un valor a partir de una entrada cruda del usuario."""
        self._require_editable()
        return self.store.set_raw(field_id, raw)

    def advance(self) -> AdvanceResult:
        """
        Avanza a la siguiente sección o envía el formulario.

        La sesión pasa a SUBMITTED solo cuando el destino recibió el registro.
        Si la entrega falla, el registro queda pendiente y un nuevo advance()
        reintenta la entrega sin volver a validar.

        Raises:
            SubmissionStoreError: el destino no pudo recibir el registro
        """
        self._require_ready()
        result = self._pending or self.navigator.advance()

        if result.status == AdvanceStatus.SUBMITTED:
            self._pending = result
            self._deliver(result.record)
            self._pending = None
            self.record = result.record
            self._state = SessionState.SUBMITTED
        return result

    def _deliver(self, record: SubmissionRecord) -> None:
        if self.sink is None:
            return
        try:
            self.sink.submit(record)
        except FormWizardError:
            logger.error("Submission %s was not delivered", record.id)
            raise
        except Exception as exc:
            logger.error("Submission %s was not delivered: %s", record.id, exc)
            raise SubmissionStoreError(f"Could not submit {record.id}: {exc}") from exc

    def retreat(self) -> bool:
        """Vuelve a la sección anterior."""
        self._require_editable()
        return self.navigator.retreat()

    def snapshot(self) -> SessionSnapshot:
        """Instantánea de la sección actual para la capa de presentación."""
        self._require_ready()
        section = self.navigator.current_section
        ids = section.field_ids
        answers = self.store.answers
        errors = self.store.errors

        return SessionSnapshot(
            form_title=self.schema.title,
            version=self.schema.version,
            section=section,
            section_index=self.navigator.index,
            section_count=self.navigator.total,
            fields=[dispatch(fld, answers[fld.id], errors.get(fld.id)) for fld in section.fields],
            answers={fid: answers[fid] for fid in ids},
            errors={fid: errors.get(fid) for fid in ids},
            progress=self.navigator.progress,
            can_retreat=self.navigator.can_retreat,
            is_terminal=self.navigator.is_terminal,
        )
