"""
Pasos del asistente en terminal.

Cada sección del formulario es un paso. El paso pide los campos de la
sección y luego la acción a tomar; el runner traduce esa acción a
advance / retreat sobre la FormSession.
"""

import logging
from enum import Enum
from typing import Optional

from formwizard.errors import SubmissionStoreError, UnsupportedFieldType
from formwizard.models.submission import SubmissionRecord
from formwizard.core.navigator import AdvanceResult, AdvanceStatus
from formwizard.session import FormSession
from formwizard.cli.theme import (
    get_console,
    print_step,
    print_error,
    print_field,
    print_warning,
    print_note,
    print_info,
    create_section_table,
)
from formwizard.cli.wizard.prompts import CANCELLED, ask_action, confirm_retry, prompt_field

logger = logging.getLogger(__name__)


class StepResult(Enum):
    """Resultado de un paso del asistente."""
    NEXT = "next"       # Validar y continuar
    BACK = "back"       # Volver a la sección anterior
    CANCEL = "cancel"   # Cancelar el asistente


class SectionStep:
    """Paso que completa los campos de la sección actual."""

    def __init__(self, session: FormSession, focus_id: Optional[str] = None):
        self.session = session
        self.focus_id = focus_id

    def show(self) -> None:
        """Muestra la tabla de la sección con valores y errores actuales."""
        snap = self.session.snapshot()
        if snap.section.description:
            print_note(snap.section.description)
        get_console().print(create_section_table(snap.section, snap.fields))

    def fill_fields(self) -> bool:
        """
        Pide cada campo de la sección, empezando por el campo con foco.

        Returns:
            False si el usuario interrumpió un prompt
        """
        views = self.session.snapshot().fields
        start = 0
        if self.focus_id is not None:
            ids = [v.field.id for v in views]
            start = ids.index(self.focus_id) if self.focus_id in ids else 0

        for view in views[start:]:
            if view.unsupported:
                print_error(f"{view.field.label}: {view.error}")
                continue

            while True:
                raw = prompt_field(view)
                if raw is CANCELLED:
                    return False
                try:
                    self.session.set_raw(view.field.id, raw)
                    break
                except (ValueError, UnsupportedFieldType) as exc:
                    print_error(str(exc))

        return True

    def execute(self) -> StepResult:
        """Ejecuta el paso y retorna el resultado."""
        self.show()
        while True:
            if not self.fill_fields():
                return StepResult.CANCEL

            snap = self.session.snapshot()
            action = ask_action(snap.can_retreat, snap.is_terminal)
            if action is None or action == "cancel":
                return StepResult.CANCEL
            if action == "back":
                return StepResult.BACK
            if action == "next":
                return StepResult.NEXT
            # "edit": volver a recorrer la sección desde el inicio
            self.focus_id = None


class FormWizard:
    """Controlador de navegación del asistente sobre una sesión cargada."""

    def __init__(self, session: FormSession):
        self.session = session

    def _advance(self) -> Optional[AdvanceResult]:
        """Avanza; si la entrega del envío falla, ofrece reintentar."""
        while True:
            try:
                return self.session.advance()
            except SubmissionStoreError as exc:
                print_error(str(exc))
                if not confirm_retry():
                    print_warning("Submission was not saved")
                    return None

    def run(self) -> Optional[SubmissionRecord]:
        """
        Ejecuta el asistente hasta enviar o cancelar.

        Returns:
            El registro de envío, o None si se canceló
        """
        focus_id: Optional[str] = None

        while True:
            snap = self.session.snapshot()
            print_step(snap.section_index + 1, snap.section_count, snap.section.title, snap.progress)

            result = SectionStep(self.session, focus_id=focus_id).execute()
            focus_id = None

            if result == StepResult.CANCEL:
                print_warning("Wizard cancelled")
                self.session.abandon()
                return None

            if result == StepResult.BACK:
                if self.session.retreat():
                    print_info("<< Back to the previous section...")
                else:
                    print_note("Already at the first section")
                continue

            outcome = self._advance()
            if outcome is None:
                return None

            if outcome.status == AdvanceStatus.BLOCKED:
                print_error(outcome.message)
                for fid in outcome.error_ids:
                    fld = self.session.schema.get_field(fid)
                    print_field(fld.label, outcome.errors[fid])
                focus_id = outcome.first_error_id
                continue

            if outcome.status == AdvanceStatus.SUBMITTED:
                return outcome.record
