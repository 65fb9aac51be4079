"""
Prompts de terminal por tipo de campo.

Cada FieldView trae su estrategia de interacción (input_kind) resuelta por
el registro; aquí se traduce esa estrategia a un prompt de questionary.
Los prompts solo verifican que la entrada sea interpretable; las reglas de
validación se ejecutan al avanzar de sección.
"""

from datetime import date
from typing import Any, Optional

import questionary

from formwizard.core.registry import FieldView
from formwizard.cli.wizard.styles import get_wizard_style

# Valor centinela cuando el usuario interrumpe un prompt (Ctrl+C)
CANCELLED = object()

NONE_CHOICE = "(none)"


def _question_text(view: FieldView) -> str:
    fld = view.field
    text = fld.label + (" *" if fld.required else "")
    if view.error:
        text += f"  [{view.error}]"
    return text


def _coercion_validator(view: FieldView):
    """Validador de questionary que solo comprueba que la entrada se pueda interpretar."""
    def validate(raw: str):
        try:
            view.behavior.coerce(view.field, raw)
        except ValueError as exc:
            return str(exc)
        return True
    return validate


def _ask_text(view: FieldView, multiline: bool = False) -> Any:
    current = view.value if isinstance(view.value, str) else ""
    instruction = view.field.placeholder or None
    if multiline:
        instruction = (instruction + " " if instruction else "") + "(Esc then Enter to finish)"
    return questionary.text(
        _question_text(view),
        default=current,
        multiline=multiline,
        instruction=instruction,
        style=get_wizard_style(),
    ).ask()


def _ask_date(view: FieldView) -> Any:
    current = view.value.isoformat() if isinstance(view.value, date) else ""
    return questionary.text(
        _question_text(view),
        default=current,
        instruction=view.field.placeholder or "YYYY-MM-DD",
        validate=_coercion_validator(view),
        style=get_wizard_style(),
    ).ask()


def _ask_choice(view: FieldView) -> Any:
    choices = [questionary.Choice(title=label, value=option_id) for option_id, label in view.options]
    if not view.field.required:
        choices.append(questionary.Choice(title=NONE_CHOICE, value=""))

    valid_values = [c.value for c in choices]
    default = view.value if view.value in valid_values else None

    ask = questionary.select if view.input_kind == "select" else questionary.rawselect
    return ask(
        _question_text(view),
        choices=choices,
        default=default,
        style=get_wizard_style(),
    ).ask()


def _ask_confirm(view: FieldView) -> Any:
    question = _question_text(view)
    if view.field.placeholder:
        question += f" ({view.field.placeholder})"
    return questionary.confirm(
        question,
        default=view.value is True,
        style=get_wizard_style(),
    ).ask()


def prompt_field(view: FieldView) -> Any:
    """
    Pide al usuario el valor de un campo.

    Returns:
        Entrada cruda (para FormSession.set_raw) o CANCELLED si el usuario
        interrumpió el prompt
    """
    kind = view.input_kind
    if kind == "multiline":
        answer = _ask_text(view, multiline=True)
    elif kind == "date":
        answer = _ask_date(view)
    elif kind in ("select", "radio"):
        answer = _ask_choice(view)
    elif kind == "confirm":
        answer = _ask_confirm(view)
    else:
        answer = _ask_text(view)

    return CANCELLED if answer is None else answer


def ask_action(can_retreat: bool, is_terminal: bool) -> Optional[str]:
    """
    Pregunta qué hacer al terminar de completar una sección.

    Returns:
        "next", "back", "edit", "cancel" o None si se interrumpió
    """
    choices = [
        questionary.Choice("Submit" if is_terminal else "Next", value="next"),
        questionary.Choice("Edit this section again", value="edit"),
    ]
    if can_retreat:
        choices.append(questionary.Choice("Previous", value="back"))
    choices.append(questionary.Choice("Cancel", value="cancel"))

    return questionary.select(
        "What next?",
        choices=choices,
        style=get_wizard_style(),
    ).ask()


def confirm_retry() -> bool:
    """Pregunta si se reintenta la entrega del envío."""
    answer = questionary.confirm(
        "Retry submission?",
        default=True,
        style=get_wizard_style(),
    ).ask()
    return bool(answer)
