"""
Motor del asistente de formularios.

- registry: Tipos de campo, comportamientos y despacho
- checks: Chequeos individuales de validación
- rules: Compilador de reglas de validación
- store: Estado de respuestas y errores
- navigator: Navegación entre secciones
- progress: Porcentaje de avance
- submission: Ensamblado del registro final
"""

from formwizard.core.registry import (
    FieldBehavior,
    FieldView,
    dispatch,
    register_behavior,
    registered_types,
    resolve,
)
from formwizard.core.checks import Check
from formwizard.core.rules import CompiledRule, compile_rule, compile_rules, is_empty
from formwizard.core.store import FormStateStore, ValidationOutcome
from formwizard.core.navigator import AdvanceResult, AdvanceStatus, SectionNavigator
from formwizard.core.progress import progress
from formwizard.core.submission import assemble

__all__ = [
    # registry
    "FieldBehavior",
    "FieldView",
    "dispatch",
    "register_behavior",
    "registered_types",
    "resolve",
    # checks / rules
    "Check",
    "CompiledRule",
    "compile_rule",
    "compile_rules",
    "is_empty",
    # store
    "FormStateStore",
    "ValidationOutcome",
    # navigator
    "AdvanceResult",
    "AdvanceStatus",
    "SectionNavigator",
    # progress / submission
    "progress",
    "assemble",
]
