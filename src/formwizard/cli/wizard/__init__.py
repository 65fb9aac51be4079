"""
Asistente interactivo para completar formularios en terminal.

Estructura:
- styles.py: Estilo de questionary según el tema
- prompts.py: Prompt por estrategia de interacción del campo
- steps.py: Paso por sección y controlador de navegación
"""

from formwizard.cli.wizard.steps import FormWizard, SectionStep, StepResult

__all__ = ["FormWizard", "SectionStep", "StepResult"]
