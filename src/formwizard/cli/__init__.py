"""
CLI de formwizard - Asistente de formularios en terminal.

Comandos:
- fill: Completar un formulario sección por sección
- check: Verificar un esquema de formulario
- submissions: Listar envíos guardados
- show: Mostrar un envío guardado
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from formwizard.cli.commands import form_check, form_fill, submission_show, submissions_list
from formwizard.cli.common import init_settings

# Crear aplicación principal
app = typer.Typer(
    name="formwizard",
    help="Asistente de formularios por secciones con validación.",
    no_args_is_help=True,
)

app.command("fill")(form_fill)
app.command("check")(form_check)
app.command("submissions")(submissions_list)
app.command("show")(submission_show)


@app.callback()
def main(
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Archivo de configuración YAML")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Mostrar logs de depuración")] = False,
):
    """
    formwizard - Completa formularios declarativos desde la terminal.
    """
    init_settings(config, verbose)


__all__ = [
    "app",
]
