"""
Comandos de formulario: fill, check, submissions, show.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from formwizard.models.identity import Identity
from formwizard.session import FormSession
from formwizard.sources import FileSchemaSource
from formwizard.cli.wizard import FormWizard
from formwizard.cli.common import cli_errors, get_settings, get_submission_store
from formwizard.cli.theme import (
    print_header,
    print_field,
    print_success,
    print_info,
    print_error,
    print_schema_table,
    print_submissions_table,
    print_record_table,
)


def form_fill(
    schema: Annotated[Optional[Path], typer.Argument(help="Archivo o directorio de esquemas")] = None,
    roll_number: Annotated[str, typer.Option("--roll-number", "-r", help="Identificador de quien responde")] = "anonymous",
    name: Annotated[str, typer.Option("--name", "-n", help="Nombre de quien responde")] = "",
):
    """
    Completa un formulario de forma interactiva, sección por sección.

    Ejemplo:
        formwizard fill registro.json --roll-number 42 --name "Ana"
    """
    location = schema or get_settings().schemas_path
    identity = Identity(roll_number=roll_number, name=name)
    session = FormSession(
        FileSchemaSource(location),
        identity=identity,
        sink=get_submission_store(),
    )

    with cli_errors():
        loaded = asyncio.run(session.load())

    print_header(loaded.title, f"Version: {loaded.version}" if loaded.version else None)

    with cli_errors():
        record = FormWizard(session).run()

    if record is None:
        raise typer.Exit(1)

    print_success("Form submitted!")
    print_field("Submission", record.id)
    print_field("Fields", record.n_answers)
    print_field("Saved to", get_submission_store().submissions_dir / f"{record.id}.json")


def form_check(
    schema: Annotated[Path, typer.Argument(help="Archivo de esquema JSON o YAML")],
):
    """
    Verifica la integridad de un esquema y muestra sus secciones y campos.

    Ejemplo:
        formwizard check registro.yaml
    """
    with cli_errors():
        loaded = asyncio.run(FileSchemaSource(schema).fetch_schema(None))

    print_schema_table(loaded)
    n_fields = len(loaded.field_ids())
    print_success(f"Schema OK: {loaded.n_sections} sections, {n_fields} fields")


def submissions_list():
    """Lista los envíos guardados."""
    submissions = get_submission_store().list_submissions()
    if not submissions:
        print_info("No submissions saved yet.")
        return
    print_submissions_table(submissions)


def submission_show(
    submission_id: Annotated[str, typer.Argument(help="ID del envío (o prefijo)")],
):
    """Muestra las respuestas de un envío guardado."""
    with cli_errors():
        record = get_submission_store().get_record(submission_id)
    if record is None:
        print_error(f"Submission not found: {submission_id}")
        raise typer.Exit(1)

    print_header(record.form_title or record.form_id, f"Submission {record.id}")
    print_field("Form", record.form_id)
    print_field("Version", record.version or "-")
    print_field("Date", record.timestamp[:19].replace("T", " "))
    if record.identity is not None:
        print_field("Roll number", record.identity.roll_number)
        if record.identity.name:
            print_field("Name", record.identity.name)
    print_record_table(record.answers)
