"""
Funciones para crear e imprimir tablas Rich.
"""

from typing import Optional

from rich.table import Table
from rich.text import Text
from rich import box

from formwizard.cli.theme.palette import get_console, get_palette
from formwizard.core.registry import FieldView, dispatch
from formwizard.models.schema import FormSchema, FormSection


def _base_table(title: Optional[str] = None) -> Table:
    p = get_palette()
    return Table(
        title=title,
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        show_header=True,
        padding=(0, 1),
        expand=False,
    )


def create_section_table(section: FormSection, views: list[FieldView]) -> Table:
    """Tabla de campos de una sección con valor y estado actual."""
    p = get_palette()

    table = _base_table(section.title)
    table.add_column("#", justify="right", width=3)
    table.add_column("Field", justify="left", width=28)
    table.add_column("Value", justify="left", width=28)
    table.add_column("Status", justify="left")

    for idx, view in enumerate(views):
        fld = view.field
        label = fld.label + ("*" if fld.required else "")

        if view.unsupported:
            status = Text(view.error or "unsupported", style=p.error)
            value = Text("-", style=p.muted)
        elif view.error:
            status = Text(view.error, style=p.error)
            value = Text(view.display_value, style=p.muted)
        elif view.display_value != "-":
            status = Text("ok", style=p.success)
            value = Text(view.display_value, style=f"bold {p.accent}")
        else:
            status = Text("required" if fld.required else "optional", style=p.muted)
            value = Text(view.display_value, style=p.muted)

        table.add_row(
            Text(str(idx + 1), style=p.muted),
            Text(label, style="bold" if fld.required else p.label),
            value,
            status,
        )

    return table


def create_schema_table(schema: FormSchema) -> Table:
    """Tabla resumen de todas las secciones y campos de un esquema."""
    p = get_palette()

    table = _base_table(f"{schema.title} (v{schema.version})" if schema.version else schema.title)
    table.add_column("Section", justify="left")
    table.add_column("Field id", justify="left")
    table.add_column("Type", justify="left")
    table.add_column("Label", justify="left")
    table.add_column("Rules", justify="left")

    for section in schema.sections:
        for i, fld in enumerate(section.fields):
            view = dispatch(fld, None)
            rules = []
            if fld.required:
                rules.append("required")
            if fld.min_length is not None:
                rules.append(f"min {fld.min_length}")
            if fld.max_length is not None:
                rules.append(f"max {fld.max_length}")
            if fld.options:
                rules.append(f"{len(fld.options)} options")

            type_text = Text(fld.type, style=p.error if view.unsupported else p.accent)
            table.add_row(
                Text(section.title if i == 0 else "", style=p.secondary),
                fld.id,
                type_text,
                fld.label,
                Text(", ".join(rules) or "-", style=p.muted),
            )

    return table


def print_schema_table(schema: FormSchema) -> None:
    """Imprime la tabla resumen de un esquema."""
    get_console().print(create_schema_table(schema))


def print_submissions_table(submissions: list[dict]) -> None:
    """Imprime la lista de envíos guardados."""
    p = get_palette()

    table = _base_table("Submissions")
    table.add_column("ID", style=f"bold {p.accent}")
    table.add_column("Form")
    table.add_column("Version")
    table.add_column("Roll number")
    table.add_column("Fields", justify="right")
    table.add_column("Date", style=p.muted)

    for s in submissions:
        table.add_row(
            s["id"],
            s["form_title"] or s["form_id"],
            s["version"],
            s["roll_number"] or "-",
            str(s["n_answers"]),
            s["timestamp"][:16].replace("T", " "),
        )

    get_console().print(table)


def print_record_table(answers: dict) -> None:
    """Imprime las respuestas de un registro de envío."""
    p = get_palette()

    table = _base_table("Answers")
    table.add_column("Field id", style=p.label)
    table.add_column("Value", style=f"bold {p.value}")

    for fid, value in answers.items():
        if value is None or value == "":
            shown = "-"
        elif value is True:
            shown = "Yes"
        elif value is False:
            shown = "No"
        else:
            shown = str(value)
        table.add_row(fid, shown)

    get_console().print(table)
