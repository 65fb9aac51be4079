"""
Funciones que imprimen directamente a la consola.
"""

from rich.panel import Panel
from rich.text import Text
from rich import box

from formwizard.cli.theme.palette import get_console, get_palette


def print_header(text: str, subtitle: str = None) -> None:
    """Imprime un encabezado."""
    console = get_console()
    p = get_palette()
    content = Text(text, style=f"bold {p.primary}")
    if subtitle:
        content.append(f"\n{subtitle}", style=p.muted)

    console.print(Panel(
        content,
        border_style=p.border,
        box=box.ROUNDED,
        padding=(0, 2),
    ))


def print_step(step_num: int, total: int, title: str, percentage: float) -> None:
    """Imprime indicador de sección con barra de progreso visual."""
    console = get_console()
    p = get_palette()

    bar_width = 30
    filled_width = int(round(percentage / 100 * bar_width))
    empty_width = bar_width - filled_width

    progress_line = Text()
    progress_line.append("█" * filled_width, style=p.primary)
    progress_line.append("░" * empty_width, style=p.muted)
    progress_line.append(f"  {percentage:.0f}%", style=p.muted)

    step_title = Text()
    step_title.append(f" Section {step_num} of {total}", style=f"bold {p.secondary}")

    panel = Panel(
        progress_line,
        title=step_title,
        subtitle=Text(title, style=f"italic {p.muted}"),
        subtitle_align="left",
        title_align="left",
        border_style=p.border,
        box=box.ROUNDED,
        padding=(0, 1),
        width=50,
    )

    console.print()
    console.print(panel)


def print_field(label: str, value, indent: int = 2) -> None:
    """Imprime una etiqueta con su valor."""
    console = get_console()
    p = get_palette()
    text = Text(" " * indent)
    text.append(f"{label}: ", style=p.label)
    text.append(str(value), style=f"bold {p.value}")
    console.print(text)


def print_success(text: str) -> None:
    """Imprime mensaje de éxito."""
    get_console().print(Text(f"✓ {text}", style=f"bold {get_palette().success}"))


def print_warning(text: str) -> None:
    """Imprime advertencia."""
    get_console().print(Text(f"! {text}", style=get_palette().warning))


def print_error(text: str) -> None:
    """Imprime error."""
    get_console().print(Text(f"✗ {text}", style=f"bold {get_palette().error}"))


def print_info(text: str) -> None:
    """Imprime información."""
    get_console().print(Text(text, style=get_palette().info))


def print_note(text: str) -> None:
    """Imprime una nota atenuada."""
    get_console().print(Text(f"  {text}", style=f"italic {get_palette().muted}"))
