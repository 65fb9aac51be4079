"""
Sistema de temas para la interfaz CLI de formwizard.

- palette: Paletas y gestión de temas (CLITheme, ColorPalette)
- printing: Funciones que imprimen directamente a consola
- tables: Tablas Rich de secciones, esquemas y envíos
"""

from formwizard.cli.theme.palette import (
    ThemeName,
    ColorPalette,
    THEMES,
    CLITheme,
    get_console,
    get_palette,
    set_theme,
)
from formwizard.cli.theme.printing import (
    print_header,
    print_step,
    print_field,
    print_success,
    print_warning,
    print_error,
    print_info,
    print_note,
)
from formwizard.cli.theme.tables import (
    create_section_table,
    create_schema_table,
    print_schema_table,
    print_submissions_table,
    print_record_table,
)

__all__ = [
    # palette
    "ThemeName",
    "ColorPalette",
    "THEMES",
    "CLITheme",
    "get_console",
    "get_palette",
    "set_theme",
    # printing
    "print_header",
    "print_step",
    "print_field",
    "print_success",
    "print_warning",
    "print_error",
    "print_info",
    "print_note",
    # tables
    "create_section_table",
    "create_schema_table",
    "print_schema_table",
    "print_submissions_table",
    "print_record_table",
]
