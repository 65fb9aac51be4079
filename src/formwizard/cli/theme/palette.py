"""
Definicion de paletas de colores y gestion de temas.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum

from rich.console import Console
from rich.theme import Theme


class ThemeName(Enum):
    """Temas disponibles."""
    DEFAULT = "default"
    NORD = "nord"
    MINIMAL = "minimal"


@dataclass
class ColorPalette:
    """Paleta de colores para un tema."""
    # Colores principales
    primary: str      # Color principal (títulos, destacados)
    secondary: str    # Color secundario (subtítulos)
    accent: str       # Color de acento (valores ingresados)

    # Colores semánticos
    success: str      # Éxito, completado
    warning: str      # Advertencia
    error: str        # Error
    info: str         # Información
    muted: str        # Texto secundario/atenuado

    # Datos
    label: str        # Etiquetas de campo
    value: str        # Valores de respuesta

    # Bordes
    border: str       # Color de bordes


# Tema por defecto - verde azulado y ámbar
THEME_DEFAULT = ColorPalette(
    primary="#5fafaf",      # Verde azulado
    secondary="#87afd7",    # Azul claro
    accent="#d787af",       # Rosa apagado
    success="#87d7af",      # Verde menta
    warning="#d7af5f",      # Ámbar
    error="#d75f5f",        # Rojo suave
    info="#87afd7",         # Azul info
    muted="#8a8a8a",        # Gris
    label="#bcbcbc",        # Gris claro
    value="#ffd787",        # Amarillo claro
    border="#585858",       # Gris oscuro
)

# Tema Nord - colores fríos
THEME_NORD = ColorPalette(
    primary="#88c0d0",
    secondary="#81a1c1",
    accent="#b48ead",
    success="#a3be8c",
    warning="#ebcb8b",
    error="#bf616a",
    info="#5e81ac",
    muted="#4c566a",
    label="#d8dee9",
    value="#d08770",
    border="#3b4252",
)

# Tema Minimal - escala de grises, errores en rojo
THEME_MINIMAL = ColorPalette(
    primary="#eeeeee",
    secondary="#bcbcbc",
    accent="#eeeeee",
    success="#bcbcbc",
    warning="#d0d0d0",
    error="#ff5f5f",
    info="#a8a8a8",
    muted="#6c6c6c",
    label="#9e9e9e",
    value="#ffffff",
    border="#4e4e4e",
)

THEMES = {
    ThemeName.DEFAULT: THEME_DEFAULT,
    ThemeName.NORD: THEME_NORD,
    ThemeName.MINIMAL: THEME_MINIMAL,
}


class CLITheme:
    """Gestor de tema para la CLI."""

    _palette: ColorPalette = THEME_DEFAULT
    _console: Optional[Console] = None

    @classmethod
    def set_theme(cls, theme: ThemeName) -> None:
        """Establece el tema activo."""
        cls._palette = THEMES.get(theme, THEME_DEFAULT)
        cls._console = None  # Recrear console con el nuevo tema

    @classmethod
    def get_palette(cls) -> ColorPalette:
        """Obtiene la paleta de colores actual."""
        return cls._palette

    @classmethod
    def get_console(cls) -> Console:
        """Obtiene la consola Rich con el tema aplicado."""
        if cls._console is None:
            p = cls._palette
            custom_theme = Theme({
                "primary": p.primary,
                "secondary": p.secondary,
                "accent": p.accent,
                "success": p.success,
                "warning": p.warning,
                "error": p.error,
                "info": p.info,
                "muted": p.muted,
                "label": p.label,
                "value": f"bold {p.value}",
                "title": f"bold {p.primary}",
            })
            cls._console = Console(theme=custom_theme)
        return cls._console


def get_console() -> Console:
    """Obtiene la consola Rich con tema aplicado."""
    return CLITheme.get_console()


def get_palette() -> ColorPalette:
    """Obtiene la paleta de colores actual."""
    return CLITheme.get_palette()


def set_theme(name: str) -> None:
    """Activa un tema por nombre ("default", "nord", "minimal")."""
    CLITheme.set_theme(ThemeName(name))
