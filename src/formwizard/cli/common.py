"""
Utilidades comunes para los comandos CLI: ajustes, almacén de envíos y
manejo de errores.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console

from formwizard.config import Settings, load_settings
from formwizard.errors import FormWizardError
from formwizard.logs import configure_logging
from formwizard.storage import JsonSubmissionStore
from formwizard.cli.theme import print_error, set_theme

# Instancias globales (se crean al primer uso)
_settings: Optional[Settings] = None
_submission_store: Optional[JsonSubmissionStore] = None


def init_settings(config_path: Optional[Path] = None, verbose: bool = False) -> Settings:
    """Carga los ajustes y configura logging y tema."""
    global _settings, _submission_store
    with cli_errors():
        _settings = load_settings(config_path)
    _submission_store = None

    configure_logging("DEBUG" if verbose else _settings.log_level, console=Console(stderr=True))
    set_theme(_settings.theme)
    return _settings


def get_settings() -> Settings:
    """Obtiene los ajustes actuales (cargándolos si hace falta)."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_submission_store() -> JsonSubmissionStore:
    """Obtiene o crea el almacén de envíos."""
    global _submission_store
    if _submission_store is None:
        _submission_store = JsonSubmissionStore(get_settings().submissions_path)
    return _submission_store


@contextmanager
def cli_errors() -> Iterator[None]:
    """Convierte errores de formwizard en un mensaje y código de salida 1."""
    try:
        yield
    except FormWizardError as exc:
        print_error(str(exc))
        raise typer.Exit(1)
