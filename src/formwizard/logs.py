"""
Configuración de logging para la CLI.

Los módulos de la librería solo usan logging.getLogger(__name__); quien
ejecuta la herramienta instala el handler.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "formwizard"


def configure_logging(level: Union[int, str] = logging.WARNING, console: Optional[Console] = None) -> logging.Logger:
    """
    Instala un RichHandler en el logger raíz del paquete.

    Llamarlo de nuevo reemplaza el handler anterior.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console,
        show_path=False,
        show_time=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    logger.propagate = False
    return logger
