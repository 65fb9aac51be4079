"""
Clases base para modelos Pydantic.

Proporciona ids cortos y timestamps para los registros que produce el motor.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


def generate_id() -> str:
    """Genera un ID corto único (8 caracteres)."""
    return str(uuid.uuid4())[:8]


def generate_timestamp() -> str:
    """Genera timestamp ISO actual."""
    return datetime.now().isoformat()


class IdentifiedModel(BaseModel):
    """
    Modelo base con ID y timestamp de creación.

    Útil para registros inmutables como los envíos de formulario.
    """

    id: str = Field(default_factory=generate_id)
    timestamp: str = Field(default_factory=generate_timestamp)
