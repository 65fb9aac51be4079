"""
Fuentes de esquemas de formulario.

El motor solo conoce la interfaz SchemaSource: una corrutina que, dada la
identidad de quien completa el formulario, entrega un FormSchema. Aquí se
incluyen una fuente basada en archivos JSON/YAML y una fuente en memoria.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import yaml

from formwizard.errors import SchemaSourceError
from formwizard.models.identity import Identity
from formwizard.models.schema import FormSchema, load_schema

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".json", ".yaml", ".yml")


class SchemaSource(ABC):
    """Colaborador externo que entrega el esquema para una identidad."""

    @abstractmethod
    async def fetch_schema(self, identity: Optional[Identity]) -> FormSchema:
        """
        Obtiene el esquema.

        Raises:
            SchemaSourceError: fallo de transporte o de formato
            SchemaIntegrityError: el contenido no es un esquema bien formado
        """


def read_schema_file(path: Path) -> Any:
    """
    Lee y deserializa un archivo de esquema (JSON o YAML según extensión).

    Raises:
        SchemaSourceError: si el archivo no existe o no se puede parsear
    """
    path = Path(path)
    if not path.exists():
        raise SchemaSourceError(f"Schema file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SchemaSourceError(f"Could not read schema file {path}: {exc}") from exc


class FileSchemaSource(SchemaSource):
    """
    Esquemas almacenados en disco.

    Si `location` es un archivo, se usa siempre ese archivo. Si es un
    directorio, se busca `<roll_number>.json|yaml|yml` y luego `default.*`.
    """

    def __init__(self, location: Path):
        self.location = Path(location)

    def resolve_path(self, identity: Optional[Identity]) -> Path:
        """Determina el archivo de esquema para una identidad."""
        if not self.location.is_dir():
            return self.location

        stems = ["default"]
        if identity is not None:
            stems.insert(0, identity.roll_number)

        for stem in stems:
            # El nombre no puede salir del directorio de esquemas
            if Path(stem).name != stem or stem in (".", ".."):
                raise SchemaSourceError(f"Invalid schema name: {stem!r}")
            for suffix in SCHEMA_SUFFIXES:
                candidate = self.location / f"{stem}{suffix}"
                if candidate.exists():
                    return candidate

        raise SchemaSourceError(
            f"No schema for {identity.roll_number if identity else 'default'} in {self.location}"
        )

    async def fetch_schema(self, identity: Optional[Identity]) -> FormSchema:
        path = self.resolve_path(identity)
        logger.info("Loading form schema from %s", path)
        payload = await asyncio.to_thread(read_schema_file, path)
        return load_schema(payload)


class StaticSchemaSource(SchemaSource):
    """
    Esquema en memoria.

    Si se pasa `gate`, la entrega espera a que el evento se active (útil para
    simular una carga lenta).
    """

    def __init__(self, payload: Any, gate: Optional[asyncio.Event] = None):
        self.payload = payload
        self.gate = gate
        self.calls = 0

    async def fetch_schema(self, identity: Optional[Identity]) -> FormSchema:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        return load_schema(self.payload)
