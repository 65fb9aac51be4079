"""
Configuración de formwizard.

Los ajustes se leen de un archivo YAML opcional. Orden de búsqueda:
1. Ruta pasada explícitamente
2. Variable de entorno FORMWIZARD_CONFIG
3. ~/.formwizard/config.yaml

Si no hay archivo se usan los valores por defecto.

Ejemplo:
```yaml
data_dir: ~/formularios
schemas_dir: ~/formularios/esquemas
log_level: info
theme: nord
```
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from formwizard.errors import ConfigError

CONFIG_ENV_VAR = "FORMWIZARD_CONFIG"
DEFAULT_DATA_DIR = Path.home() / ".formwizard"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
THEMES = ("default", "nord", "minimal")


class Settings(BaseModel):
    """Ajustes de la herramienta."""
    data_dir: Path = Field(default=DEFAULT_DATA_DIR, description="Directorio base de datos")
    schemas_dir: Optional[Path] = Field(None, description="Directorio de esquemas")
    submissions_dir: Optional[Path] = Field(None, description="Directorio de envíos")
    log_level: str = Field(default="WARNING", description="Nivel de logging")
    theme: str = Field(default="default", description="Tema de colores de la CLI")

    @field_validator("data_dir", "schemas_dir", "submissions_dir")
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level debe ser uno de {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        theme = v.lower()
        if theme not in THEMES:
            raise ValueError(f"theme debe ser uno de {', '.join(THEMES)}")
        return theme

    @property
    def schemas_path(self) -> Path:
        """Directorio de esquemas (default: <data_dir>/schemas)."""
        return self.schemas_dir or self.data_dir / "schemas"

    @property
    def submissions_path(self) -> Path:
        """Directorio de envíos (default: <data_dir>/submissions)."""
        return self.submissions_dir or self.data_dir / "submissions"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def default_config_path() -> Path:
    """Ruta del archivo de configuración según entorno."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_DATA_DIR / "config.yaml"


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Carga los ajustes desde YAML.

    Raises:
        ConfigError: si el archivo existe pero no es válido
    """
    config_path = Path(path).expanduser() if path else default_config_path()
    if not config_path.exists():
        if path:
            raise ConfigError(f"Config file not found: {config_path}")
        return Settings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read config file {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {config_path}: {exc}") from exc
