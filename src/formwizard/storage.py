"""
Almacenamiento de registros de envío.

El motor termina al producir el SubmissionRecord; el envío lo realiza un
SubmissionSink externo. JsonSubmissionStore guarda cada registro como un
archivo JSON en disco.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from formwizard.errors import SubmissionStoreError
from formwizard.models.submission import SubmissionRecord

logger = logging.getLogger(__name__)


class SubmissionSink(ABC):
    """Destino externo de los registros de envío."""

    @abstractmethod
    def submit(self, record: SubmissionRecord) -> Any:
        """Entrega el registro y retorna el resultado del destino."""


class JsonSubmissionStore(SubmissionSink):
    """Gestiona registros de envío guardados como JSON."""

    def __init__(self, submissions_dir: Optional[Path] = None):
        """
        Inicializa el almacén.

        Args:
            submissions_dir: Directorio para guardar registros.
                             Default: ~/.formwizard/submissions/
        """
        if submissions_dir is None:
            submissions_dir = Path.home() / ".formwizard" / "submissions"

        self.submissions_dir = Path(submissions_dir)
        self.submissions_dir.mkdir(parents=True, exist_ok=True)

    def _record_path(self, record_id: str) -> Path:
        """Retorna la ruta del archivo de un registro."""
        return self.submissions_dir / f"{record_id}.json"

    def submit(self, record: SubmissionRecord) -> Path:
        """Guarda un registro a disco."""
        path = self._record_path(record.id)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(record.to_payload(), f, indent=2, ensure_ascii=False)

        logger.info("Submission %s saved to %s", record.id, path)
        return path

    def load(self, record_id: str) -> SubmissionRecord:
        """
        Carga un registro desde disco.

        Raises:
            FileNotFoundError: si no existe el registro
            SubmissionStoreError: si el archivo no es un registro válido
        """
        path = self._record_path(record_id)

        if not path.exists():
            raise FileNotFoundError(f"Submission not found: {record_id}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return SubmissionRecord.model_validate(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            raise SubmissionStoreError(f"Unreadable submission {path.name}: {exc}") from exc

    def get_record(self, record_id: str) -> Optional[SubmissionRecord]:
        """Obtiene un registro por ID (parcial o completo)."""
        exact = self._record_path(record_id)
        if exact.exists():
            return self.load(record_id)

        for path in self.submissions_dir.glob("*.json"):
            if path.stem.startswith(record_id):
                return self.load(path.stem)
        return None

    def list_submissions(self) -> list[dict]:
        """Lista los registros guardados (resumen), del más reciente al más antiguo."""
        submissions = []
        for path in self.submissions_dir.glob("*.json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                logger.warning("Skipping unreadable submission %s: %s", path.name, exc)
                continue
            if not isinstance(data, dict):
                logger.warning("Skipping submission %s: not a JSON object", path.name)
                continue
            identity = data.get("identity") or {}
            submissions.append({
                "id": data.get("id", path.stem),
                "form_id": data.get("form_id", ""),
                "form_title": data.get("form_title", ""),
                "version": data.get("version", ""),
                "timestamp": data.get("timestamp", ""),
                "roll_number": identity.get("roll_number", ""),
                "n_answers": len(data.get("answers", {})),
            })

        return sorted(submissions, key=lambda s: s["timestamp"], reverse=True)

