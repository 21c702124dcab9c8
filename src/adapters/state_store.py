"""Persistencia JSON del estado (versión de mkcert + registro del certificado).

Por qué JSON:
- Un único `config.json` legible y versionable a mano, igual que el resto de
  exportaciones del proyecto.
- Se construye una vez por orquestador y se pasa explícitamente a
  `VersionManager` y `Record` (sin estado global).
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import CertRecord, StateFile
from core.logging import get_logger

logger = get_logger(__name__)


class StateStore:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._state = StateFile()
        self.loaded = False

    def init(self) -> None:
        """Carga el estado de disco. Un archivo ausente o corrupto equivale a vacío."""

        self.loaded = True
        if not self.path.is_file():
            self._state = StateFile()
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self._state = StateFile.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("state file unreadable, starting fresh", path=str(self.path), error=str(exc))
            self._state = StateFile()

    def get_version(self) -> str | None:
        return self._state.version

    def set_version(self, version: str) -> None:
        self._state = self._state.model_copy(update={"version": version})
        self._save()

    def get_record(self) -> CertRecord | None:
        return self._state.record

    def set_record(self, record: CertRecord) -> None:
        self._state = self._state.model_copy(update={"record": record})
        self._save()

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = self._state.model_dump(mode="json")
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        tmp.replace(self.path)
