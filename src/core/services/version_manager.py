"""Comparación de la versión instalada de mkcert con la publicada.

Política: un salto de versión mayor se marca como `breaking_change` y el
provisioner no lo aplica, porque las flags de línea de comandos pueden haber
cambiado.
"""

from __future__ import annotations

from adapters.state_store import StateStore
from core.domain.models import Version, VersionInfo


class VersionManager:
    def __init__(self, *, state: StateStore) -> None:
        self._state = state

    def compare(self, latest: str) -> VersionInfo:
        """Nunca lanza: una versión publicada ilegible equivale a "sin update"."""

        current_raw = self._state.get_version()
        next_version = Version.parse(latest)
        if next_version is None:
            return VersionInfo(current_version=current_raw, next_version=latest)

        current = Version.parse(current_raw)
        if current is None:
            return VersionInfo(
                current_version=current_raw,
                next_version=latest,
                should_update=True,
            )

        should_update = next_version.as_tuple() > current.as_tuple()
        return VersionInfo(
            current_version=current_raw,
            next_version=latest,
            should_update=should_update,
            breaking_change=should_update and next_version.major != current.major,
        )

    def update(self, version: str) -> None:
        self._state.set_version(version)
