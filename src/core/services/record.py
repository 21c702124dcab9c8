"""Registro de la última generación: hosts pedidos + huella de los archivos."""

from __future__ import annotations

from collections.abc import Iterable

from adapters.state_store import StateStore
from core.domain.models import CertHash, CertRecord


class Record:
    def __init__(self, *, state: StateStore) -> None:
        self._state = state

    def get_hosts(self) -> list[str]:
        record = self._state.get_record()
        return list(record.hosts) if record else []

    def get_hash(self) -> CertHash | None:
        record = self._state.get_record()
        return record.hash if record else None

    def contains(self, hosts: Iterable[str]) -> bool:
        """Igualdad de conjuntos: el orden y los duplicados no cuentan."""

        record = self._state.get_record()
        if record is None:
            return False
        return set(record.hosts) == set(hosts)

    def tamper(self, live: CertHash) -> bool:
        """True si los archivos en disco ya no coinciden con lo registrado.

        Un archivo ausente (hash None) siempre cuenta como alterado.
        """

        recorded = self.get_hash()
        if recorded is None or not live.complete:
            return True
        return recorded != live

    def update(self, *, hosts: Iterable[str], hash: CertHash) -> None:
        self._state.set_record(CertRecord(hosts=list(hosts), hash=hash))
