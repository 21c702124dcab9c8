"""Aprovisionamiento del binario de mkcert.

Decide si hay que descargar (binario ausente) o actualizar (`auto_upgrade`)
y lo hace a través de un `Downloader`. Los problemas recuperables (fuente sin
respuesta, salto de versión mayor, binario local ausente) se devuelven como
`ProvisionOutcome`; solo los fallos de descarga se propagan.
"""

from __future__ import annotations

from pathlib import Path

from adapters.files import exists
from core.domain.models import ProvisionOutcome, ProvisionResult, SourceKind
from core.interfaces.downloader import Downloader
from core.interfaces.source import SourceProvider
from core.logging import DiagnosticLogger
from core.services.version_manager import VersionManager


class BinaryProvisioner:
    def __init__(
        self,
        *,
        source: SourceProvider,
        source_kind: SourceKind,
        downloader: Downloader,
        version_manager: VersionManager,
        saved_path: Path,
        local_path: Path | None,
        auto_upgrade: bool,
        logger: DiagnosticLogger,
    ) -> None:
        self._source = source
        self._source_kind = source_kind
        self._downloader = downloader
        self._versions = version_manager
        self.saved_path = saved_path
        self.local_path = local_path
        self._auto_upgrade = auto_upgrade
        self._logger = logger

    def _binary_exists(self) -> bool:
        if self.local_path is not None:
            return exists(self.local_path)
        return exists(self.saved_path)

    def check_mkcert(self) -> bool:
        """Existe el binario? Con ruta local configurada solo se mira esa ruta."""

        found = self._binary_exists()
        if not found and self.local_path is not None:
            self._logger.error(f"{self.local_path} does not exist, please check the mkcertPath parameter")
        return found

    def get_mkcert_binary(self) -> Path | None:
        if not self._binary_exists():
            return None
        # La ruta local tiene prioridad aunque también exista la gestionada.
        return self.local_path or self.saved_path

    async def ensure_present(self) -> ProvisionResult:
        present = self.check_mkcert()

        if not (self._auto_upgrade or not present):
            return ProvisionResult(outcome=ProvisionOutcome.PRESENT, binary=self.get_mkcert_binary())

        result = await self.update_mkcert(present)

        if self.local_path is not None:
            # La copia gestionada se actualiza igualmente, pero se sigue usando la local.
            return ProvisionResult(
                outcome=ProvisionOutcome.PRESENT if present else ProvisionOutcome.BINARY_MISSING_LOCAL,
                binary=self.local_path if present else None,
                version_info=result.version_info,
                update_outcome=result.outcome,
            )

        if result.binary is None and exists(self.saved_path):
            result = result.model_copy(update={"binary": self.saved_path})
        return result

    async def update_mkcert(self, mkcert_exists: bool) -> ProvisionResult:
        source_info = await self._source.get_source_info()

        if source_info is None:
            self._report_source_unavailable()
            return ProvisionResult(outcome=ProvisionOutcome.SOURCE_UNAVAILABLE)

        if not mkcert_exists:
            self._logger.debug("mkcert does not exist, download it now")
            await self._downloader.download(source_info.download_url, self.saved_path)
            self._versions.update(source_info.version)
            return ProvisionResult(outcome=ProvisionOutcome.INSTALLED, binary=self.saved_path)

        version_info = self._versions.compare(source_info.version)

        if not version_info.should_update:
            self._logger.debug("mkcert is kept latest version, update skipped")
            return ProvisionResult(outcome=ProvisionOutcome.UP_TO_DATE, version_info=version_info)

        if version_info.breaking_change:
            self._logger.info(
                f"The current version of mkcert is {version_info.current_version}, and the latest version is "
                f"{version_info.next_version}, there may be some breaking changes, update skipped"
            )
            return ProvisionResult(outcome=ProvisionOutcome.BREAKING_DEFERRED, version_info=version_info)

        self._logger.debug(
            f"The current version of mkcert is {version_info.current_version}, and the latest version is "
            f"{version_info.next_version}, mkcert will be updated"
        )
        await self._downloader.download(source_info.download_url, self.saved_path)
        self._versions.update(version_info.next_version)
        return ProvisionResult(
            outcome=ProvisionOutcome.UPDATED,
            binary=self.saved_path,
            version_info=version_info,
        )

    def _report_source_unavailable(self) -> None:
        if self._source_kind is SourceKind.CUSTOM:
            self._logger.debug('Please check your custom "source", it seems to return invalid result')
        else:
            self._logger.debug("Failed to request mkcert information, please check your network")
            if self._source_kind is SourceKind.GITHUB:
                self._logger.debug('If GitHub is unreachable from your network, try setting "source" to "coding"')
        self._logger.info("Can not get mkcert information, update skipped")
