"""Orquestador del certificado de desarrollo.

This module is the public entry-point consumed by dev servers:

    mkcert = Mkcert.create(MkcertOptions(auto_upgrade=True))
    await mkcert.init()
    certificate = await mkcert.install(["localhost", "127.0.0.1"])

`init` makes sure the mkcert binary is available; `install` regenerates the
certificate only when the requested hosts or the files on disk changed since
the last generation, and returns the key/cert bytes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from adapters.command import CommandRunner, run_command
from adapters.downloader import HttpDownloader
from adapters.files import ensure_parent_dir, file_hash
from adapters.network import unique_hosts
from adapters.sources import create_source
from adapters.state_store import StateStore
from core.config import AppSettings
from core.domain.models import (
    CertHash,
    Certificate,
    CertRecord,
    ProvisionResult,
    SourceKind,
)
from core.errors import CertificateNotFoundError
from core.interfaces.downloader import Downloader
from core.interfaces.source import SourceProvider
from core.logging import DiagnosticLogger, get_logger
from core.services.provisioner import BinaryProvisioner
from core.services.record import Record
from core.services.version_manager import VersionManager


@dataclass
class MkcertOptions:
    """Per-instance options; unset values fall back to `AppSettings`."""

    auto_upgrade: bool | None = None
    source: SourceKind | None = None
    custom_source: SourceProvider | None = None
    mkcert_path: Path | None = None
    logger: DiagnosticLogger | None = None


class Mkcert:
    def __init__(
        self,
        options: MkcertOptions | None = None,
        *,
        settings: AppSettings | None = None,
        downloader: Downloader | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        options = options or MkcertOptions()
        self.settings = settings or AppSettings()
        self.logger = options.logger or get_logger("devcert")

        if options.source is not None:
            self.source_kind = options.source
        elif options.custom_source is not None:
            self.source_kind = SourceKind.CUSTOM
        else:
            self.source_kind = self.settings.source
        source = create_source(self.source_kind, custom=options.custom_source, settings=self.settings)

        auto_upgrade = options.auto_upgrade if options.auto_upgrade is not None else self.settings.auto_upgrade
        local_path = options.mkcert_path or self.settings.mkcert_path

        self.key_file_path = self.settings.key_file_path
        self.cert_file_path = self.settings.cert_file_path

        self.state = StateStore(self.settings.state_file)
        self.version_manager = VersionManager(state=self.state)
        self.record = Record(state=self.state)
        self.provisioner = BinaryProvisioner(
            source=source,
            source_kind=self.source_kind,
            downloader=downloader or HttpDownloader(self.settings),
            version_manager=self.version_manager,
            saved_path=self.settings.mkcert_saved_path,
            local_path=local_path,
            auto_upgrade=auto_upgrade,
            logger=self.logger,
        )
        self._run = runner or run_command

    @classmethod
    def create(cls, options: MkcertOptions | None = None, **kwargs) -> Mkcert:
        return cls(options, **kwargs)

    async def init(self) -> ProvisionResult:
        """Carga el estado persistido y aprovisiona el binario si hace falta.

        Solo `DownloadError` se propaga; el resto de resultados van en el
        `ProvisionResult` devuelto.
        """

        self.state.init()
        return await self.provisioner.ensure_present()

    async def install(self, hosts: Sequence[str]) -> Certificate:
        """Garantiza un certificado válido para `hosts` y devuelve su contenido.

        Una lista vacía no regenera: solo devuelve lo que haya en disco.
        """

        if not self.state.loaded:
            self.state.init()

        hosts = unique_hosts(hosts)
        if hosts:
            await self.renew(hosts)
        return self.get_certificate()

    async def renew(self, hosts: list[str]) -> bool:
        """Regenera si cambiaron los hosts o los archivos. Devuelve si regeneró."""

        if not self.record.contains(hosts):
            self.logger.info(
                f"The hosts changed from {self.record.get_hosts()} to {hosts}, start regenerate certificate",
            )
            await self.regenerate(hosts)
            return True

        live = self.get_latest_hash()
        if self.record.tamper(live):
            recorded = self.record.get_hash()
            self.logger.info(
                f"The hash changed from {recorded.pretty() if recorded else None} to {live.pretty()}, "
                "start regenerate certificate",
            )
            await self.regenerate(hosts)
            return True

        self.logger.debug("Neither hosts nor hash has changed, skip regenerate certificate")
        return False

    async def regenerate(self, hosts: list[str]) -> None:
        await self.create_certificate(hosts)
        self.record.update(hosts=hosts, hash=self.get_latest_hash())

    async def create_certificate(self, hosts: list[str]) -> None:
        binary = self.provisioner.get_mkcert_binary()
        if binary is None:
            self.logger.debug(f"Mkcert does not exist, unable to generate certificate for {' '.join(hosts)}")

        ensure_parent_dir(self.key_file_path)
        ensure_parent_dir(self.cert_file_path)

        # Sin binario se intenta igualmente: el fallo llega como GenerationCommandError.
        argv = [
            str(binary) if binary is not None else "",
            "-install",
            "-key-file",
            str(self.key_file_path),
            "-cert-file",
            str(self.cert_file_path),
            *hosts,
        ]
        await self._run(argv)

        self.logger.info(f"The certificate is saved in:\n{self.key_file_path}\n{self.cert_file_path}")

    def record_snapshot(self) -> CertRecord | None:
        return self.state.get_record()

    def get_latest_hash(self) -> CertHash:
        return CertHash(key=file_hash(self.key_file_path), cert=file_hash(self.cert_file_path))

    def get_certificate(self) -> Certificate:
        for path in (self.key_file_path, self.cert_file_path):
            if not path.is_file():
                raise CertificateNotFoundError(path)
        return Certificate(key=self.key_file_path.read_bytes(), cert=self.cert_file_path.read_bytes())
