"""Fuente de mkcert: mirror en Coding (redes donde GitHub no es accesible).

Fase 1: la Open API devuelve la última versión del artefacto `mkcert`.
Fase 2: la URL de descarga sigue el formato del registro genérico de Coding:
`https://<team>-generic.pkg.coding.net/<project>/<repo>/<file>?version=<v>`.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import ClientFactory, build_async_client
from adapters.sources.platforms import get_platform_identifier
from core.config import AppSettings
from core.domain.models import SourceInfo
from core.interfaces.source import SourceProvider
from core.logging import get_logger

logger = get_logger(__name__)


class CodingSource(SourceProvider):
    """Última versión de mkcert publicada en el registro de artefactos de Coding."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        platform_id: str | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._platform_id = platform_id or get_platform_identifier()
        self._client_factory = client_factory or self._default_client

    @classmethod
    def create(cls, settings: AppSettings | None = None) -> CodingSource:
        return cls(settings)

    def _default_client(self) -> httpx.AsyncClient:
        headers: dict[str, str] = {}
        if self._settings.coding_token:
            headers["Authorization"] = f"token {self._settings.coding_token}"
        return build_async_client(self._settings, extra_headers=headers)

    async def _latest_version(self) -> str | None:
        payload = {
            "Action": "DescribeTeamArtifacts",
            "ProjectId": self._settings.coding_project_id,
            "PageNumber": 1,
            "PageSize": 1,
            "Rule": {"Include": [self._settings.coding_repository]},
        }
        try:
            async with self._client_factory() as client:
                resp = await client.post(self._settings.coding_api_url, json=payload)
        except httpx.HTTPError as exc:
            logger.debug("coding request failed", error=str(exc))
            return None

        if resp.status_code != 200:
            logger.debug("coding returned unexpected status", status=resp.status_code)
            return None

        try:
            data: Any = resp.json()
            instances = data["Response"]["Data"]["InstanceSet"]
            version = instances[0]["LatestVersionName"]
        except (ValueError, KeyError, IndexError, TypeError):
            return None

        return version if isinstance(version, str) and version else None

    async def get_source_info(self) -> SourceInfo | None:
        version = await self._latest_version()
        if not version:
            return None

        s = self._settings
        filename = f"mkcert-{version}-{self._platform_id}"
        download_url = (
            f"https://{s.coding_team}-generic.pkg.coding.net/"
            f"{s.coding_project}/{s.coding_repository}/{filename}?version={version}"
        )
        return SourceInfo(version=version, download_url=download_url)
