"""Fuente de mkcert: GitHub Releases.

- Usa la API oficial (`/repos/<repo>/releases/latest`).
- Elige el asset `mkcert-<tag>-<plataforma>` de la release.
- Cualquier fallo de red o respuesta inesperada devuelve None.
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


class GithubSource(SourceProvider):
    """Última release de mkcert publicada en GitHub."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        platform_id: str | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._platform_id = platform_id or get_platform_identifier()
        self._client_factory = client_factory or (
            lambda: build_async_client(
                self._settings,
                extra_headers={"Accept": "application/vnd.github+json"},
            )
        )

    @classmethod
    def create(cls, settings: AppSettings | None = None) -> GithubSource:
        return cls(settings)

    async def get_source_info(self) -> SourceInfo | None:
        base = self._settings.github_api_url.rstrip("/")
        url = f"{base}/repos/{self._settings.github_repo}/releases/latest"

        try:
            async with self._client_factory() as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            logger.debug("github request failed", url=url, error=str(exc))
            return None

        if resp.status_code != 200:
            logger.debug("github returned unexpected status", url=url, status=resp.status_code)
            return None

        try:
            data = resp.json()
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None

        return self._pick_asset(data)

    def _pick_asset(self, release: dict[str, Any]) -> SourceInfo | None:
        tag = release.get("tag_name")
        if not isinstance(tag, str) or not tag:
            return None

        expected = f"mkcert-{tag}-{self._platform_id}"
        for asset in release.get("assets") or []:
            if not isinstance(asset, dict):
                continue
            if asset.get("name") == expected and isinstance(asset.get("browser_download_url"), str):
                return SourceInfo(version=tag, download_url=asset["browser_download_url"])

        logger.debug("no mkcert asset for this platform", tag=tag, expected=expected)
        return None
