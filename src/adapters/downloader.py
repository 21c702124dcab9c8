"""Descarga del binario de mkcert por HTTP.

Se escribe primero a un temporal junto al destino y luego se reemplaza, para
no dejar un binario a medias si la descarga se corta.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import httpx

from adapters.http_client import ClientFactory, build_async_client
from core.config import AppSettings
from core.errors import DownloadError
from core.logging import get_logger

logger = get_logger(__name__)

_EXECUTABLE = stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH


class HttpDownloader:
    """Implementa `core.interfaces.downloader.Downloader` con httpx."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client_factory = client_factory or (
            lambda: build_async_client(self._settings, extra_headers={"Accept": "application/octet-stream"})
        )

    async def download(self, url: str, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        tmp = destination.with_name(destination.name + ".download")

        logger.debug("downloading mkcert", url=url, destination=str(destination))
        try:
            async with self._client_factory() as client:
                async with client.stream("GET", url) as resp:
                    resp.raise_for_status()
                    with tmp.open("wb") as fh:
                        async for chunk in resp.aiter_bytes():
                            fh.write(chunk)
            os.chmod(tmp, _EXECUTABLE)
            tmp.replace(destination)
        except httpx.HTTPStatusError as exc:
            tmp.unlink(missing_ok=True)
            raise DownloadError(url, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, OSError) as exc:
            tmp.unlink(missing_ok=True)
            raise DownloadError(url, str(exc) or type(exc).__name__) from exc

        logger.info("mkcert downloaded", path=str(destination))
