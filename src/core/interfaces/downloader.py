"""Contrato del descargador del binario."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Downloader(Protocol):
    """Descarga `url` a `destination`; los fallos se propagan como `DownloadError`."""

    async def download(self, url: str, destination: Path) -> None: ...
