"""Utilidades de ficheros: existencia, hash de contenido y lectura."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK = 64 * 1024


def exists(path: Path) -> bool:
    return path.is_file()


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def file_hash(path: Path) -> str | None:
    """sha256 hex del contenido, o None si el archivo falta o no se puede leer."""

    digest = hashlib.sha256()
    try:
        with path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK), b""):
                digest.update(chunk)
    except OSError:
        return None
    return digest.hexdigest()
