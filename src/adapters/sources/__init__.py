"""Fuentes de releases de mkcert.

Por qué un paquete:
- Agrupa un módulo por fuente (GitHub, mirror de Coding).
- Cada módulo implementa `core.interfaces.source.SourceProvider`.
"""

from __future__ import annotations

from adapters.sources.coding import CodingSource
from adapters.sources.github import GithubSource
from core.config import AppSettings
from core.domain.models import SourceKind
from core.errors import SourceConfigurationError
from core.interfaces.source import SourceProvider


def create_source(
    kind: SourceKind,
    *,
    custom: SourceProvider | None = None,
    settings: AppSettings | None = None,
) -> SourceProvider:
    """Resuelve la fuente a partir de la etiqueta de configuración."""

    if kind is SourceKind.GITHUB:
        return GithubSource.create(settings)
    if kind is SourceKind.CODING:
        return CodingSource.create(settings)
    if custom is None:
        raise SourceConfigurationError('source "custom" requires a custom source object')
    return custom


__all__ = [
    "CodingSource",
    "GithubSource",
    "create_source",
]
