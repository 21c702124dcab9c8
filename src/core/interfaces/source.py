"""Contrato de fuentes de releases de mkcert.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- GitHub, el mirror de Coding o un objeto propio del usuario son
  intercambiables mientras expongan `get_source_info`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import SourceInfo


@runtime_checkable
class SourceProvider(Protocol):
    """Contrato mínimo para una fuente de mkcert.

    Reglas de diseño:
    - `get_source_info` es asíncrono porque típicamente hará I/O (HTTP).
    - Devuelve `None` si la fuente no responde o la respuesta no sirve; no
      lanza por errores de red.
    """

    async def get_source_info(self) -> SourceInfo | None:
        """Devuelve la última versión publicada y su URL de descarga."""

        ...
