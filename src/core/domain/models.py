"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita la serialización del estado persistido (versión + registro del
  certificado) a JSON estable.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from packaging.version import InvalidVersion
from packaging.version import Version as PackagingVersion
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

_VERSION_RE = re.compile(r"\d+(?:\.\d+)*")


class SourceKind(str, Enum):
    """Fuentes de descarga soportadas para mkcert."""

    GITHUB = "github"
    CODING = "coding"
    CUSTOM = "custom"


class Version(BaseModel):
    """Versión semántica {major, minor, patch} de mkcert."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(..., ge=0)
    minor: int = Field(default=0, ge=0)
    patch: int = Field(default=0, ge=0)

    @classmethod
    def parse(cls, raw: str | None) -> Version | None:
        """Parsea cadenas libres (`v1.4.4`, `mkcert 1.4.4`).

        Devuelve `None` ("desconocida") en vez de lanzar si no hay versión.
        """

        if not raw:
            return None
        match = _VERSION_RE.search(raw)
        if match is None:
            return None
        try:
            parsed = PackagingVersion(match.group(0))
        except InvalidVersion:
            return None
        return cls(major=parsed.major, minor=parsed.minor, patch=parsed.micro)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class VersionInfo(BaseModel):
    """Resultado de comparar la versión instalada con la última publicada."""

    current_version: str | None = Field(
        default=None,
        description="Versión instalada según el estado persistido (None si se desconoce).",
    )
    next_version: str = Field(
        ...,
        description="Versión publicada por la fuente, tal cual la reporta.",
    )
    should_update: bool = Field(
        default=False,
        description="True si la versión publicada es mayor que la instalada.",
    )
    breaking_change: bool = Field(
        default=False,
        description="True si la actualización cruza una versión mayor.",
    )


class SourceInfo(BaseModel):
    """Última release disponible según una fuente."""

    version: str = Field(..., min_length=1, description="Versión publicada (p.ej. 'v1.4.4').")
    download_url: str = Field(..., min_length=1, description="URL del binario para esta plataforma.")


class CertHash(BaseModel):
    """Huella de contenido de la pareja clave/certificado en disco."""

    model_config = ConfigDict(frozen=True)

    key: str | None = Field(default=None, description="sha256 hex de la clave (None si falta).")
    cert: str | None = Field(default=None, description="sha256 hex del certificado (None si falta).")

    @property
    def complete(self) -> bool:
        return self.key is not None and self.cert is not None

    def pretty(self) -> str:
        return f"{{key: {self.key}, cert: {self.cert}}}"


class CertRecord(BaseModel):
    """Hosts y huella de la última generación correcta."""

    hosts: list[str] = Field(default_factory=list)
    hash: CertHash = Field(default_factory=CertHash)


class StateFile(BaseModel):
    """Contenido de `config.json`: versión de mkcert + registro del certificado."""

    model_config = ConfigDict(extra="ignore")

    version: str | None = None
    record: CertRecord | None = None


class Certificate(BaseModel):
    """Pareja (clave, certificado) leída de disco, lista para un servidor TLS."""

    model_config = ConfigDict(frozen=True)

    key: bytes
    cert: bytes


class ProvisionOutcome(str, Enum):
    """Resultado recuperable de `BinaryProvisioner.ensure_present`."""

    PRESENT = "present"
    INSTALLED = "installed"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    SOURCE_UNAVAILABLE = "source_unavailable"
    BREAKING_DEFERRED = "breaking_deferred"
    BINARY_MISSING_LOCAL = "binary_missing_local"


class ProvisionResult(BaseModel):
    """Binario utilizable (si lo hay) y qué pasó al aprovisionarlo."""

    outcome: ProvisionOutcome
    binary: Path | None = None
    version_info: VersionInfo | None = None
    # Con ruta local: qué pasó con la copia gestionada, si se intentó actualizar.
    update_outcome: ProvisionOutcome | None = None

    @property
    def available(self) -> bool:
        return self.binary is not None
