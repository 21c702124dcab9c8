"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/fuentes/descarga) lean config de forma consistente.
"""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import SourceKind


def get_default_data_dir() -> Path:
    """Directorio local del proyecto donde viven binario, estado y certificados."""

    return Path.cwd() / ".devcert"


def get_mkcert_binary_name() -> str:
    return "mkcert.exe" if sys.platform.startswith("win") else "mkcert"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVCERT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    data_dir: Path = Field(
        default_factory=get_default_data_dir,
        description="Directorio con config.json, el binario gestionado y los certificados.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="devcert/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones a las fuentes de mkcert.",
    )

    source: SourceKind = Field(
        default=SourceKind.GITHUB,
        description="Fuente por defecto para descargar mkcert (github/coding).",
    )
    auto_upgrade: bool = Field(
        default=False,
        description="Actualizar mkcert automáticamente si hay versión nueva compatible.",
    )
    mkcert_path: Path | None = Field(
        default=None,
        description="Binario local de mkcert (redes restringidas); desactiva la descarga.",
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base URL de la API de GitHub.",
    )
    github_repo: str = Field(
        default="FiloSottile/mkcert",
        min_length=3,
        description="Repositorio owner/name con las releases de mkcert.",
    )

    coding_api_url: str = Field(
        default="https://e.coding.net/open-api",
        min_length=8,
        description="Endpoint de la Open API de Coding (mirror para redes en China).",
    )
    coding_token: str | None = Field(
        default=None,
        description="Token de acceso para la Open API de Coding.",
    )
    coding_project_id: int = Field(
        default=8524617,
        ge=1,
        description="Id del proyecto de Coding que publica los artefactos.",
    )
    coding_team: str = Field(
        default="vite-plugin-mkcert",
        min_length=1,
        description="Equipo de Coding (subdominio del registro genérico).",
    )
    coding_project: str = Field(
        default="mkcert",
        min_length=1,
        description="Proyecto de Coding que aloja el repositorio de artefactos.",
    )
    coding_repository: str = Field(
        default="mkcert",
        min_length=1,
        description="Repositorio genérico de artefactos dentro del proyecto.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel mínimo de log (DEBUG/INFO/WARNING/ERROR).",
    )

    @property
    def state_file(self) -> Path:
        return self.data_dir / "config.json"

    @property
    def mkcert_saved_path(self) -> Path:
        return self.data_dir / get_mkcert_binary_name()

    @property
    def key_file_path(self) -> Path:
        return self.data_dir / "certs" / "dev.key"

    @property
    def cert_file_path(self) -> Path:
        return self.data_dir / "certs" / "dev.pem"
