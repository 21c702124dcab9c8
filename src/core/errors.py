"""Excepciones del Core.

Solo los fallos fatales son excepciones: descarga del binario y ejecución de
mkcert. Los problemas de aprovisionamiento recuperables (fuente caída, versión
ilegible, salto de versión mayor, binario local ausente) se devuelven como
`ProvisionOutcome` para que el llamador decida.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class DevcertError(Exception):
    """Base de todos los errores de devcert."""


class DownloadError(DevcertError):
    """La descarga del binario de mkcert falló (red, HTTP o disco)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to download {url}: {reason}")
        self.url = url
        self.reason = reason


class GenerationCommandError(DevcertError):
    """mkcert no pudo ejecutarse o terminó con código distinto de cero."""

    def __init__(
        self,
        argv: Sequence[str],
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        command = " ".join(argv)
        if returncode is None:
            message = f"Unable to run `{command}`"
        else:
            message = f"`{command}` exited with code {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr


class CertificateNotFoundError(DevcertError):
    """No hay certificado en disco que devolver."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Certificate file not found: {path}")
        self.path = path


class SourceConfigurationError(DevcertError):
    """Se pidió la fuente `custom` sin proporcionar un objeto fuente."""
