"""Identificador de plataforma usado en los nombres de assets de mkcert.

Las releases publican `mkcert-<version>-<os>-<arch>` (con `.exe` en Windows).
"""

from __future__ import annotations

import platform
import sys

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "arm": "arm",
}


def get_platform_identifier(system: str | None = None, machine: str | None = None) -> str:
    system = system or sys.platform
    arch = _ARCH_ALIASES.get((machine or platform.machine()).lower(), "amd64")

    if system.startswith("win"):
        # Solo hay build de Windows para amd64 y arm64.
        return f"windows-{'arm64' if arch == 'arm64' else 'amd64'}.exe"
    if system == "darwin":
        return f"darwin-{'arm64' if arch == 'arm64' else 'amd64'}"
    return f"linux-{arch}"
