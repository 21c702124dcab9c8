"""Ejecución de comandos externos (mkcert) con asyncio."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Awaitable, Callable

from core.errors import GenerationCommandError

CommandRunner = Callable[[Sequence[str]], Awaitable[str]]


async def run_command(argv: Sequence[str]) -> str:
    """Ejecuta `argv` sin shell y devuelve stdout.

    Lanza `GenerationCommandError` si el proceso no arranca o sale con error.
    """

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as exc:
        raise GenerationCommandError(argv, stderr=str(exc)) from exc

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        raise GenerationCommandError(
            argv,
            returncode=proc.returncode,
            stderr=stderr.decode("utf-8", errors="replace"),
        )
    return stdout.decode("utf-8", errors="replace")
