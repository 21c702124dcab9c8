"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import os

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.sources.platforms import get_platform_identifier
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_data_dir(settings: AppSettings) -> tuple[bool, str]:
    """The data dir must be creatable and writable (state, binary, certs)."""

    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, str(exc)
    if not os.access(settings.data_dir, os.W_OK):
        return False, f"{settings.data_dir} is not writable"
    return True, str(settings.data_dir)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="devcert Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Platform", "OK", get_platform_identifier())
    table.add_row("Source", "OK", settings.source.value)

    ok_dir, detail_dir = _check_data_dir(settings)
    table.add_row("Data dir", "OK" if ok_dir else "FAIL", detail_dir)

    if settings.mkcert_path is not None:
        ok_bin = settings.mkcert_path.is_file()
        table.add_row("mkcert (local)", "OK" if ok_bin else "FAIL", str(settings.mkcert_path))
    else:
        ok_bin = settings.mkcert_saved_path.is_file()
        table.add_row(
            "mkcert (managed)",
            "OK" if ok_bin else "MISSING",
            str(settings.mkcert_saved_path) if ok_bin else "Will be downloaded on next install",
        )

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.github_api_url, settings))
    table.add_row("GitHub API", "OK" if ok_http else "FAIL", detail_http)

    certs = settings.key_file_path.is_file() and settings.cert_file_path.is_file()
    table.add_row("Certificate", "OK" if certs else "MISSING", str(settings.cert_file_path))

    _console.print(table)

    if not ok_http and settings.mkcert_path is None:
        _console.print(
            "\n[yellow]Note:[/yellow] GitHub is unreachable; try `DEVCERT_SOURCE=coding` "
            "or point `DEVCERT_MKCERT_PATH` at a local mkcert binary."
        )
