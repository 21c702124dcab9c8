"""CLI de devcert (Typer).

Commands:
- `install`: provisions mkcert and (re)generates the dev certificate.
- `upgrade`: checks the source for a newer compatible mkcert.
- `status`: shows the persisted record and the certificate paths.
- `doctor`: environment diagnostics.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from adapters.network import get_default_hosts, unique_hosts
from cli.doctor import app as doctor_app
from cli.ui_components import build_provision_panel, build_record_table, print_banner
from core.config import AppSettings
from core.domain.models import ProvisionOutcome, SourceKind
from core.errors import DevcertError
from core.logging import setup_logging
from core.services.mkcert import Mkcert, MkcertOptions

app = typer.Typer(no_args_is_help=True, help="Local TLS certificates for dev servers, powered by mkcert.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


def _build(
    *,
    auto_upgrade: bool | None,
    source: SourceKind | None,
    mkcert_path: Path | None,
) -> Mkcert:
    if source is SourceKind.CUSTOM:
        raise typer.BadParameter('"custom" sources are only available from the Python API', param_hint="--source")

    settings = AppSettings()
    setup_logging(settings.log_level)
    options = MkcertOptions(auto_upgrade=auto_upgrade, source=source, mkcert_path=mkcert_path)
    return Mkcert.create(options, settings=settings)


def _fail(exc: DevcertError) -> NoReturn:
    _console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(code=1) from exc


@app.command()
def install(
    host: list[str] | None = typer.Option(
        None,
        "--host",
        "-H",
        help="Hostname/IP to include (repeatable). Defaults to localhost + local IPv4s.",
    ),
    auto_upgrade: bool | None = typer.Option(None, "--auto-upgrade/--no-auto-upgrade", help="Upgrade mkcert if possible."),
    source: SourceKind | None = typer.Option(None, "--source", help="mkcert download source (github/coding)."),
    mkcert_path: Path | None = typer.Option(None, "--mkcert-path", help="Use a local mkcert binary instead of downloading."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the banner."),
) -> None:
    """Ensure a valid development certificate for the requested hosts."""

    hosts = unique_hosts(host) if host else get_default_hosts()

    if not quiet:
        print_banner(_console)

    async def _run(mkcert: Mkcert) -> None:
        result = await mkcert.init()
        _console.print(build_provision_panel(result))
        await mkcert.install(hosts)

    try:
        mkcert = _build(auto_upgrade=auto_upgrade, source=source, mkcert_path=mkcert_path)
        asyncio.run(_run(mkcert))
    except DevcertError as exc:
        _fail(exc)

    _console.print(
        build_record_table(
            mkcert.record_snapshot(),
            key_path=str(mkcert.key_file_path),
            cert_path=str(mkcert.cert_file_path),
        )
    )


@app.command()
def upgrade(
    source: SourceKind | None = typer.Option(None, "--source", help="mkcert download source (github/coding)."),
) -> None:
    """Check the source for a newer mkcert and install it when compatible."""

    try:
        mkcert = _build(auto_upgrade=True, source=source, mkcert_path=None)
        result = asyncio.run(mkcert.init())
    except DevcertError as exc:
        _fail(exc)

    _console.print(build_provision_panel(result))
    if result.outcome is ProvisionOutcome.BREAKING_DEFERRED:
        _console.print(
            "\n[yellow]Note:[/yellow] major upgrades are not applied automatically; "
            "delete the managed binary to force a fresh download."
        )


@app.command()
def status() -> None:
    """Show the persisted certificate record."""

    try:
        mkcert = Mkcert.create(settings=AppSettings())
    except DevcertError as exc:
        _fail(exc)
    mkcert.state.init()

    binary = mkcert.provisioner.get_mkcert_binary()
    _console.print(f"mkcert: {binary or '[red]missing[/red]'}  (version {mkcert.state.get_version() or '-'})")
    _console.print(
        build_record_table(
            mkcert.record_snapshot(),
            key_path=str(mkcert.key_file_path),
            cert_path=str(mkcert.cert_file_path),
        )
    )


def run() -> None:
    app()
