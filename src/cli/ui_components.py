"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `install`, `upgrade` y `status`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import CertRecord, ProvisionOutcome, ProvisionResult

_OUTCOME_STYLES: dict[ProvisionOutcome, str] = {
    ProvisionOutcome.PRESENT: "green",
    ProvisionOutcome.INSTALLED: "green",
    ProvisionOutcome.UPDATED: "green",
    ProvisionOutcome.UP_TO_DATE: "green",
    ProvisionOutcome.SOURCE_UNAVAILABLE: "yellow",
    ProvisionOutcome.BREAKING_DEFERRED: "yellow",
    ProvisionOutcome.BINARY_MISSING_LOCAL: "red",
}


def print_banner(console: Console) -> None:
    title = Text("devcert", style="bold cyan")
    subtitle = Text("Certificados TLS locales con mkcert", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_provision_panel(result: ProvisionResult) -> Panel:
    """Panel con el resultado de aprovisionar mkcert."""

    style = _OUTCOME_STYLES.get(result.outcome, "white")
    body = Text()
    body.append("Outcome: ", style="bold")
    body.append(result.outcome.value + "\n", style=style)
    body.append("Binary: ", style="bold")
    body.append(str(result.binary) if result.binary else "-")
    if result.update_outcome is not None:
        body.append(f"\nManaged copy: {result.update_outcome.value}", style="dim")
    info = result.version_info
    if info is not None:
        body.append(f"\nInstalled: {info.current_version or '-'}  Latest: {info.next_version}", style="dim")
    return Panel(body, title=Text("mkcert", style="bold yellow"), border_style=style)


def build_record_table(record: CertRecord | None, *, key_path: str, cert_path: str) -> Table:
    table = Table(title="Development certificate")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Key file", key_path)
    table.add_row("Cert file", cert_path)
    if record is None:
        table.add_row("Hosts", "[dim]never generated[/dim]")
        return table

    table.add_row("Hosts", ", ".join(record.hosts))
    table.add_row("Key sha256", record.hash.key or "-")
    table.add_row("Cert sha256", record.hash.cert or "-")
    return table
