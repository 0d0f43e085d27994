"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Lets several commands reuse the same tables/panels.
"""

from __future__ import annotations

import json

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.results import ResultEnvelope


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in `--json` mode)."""

    title = Text("REST-CLIENT", style="bold cyan")
    subtitle = Text("Typed REST calls • Bearer auth • Result envelopes", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_table(result: ResultEnvelope) -> Table:
    """Rich table with the envelope fields."""

    table = Table(title="Result")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Success", "[green]yes[/green]" if result.success else "[red]no[/red]")
    table.add_row("Status", str(result.status) if result.status is not None else "-")
    table.add_row("Title", result.title or "-")
    if result.trace_id:
        table.add_row("Trace id", result.trace_id)
    for field, messages in result.errors.items():
        table.add_row(f"Error: {field}", "; ".join(messages))
    if result.exception is not None:
        table.add_row("Exception", f"{type(result.exception).__name__}: {result.exception}")

    data = getattr(result, "data", None)
    if data is not None:
        table.add_row("Data", json.dumps(data, ensure_ascii=False, indent=2, default=str))
    return table
