from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dipstick.domain.errors import GenerationError
from dipstick.domain.models import Generation


def _specializations_text(generation: Generation) -> str:
    if not generation.specializations:
        return "-"
    return escape(", ".join(generation.specializations))


def print_generations(generations: List[Generation], console: Optional[Console] = None) -> None:
    """
    Render the generation listing as a rich table.

    Rows keep the order the tool emitted them in. The current generation is
    marked and highlighted. Tool strings are escaped so brackets print literally.
    """
    console = console or Console()

    if not generations:
        console.print("[yellow]No generations found.[/yellow]")
        return

    table = Table(
        title="NixOS Generations",
        box=box.ROUNDED,
        caption=f"{len(generations)} generation(s)",
    )

    table.add_column("Generation", justify="right", style="cyan", no_wrap=True)
    table.add_column("Date", style="magenta")
    table.add_column("NixOS Version", style="green")
    table.add_column("Kernel", style="green")
    table.add_column("Revision", style="dim")
    table.add_column("Specialisations", style="yellow")
    table.add_column("Current", justify="center", style="bold green")

    for generation in generations:
        table.add_row(
            str(generation.generation),
            escape(generation.date),
            escape(generation.system_version),
            escape(generation.kernel_version),
            escape(generation.configuration_revision) or "-",
            _specializations_text(generation),
            "*" if generation.current else "",
            style="bold" if generation.current else None,
        )

    console.print(table)


def print_generation_detail(generation: Generation, console: Optional[Console] = None) -> None:
    """
    Render one generation as a detail panel.
    """
    console = console or Console()

    details = Table.grid(padding=(0, 2))
    details.add_column(style="cyan", no_wrap=True)
    details.add_column()

    details.add_row("Date", escape(generation.date))
    details.add_row("NixOS Version", escape(generation.system_version))
    details.add_row("Linux Kernel Version", escape(generation.kernel_version))
    details.add_row("Configuration Revision", escape(generation.configuration_revision) or "-")
    details.add_row("Specialisations", _specializations_text(generation))
    details.add_row("Current Generation", "yes" if generation.current else "no")

    console.print(Panel(details, title=generation.label, box=box.ROUNDED, expand=False))


def print_error(error: GenerationError, console: Optional[Console] = None) -> None:
    """
    Report a pipeline failure, tagged with its kind.
    """
    console = console or Console(stderr=True)
    kind = error.kind.value if error.kind is not None else "error"
    console.print(f"[bold red]{kind}:[/bold red] {escape(error.message)}", highlight=False)
