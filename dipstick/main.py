from __future__ import annotations

import json
import sys
from typing import List, Optional

import typer

from dipstick.config import get_settings
from dipstick.domain.errors import GenerationError
from dipstick.domain.models import Generation
from dipstick.infrastructure.retriever import LIST_GENERATIONS_COMMAND
from dipstick.inventory import current_generation, list_generations_with_retry, select_generation
from dipstick.reporter import print_error, print_generation_detail, print_generations
from dipstick.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Inspect the NixOS generations available on this host.")

log = get_logger(__name__)

_ATTEMPTS_HELP = "Total fetch attempts if the listing command fails (default from settings)."


def _load_generations(attempts: Optional[int]) -> List[Generation]:
    """
    Configure logging from settings and run the listing pipeline.

    Exits with status 1 after reporting any pipeline error.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        return list_generations_with_retry(
            attempts=attempts or settings.fetch_attempts,
            backoff_seconds=settings.retry_backoff_seconds,
        )
    except GenerationError as exc:
        log.debug("Listing generations failed", exc_info=True, extra={"kind": exc.kind})
        print_error(exc)
        raise typer.Exit(code=1) from exc


@app.command("list")
def list_command(
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the records as JSON using the tool's field names.",
    ),
    attempts: Optional[int] = typer.Option(None, "--attempts", "-a", min=1, help=_ATTEMPTS_HELP),
) -> None:
    """
    List every generation in the order the tool reports them.
    """
    generations = _load_generations(attempts)
    if as_json:
        typer.echo(json.dumps([g.to_wire() for g in generations], indent=2))
        return
    print_generations(generations)


@app.command()
def show(
    generation_id: int = typer.Argument(..., metavar="GENERATION", help="Generation number."),
    attempts: Optional[int] = typer.Option(None, "--attempts", "-a", min=1, help=_ATTEMPTS_HELP),
) -> None:
    """
    Show the details of one generation.
    """
    generations = _load_generations(attempts)
    try:
        selected = select_generation(generations, generation_id)
    except GenerationError as exc:
        print_error(exc)
        raise typer.Exit(code=1) from exc
    print_generation_detail(selected)


@app.command()
def current(
    attempts: Optional[int] = typer.Option(None, "--attempts", "-a", min=1, help=_ATTEMPTS_HELP),
) -> None:
    """
    Show the generation currently active on this host.
    """
    generations = _load_generations(attempts)
    active = current_generation(generations)
    if active is None:
        typer.echo("No generation is flagged as current.", err=True)
        raise typer.Exit(code=1)
    print_generation_detail(active)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"command={' '.join(LIST_GENERATIONS_COMMAND)} | "
        f"attempts={settings.fetch_attempts} backoff={settings.retry_backoff_seconds}s | "
        f"log_level={settings.log_level} json_logs={settings.log_json} env={settings.app_env}"
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
