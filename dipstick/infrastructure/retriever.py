"""
Subprocess-backed retrieval of the generation listing.

Runs `nixos-rebuild list-generations --json` once per `fetch()`, waits for it
to exit and returns its stdout untouched. Launch failures and failed exits are
mapped onto the RetrievalError subclasses; there is no timeout and no retry.
"""

from __future__ import annotations

import subprocess
from typing import Optional, Sequence, Tuple

from dipstick.domain.errors import LaunchFailedError, ProcessFailedError
from dipstick.utils.logging import get_logger

log = get_logger(__name__)

LIST_GENERATIONS_COMMAND: Tuple[str, ...] = ("nixos-rebuild", "list-generations", "--json")


class GenerationRetriever:
    """
    Fetch raw generation listings from the NixOS rebuild tool.

    The command is fixed. `command_override` exists so tests can point the
    retriever at a stand-in executable; it is not a configuration surface.
    """

    def __init__(self, command_override: Optional[Sequence[str]] = None) -> None:
        if command_override is not None and not command_override:
            raise ValueError("command_override must contain at least the executable")
        self._command: Tuple[str, ...] = (
            tuple(command_override) if command_override else LIST_GENERATIONS_COMMAND
        )

    @property
    def command(self) -> Tuple[str, ...]:
        return self._command

    def fetch(self) -> bytes:
        """
        Run the listing command and return its complete stdout.

        Raises
        ------
        LaunchFailedError
            If the executable cannot be spawned (missing, not executable, ...).
        ProcessFailedError
            If it exits with a non-zero status or is killed by a signal. Any
            stdout produced before the failure is discarded.
        """
        log.debug("Launching generation listing", extra={"command": list(self._command)})
        try:
            completed = subprocess.run(
                list(self._command),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            raise LaunchFailedError(self._command, exc) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            log.debug(
                "Generation listing failed",
                extra={"returncode": completed.returncode, "stderr_bytes": len(completed.stderr)},
            )
            raise ProcessFailedError(self._command, completed.returncode, stderr)

        log.debug("Generation listing captured", extra={"stdout_bytes": len(completed.stdout)})
        return completed.stdout


__all__ = ["GenerationRetriever", "LIST_GENERATIONS_COMMAND"]
