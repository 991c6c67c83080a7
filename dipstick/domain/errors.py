"""
Error taxonomy for the generation retrieval pipeline.

Every failure the pipeline can hit maps to exactly one exception class, and
each class carries an `ErrorKind` tag so callers can branch on the kind
without isinstance chains:

- LaunchFailedError     the external command could not be spawned
- ProcessFailedError    the command ran but exited with a failure status
- EncodingError         stdout was not valid UTF-8
- StructureError        stdout was not a well-formed generation listing

RetrievalError groups the first two, DecodeError the last two. None of them
are retried by the pipeline.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Sequence


class ErrorKind(str, Enum):
    """Machine-friendly tag for each terminal failure."""

    LAUNCH_FAILED = "launch_failed"
    PROCESS_FAILED = "process_failed"
    ENCODING = "encoding"
    STRUCTURE = "structure"
    NOT_FOUND = "not_found"


class GenerationError(Exception):
    """Base exception for everything raised while listing generations."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}


class RetrievalError(GenerationError):
    """The external inventory command did not produce usable output."""


class LaunchFailedError(RetrievalError):
    """
    The external command could not be started at all.

    The underlying OSError is kept on `os_error` (and chained as `__cause__`)
    so diagnostics can tell a missing binary from a permission problem.
    """

    kind = ErrorKind.LAUNCH_FAILED

    def __init__(self, command: Sequence[str], os_error: OSError) -> None:
        super().__init__(
            f"failed to launch {command[0]!r}: {os_error.strerror or os_error}",
            details={"command": list(command), "errno": os_error.errno},
        )
        self.command = tuple(command)
        self.os_error = os_error


class ProcessFailedError(RetrievalError):
    """
    The external command exited with a failure status.

    Whatever it wrote to stdout is discarded. A negative `returncode` means the
    process was killed by that signal number.
    """

    kind = ErrorKind.PROCESS_FAILED

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        if returncode < 0:
            status = f"was terminated by signal {-returncode}"
        else:
            status = f"exited with status {returncode}"
        message = f"{' '.join(command)} {status}"
        if stderr.strip():
            message = f"{message}: {stderr.strip().splitlines()[-1]}"
        super().__init__(
            message,
            details={"command": list(command), "returncode": returncode, "stderr": stderr},
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class DecodeError(GenerationError):
    """Captured output could not be turned into generation records."""


class EncodingError(DecodeError):
    """Captured bytes are not valid UTF-8."""

    kind = ErrorKind.ENCODING

    def __init__(self, offset: Optional[int], reason: str) -> None:
        where = f" at byte offset {offset}" if offset is not None else ""
        super().__init__(
            f"output is not valid UTF-8{where}: {reason}",
            details={"offset": offset, "reason": reason},
        )
        self.offset = offset
        self.reason = reason


class StructureError(DecodeError):
    """
    Output text is not a well-formed generation listing.

    Covers JSON syntax errors (`line`/`column` set), a top level that is not
    an array, and per-object shape failures (`index`/`field` set).
    """

    kind = ErrorKind.STRUCTURE

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        field: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            details={
                "index": index,
                "field": field,
                "line": line,
                "column": column,
                "offset": offset,
            },
        )
        self.index = index
        self.field = field
        self.line = line
        self.column = column
        self.offset = offset


class GenerationNotFoundError(GenerationError):
    """A caller asked for a generation id that is not in the listing."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, generation_id: int) -> None:
        super().__init__(
            f"generation {generation_id} not found",
            details={"generation_id": generation_id},
        )
        self.generation_id = generation_id


__all__ = [
    "ErrorKind",
    "GenerationError",
    "RetrievalError",
    "LaunchFailedError",
    "ProcessFailedError",
    "DecodeError",
    "EncodingError",
    "StructureError",
    "GenerationNotFoundError",
]
