"""
Dipstick - inspect the NixOS generations available on a host.

This package wraps `nixos-rebuild list-generations --json` in a small, typed,
read-only pipeline:

- Retrieval: spawn the tool once and capture its output
- Decoding: UTF-8, JSON, and strict per-record validation
- Presentation: rich tables and a typer CLI

Every failure surfaces as a GenerationError subclass tagged with an ErrorKind.
Nothing is cached and the host is never modified.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from dipstick.config import Settings, get_settings
from dipstick.decoder import decode_generations
from dipstick.domain import (
    DecodeError,
    EncodingError,
    ErrorKind,
    Generation,
    GenerationError,
    GenerationNotFoundError,
    LaunchFailedError,
    ProcessFailedError,
    RetrievalError,
    StructureError,
)
from dipstick.infrastructure import GenerationRetriever, GenerationSource
from dipstick.inventory import (
    current_generation,
    list_generations,
    list_generations_with_retry,
    select_generation,
)
from dipstick.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Generation",
    # Errors
    "ErrorKind",
    "GenerationError",
    "RetrievalError",
    "LaunchFailedError",
    "ProcessFailedError",
    "DecodeError",
    "EncodingError",
    "StructureError",
    "GenerationNotFoundError",
    # Pipeline
    "GenerationRetriever",
    "GenerationSource",
    "decode_generations",
    "list_generations",
    "list_generations_with_retry",
    "current_generation",
    "select_generation",
    # Logging
    "configure_logging",
    "get_logger",
]
