"""
Domain package for Dipstick.

Exports the generation record model and the pipeline's error taxonomy.
Keep this package focused on data definitions and validation concerns.
"""

from dipstick.domain.errors import (
    DecodeError,
    EncodingError,
    ErrorKind,
    GenerationError,
    GenerationNotFoundError,
    LaunchFailedError,
    ProcessFailedError,
    RetrievalError,
    StructureError,
)
from dipstick.domain.models import Generation

__all__ = [
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
]
