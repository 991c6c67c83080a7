"""
Infrastructure package for Dipstick.

Centralizes process I/O: spawning the inventory command and capturing its
output. Keep this layer focused on I/O, decoupled from decoding and
presentation.
"""

from dipstick.infrastructure.abstract import GenerationSource
from dipstick.infrastructure.retriever import LIST_GENERATIONS_COMMAND, GenerationRetriever

__all__ = [
    "GenerationSource",
    "GenerationRetriever",
    "LIST_GENERATIONS_COMMAND",
]
