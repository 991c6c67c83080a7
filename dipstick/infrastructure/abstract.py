"""
Source interface for raw generation listings.

The inventory only needs something that returns the tool's stdout as bytes.
The subprocess-backed GenerationRetriever is the production implementation;
tests and alternative frontends can supply any object with a matching
`fetch()`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerationSource(Protocol):
    """
    Anything that can produce a raw generation listing.

    Implementations raise `RetrievalError` subclasses on failure and never
    return partial output.
    """

    def fetch(self) -> bytes:
        """
        Produce the complete listing as raw bytes.

        Returns
        -------
        bytes
            Unparsed stdout of the inventory command.
        """
        ...


__all__ = ["GenerationSource"]
