"""
Read-side entry points for the generation inventory.

`list_generations` is the one operation presentation code needs: fetch the
raw listing, decode it, hand back the ordered records. The helpers below it
work on an already-decoded list and never touch the host.

Usage:
    from dipstick.inventory import list_generations, current_generation

    generations = list_generations()
    active = current_generation(generations)
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from dipstick.decoder import decode_generations
from dipstick.domain.errors import GenerationNotFoundError, RetrievalError
from dipstick.domain.models import Generation
from dipstick.infrastructure.abstract import GenerationSource
from dipstick.infrastructure.retriever import GenerationRetriever
from dipstick.utils.logging import get_logger

log = get_logger(__name__)


def list_generations(source: Optional[GenerationSource] = None) -> List[Generation]:
    """
    Run one fetch-and-decode cycle.

    Parameters
    ----------
    source : GenerationSource | None
        Where to read the raw listing from. Defaults to a fresh
        GenerationRetriever running the NixOS rebuild tool.

    Returns
    -------
    List[Generation]
        Every generation, in the order the tool listed them.

    Raises
    ------
    RetrievalError
        If the command could not be launched or failed.
    DecodeError
        If its output could not be decoded.
    """
    source = source if source is not None else GenerationRetriever()
    return decode_generations(source.fetch())


def list_generations_with_retry(
    attempts: int = 1,
    backoff_seconds: float = 0.5,
    source: Optional[GenerationSource] = None,
) -> List[Generation]:
    """
    Repeat the whole fetch-and-decode cycle until it succeeds or attempts run out.

    Only RetrievalError is retried. Decode failures are raised on the first
    occurrence since the same output would fail the same way. The last error
    is re-raised unchanged.

    Parameters
    ----------
    attempts : int
        Total number of cycles, including the first one. Must be >= 1.
    backoff_seconds : float
        Multiplier for the exponential wait between cycles (capped at 10s).
        Zero disables waiting.
    source : GenerationSource | None
        Passed through to `list_generations`.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=backoff_seconds, max=10),
        retry=retry_if_exception_type(RetrievalError),
        before_sleep=lambda state: log.warning(
            f"[RETRY] Generation listing failed (attempt {state.attempt_number}/{attempts})",
            extra={
                "attempt": state.attempt_number,
                "error": str(state.outcome.exception()) if state.outcome else None,
            },
        ),
        reraise=True,
    )
    return retrying(list_generations, source)


def current_generation(generations: Iterable[Generation]) -> Optional[Generation]:
    """
    Return the generation flagged as current, or None if none is.

    The tool should flag at most one. If it flags several, the first is
    returned and a warning is logged.
    """
    flagged = [g for g in generations if g.current]
    if len(flagged) > 1:
        log.warning(
            "Multiple generations flagged as current",
            extra={"generations": [g.generation for g in flagged]},
        )
    return flagged[0] if flagged else None


def select_generation(generations: Iterable[Generation], generation_id: int) -> Generation:
    """
    Return the first generation with `generation_id`.

    Raises
    ------
    GenerationNotFoundError
        If no record carries that id.
    """
    for generation in generations:
        if generation.generation == generation_id:
            return generation
    raise GenerationNotFoundError(generation_id)


__all__ = [
    "current_generation",
    "list_generations",
    "list_generations_with_retry",
    "select_generation",
]
