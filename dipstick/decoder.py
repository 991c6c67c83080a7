"""
Decoding and validation of raw generation listings.

Turns the bytes captured from `nixos-rebuild list-generations --json` into an
ordered list of Generation records in three steps, each with its own failure:

1. UTF-8 decoding          -> EncodingError
2. JSON parsing            -> StructureError (line/column from the parser)
3. per-object validation   -> StructureError (object index and field name)

The output keeps the document order. Duplicate or out-of-order generation ids
are passed through; callers that need sorting do it themselves.
"""

from __future__ import annotations

import json
from typing import Any, List

from pydantic import ValidationError

from dipstick.domain.errors import EncodingError, StructureError
from dipstick.domain.models import Generation
from dipstick.utils.logging import get_logger

log = get_logger(__name__)


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(offset=exc.start, reason=exc.reason) from exc


def _parse_document(text: str) -> List[Any]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StructureError(
            f"malformed JSON at line {exc.lineno} column {exc.colno}: {exc.msg}",
            line=exc.lineno,
            column=exc.colno,
            offset=exc.pos,
        ) from exc

    if not isinstance(document, list):
        raise StructureError(
            f"expected a JSON array of generations, got {type(document).__name__}"
        )
    return document


def _validate_entry(index: int, entry: Any) -> Generation:
    if not isinstance(entry, dict):
        raise StructureError(
            f"generation #{index}: expected an object, got {type(entry).__name__}",
            index=index,
        )
    try:
        return Generation.model_validate(entry)
    except ValidationError as exc:
        # Report the first problem; the rest are usually knock-on effects.
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else None
        path = ".".join(str(part) for part in loc) or "<object>"
        raise StructureError(
            f"generation #{index}: field '{path}': {first.get('msg', 'invalid value')}",
            index=index,
            field=field,
        ) from exc


def decode_generations(data: bytes) -> List[Generation]:
    """
    Decode a raw listing into Generation records.

    Parameters
    ----------
    data : bytes
        Complete stdout of the listing command.

    Returns
    -------
    List[Generation]
        One record per array element, in document order. `[]` yields `[]`.

    Raises
    ------
    EncodingError
        If `data` is not valid UTF-8.
    StructureError
        If the text is not a JSON array, or any element is missing a field or
        carries a value of the wrong kind. No partial list is returned.
    """
    text = _decode_text(data)
    document = _parse_document(text)
    generations = [_validate_entry(index, entry) for index, entry in enumerate(document)]
    log.debug("Decoded generation listing", extra={"generations": len(generations)})
    return generations


__all__ = ["decode_generations"]
