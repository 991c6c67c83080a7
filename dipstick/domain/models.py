"""
Domain models for Dipstick.

Defines the generation record schema as emitted by
`nixos-rebuild list-generations --json`. Python attributes are snake_case;
the wire names (camelCase, British "specialisations") live in the aliases and
must match exactly.
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field


class Generation(BaseModel):
    """
    One immutable system snapshot.

    Validation is strict: `generation` must be an integer (booleans and
    numeric strings are rejected), `current` must be a boolean and the
    textual fields must be strings. Specialisations are held as a tuple so
    the record cannot be changed in place. Unknown wire fields are ignored.
    """

    generation: int = Field(..., ge=0, description="Generation number.")
    date: str = Field(..., description="Creation timestamp, verbatim from the tool.")
    system_version: str = Field(..., alias="nixosVersion", description="NixOS version.")
    kernel_version: str = Field(..., alias="kernelVersion", description="Linux kernel version.")
    configuration_revision: str = Field(
        ..., alias="configurationRevision", description="Source revision; may be empty."
    )
    # Lax for the container so a JSON array becomes a tuple; non-string items are still rejected.
    specializations: Tuple[str, ...] = Field(
        ...,
        alias="specialisations",
        strict=False,
        description="Specialisation names, in tool order.",
    )
    current: bool = Field(..., description="Whether this generation is active on the host.")

    model_config = {
        "frozen": True,
        "strict": True,
        "extra": "ignore",
    }

    @property
    def label(self) -> str:
        return f"Generation {self.generation}"

    def to_wire(self) -> Dict[str, Any]:
        """Re-encode with the tool's field names."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["Generation"]
