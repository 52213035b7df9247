"""Schemas for the PDF-to-transaction converter's JSON output.

Only the shape of the ``convert?format=JSON`` payload is modelled; the
converter itself is an external service.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConverterTransaction(BaseModel):
    """One normalised row. Fields stay loose so bad rows can be skipped, not rejected."""

    model_config = ConfigDict(extra="allow")

    date: str | None = None
    description: str | None = None
    amount: str | float | None = Field(None, description="Signed decimal; negative for debits")


class ConverterResponse(BaseModel):
    """Converter payload for a single statement."""

    model_config = ConfigDict(extra="allow")

    normalised: list[ConverterTransaction]


class StatementUpload(BaseModel):
    """A converter payload plus the name of the file it came from."""

    filename: str = Field("", description="Original PDF filename (used to guess the bank)")
    response: dict[str, Any] = Field(..., description="Raw converter JSON")
