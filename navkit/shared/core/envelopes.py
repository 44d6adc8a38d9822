"""Canonical result envelopes published by child screens."""

from __future__ import annotations

import time
import uuid
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResultKind(str, Enum):
    """All outcomes a result-producing screen can report."""
    ISSUE_SELECTED = "issue_selected"
    ASSET_SELECTED = "asset_selected"
    BARCODE_SCAN_COMPLETE = "barcode_scan_complete"


class ResultEnvelope(BaseModel):
    """A child screen's outcome, tagged by kind.

    A cancelled envelope carries no payload. An envelope whose payload is
    None is also treated as a cancellation, so a picker can report "nothing
    chosen" either way.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    envelope_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    kind: ResultKind
    payload: Any = None
    cancelled: bool = False
    source: Optional[str] = Field(default=None, description="Screen that produced the result")
    ts: float = Field(default_factory=time.time)
    seq: Optional[int] = Field(default=None, description="Bus sequence number, stamped on publish")

    @model_validator(mode="after")
    def _cancelled_has_no_payload(self) -> "ResultEnvelope":
        if self.cancelled and self.payload is not None:
            raise ValueError("A cancelled envelope cannot carry a payload")
        return self

    @property
    def is_cancellation(self) -> bool:
        return self.cancelled or self.payload is None


def create_selection_envelope(
    kind: ResultKind,
    payload: Any,
    source: Optional[str] = None,
) -> ResultEnvelope:
    """Create an envelope reporting that the user picked ``payload``."""
    return ResultEnvelope(kind=kind, payload=payload, source=source)


def create_cancellation_envelope(
    kind: ResultKind,
    source: Optional[str] = None,
) -> ResultEnvelope:
    """Create an envelope reporting that the user backed out without a choice."""
    return ResultEnvelope(kind=kind, cancelled=True, source=source)
