# tests/test_envelopes.py
import pytest
from pydantic import ValidationError

from navkit.shared.core.envelopes import (
    ResultEnvelope,
    ResultKind,
    create_cancellation_envelope,
    create_selection_envelope,
)


def test_selection_envelope_carries_payload():
    envelope = create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc", source="picker")

    assert envelope.kind is ResultKind.ISSUE_SELECTED
    assert envelope.payload == "abc"
    assert envelope.source == "picker"
    assert not envelope.is_cancellation


def test_cancellation_envelope_has_no_payload():
    envelope = create_cancellation_envelope(ResultKind.ISSUE_SELECTED)

    assert envelope.cancelled
    assert envelope.payload is None
    assert envelope.is_cancellation


def test_selection_without_payload_counts_as_cancellation():
    envelope = ResultEnvelope(kind=ResultKind.ASSET_SELECTED, payload=None)

    assert envelope.is_cancellation


def test_cancelled_envelope_rejects_payload():
    with pytest.raises(ValidationError):
        ResultEnvelope(kind=ResultKind.ISSUE_SELECTED, payload="abc", cancelled=True)


def test_envelope_is_immutable():
    envelope = create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc")

    with pytest.raises(ValidationError):
        envelope.payload = "xyz"


def test_envelopes_get_unique_ids():
    first = create_cancellation_envelope(ResultKind.BARCODE_SCAN_COMPLETE)
    second = create_cancellation_envelope(ResultKind.BARCODE_SCAN_COMPLETE)

    assert first.envelope_id != second.envelope_id


def test_result_kind_round_trips_from_string():
    assert ResultKind("issue_selected") is ResultKind.ISSUE_SELECTED
