"""Tests for building structured inputs from classifier output."""

from __future__ import annotations

import logging

import pytest

from src.datatypes.classes import FlexIdType
from src.datatypes.ingest import structured_input_from_pairs
from src.datatypes.schema import InvalidArgumentError, InvalidClassError


def test_builds_record_with_identity(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="src.datatypes.ingest"):
        si = structured_input_from_pairs(
            [("remind", "Command"), ("me", "Actor"), ("then", "Time")],
            sentence="remind me then",
            flex_id="me@example.com",
            flex_id_type=FlexIdType.email,
        )
    assert si.sentence == "remind me then"
    assert si.user_id is None
    assert si.flex_id == "me@example.com"
    assert si.commands == ["remind"]
    assert si.pronouns() == ["me", "then"]
    assert "Command: remind" in caplog.text


def test_errors_propagate() -> None:
    with pytest.raises(InvalidArgumentError):
        structured_input_from_pairs([], sentence="")
    with pytest.raises(InvalidClassError):
        structured_input_from_pairs([("x", "Verb")])
