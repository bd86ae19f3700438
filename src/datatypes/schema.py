"""Structured input records (Pydantic models).

`StructuredInput` is the contract between the upstream word classifier and the downstream intent
executors: it carries the original sentence, the user identity and the classified words grouped into
five slots (commands, actors, objects, times, places).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.datatypes.classes import FlexIdType, WordClass, is_pronoun
from src.datatypes.string_list import StringList

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when `StructuredInput.add` is called without any pairs."""


class InvalidClassError(ValueError):
    """Raised when a word carries a class outside the known slots."""


_SLOT_FIELDS: Mapping[WordClass, str] = MappingProxyType(
    {
        WordClass.command: "commands",
        WordClass.actor: "actors",
        WordClass.object: "objects",
        WordClass.time: "times",
        WordClass.place: "places",
    }
)

_RENDER_LABELS: tuple[tuple[str, str], ...] = (
    ("Command", "commands"),
    ("Actors", "actors"),
    ("Objects", "objects"),
    ("Times", "times"),
    ("Places", "places"),
)


class WordClassPair(BaseModel):
    """A single classified word as emitted by the upstream classifier."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    word: str
    word_class: WordClass = Field(alias="class")


class StructuredInput(BaseModel):
    """One interpreted utterance.

    The record is created with its identity fields, filled by one or more `add` calls, and then only
    read. It is owned by a single pipeline run; concurrent `add` calls need external locking.
    """

    # Reassigned slots are re-validated so they stay `StringList`.
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    user_id: int | None = None
    flex_id: str = ""
    flex_id_type: FlexIdType | None = None
    sentence: str = Field(default="", frozen=True)

    commands: StringList = Field(default_factory=StringList)
    actors: StringList = Field(default_factory=StringList)
    objects: StringList = Field(default_factory=StringList)
    times: StringList = Field(default_factory=StringList)
    places: StringList = Field(default_factory=StringList)

    def add(self, pairs: Iterable[WordClassPair | tuple[str, Any]]) -> None:
        """Append classified words to their slots, in order.

        Pairs are `WordClassPair` objects or `(word, class)` tuples, e.g. `("order", "Command")`.
        Words classed `Ignore` are dropped.

        Processing stops at the first unknown class. Words from earlier pairs in the same call stay
        appended; validate the whole batch with `WordClassPair` first if that matters.

        Raises:
            InvalidArgumentError: If `pairs` is empty or a pair is not a `(word, class)` pair.
            InvalidClassError: If a pair carries an unknown class.
        """

        pairs = list(pairs)
        if not pairs:
            raise InvalidArgumentError("at least one word/class pair is required")

        for pair in pairs:
            if isinstance(pair, WordClassPair):
                word, raw_class = pair.word, pair.word_class
            else:
                try:
                    word, raw_class = pair
                except (TypeError, ValueError):
                    raise InvalidArgumentError(f"expected a (word, class) pair, got {pair!r}") from None

            try:
                word_class = WordClass(raw_class)
            except ValueError:
                logger.warning("invalid class=%r word=%r", raw_class, word)
                raise InvalidClassError(f"invalid class: {raw_class!r}") from None

            if word_class == WordClass.ignore:
                continue
            getattr(self, _SLOT_FIELDS[word_class]).append(word)

    def pronouns(self) -> list[str]:
        """Return pronoun tokens in objects, actors, times and places (in that order).

        Commands are never pronoun candidates.
        """

        return [
            word
            for slot in (self.objects, self.actors, self.times, self.places)
            for word in slot
            if is_pronoun(word)
        ]

    def render(self) -> str:
        """Human-readable multi-line summary for logs; empty slots are omitted."""

        lines = [
            f"{label}: {', '.join(getattr(self, field))}\n"
            for label, field in _RENDER_LABELS
            if getattr(self, field)
        ]
        return "\n" + "".join(lines)

    def __str__(self) -> str:
        return self.render()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class User(BaseModel):
    """A known user of the assistant."""

    model_config = ConfigDict(extra="forbid")

    id: int
    email: str = ""
    phone: str = ""
    last_authenticated: datetime | None = None

    def is_authenticated(self, *, require_auth_in_hours: int, now: datetime | None = None) -> bool:
        """Whether the user authenticated within the last `require_auth_in_hours` hours.

        Naive timestamps are interpreted as UTC. A user who never authenticated is not authenticated.
        """

        if require_auth_in_hours < 0:
            raise ValueError("require_auth_in_hours must be >= 0")
        if self.last_authenticated is None:
            return False

        cutoff = _as_utc(now or datetime.now(UTC)) - timedelta(hours=require_auth_in_hours)
        return _as_utc(self.last_authenticated) > cutoff
