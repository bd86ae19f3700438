"""Word classes and the lookup tables built on them.

The tables are module-level and read-only; they are safe to share between concurrent pipelines.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum, StrEnum
from types import MappingProxyType


class WordClass(StrEnum):
    """Slot a classified word belongs to (`ignore` words are dropped)."""

    command = "Command"
    actor = "Actor"
    object = "Object"
    time = "Time"
    place = "Place"
    ignore = "Ignore"


class FlexIdType(IntEnum):
    """Kind of alternate user identifier carried in `StructuredInput.flex_id`."""

    email = 1
    phone = 2


# Pronoun token -> slot it usually refers back to.
PRONOUNS: Mapping[str, WordClass] = MappingProxyType(
    {
        "me": WordClass.actor,
        "us": WordClass.actor,
        "you": WordClass.actor,
        "him": WordClass.actor,
        "her": WordClass.actor,
        "them": WordClass.actor,
        "it": WordClass.object,
        "that": WordClass.object,
        "there": WordClass.place,
        "then": WordClass.time,
    }
)


def is_pronoun(word: str) -> bool:
    """Whether `word` is one of the recognised pronoun tokens (exact, case-sensitive match)."""

    return word in PRONOUNS
