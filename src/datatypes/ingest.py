"""Build a `StructuredInput` from classifier output."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from src.datatypes.classes import FlexIdType
from src.datatypes.schema import StructuredInput, WordClassPair

logger = logging.getLogger(__name__)


def structured_input_from_pairs(
        pairs: Iterable[WordClassPair | tuple[str, Any]],
        *,
        sentence: str = "",
        user_id: int | None = None,
        flex_id: str = "",
        flex_id_type: FlexIdType | None = None,
) -> StructuredInput:
    """Create a record for one utterance and ingest its classified words.

    Errors from `StructuredInput.add` are not caught; the partially filled record is discarded.
    """

    si = StructuredInput(
        user_id=user_id,
        flex_id=flex_id,
        flex_id_type=flex_id_type,
        sentence=sentence,
    )
    si.add(pairs)
    logger.debug("structured input user_id=%s%s", user_id, si)
    return si
