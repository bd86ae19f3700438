"""psycopg adaptation for `StringList`.

Once registered, a `StringList` passed as a query parameter is sent as its array literal
(`encode_string_list`) instead of being adapted as a Postgres array.
"""

from __future__ import annotations

from psycopg import postgres
from psycopg.abc import AdaptContext
from psycopg.adapt import Dumper

from src.datatypes.string_list import StringList, encode_string_list


class StringListDumper(Dumper):
    """Dump a `StringList` as `{"a","b"}` text."""

    oid = postgres.types["text"].oid

    def dump(self, obj: StringList) -> bytes:
        return encode_string_list(obj).encode()


def register_string_list(context: AdaptContext) -> None:
    """Register the `StringList` dumper on a connection, cursor or adapters map."""

    context.adapters.register_dumper(StringList, StringListDumper)
