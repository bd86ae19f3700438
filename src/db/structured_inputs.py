"""Persistence helpers for structured inputs and users.

The helpers take an open `AsyncConnection` owned by the caller. They never interpolate user values
into SQL, do not commit, and do not swallow DB errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from psycopg import AsyncConnection, sql

from src.datatypes.classes import FlexIdType
from src.datatypes.schema import StructuredInput, User
from src.datatypes.string_list import StringList, decode_string_list
from src.db.adapters import register_string_list

# Allowlisted lookup columns; `flex_id_type` is never interpolated directly.
FLEX_ID_COLUMNS: Mapping[FlexIdType, str] = MappingProxyType(
    {
        FlexIdType.email: "email",
        FlexIdType.phone: "phone",
    }
)

_USER_COLUMNS = "id, email, phone, last_authenticated"

# Slot fields in column order; each is re-wrapped as `StringList` before dumping.
SLOT_COLUMNS: tuple[str, ...] = ("commands", "actors", "objects", "times", "places")


def _user_from_row(row: tuple[Any, ...]) -> User:
    return User(id=row[0], email=row[1], phone=row[2], last_authenticated=row[3])


async def insert_structured_input(conn: AsyncConnection, si: StructuredInput) -> int:
    """Insert a structured input and return its generated id."""

    async with conn.cursor() as cur:
        register_string_list(cur)
        await cur.execute(
            """
            INSERT INTO structured_inputs (user_id, flex_id, flex_id_type, sentence,
                                           commands, actors, objects, times, places)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s) RETURNING id
            """,
            (
                si.user_id,
                si.flex_id,
                int(si.flex_id_type) if si.flex_id_type is not None else None,
                si.sentence,
                *(StringList(getattr(si, field)) for field in SLOT_COLUMNS),
            ),
        )
        row = await cur.fetchone()

    if row is None:
        raise RuntimeError("INSERT ... RETURNING id produced no row")
    return int(row[0])


async def fetch_structured_input(conn: AsyncConnection, input_id: int) -> StructuredInput | None:
    """Load a structured input by id.

    Returns:
        The record, or `None` if no row has this id.

    Raises:
        DecodeError: If a slot column does not hold a valid array literal.
    """

    async with conn.cursor() as cur:
        await cur.execute(
            """
            SELECT user_id, flex_id, flex_id_type, sentence, commands, actors, objects, times, places
            FROM structured_inputs
            WHERE id = %s
            """,
            (input_id,),
        )
        row = await cur.fetchone()

    if row is None:
        return None

    return StructuredInput(
        user_id=row[0],
        flex_id=row[1],
        flex_id_type=row[2],
        sentence=row[3],
        commands=decode_string_list(row[4]),
        actors=decode_string_list(row[5]),
        objects=decode_string_list(row[6]),
        times=decode_string_list(row[7]),
        places=decode_string_list(row[8]),
    )


async def fetch_user(conn: AsyncConnection, user_id: int) -> User | None:
    """Load a user by primary id."""

    async with conn.cursor() as cur:
        await cur.execute(
            "SELECT id, email, phone, last_authenticated FROM users WHERE id = %s",
            (user_id,),
        )
        row = await cur.fetchone()

    return _user_from_row(row) if row is not None else None


async def fetch_user_by_flex_id(
        conn: AsyncConnection,
        flex_id: str,
        flex_id_type: FlexIdType,
) -> User | None:
    """Look a user up by email or phone, for inputs whose `user_id` is not known yet.

    If several users share the identifier, the one with the lowest id is returned.
    """

    query = sql.SQL("SELECT {} FROM users WHERE {} = %s ORDER BY id LIMIT 1").format(
        sql.SQL(_USER_COLUMNS),
        sql.Identifier(FLEX_ID_COLUMNS[FlexIdType(flex_id_type)]),
    )

    async with conn.cursor() as cur:
        await cur.execute(query, (flex_id,))
        row = await cur.fetchone()

    return _user_from_row(row) if row is not None else None
