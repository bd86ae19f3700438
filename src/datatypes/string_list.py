"""Ordered string lists and their relational array literal codec.

A `StringList` is stored in a single column as `{"elem1","elem2",...}`. Inside an element every
backslash is written as three backslashes and every double quote as `\\"`, so a run of backslashes
inside a quoted element is always `3n` (n literal backslashes) or `3n + 1` followed by a quote
(n literal backslashes and one literal quote).

The encoded text is a persistence contract: anything reading or writing these columns must match it
byte-for-byte, including the empty-list form `{}`.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema


class DecodeError(ValueError):
    """Raised when an array literal cannot be decoded into a `StringList`."""


class StringList(list[str]):
    """An ordered list of strings (duplicates and empty strings allowed)."""

    def last(self) -> str:
        """Return the last element, or an empty string for an empty list."""

        if not self:
            return ""
        return self[-1]

    @classmethod
    def __get_pydantic_core_schema__(
            cls,
            source_type: Any,
            handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        # Validate as `list[str]`, then wrap so model fields keep the `StringList` type.
        return core_schema.no_info_after_validator_function(cls, handler.generate_schema(list[str]))


def _quote(elem: str) -> str:
    return '"' + elem.replace("\\", "\\\\\\").replace('"', '\\"') + '"'


def encode_string_list(items: Iterable[str]) -> str:
    """Encode strings as a relational array literal, e.g. `{"a","b"}`."""

    return "{" + ",".join(_quote(elem) for elem in items) + "}"


def _as_text(src: object) -> str:
    if isinstance(src, str):
        return src
    if isinstance(src, (bytes, bytearray, memoryview)):
        try:
            return bytes(src).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("array literal is not valid UTF-8") from exc
    raise DecodeError(f"scan source was not text: {type(src).__name__}")


def _read_quoted(body: str, pos: int) -> tuple[str, int]:
    """Read a quoted element starting right after its opening quote.

    Returns the element value and the position right after the closing quote.
    """

    chars: list[str] = []
    end = len(body)
    while pos < end:
        ch = body[pos]
        if ch == "\\":
            run_end = pos
            while run_end < end and body[run_end] == "\\":
                run_end += 1
            literal, rest = divmod(run_end - pos, 3)
            chars.append("\\" * literal)
            if rest == 0:
                pos = run_end
                continue
            if rest == 1 and run_end < end and body[run_end] == '"':
                chars.append('"')
                pos = run_end + 1
                continue
            raise DecodeError(f"malformed escape sequence at offset {pos + 1}")
        if ch == '"':
            # CSV convention: a doubled quote inside a quoted field is one literal quote.
            if pos + 1 < end and body[pos + 1] == '"':
                chars.append('"')
                pos += 2
                continue
            return "".join(chars), pos + 1
        chars.append(ch)
        pos += 1
    raise DecodeError("unterminated quoted element")


def _read_unquoted(body: str, pos: int) -> tuple[str, int]:
    comma = body.find(",", pos)
    if comma == -1:
        comma = len(body)
    value = body[pos:comma]
    if '"' in value:
        raise DecodeError(f'bare " in unquoted element at offset {pos + 1}')
    return value, comma


def decode_string_list(src: object) -> StringList:
    """Decode a relational array literal produced by `encode_string_list`.

    `src` may be `str` or UTF-8 bytes (`bytes`, `bytearray`, `memoryview`).

    Raises:
        DecodeError: If `src` is not text or the literal is malformed.
    """

    text = _as_text(src)
    if len(text) < 2 or not text.startswith("{") or not text.endswith("}"):
        raise DecodeError("array literal must be wrapped in '{' and '}'")

    body = text[1:-1]
    items = StringList()
    if not body:
        return items

    pos = 0
    end = len(body)
    while True:
        if pos < end and body[pos] == '"':
            value, pos = _read_quoted(body, pos + 1)
        else:
            value, pos = _read_unquoted(body, pos)
        items.append(value)

        if pos == end:
            return items
        if body[pos] != ",":
            raise DecodeError(f"expected ',' after element at offset {pos + 1}")
        pos += 1
