"""Tests for the psycopg `StringList` dumper (no database required)."""

from __future__ import annotations

import psycopg
from psycopg.adapt import AdaptersMap, PyFormat

from src.datatypes.schema import StructuredInput
from src.datatypes.string_list import StringList, decode_string_list, encode_string_list
from src.db.adapters import StringListDumper, register_string_list


def _adapters() -> AdaptersMap:
    adapters = AdaptersMap(psycopg.adapters)
    register_string_list(adapters)
    return adapters


def test_dumper_is_selected_for_string_list() -> None:
    assert _adapters().get_dumper(StringList, PyFormat.AUTO) is StringListDumper


def test_plain_lists_keep_default_adaptation() -> None:
    assert _adapters().get_dumper(list, PyFormat.AUTO) is not StringListDumper


def test_dumper_writes_array_literal_as_text() -> None:
    dumper = StringListDumper(StringList)
    items = StringList(["it", 'a "b" \\ c', ""])
    dumped = dumper.dump(items)
    assert dumped == b'{"it","a \\"b\\" \\\\\\ c",""}'
    assert decode_string_list(dumped) == items
    assert dumper.oid == psycopg.postgres.types["text"].oid


def test_reassigned_slot_dumps_as_array_literal() -> None:
    si = StructuredInput()
    si.objects = ["a\\b", 'say "hi"']

    dumper_cls = _adapters().get_dumper(type(si.objects), PyFormat.AUTO)
    assert dumper_cls is StringListDumper
    assert dumper_cls(StringList).dump(si.objects) == encode_string_list(si.objects).encode()
    assert encode_string_list(si.objects) == r'{"a\\\b","say \"hi\""}'
