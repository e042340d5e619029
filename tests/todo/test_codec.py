"""Tests: PersistedBlob 编解码"""

import json

import pytest

from todolist.todo import PersistenceReadFailure, decode_items, encode_items


@pytest.mark.parametrize(
    "items",
    [[], ["a"], ["a", "a", ""], ["买牛奶", "emoji 🥛", 'quote " and \\ slash']],
)
def test_round_trip(items):
    assert decode_items(encode_items(items)) == items


def test_encode_is_plain_json_array():
    raw = encode_items(("x", "y"))
    assert json.loads(raw) == ["x", "y"]


def test_encode_keeps_non_ascii():
    assert "买牛奶" in encode_items(["买牛奶"])


def test_decode_compact_json():
    """没有空格的紧凑 JSON 数组同样可以读取"""
    assert decode_items('["x","y"]') == ["x", "y"]


@pytest.mark.parametrize("raw", ["", "nope", "{}", '"x"', "[1]", '["a", null]', "null"])
def test_decode_rejects_non_string_arrays(raw):
    with pytest.raises(PersistenceReadFailure) as exc_info:
        decode_items(raw)
    assert exc_info.value.code == "persistence_read_failure"
    assert exc_info.value.cause is not None
