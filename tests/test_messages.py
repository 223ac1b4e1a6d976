from __future__ import annotations

from collections import OrderedDict

from livetrack.messages import flatten_messages


def test_flatten_nested_mapping() -> None:
    assert flatten_messages({"a": {"b": "hello", "c": "world"}}) == [("a.b", "hello"), ("a.c", "world")]


def test_flatten_is_preorder_and_follows_key_order() -> None:
    tree = OrderedDict(
        [
            ("z", "first"),
            ("nav", {"home": "Home", "deep": {"x": "X"}, "about": "About"}),
            ("a", "last"),
        ]
    )

    assert flatten_messages(tree) == [
        ("z", "first"),
        ("nav.home", "Home"),
        ("nav.deep.x", "X"),
        ("nav.about", "About"),
        ("a", "last"),
    ]


def test_flatten_skips_non_string_leaves() -> None:
    tree = {
        "list": ["a", "b"],
        "none": None,
        "number": 3,
        "flag": True,
        "ok": "kept",
        "nested": {"tuple": ("x",), "inner": "also kept"},
    }

    assert flatten_messages(tree) == [("ok", "kept"), ("nested.inner", "also kept")]


def test_flatten_empty_inputs() -> None:
    assert flatten_messages({}) == []
    assert flatten_messages(None) == []
    assert flatten_messages({"empty": {}}) == []


def test_flatten_with_prefix() -> None:
    assert flatten_messages({"title": "Hi"}, prefix="page") == [("page.title", "Hi")]
