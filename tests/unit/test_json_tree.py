# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from rscflight.utils import json_tree
from rscflight.utils.json_tree import (
    as_array_or_none,
    as_float_or_none,
    as_int_or_none,
    as_object_or_none,
    as_string_or_none,
    find_all_objects,
    find_first_object,
    find_object_with_key,
    find_primitive_by_key,
    primitive_text,
    safe_float,
    safe_int,
    safe_string,
)

TREE = [
    "$",
    "html",
    None,
    {
        "children": [
            ["$", "head", None, {"children": ["$", "title", None, {"children": "Shop"}]}],
            [
                "$",
                "body",
                None,
                {
                    "product": {"id": "p-1", "price": 19.99, "stock": "12"},
                    "children": [
                        {"id": {"nested": True}, "sku": "A"},
                        {"id": "p-2", "price": 5},
                    ],
                },
            ],
        ]
    },
]


def test_primitive_text():
    assert primitive_text("abc") == "abc"
    assert primitive_text(12) == "12"
    assert primitive_text(1.5) == "1.5"
    assert primitive_text(True) == "true"
    assert primitive_text(None) == "null"
    with pytest.raises(TypeError):
        primitive_text({"a": 1})
    with pytest.raises(TypeError):
        primitive_text([1])


def test_container_accessors():
    assert as_object_or_none({"a": 1}) == {"a": 1}
    assert as_object_or_none([1]) is None
    assert as_array_or_none([1]) == [1]
    assert as_array_or_none("x") is None


@pytest.mark.parametrize(
    "value,expected",
    [("x", "x"), (3, "3"), (False, "false"), (None, None), ({}, None), ([], None)],
)
def test_as_string_or_none(value, expected):
    assert as_string_or_none(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [(7, 7), (7.0, 7), (1.5, None), (" 42 ", 42), ("4.2", None), ("nope", None), (True, None), (None, None)],
)
def test_as_int_or_none(value, expected):
    assert as_int_or_none(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [(2, 2.0), (2.5, 2.5), ("3.25", 3.25), ("x", None), (False, None), ([1], None)],
)
def test_as_float_or_none(value, expected):
    assert as_float_or_none(value) == expected


def test_safe_accessors():
    obj = {"name": "Shop", "count": "3", "ratio": "0.5", "nested": {"a": 1}}
    assert safe_string(obj, "name") == "Shop"
    assert safe_string(obj, "nested") is None
    assert safe_string(obj, "missing") is None
    assert safe_int(obj, "count") == 3
    assert safe_int(obj, "name") is None
    assert safe_float(obj, "ratio") == 0.5


def test_find_all_objects_in_document_order():
    found = find_all_objects(TREE, lambda obj: "id" in obj)
    assert [obj["id"] for obj in found] == ["p-1", {"nested": True}, "p-2"]


def test_find_all_objects_appends_to_given_list():
    out = [{"seed": True}]
    result = find_all_objects(TREE, lambda obj: "sku" in obj, out)
    assert result is out
    assert out[1] == {"id": {"nested": True}, "sku": "A"}


def test_find_first_object_and_key():
    assert find_first_object(TREE, lambda obj: obj.get("price") == 5) == {"id": "p-2", "price": 5}
    assert find_first_object(TREE, lambda obj: "nothing" in obj) is None
    assert find_first_object("scalar", lambda obj: True) is None
    assert find_object_with_key(TREE, "stock") == {"id": "p-1", "price": 19.99, "stock": "12"}


def test_find_primitive_by_key():
    assert find_primitive_by_key(TREE, "price") == 19.99
    assert find_primitive_by_key(TREE, "children") == "Shop"
    assert find_primitive_by_key([{"id": {"nested": True}}, {"id": "late"}], "id") == "late"
    assert find_primitive_by_key({"a": None}, "a") is None


def test_utils_package_reexports():
    from rscflight import utils

    assert utils.find_first_object is json_tree.find_first_object
