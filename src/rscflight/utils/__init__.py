# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Utility exports."""

from .json_tree import (
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

__all__ = [
    "as_array_or_none",
    "as_float_or_none",
    "as_int_or_none",
    "as_object_or_none",
    "as_string_or_none",
    "find_all_objects",
    "find_first_object",
    "find_object_with_key",
    "find_primitive_by_key",
    "primitive_text",
    "safe_float",
    "safe_int",
    "safe_string",
]
