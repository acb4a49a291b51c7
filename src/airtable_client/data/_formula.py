# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Builders for Airtable formula strings used in ``filterByFormula``."""

from __future__ import annotations

from typing import Any


def _formula_literal(value: Any) -> str:
    """Render a Python value the way it appears inside a quoted formula literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        # None items render as empty entries
        return ",".join("" if v is None else _formula_literal(v) for v in value)
    return str(value)


def field_equals(field: str, value: Any) -> str:
    """
    Build ``{field}='value'``.

    The value is interpolated verbatim. Values containing a single quote
    produce a malformed formula.
    """
    return f"{{{field}}}='{_formula_literal(value)}'"


def modified_since(hours: int) -> str:
    """Match records whose last modification is at most ``hours`` hours old."""
    return f"{{lastModifiedTime}}>=DATETIME_FORMAT(DATEADD(NOW(),-{hours},'hours'))"
