"""
validator/selectors.py — ewaluacja wyrażeń JSONPath reguł szablonu.

Wyrażenia są parsowane parserem rozszerzonym jsonpath-ng (filtry,
wildcardy) i cache'owane. Wyrażenie złożone 'a | b' jest dzielone na
alternatywy; wyniki są łączone z zachowaniem kolejności.
"""

from __future__ import annotations

import functools
from typing import Any

from jsonpath_ng.ext import parse as _parse_jsonpath

from profile_model import StructuralError


@functools.lru_cache(maxsize=512)
def compile_path(expr: str):
    """
    Parsuje pojedyncze wyrażenie JSONPath (z cache).

    Raises:
        StructuralError gdy wyrażenie jest niepoprawne.
    """
    try:
        return _parse_jsonpath(expr)
    except Exception as exc:  # lekser jsonpath-ng zgłasza też gołe Exception
        raise StructuralError(f"Niepoprawne wyrażenie JSONPath '{expr}': {exc}") from exc


def split_paths(expr: str) -> list[str]:
    """'$.a | $.b' → ['$.a', '$.b'] (puste fragmenty pomijane)."""
    return [p.strip() for p in expr.split("|") if p.strip()]


def find_values(document: Any, expr: str) -> list[Any]:
    """Wartości pasujące do jednego wyrażenia, w kolejności dokumentu."""
    return [m.value for m in compile_path(expr).find(document)]


def select(document: Any, paths: list[str]) -> list[Any]:
    """Konkatenacja wartości ze wszystkich alternatyw."""
    values: list[Any] = []
    for expr in paths:
        values.extend(find_values(document, expr))
    return values


def select_within(values: list[Any], paths: list[str]) -> tuple[list[Any], bool]:
    """
    Ewaluuje selektory względem każdej wartości osobno.

    Returns:
        (wyniki, has_unmatchable) — has_unmatchable=True gdy dla którejś
        wartości żadna alternatywa nic nie zwróciła.
    """
    selected: list[Any] = []
    has_unmatchable = False
    for value in values:
        found = select(value, paths)
        if not found:
            has_unmatchable = True
        selected.extend(found)
    return selected, has_unmatchable
