"""
Schemat JSON (Draft 2020-12) dokumentu profilu — kontrola kształtu przed
budową indeksu. Sprawdza tylko to, czego potrzebuje rejestr; pełna
zgodność ze specyfikacją profili xAPI nie jest celem.
"""

from __future__ import annotations

from typing import Any

_IRI = {"type": "string", "minLength": 1}

_LANGUAGE_MAP = {
    "type": "object",
    "additionalProperties": {"type": "string"},
}

_IRI_OR_IRIS = {
    "oneOf": [
        _IRI,
        {"type": "array", "items": _IRI},
    ]
}

_MEMBER = {
    "oneOf": [
        _IRI,
        {"type": "object", "required": ["id"], "properties": {"id": _IRI}},
    ]
}

_RULE = {
    "type": "object",
    "required": ["location"],
    "properties": {
        "location": _IRI,
        "selector": {"type": "string"},
        "presence": {"enum": ["included", "excluded", "recommended"]},
        "any": {"type": "array"},
        "all": {"type": "array"},
        "none": {"type": "array"},
        "scopeNote": _LANGUAGE_MAP,
    },
}

PROFILE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["id", "versions"],
    "properties": {
        "id": _IRI,
        "prefLabel": _LANGUAGE_MAP,
        "versions": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": _IRI,
                    "wasRevisionOf": _IRI_OR_IRIS,
                },
            },
        },
        "concepts": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type"],
                "properties": {
                    "id": _IRI,
                    "type": {"type": "string"},
                    "prefLabel": _LANGUAGE_MAP,
                },
            },
        },
        "templates": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type"],
                "properties": {
                    "id": _IRI,
                    "type": {"const": "StatementTemplate"},
                    "prefLabel": _LANGUAGE_MAP,
                    "verb": _IRI,
                    "objectActivityType": _IRI,
                    "contextParentActivityType": _IRI_OR_IRIS,
                    "contextGroupingActivityType": _IRI_OR_IRIS,
                    "contextCategoryActivityType": _IRI_OR_IRIS,
                    "contextOtherActivityType": _IRI_OR_IRIS,
                    "attachmentUsageType": _IRI_OR_IRIS,
                    "objectStatementRefTemplate": _IRI_OR_IRIS,
                    "contextStatementRefTemplate": _IRI_OR_IRIS,
                    "rules": {"type": "array", "items": _RULE},
                },
            },
        },
        "patterns": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "type"],
                "properties": {
                    "id": _IRI,
                    "type": {"const": "Pattern"},
                    "prefLabel": _LANGUAGE_MAP,
                    "primary": {"type": "boolean"},
                    "sequence": {"type": "array", "minItems": 1, "items": _MEMBER},
                    "alternates": {"type": "array", "minItems": 1, "items": _MEMBER},
                    "optional": _MEMBER,
                    "oneOrMore": _MEMBER,
                    "zeroOrMore": _MEMBER,
                },
            },
        },
    },
}
