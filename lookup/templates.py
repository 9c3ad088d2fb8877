"""
lookup/templates.py — rozwiązanie właściwości determinujących szablonu.

Szablon w profilu może wskazywać czasownik, typy aktywności itd. nazwą
(prefLabel) zamiast IRI. resolve_template() zamienia każdą taką wartość
na IRI przez wyrocznię; brak jednoznacznego trafienia to LookupFailure.
Wartości any / all / none reguł nie są rozwiązywane.
"""

from __future__ import annotations

import dataclasses

from profile_model import StatementTemplate

from .oracle import Oracle, resolve_id


def _resolve_all(oracle: Oracle, identifiers: tuple[str, ...], category: str) -> tuple[str, ...]:
    return tuple(resolve_id(oracle, i, category) for i in identifiers)


def resolve_template(template: StatementTemplate, oracle: Oracle) -> StatementTemplate:
    """
    Zwraca kopię szablonu z właściwościami determinującymi w postaci IRI.

    Raises:
        LookupFailure gdy któraś nazwa nie wskazuje jednego pojęcia.
    """
    return dataclasses.replace(
        template,
        verb=resolve_id(oracle, template.verb, "Verb") if template.verb else None,
        object_activity_type=(
            resolve_id(oracle, template.object_activity_type, "ActivityType")
            if template.object_activity_type else None
        ),
        context_activity_types={
            relation: _resolve_all(oracle, types, "ActivityType")
            for relation, types in template.context_activity_types.items()
        },
        attachment_usage_types=_resolve_all(
            oracle, template.attachment_usage_types, "AttachmentUsageType",
        ),
        object_statement_ref_templates=_resolve_all(
            oracle, template.object_statement_ref_templates, "StatementTemplate",
        ),
        context_statement_ref_templates=_resolve_all(
            oracle, template.context_statement_ref_templates, "StatementTemplate",
        ),
    )
