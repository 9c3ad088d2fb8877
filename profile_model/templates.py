"""
Struktury danych dla szablonów wyrażeń (Statement Templates).

Mapowanie na dokument profilu xAPI:
  templates[]         → StatementTemplate
  templates[].rules[] → TemplateRule

Właściwości determinujące (verb, objectActivityType, context*ActivityType,
attachmentUsageType, *StatementRefTemplate) mogą być podane jako IRI lub jako
nazwa pojęcia — rozwiązuje je rejestr (registry) przez wyrocznię (lookup).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .common import Iri, LanguageMap, StructuralError


# ---------------------------------------------------------------------------
# Enumeracje
# ---------------------------------------------------------------------------

class Presence(StrEnum):
    """Wymóg obecności wartości w lokalizacji reguły. Brak = None."""
    INCLUDED    = "included"
    EXCLUDED    = "excluded"
    RECOMMENDED = "recommended"


class ContextRelation(StrEnum):
    """Relacja aktywności kontekstowej (context.contextActivities.<relacja>)."""
    PARENT   = "parent"
    GROUPING = "grouping"
    CATEGORY = "category"
    OTHER    = "other"


# Klucz JSON szablonu → relacja kontekstowa
CONTEXT_TYPE_KEYS: dict[str, ContextRelation] = {
    "contextParentActivityType":   ContextRelation.PARENT,
    "contextGroupingActivityType": ContextRelation.GROUPING,
    "contextCategoryActivityType": ContextRelation.CATEGORY,
    "contextOtherActivityType":    ContextRelation.OTHER,
}


# ---------------------------------------------------------------------------
# TemplateRule
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TemplateRule:
    """
    Reguła obecności/wartości nad lokalizacjami dokumentu.

    - location:   wyrażenia JSONPath rozdzielone '|'
    - selector:   opcjonalne wyrażenia wtórne (rozdzielone '|'), liczone
                  względem każdej wartości znalezionej przez location
    - presence:   included | excluded | recommended | None (brak)
    - any:        wartości, z których co najmniej jedna musi wystąpić
    - all:        wartości dozwolone (każda znaleziona musi do nich należeć)
    - none:       wartości zakazane
    - scope_note: opis reguły (opcjonalnie)
    """
    location: str
    selector: str | None = None
    presence: Presence | None = None
    any: tuple[Any, ...] | None = None
    all: tuple[Any, ...] | None = None
    none: tuple[Any, ...] | None = None
    scope_note: LanguageMap | None = None


# ---------------------------------------------------------------------------
# StatementTemplate
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class StatementTemplate:
    """
    Szablon wyrażenia: właściwości determinujące + lista reguł.

    - verb:                     wymagany IRI czasownika
    - object_activity_type:     wymagany typ aktywności obiektu
    - context_activity_types:   relacja → wymagane typy aktywności kontekstowych
    - attachment_usage_types:   wymagane typy użycia załączników
    - object_statement_ref_templates:  niepuste → obiekt musi być StatementRef
    - context_statement_ref_templates: niepuste → wymagane context.statement
    - rules:                    reguły w kolejności deklaracji
    """
    id: Iri
    in_scheme: Iri | None = None
    pref_label: LanguageMap = field(default_factory=dict)
    verb: Iri | None = None
    object_activity_type: Iri | None = None
    context_activity_types: dict[ContextRelation, tuple[Iri, ...]] = field(default_factory=dict)
    attachment_usage_types: tuple[Iri, ...] = ()
    object_statement_ref_templates: tuple[Iri, ...] = ()
    context_statement_ref_templates: tuple[Iri, ...] = ()
    rules: tuple[TemplateRule, ...] = ()

    @property
    def requires_object_statement_ref(self) -> bool:
        return bool(self.object_statement_ref_templates)

    @property
    def requires_context_statement_ref(self) -> bool:
        return bool(self.context_statement_ref_templates)


# ---------------------------------------------------------------------------
# Parsowanie z JSON
# ---------------------------------------------------------------------------

def _as_tuple(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _optional_tuple(value: Any) -> tuple[Any, ...] | None:
    return None if value is None else _as_tuple(value)


def rule_from_dict(raw: dict[str, Any]) -> TemplateRule:
    """Buduje TemplateRule ze słownika reguły profilu."""
    location = raw.get("location")
    if not isinstance(location, str) or not location.strip():
        raise StructuralError(f"Reguła bez poprawnego 'location': {raw!r}")

    presence_raw = raw.get("presence")
    try:
        presence = Presence(presence_raw) if presence_raw is not None else None
    except ValueError:
        raise StructuralError(
            f"Nieznana wartość presence '{presence_raw}' "
            f"(dozwolone: {', '.join(p.value for p in Presence)})."
        ) from None

    return TemplateRule(
        location=location,
        selector=raw.get("selector"),
        presence=presence,
        any=_optional_tuple(raw.get("any")),
        all=_optional_tuple(raw.get("all")),
        none=_optional_tuple(raw.get("none")),
        scope_note=raw.get("scopeNote"),
    )


def template_from_dict(raw: dict[str, Any]) -> StatementTemplate:
    """Buduje StatementTemplate ze słownika szablonu profilu."""
    if not raw.get("id"):
        raise StructuralError(f"Szablon bez identyfikatora: {raw!r}")

    context_types = {
        relation: _as_tuple(raw[key])
        for key, relation in CONTEXT_TYPE_KEYS.items()
        if raw.get(key)
    }

    return StatementTemplate(
        id=raw["id"],
        in_scheme=raw.get("inScheme"),
        pref_label=dict(raw.get("prefLabel") or {}),
        verb=raw.get("verb"),
        object_activity_type=raw.get("objectActivityType"),
        context_activity_types=context_types,
        attachment_usage_types=_as_tuple(raw.get("attachmentUsageType")),
        object_statement_ref_templates=_as_tuple(raw.get("objectStatementRefTemplate")),
        context_statement_ref_templates=_as_tuple(raw.get("contextStatementRefTemplate")),
        rules=tuple(rule_from_dict(r) for r in raw.get("rules") or []),
    )
