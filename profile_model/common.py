"""
Wspólne typy pierwotne używane przez templates, patterns i profiles.

Mapowanie na dokument profilu xAPI (JSON-LD):
  concepts[] → Concept
  versions[] → ProfileVersion
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Mapa język → tekst, np. {"en": "completed", "pl": "ukończył"}
type LanguageMap = dict[str, str]

# Identyfikator IRI, np. "http://adlnet.gov/expapi/verbs/completed"
type Iri = str


# ---------------------------------------------------------------------------
# Błąd strukturalny
# ---------------------------------------------------------------------------

class StructuralError(ValueError):
    """
    Niepoprawna struktura profilu (np. wzorzec wskazuje na nieistniejący
    szablon, zdublowany identyfikator, naruszenie schematu JSON).

    - errors: lista komunikatów (co najmniej jeden)
    """

    def __init__(self, errors: list[str] | str) -> None:
        self.errors: list[str] = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))


# ---------------------------------------------------------------------------
# Concept
# ---------------------------------------------------------------------------

class ConceptType(StrEnum):
    """Kategoria pojęcia w profilu (pole 'type')."""
    VERB                      = "Verb"
    ACTIVITY_TYPE             = "ActivityType"
    ATTACHMENT_USAGE_TYPE     = "AttachmentUsageType"
    CONTEXT_EXTENSION         = "ContextExtension"
    RESULT_EXTENSION          = "ResultExtension"
    ACTIVITY_EXTENSION        = "ActivityExtension"
    STATE_RESOURCE            = "StateResource"
    AGENT_PROFILE_RESOURCE    = "AgentProfileResource"
    ACTIVITY_PROFILE_RESOURCE = "ActivityProfileResource"
    ACTIVITY                  = "Activity"


@dataclass(slots=True)
class Concept:
    """
    Pojęcie słownika kontrolowanego.

    - id:         IRI pojęcia
    - type:       kategoria (ConceptType)
    - pref_label: nazwy czytelne dla człowieka
    - in_scheme:  IRI wersji profilu, w której zdefiniowano pojęcie
    - raw:        pełny słownik z profilu (np. activityDefinition)
    """
    id: Iri
    type: ConceptType
    pref_label: LanguageMap = field(default_factory=dict)
    in_scheme: Iri | None = None
    raw: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# ProfileVersion
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ProfileVersion:
    """Wersja profilu: IRI wersji + opcjonalnie IRI wersji poprzedniej."""
    id: Iri
    was_revision_of: tuple[Iri, ...] = ()
    generated_at: str | None = None
