"""
Profil xAPI: wersje, pojęcia, szablony i wzorce.

profile_from_dict(raw) -> Profile
  - concepts / templates / patterns domyślnie puste
  - najnowsza wersja profilu = versions[0]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import Concept, ConceptType, Iri, LanguageMap, ProfileVersion, StructuralError
from .patterns import PatternDefinition, pattern_definition_from_dict
from .templates import StatementTemplate, template_from_dict


@dataclass(slots=True)
class Profile:
    """
    Wczytany profil.

    - id:        IRI profilu
    - versions:  wersje, od najnowszej
    - concepts:  pojęcia słownika kontrolowanego
    - templates: szablony wyrażeń
    - patterns:  definicje wzorców
    - raw:       oryginalny słownik (dla wyroczni ProfileOracle)
    """
    id: Iri
    versions: tuple[ProfileVersion, ...]
    pref_label: LanguageMap = field(default_factory=dict)
    concepts: tuple[Concept, ...] = ()
    templates: tuple[StatementTemplate, ...] = ()
    patterns: tuple[PatternDefinition, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def current_version(self) -> Iri:
        """IRI najnowszej wersji profilu."""
        return self.versions[0].id if self.versions else self.id

    @property
    def primary_patterns(self) -> list[PatternDefinition]:
        return [p for p in self.patterns if p.primary]


def concept_from_dict(raw: dict[str, Any]) -> Concept:
    type_raw = raw.get("type")
    try:
        concept_type = ConceptType(type_raw)
    except ValueError:
        raise StructuralError(
            f"Pojęcie '{raw.get('id')}' ma nieznany typ '{type_raw}'."
        ) from None
    if not raw.get("id"):
        raise StructuralError(f"Pojęcie bez identyfikatora: {raw!r}")
    return Concept(
        id=raw["id"],
        type=concept_type,
        pref_label=dict(raw.get("prefLabel") or {}),
        in_scheme=raw.get("inScheme"),
        raw=dict(raw),
    )


def _version_from_dict(raw: dict[str, Any]) -> ProfileVersion:
    revision_of = raw.get("wasRevisionOf") or []
    if isinstance(revision_of, str):
        revision_of = [revision_of]
    return ProfileVersion(
        id=raw["id"],
        was_revision_of=tuple(revision_of),
        generated_at=raw.get("generatedAtTime"),
    )


def profile_from_dict(raw: dict[str, Any]) -> Profile:
    """
    Buduje Profile ze słownika (po json.loads).

    Raises:
        StructuralError przy brakującym id lub błędnych elementach.
    """
    if not isinstance(raw, dict) or not raw.get("id"):
        raise StructuralError("Profil musi być obiektem z polem 'id'.")

    return Profile(
        id=raw["id"],
        versions=tuple(_version_from_dict(v) for v in raw.get("versions") or []),
        pref_label=dict(raw.get("prefLabel") or {}),
        concepts=tuple(concept_from_dict(c) for c in raw.get("concepts") or []),
        templates=tuple(template_from_dict(t) for t in raw.get("templates") or []),
        patterns=tuple(pattern_definition_from_dict(p) for p in raw.get("patterns") or []),
        raw=raw,
    )
