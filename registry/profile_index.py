"""
registry/profile_index.py — indeks jednego profilu xAPI.

ProfileIndex sprawdza kształt dokumentu profilu schematem JSON, parsuje go
do profile_model.Profile i buduje słowniki:
  _concepts:  id -> Concept
  _templates: id -> StatementTemplate
  _patterns:  id -> PatternDefinition

compile_pattern(id) zamienia definicję wzorca (członkowie jako IRI) na
drzewo gramatyki matcher.Pattern.
"""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any

import jsonschema

from matcher import (
    AlternatesPattern,
    OneOrMorePattern,
    OptionalPattern,
    Pattern,
    SequencePattern,
    TemplateRef,
    ZeroOrMorePattern,
)
from profile_model import (
    PROFILE_SCHEMA,
    Concept,
    PatternDefinition,
    PatternKind,
    Profile,
    StatementTemplate,
    StructuralError,
    profile_from_dict,
)

logger = logging.getLogger(__name__)


def check_profile_schema(raw: Any) -> None:
    """
    Raises:
        StructuralError z listą naruszeń (ścieżka JSON Pointer: komunikat).
    """
    validator = jsonschema.Draft202012Validator(PROFILE_SCHEMA)
    errors = []
    for e in validator.iter_errors(raw):
        path = (
            "/" + "/".join(str(p) for p in e.absolute_path)
            if e.absolute_path
            else "/"
        )
        errors.append(f"{path}: {e.message}")
    if errors:
        raise StructuralError(errors)


class ProfileIndex:
    """
    Zarejestrowany profil z indeksami po id.

    Atrybuty publiczne:
      profile  — sparsowany Profile
      version  — IRI najnowszej wersji profilu
    """

    def __init__(self, profile: Profile | dict[str, Any]) -> None:
        if not isinstance(profile, Profile):
            check_profile_schema(profile)
            profile = profile_from_dict(profile)
        self.profile: Profile = profile
        self.version: str = profile.current_version

        self._concepts: dict[str, Concept] = {}
        self._templates: dict[str, StatementTemplate] = {}
        self._patterns: dict[str, PatternDefinition] = {}
        self._compiled: dict[str, Pattern] = {}

        seen: set[str] = set()
        for target, items in (
            (self._concepts, profile.concepts),
            (self._templates, profile.templates),
            (self._patterns, profile.patterns),
        ):
            for item in items:
                if item.id in seen:
                    raise StructuralError(
                        f"Identyfikator '{item.id}' występuje w profilu '{profile.id}' więcej niż raz."
                    )
                seen.add(item.id)
                target[item.id] = item

        logger.debug(
            "Profil %s: %d pojęć, %d szablonów, %d wzorców",
            profile.id, len(self._concepts), len(self._templates), len(self._patterns),
        )

    @property
    def id(self) -> str:
        return self.profile.id

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def concept(self, concept_id: str) -> Concept | None:
        return self._concepts.get(concept_id)

    def template(self, template_id: str) -> StatementTemplate | None:
        return self._templates.get(template_id)

    def pattern_definition(self, pattern_id: str) -> PatternDefinition | None:
        return self._patterns.get(pattern_id)

    @property
    def template_ids(self) -> list[str]:
        return list(self._templates)

    @property
    def pattern_ids(self) -> list[str]:
        return list(self._patterns)

    # ------------------------------------------------------------------
    # Kompilacja wzorców
    # ------------------------------------------------------------------

    def compile_pattern(self, pattern_id: str) -> Pattern:
        """
        Buduje drzewo gramatyki wzorca (z cache).

        Raises:
            StructuralError gdy wzorzec lub któryś członek nie istnieje
            w profilu albo wzorzec odwołuje się do siebie (cykl).
        """
        if pattern_id not in self._compiled:
            self._compiled[pattern_id] = self._compile(pattern_id, ())
        return self._compiled[pattern_id]

    def _compile(self, pattern_id: str, stack: tuple[str, ...]) -> Pattern:
        if pattern_id in stack:
            cycle = " → ".join((*stack, pattern_id))
            raise StructuralError(f"Cykl we wzorcach profilu: {cycle}")
        definition = self._patterns.get(pattern_id)
        if definition is None:
            raise StructuralError(f"Wzorzec '{pattern_id}' nie istnieje w profilu '{self.id}'.")

        stack = (*stack, pattern_id)
        children = tuple(self._compile_member(m, pattern_id, stack) for m in definition.members)

        match definition.kind:
            case PatternKind.SEQUENCE:
                return SequencePattern(children)
            case PatternKind.ALTERNATES:
                return AlternatesPattern(children)
            case PatternKind.OPTIONAL:
                return OptionalPattern(children[0])
            case PatternKind.ONE_OR_MORE:
                return OneOrMorePattern(children[0])
            case PatternKind.ZERO_OR_MORE:
                return ZeroOrMorePattern(children[0])

    def _compile_member(self, member: str, parent: str, stack: tuple[str, ...]) -> Pattern:
        if member in self._templates:
            return TemplateRef(member)
        if member in self._patterns:
            return self._compile(member, stack)
        raise StructuralError(
            f"Wzorzec '{parent}' odwołuje się do nieznanego szablonu lub wzorca '{member}'."
        )

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> "ProfileIndex":
        """Ładuje profil z pliku JSON."""
        data = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
        return cls(data)

    @classmethod
    def from_dict(cls, profile: dict[str, Any]) -> "ProfileIndex":
        """Buduje indeks z już wczytanego słownika."""
        return cls(profile)

    def __repr__(self) -> str:
        return f"ProfileIndex({self.id!r}, version={self.version!r})"
