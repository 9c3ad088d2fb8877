"""
registry/registration.py — rejestr profili: wzorce, szablony, walidatory.

ProfileRegistration jest niemutowalna: with_profile() zwraca nową
rejestrację. Jedyny stan zmienny to PatternOccurrence zwracane przez
pattern() — ciąg szablonów jednego wystąpienia wzorca.

Przykład::

    registration = ProfileRegistration.builder().with_profile(profile_json)
    occurrence   = registration.pattern("A Pattern")
    statement    = (
        registration.template("A Template", occurrence)
        .with_actor_email("jan@example.com")
        .as_succeeded()
        .build()
    )
"""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any

from builder import StatementBuilder
from lookup import (
    CompositeOracle,
    LookupFailure,
    ProfileOracle,
    default_oracle,
    resolve,
    resolve_template,
)
from matcher import PatternOccurrence
from profile_model import Profile, StatementTemplate, StructuralError
from validator import TemplateValidator

from .profile_index import ProfileIndex

logger = logging.getLogger(__name__)

# Typ aktywności kategorii wskazującej wersję profilu
PROFILE_ACTIVITY_TYPE = "http://adlnet.gov/expapi/activities/profile"


@dataclass(frozen=True)
class ProfileRegistration:
    """
    - profiles: zarejestrowane profile, w kolejności rejestracji
    - oracle:   UriOracle + ProfileOracle każdego profilu
    """
    profiles: tuple[ProfileIndex, ...] = ()
    oracle: CompositeOracle = field(default_factory=default_oracle)

    @classmethod
    def builder(cls) -> "ProfileRegistration":
        return cls()

    # ------------------------------------------------------------------
    # Rejestracja
    # ------------------------------------------------------------------

    def with_profile(
        self, profile: ProfileIndex | Profile | dict[str, Any] | str | pathlib.Path,
    ) -> "ProfileRegistration":
        """
        Rejestruje profil (indeks, Profile, słownik JSON lub ścieżka do pliku).

        Raises:
            StructuralError gdy profil jest niepoprawny albo któryś jego
            szablon lub wzorzec jest już zarejestrowany.
        """
        match profile:
            case ProfileIndex():
                index = profile
            case str() | pathlib.Path():
                index = ProfileIndex.from_file(profile)
            case _:
                index = ProfileIndex(profile)

        for existing in self.profiles:
            taken = (
                set(index.template_ids) & set(existing.template_ids)
                | set(index.pattern_ids) & set(existing.pattern_ids)
            )
            if taken:
                raise StructuralError([
                    f"'{iri}' jest już zarejestrowany w profilu '{existing.id}'."
                    for iri in sorted(taken)
                ])

        logger.debug("Zarejestrowano profil %s (wersja %s)", index.id, index.version)
        return ProfileRegistration(
            profiles=(*self.profiles, index),
            oracle=self.oracle.add(ProfileOracle.from_profile(index.profile)),
        )

    # ------------------------------------------------------------------
    # Wyszukiwanie
    # ------------------------------------------------------------------

    def _find_template(self, identifier: str) -> tuple[ProfileIndex, StatementTemplate]:
        template_id = resolve(self.oracle, identifier, "StatementTemplate")["id"]
        for index in self.profiles:
            template = index.template(template_id)
            if template is not None:
                return index, template
        raise LookupFailure(identifier, "StatementTemplate")

    def _find_pattern(self, identifier: str) -> tuple[ProfileIndex, str]:
        pattern_id = resolve(self.oracle, identifier, "Pattern")["id"]
        for index in self.profiles:
            if index.pattern_definition(pattern_id) is not None:
                return index, pattern_id
        raise LookupFailure(identifier, "Pattern")

    def resolved_template(self, identifier: str) -> StatementTemplate:
        """
        Szablon z właściwościami determinującymi w postaci IRI.

        Raises:
            LookupFailure gdy szablon lub któraś jego nazwa nie istnieje.
        """
        _, template = self._find_template(identifier)
        return resolve_template(template, self.oracle)

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def pattern(self, identifier: str, registration: str | None = None) -> PatternOccurrence:
        """
        Nowe wystąpienie wzorca (nazwa lub IRI).

        Drzewo gramatyki jest kompilowane przy pierwszym użyciu wystąpienia.

        Raises:
            LookupFailure gdy wzorzec nie jest zarejestrowany.
        """
        index, pattern_id = self._find_pattern(identifier)
        definition = index.pattern_definition(pattern_id)
        return PatternOccurrence(
            pattern_id=pattern_id,
            profile_version=definition.in_scheme or index.version,
            pattern=lambda: index.compile_pattern(pattern_id),
            registration=registration,
        )

    def template(
        self, identifier: str, occurrence: PatternOccurrence | None = None,
    ) -> StatementBuilder:
        """
        Budowniczy wyrażenia związany z szablonem.

        Gdy podano wystąpienie wzorca, szablon jest do niego dokładany,
        a wyrażenie dostaje context.registration wystąpienia.

        Raises:
            LookupFailure     nieznany szablon lub nazwa w szablonie
            SequenceViolation szablon nie może być następny we wzorcu
            StructuralError   wzorzec wystąpienia jest niepoprawny
        """
        index, template = self._find_template(identifier)
        resolved = resolve_template(template, self.oracle)
        builder = StatementBuilder(oracle=self.oracle).templated(resolved).with_context_category({
            "id": template.in_scheme or index.version,
            "definition": {"type": PROFILE_ACTIVITY_TYPE},
        })
        if occurrence is None:
            return builder

        # szablon trafia do wystąpienia dopiero, gdy wyrażenie jest gotowe
        builder = builder.with_registration(occurrence.registration)
        occurrence.append(resolved.id)
        return builder

    def validator_for(self, identifier: str) -> TemplateValidator:
        return TemplateValidator(self.resolved_template(identifier))

    def __repr__(self) -> str:
        return f"ProfileRegistration(profiles={[p.id for p in self.profiles]!r})"
