"""
lookup/oracle.py — rozwiązywanie nazw i IRI na pojęcia profilu.

Wyrocznie (oracles):
  UriOracle        — identyfikator z ':' jest już IRI → {"id": identyfikator}
  ProfileOracle    — pojęcia / szablony / wzorce jednego profilu
                     (dopasowanie po id lub prefLabel, bez rozróżniania wielkości liter;
                     zwraca wynik tylko gdy jest jednoznaczny)
  CompositeOracle  — jawnie uporządkowana lista wyroczni; pytana od
                     ostatnio dodanej do pierwszej
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Protocol

from profile_model import Profile

# Rekord pojęcia: słownik w kształcie z profilu ({"id", "type", "prefLabel", ...})
type ConceptRecord = dict[str, Any]


class LookupFailure(LookupError, ValueError):
    """Nazwa / IRI nie wskazuje dokładnie jednego pojęcia oczekiwanej kategorii."""

    def __init__(self, identifier: str, category: str) -> None:
        self.identifier = identifier
        self.category   = category
        super().__init__(f"Nie znaleziono {category} dla: '{identifier}'")


class Oracle(Protocol):
    def lookup(self, identifier: str, category: str) -> ConceptRecord | None:
        ...


# ---------------------------------------------------------------------------
# UriOracle
# ---------------------------------------------------------------------------

class UriOracle:
    """Przepuszcza identyfikatory wyglądające na IRI (zawierające ':')."""

    def lookup(self, identifier: str, category: str) -> ConceptRecord | None:
        if ":" in identifier:
            return {"id": identifier}
        return None

    def __repr__(self) -> str:
        return "UriOracle()"


# ---------------------------------------------------------------------------
# ProfileOracle
# ---------------------------------------------------------------------------

class ProfileOracle:
    """Wyrocznia nad pojęciami, szablonami i wzorcami jednego profilu."""

    def __init__(self, profile_id: str, entries: list[ConceptRecord]) -> None:
        self.profile_id = profile_id
        self._entries   = entries

    @classmethod
    def from_profile(cls, profile: Profile | dict[str, Any]) -> "ProfileOracle":
        raw = profile.raw if isinstance(profile, Profile) else profile
        entries = [
            *(raw.get("concepts") or []),
            *(raw.get("templates") or []),
            *(raw.get("patterns") or []),
        ]
        return cls(raw.get("id", ""), entries)

    @staticmethod
    def _matches(entry: ConceptRecord, identifier: str, category: str) -> bool:
        if entry.get("type") != category:
            return False
        if str(entry.get("id", "")).lower() == identifier:
            return True
        labels = entry.get("prefLabel") or {}
        return any(str(v).lower() == identifier for v in labels.values())

    def lookup(self, identifier: str, category: str) -> ConceptRecord | None:
        needle   = identifier.lower()
        matching = [e for e in self._entries if self._matches(e, needle, category)]
        if len(matching) == 1:  # tylko jednoznaczne trafienia
            return copy.deepcopy(matching[0])
        return None

    def __repr__(self) -> str:
        return f"ProfileOracle({self.profile_id!r})"


# ---------------------------------------------------------------------------
# CompositeOracle
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompositeOracle:
    """
    Złożenie wyroczni w jawnej kolejności rejestracji.

    lookup() pyta wyrocznie od ostatnio zarejestrowanej; pierwsza
    zarejestrowana (zwykle UriOracle) jest pytana na końcu.
    """
    oracles: tuple[Oracle, ...] = ()

    def add(self, oracle: Oracle) -> "CompositeOracle":
        """Zwraca nowe złożenie z dodaną wyrocznią (oryginał bez zmian)."""
        if oracle in self.oracles:
            return self
        return CompositeOracle((*self.oracles, oracle))

    def lookup(self, identifier: str, category: str) -> ConceptRecord | None:
        for oracle in reversed(self.oracles):
            result = oracle.lookup(identifier, category)
            if result:
                return result
        return None


def default_oracle() -> CompositeOracle:
    """Złożenie z samą wyrocznią IRI."""
    return CompositeOracle((UriOracle(),))


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def resolve(oracle: Oracle, identifier: str, category: str) -> ConceptRecord:
    """
    Rozwiązuje identyfikator przez wyrocznię.

    Raises:
        LookupFailure gdy wyrocznia nic nie zwróci.
    """
    found = oracle.lookup(identifier, category)
    if not found:
        raise LookupFailure(identifier, category)
    return found


def resolve_id(oracle: Oracle, identifier: str, category: str) -> str:
    """Jak resolve(), ale zwraca samo IRI."""
    return resolve(oracle, identifier, category)["id"]


def adapt(record: ConceptRecord) -> dict[str, Any]:
    """
    Przekształca rekord pojęcia w fragment wyrażenia xAPI.

      Activity → {"objectType": "Activity", "id", "definition"}
      Verb     → {"id", "display"}   (display z prefLabel)
      pozostałe → bez zmian (używane jest samo id)
    """
    match record.get("type"):
        case "Activity":
            definition = {
                k: v for k, v in (record.get("activityDefinition") or {}).items()
                if k != "@context"
            }
            adapted: dict[str, Any] = {"objectType": "Activity", "id": record["id"]}
            if definition:
                adapted["definition"] = definition
            return adapted
        case "Verb":
            adapted = {"id": record["id"]}
            if record.get("prefLabel"):
                adapted["display"] = dict(record["prefLabel"])
            return adapted
        case _:
            return record
