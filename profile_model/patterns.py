"""
Definicje wzorców (Patterns) w postaci profilowej.

W profilu wzorzec odwołuje się do innych wzorców i szablonów przez IRI.
Drzewo gramatyki (matcher.types.Pattern) buduje z tego rejestr
(ProfileIndex.compile_pattern).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .common import Iri, LanguageMap, StructuralError


class PatternKind(StrEnum):
    """Operator gramatyki; wartość = klucz JSON we wzorcu."""
    SEQUENCE     = "sequence"
    ALTERNATES   = "alternates"
    OPTIONAL     = "optional"
    ONE_OR_MORE  = "oneOrMore"
    ZERO_OR_MORE = "zeroOrMore"


# Operatory przyjmujące listę członków (pozostałe: dokładnie jeden)
LIST_KINDS: frozenset[PatternKind] = frozenset({PatternKind.SEQUENCE, PatternKind.ALTERNATES})


@dataclass(slots=True)
class PatternDefinition:
    """
    Wzorzec zdefiniowany w profilu.

    - id:         IRI wzorca
    - in_scheme:  IRI wersji profilu
    - pref_label: nazwy czytelne dla człowieka
    - primary:    czy wzorzec jest wzorcem głównym
    - kind:       operator (PatternKind)
    - members:    IRI członków (szablony lub wzorce), w kolejności deklaracji
    """
    id: Iri
    kind: PatternKind
    members: tuple[Iri, ...]
    in_scheme: Iri | None = None
    pref_label: LanguageMap = field(default_factory=dict)
    primary: bool = False


def _member_id(value: Any) -> Iri | None:
    # Członek jako napis albo obiekt {"id": ...}
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("id"), str):
        return value["id"]
    return None


def pattern_definition_from_dict(raw: dict[str, Any]) -> PatternDefinition:
    """
    Buduje PatternDefinition ze słownika wzorca profilu.

    Raises:
        StructuralError gdy brak id, brak operatora, jest więcej niż jeden
        operator albo członkowie mają zły kształt.
    """
    pattern_id = raw.get("id")
    if not pattern_id:
        raise StructuralError(f"Wzorzec bez identyfikatora: {raw!r}")

    kinds = [k for k in PatternKind if k.value in raw]
    if len(kinds) != 1:
        raise StructuralError(
            f"Wzorzec '{pattern_id}' musi mieć dokładnie jeden operator "
            f"({', '.join(k.value for k in PatternKind)}), podano {len(kinds)}."
        )
    kind = kinds[0]
    value = raw[kind.value]

    if kind in LIST_KINDS:
        if not isinstance(value, list) or not value:
            raise StructuralError(
                f"Wzorzec '{pattern_id}': '{kind.value}' wymaga niepustej listy IRI."
            )
        members = tuple(_member_id(v) for v in value)
    else:
        members = (_member_id(value),)

    if any(m is None for m in members):
        raise StructuralError(
            f"Wzorzec '{pattern_id}': członkowie '{kind.value}' muszą być IRI "
            f"lub obiektami z polem 'id'."
        )

    return PatternDefinition(
        id=pattern_id,
        kind=kind,
        members=members,  # type: ignore[arg-type]
        in_scheme=raw.get("inScheme"),
        pref_label=dict(raw.get("prefLabel") or {}),
        primary=bool(raw.get("primary", False)),
    )
