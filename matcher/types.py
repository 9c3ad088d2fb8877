"""
matcher/types.py — drzewo gramatyki wzorców i wynik dopasowania.

Pattern to zamknięty typ sumy: TemplateRef | SequencePattern |
AlternatesPattern | OneOrMorePattern | ZeroOrMorePattern | OptionalPattern.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


# ---------------------------------------------------------------------------
# Węzły gramatyki
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TemplateRef:
    """Liść: dokładnie jedno wyrażenie zbudowane z danego szablonu."""
    template_id: str

    def __str__(self) -> str:
        return self.template_id


@dataclass(frozen=True)
class SequencePattern:
    """Dzieci muszą pasować po kolei, konsumując kolejne wyrażenia."""
    children: tuple[Pattern, ...]

    def __str__(self) -> str:
        return f"sequence({', '.join(str(c) for c in self.children)})"


@dataclass(frozen=True)
class AlternatesPattern:
    """Dokładnie jedno dziecko musi pasować."""
    children: tuple[Pattern, ...]

    def __str__(self) -> str:
        return f"alternates({' | '.join(str(c) for c in self.children)})"


@dataclass(frozen=True)
class OneOrMorePattern:
    child: Pattern

    def __str__(self) -> str:
        return f"({self.child})+"


@dataclass(frozen=True)
class ZeroOrMorePattern:
    child: Pattern

    def __str__(self) -> str:
        return f"({self.child})*"


@dataclass(frozen=True)
class OptionalPattern:
    child: Pattern

    def __str__(self) -> str:
        return f"({self.child})?"


type Pattern = (
    TemplateRef
    | SequencePattern
    | AlternatesPattern
    | OneOrMorePattern
    | ZeroOrMorePattern
    | OptionalPattern
)


# ---------------------------------------------------------------------------
# Wynik dopasowania
# ---------------------------------------------------------------------------

class MatchStatus(StrEnum):
    SUCCESS = "success"   # gramatyka spełniona
    PARTIAL = "partial"   # prefiks zgodny, gramatyka jeszcze niespełniona
    FAILURE = "failure"   # ciąg niezgodny z gramatyką


@dataclass(frozen=True)
class MatchResult:
    """
    Wynik dopasowania ciągu do wzorca.

    - status:    MatchStatus
    - remainder: nieskonsumowana reszta ciągu (kolejność zachowana)
    """
    status: MatchStatus
    remainder: tuple[str, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.status is MatchStatus.SUCCESS

    @property
    def is_partial(self) -> bool:
        return self.status is MatchStatus.PARTIAL

    @property
    def is_failure(self) -> bool:
        return self.status is MatchStatus.FAILURE

    @property
    def is_complete(self) -> bool:
        """Sukces bez pozostałych wyrażeń."""
        return self.is_success and not self.remainder


# ---------------------------------------------------------------------------
# Błąd
# ---------------------------------------------------------------------------

class SequenceViolation(ValueError):
    """
    Dołożenie szablonu uczyniłoby ciąg wystąpienia wzorca niezgodnym
    z gramatyką. Stan dopasowania pozostaje bez zmian.
    """

    def __init__(self, pattern_id: str, template_id: str, templates: tuple[str, ...]) -> None:
        self.pattern_id  = pattern_id
        self.template_id = template_id
        self.templates   = templates
        super().__init__(
            f"Szablon '{template_id}' nie może być następny we wzorcu "
            f"'{pattern_id}' (dotychczas: {list(templates)})."
        )
