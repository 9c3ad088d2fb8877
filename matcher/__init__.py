"""
matcher — dopasowanie ciągów szablonów do wzorców profilu.

Publiczne API:
  matches(sequence, pattern)                  → MatchResult
  can_append(templates_so_far, new_id, pattern) → bool
  PatternOccurrence(pattern_id, version, pattern) wystąpienie wzorca ze stanem
  MatchState, MatchResult, MatchStatus        typy wyniku i stanu
  TemplateRef, SequencePattern, AlternatesPattern,
  OneOrMorePattern, ZeroOrMorePattern, OptionalPattern, Pattern
                                              węzły gramatyki
  SequenceViolation                           błąd odrzuconego dołożenia
"""

from .engine import matches, can_append
from .state  import MatchState, PatternOccurrence
from .types  import (
    AlternatesPattern,
    MatchResult,
    MatchStatus,
    OneOrMorePattern,
    OptionalPattern,
    Pattern,
    SequencePattern,
    SequenceViolation,
    TemplateRef,
    ZeroOrMorePattern,
)

__all__ = [
    "matches",
    "can_append",
    "MatchState",
    "PatternOccurrence",
    "AlternatesPattern",
    "MatchResult",
    "MatchStatus",
    "OneOrMorePattern",
    "OptionalPattern",
    "Pattern",
    "SequencePattern",
    "SequenceViolation",
    "TemplateRef",
    "ZeroOrMorePattern",
]
