"""
matcher/engine.py — dopasowanie ciągu identyfikatorów szablonów do wzorca.

Zstępowanie rekurencyjne ze śledzeniem nieskonsumowanej reszty:
  - TemplateRef:  pusty ciąg → PARTIAL; zgodna głowa → SUCCESS(ogon)
  - sequence:     fold po dzieciach; FAILURE → oryginalny ciąg jako reszta
  - alternates:   każde dziecko na oryginalnym ciągu; wygrywa najmniejsza reszta
  - oneOrMore / zeroOrMore: zachłanne powtarzanie
  - optional:     nigdy nie zawodzi

Funkcje są czyste: nie modyfikują drzewa wzorca ani ciągu wejściowego.
"""

from __future__ import annotations

from collections.abc import Sequence

from .types import (
    AlternatesPattern,
    MatchResult,
    MatchStatus,
    OneOrMorePattern,
    OptionalPattern,
    Pattern,
    SequencePattern,
    TemplateRef,
    ZeroOrMorePattern,
)

SUCCESS = MatchStatus.SUCCESS
PARTIAL = MatchStatus.PARTIAL
FAILURE = MatchStatus.FAILURE


# ---------------------------------------------------------------------------
# Warianty
# ---------------------------------------------------------------------------

def _match_template(seq: tuple[str, ...], node: TemplateRef) -> MatchResult:
    if not seq:
        return MatchResult(PARTIAL, ())
    if seq[0] == node.template_id:
        return MatchResult(SUCCESS, seq[1:])
    return MatchResult(FAILURE, seq)


def _match_sequence(seq: tuple[str, ...], node: SequencePattern) -> MatchResult:
    remainder = seq
    for child in node.children:
        result = _match(remainder, child)
        if result.is_failure:
            # nieudana sekwencja nic nie konsumuje z punktu widzenia rodzica
            return MatchResult(FAILURE, seq)
        if result.is_partial:
            return MatchResult(PARTIAL, ())
        remainder = result.remainder
    return MatchResult(SUCCESS, remainder)


def _match_alternates(seq: tuple[str, ...], node: AlternatesPattern) -> MatchResult:
    best: MatchResult | None = None
    any_partial = False

    for child in node.children:
        result = _match(seq, child)
        if result.is_success:
            # przy remisie zostaje pierwsze zadeklarowane dziecko
            if best is None or len(result.remainder) < len(best.remainder):
                best = result
        elif result.is_partial:
            any_partial = True

    if best is not None:
        return MatchResult(SUCCESS, best.remainder)
    if any_partial:
        return MatchResult(PARTIAL, ())
    return MatchResult(FAILURE, seq)


def _repeat(seq: tuple[str, ...], child: Pattern, at_least_once: bool) -> MatchResult:
    """Wspólna pętla oneOrMore / zeroOrMore."""
    remainder = seq
    first = True

    while True:
        result = _match(remainder, child)

        if first and at_least_once:
            if result.is_failure:
                return MatchResult(FAILURE, remainder)
            if result.is_partial:
                return MatchResult(PARTIAL, ())
        elif not result.is_success:
            if result.is_partial and remainder:
                return MatchResult(PARTIAL, remainder)
            return MatchResult(SUCCESS, remainder)

        first = False
        if len(result.remainder) == len(remainder):
            # iteracja nic nie skonsumowała — koniec, inaczej pętla nieskończona
            return MatchResult(SUCCESS, remainder)
        remainder = result.remainder


def _match_optional(seq: tuple[str, ...], node: OptionalPattern) -> MatchResult:
    if not seq:
        return MatchResult(SUCCESS, ())
    result = _match(seq, node.child)
    if result.is_failure:
        return MatchResult(SUCCESS, seq)
    return result


def _match(seq: tuple[str, ...], pattern: Pattern) -> MatchResult:
    match pattern:
        case TemplateRef():
            return _match_template(seq, pattern)
        case SequencePattern():
            return _match_sequence(seq, pattern)
        case AlternatesPattern():
            return _match_alternates(seq, pattern)
        case OneOrMorePattern(child=child):
            return _repeat(seq, child, at_least_once=True)
        case ZeroOrMorePattern(child=child):
            return _repeat(seq, child, at_least_once=False)
        case OptionalPattern():
            return _match_optional(seq, pattern)
        case _:
            raise TypeError(f"Nieznany węzeł wzorca: {pattern!r}")


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def matches(sequence: Sequence[str], pattern: Pattern) -> MatchResult:
    """
    Dopasowuje pełny ciąg kandydujący do wzorca.

    Args:
        sequence: identyfikatory szablonów w kolejności emisji wyrażeń
        pattern:  korzeń drzewa gramatyki

    Returns:
        MatchResult (SUCCESS / PARTIAL / FAILURE + reszta).
    """
    return _match(tuple(sequence), pattern)


def can_append(
    templates_so_far: Sequence[str],
    new_template_id: str,
    pattern: Pattern,
) -> bool:
    """
    Czy ciąg rozszerzony o new_template_id jest zgodny z wzorcem?

    Akceptuje SUCCESS bez reszty albo PARTIAL; odrzuca FAILURE
    i SUCCESS z nieskonsumowanymi wyrażeniami.
    """
    result = matches([*templates_so_far, new_template_id], pattern)
    return result.is_complete or result.is_partial
