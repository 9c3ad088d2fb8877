"""
matcher/state.py — stan dopasowania jednego wystąpienia wzorca.

MatchState jest mutowalny i ma jednego właściciela (PatternOccurrence).
Dołożenie szablonu zmienia stan wyłącznie po akceptacji przez
can_append(); odrzucenie zostawia stan nietknięty.

Nie współdzielić jednego PatternOccurrence między wątkami bez
zewnętrznej synchronizacji.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from .engine import can_append, matches
from .types import MatchResult, Pattern, SequenceViolation

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchState:
    """
    - pattern_id:      IRI wzorca
    - profile_version: IRI wersji profilu, do której należy wzorzec
    - templates:       zaakceptowane IRI szablonów, w kolejności
    """
    pattern_id: str
    profile_version: str
    templates: list[str] = field(default_factory=list)


class PatternOccurrence:
    """
    Jedno wystąpienie (rejestracja) wzorca.

    Drzewo gramatyki jest kompilowane leniwie przy pierwszym użyciu —
    błąd strukturalny profilu (np. brakujący szablon) wychodzi dopiero
    wtedy, a nie przy pobraniu wystąpienia.

    Użycie::

        occurrence = registration.pattern("A Pattern")
        occurrence.append("http://template.example.com")
        occurrence.is_complete
    """

    def __init__(
        self,
        pattern_id: str,
        profile_version: str,
        pattern: Pattern | Callable[[], Pattern],
        registration: str | None = None,
    ) -> None:
        self._state = MatchState(pattern_id=pattern_id, profile_version=profile_version)
        self._pattern: Pattern | None = None if callable(pattern) else pattern
        self._compile: Callable[[], Pattern] = pattern if callable(pattern) else (lambda: pattern)
        self.registration: str = registration or str(uuid.uuid4())

    # ------------------------------------------------------------------

    @property
    def pattern_id(self) -> str:
        return self._state.pattern_id

    @property
    def profile_version(self) -> str:
        return self._state.profile_version

    @property
    def pattern(self) -> Pattern:
        """Drzewo gramatyki (kompilowane przy pierwszym dostępie)."""
        if self._pattern is None:
            self._pattern = self._compile()
            logger.debug("Skompilowano wzorzec %s: %s", self.pattern_id, self._pattern)
        return self._pattern

    @property
    def templates(self) -> tuple[str, ...]:
        """Migawka zaakceptowanego ciągu szablonów."""
        return tuple(self._state.templates)

    # ------------------------------------------------------------------

    def status(self) -> MatchResult:
        """Wynik dopasowania dotychczasowego ciągu."""
        return matches(self._state.templates, self.pattern)

    @property
    def is_complete(self) -> bool:
        """Czy dotychczasowy ciąg w pełni spełnia wzorzec."""
        return self.status().is_complete

    def can_append(self, template_id: str) -> bool:
        return can_append(self._state.templates, template_id, self.pattern)

    def append(self, template_id: str) -> None:
        """
        Dokłada szablon do ciągu wystąpienia.

        Raises:
            SequenceViolation gdy szablon nie może być następny;
            stan pozostaje bez zmian.
        """
        if not self.can_append(template_id):
            logger.debug(
                "Odrzucono %s we wzorcu %s (ciąg: %s)",
                template_id, self.pattern_id, self._state.templates,
            )
            raise SequenceViolation(self.pattern_id, template_id, self.templates)
        self._state.templates.append(template_id)
        logger.debug("Przyjęto %s we wzorcu %s", template_id, self.pattern_id)

    def __repr__(self) -> str:
        return (
            f"PatternOccurrence(pattern_id={self.pattern_id!r}, "
            f"registration={self.registration!r}, templates={self.templates!r})"
        )
