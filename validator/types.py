"""
validator/types.py — kody błędów i struktury raportu walidacji szablonu.

ValidationError — pojedyncze naruszenie z kodem, lokalizacją JSONPath,
    komunikatem i mechaniczną instrukcją naprawy.
ValidationReport — wynik walidacji: is_valid, errors, warnings.
TemplateViolation — wyjątek niosący raport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody błędów walidatora (etapy 1–7)."""

    # 1–2 — czasownik i typ aktywności obiektu
    VERB_MISMATCH                 = "E_VERB_MISMATCH"
    OBJECT_ACTIVITY_TYPE_MISMATCH = "E_OBJECT_ACTIVITY_TYPE_MISMATCH"

    # 3–4 — aktywności kontekstowe i załączniki
    CONTEXT_ACTIVITY_TYPE_MISSING = "E_CONTEXT_ACTIVITY_TYPE_MISSING"
    ATTACHMENT_USAGE_TYPE_MISSING = "E_ATTACHMENT_USAGE_TYPE_MISSING"

    # 5–6 — StatementRef
    OBJECT_NOT_STATEMENT_REF      = "E_OBJECT_NOT_STATEMENT_REF"
    CONTEXT_STATEMENT_REF_MISSING = "E_CONTEXT_STATEMENT_REF_MISSING"

    # 7 — reguły
    RULE_INCLUDED_MISSING         = "E_RULE_INCLUDED_MISSING"
    RULE_INCLUDED_UNMATCHABLE     = "E_RULE_INCLUDED_UNMATCHABLE"
    RULE_EXCLUDED_PRESENT         = "E_RULE_EXCLUDED_PRESENT"
    RULE_ANY_UNMATCHED            = "E_RULE_ANY_UNMATCHED"
    RULE_ALL_UNLISTED             = "E_RULE_ALL_UNLISTED"
    RULE_ALL_UNMATCHABLE          = "E_RULE_ALL_UNMATCHABLE"
    RULE_NONE_FORBIDDEN           = "E_RULE_NONE_FORBIDDEN"


@dataclass(slots=True)
class ValidationError:
    """
    Pojedyncze naruszenie szablonu.

    - code:         stały identyfikator klasy błędu (ErrorCode)
    - path:         lokalizacja w wyrażeniu (JSONPath), np. "$.verb.id"
    - message:      czytelny opis naruszenia
    - expected_fix: krótka mechaniczna instrukcja naprawy
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    path: str
    message: str
    expected_fix: str
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik walidacji wyrażenia względem szablonu.

    - template_id: IRI szablonu
    - is_valid:    True gdy brak błędów (warnings nie wpływają)
    - errors:      naruszenia w kolejności etapów 1–7
    - warnings:    komunikaty ostrzegawcze (np. brak wartości 'recommended')
    """

    template_id: str
    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class TemplateViolation(ValueError):
    """
    Wyrażenie nie spełnia szablonu.

    - template_id: IRI szablonu
    - report:      pełny ValidationReport (wszystkie naruszenia)
    """

    def __init__(self, report: ValidationReport) -> None:
        self.template_id = report.template_id
        self.report      = report
        first = report.errors[0].message if report.errors else "?"
        more  = len(report.errors) - 1
        suffix = f" (+{more} kolejnych)" if more > 0 else ""
        super().__init__(
            f"Wyrażenie nie spełnia szablonu '{report.template_id}': {first}{suffix}"
        )

    @property
    def errors(self) -> list[ValidationError]:
        return self.report.errors
