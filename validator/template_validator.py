"""
validator/template_validator.py — walidacja wyrażenia względem szablonu.

TemplateValidator(template).check(statement) -> ValidationReport
TemplateValidator(template).validate(statement) -> None | TemplateViolation

Etapy (stała kolejność):
  1 — czasownik                    (verb.id == template.verb)
  2 — typ aktywności obiektu       (object.definition.type)
  3 — aktywności kontekstowe       (parent / grouping / category / other: podzbiór)
  4 — typy użycia załączników      (attachments[].usageType: podzbiór)
  5 — obiekt jako StatementRef     (gdy objectStatementRefTemplate)
  6 — context.statement            (gdy contextStatementRefTemplate)
  7 — reguły                       (w kolejności deklaracji)

Wszystkie etapy są wykonywane; naruszenia trafiają do jednego raportu.
"""

from __future__ import annotations

import logging
from typing import Any

from profile_model import ContextRelation, Presence, StatementTemplate, TemplateRule

from .selectors import select, select_within, split_paths
from .types import ErrorCode, TemplateViolation, ValidationError, ValidationReport

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

def _get(document: Any, *keys: str) -> Any:
    node = document
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _preview(values: list[Any], limit: int = 5) -> str:
    shown = ", ".join(repr(v) for v in values[:limit])
    return shown + (", …" if len(values) > limit else "")


def _same(a: Any, b: Any) -> bool:
    """Równość wartości JSON: true/false nie są równe liczbom 1/0."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_same(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_same(x, y) for x, y in zip(a, b))
    return a == b


def _listed(value: Any, allowed: tuple[Any, ...]) -> bool:
    return any(_same(value, candidate) for candidate in allowed)


# ---------------------------------------------------------------------------
# TemplateValidator
# ---------------------------------------------------------------------------

class TemplateValidator:
    """
    Walidator wyrażenia xAPI względem szablonu profilu.

    Użycie:
        validator = TemplateValidator(template)
        report    = validator.check(statement)
        validator.validate(statement)   # TemplateViolation gdy są błędy
    """

    def __init__(self, template: StatementTemplate) -> None:
        self._template = template

    @property
    def template(self) -> StatementTemplate:
        return self._template

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def check(self, statement: dict[str, Any]) -> ValidationReport:
        """Wykonuje etapy 1–7 i zwraca raport ze wszystkimi naruszeniami."""
        errors: list[ValidationError] = []
        warnings: list[str] = []

        self._stage_verb(statement, errors)
        self._stage_object_activity_type(statement, errors)
        self._stage_context_activities(statement, errors)
        self._stage_attachments(statement, errors)
        self._stage_statement_refs(statement, errors)
        for index, rule in enumerate(self._template.rules):
            self.check_rule(statement, rule, errors, warnings, index=index)

        logger.debug(
            "Szablon %s: %d błąd(ów), %d ostrzeżeń",
            self._template.id, len(errors), len(warnings),
        )
        return ValidationReport(
            template_id=self._template.id,
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    def validate(self, statement: dict[str, Any]) -> None:
        """
        Raises:
            TemplateViolation z pełnym raportem, gdy wyrażenie narusza szablon.
        """
        report = self.check(statement)
        if not report.is_valid:
            raise TemplateViolation(report)

    # ------------------------------------------------------------------
    # Etapy 1–2 — czasownik i typ aktywności obiektu
    # ------------------------------------------------------------------

    def _stage_verb(self, statement: dict, errors: list[ValidationError]) -> None:
        expected = self._template.verb
        if expected is None:
            return
        actual = _get(statement, "verb", "id")
        if actual != expected:
            errors.append(ValidationError(
                code=ErrorCode.VERB_MISMATCH,
                path="$.verb.id",
                message=f"Czasownik '{actual}' różni się od wymaganego '{expected}'.",
                expected_fix=f"Ustaw verb.id na '{expected}'.",
                details={"expected": expected, "actual": actual},
            ))

    def _stage_object_activity_type(self, statement: dict, errors: list[ValidationError]) -> None:
        expected = self._template.object_activity_type
        if expected is None:
            return
        actual = _get(statement, "object", "definition", "type")
        if actual != expected:
            errors.append(ValidationError(
                code=ErrorCode.OBJECT_ACTIVITY_TYPE_MISMATCH,
                path="$.object.definition.type",
                message=(
                    f"Typ aktywności obiektu '{actual}' różni się od "
                    f"wymaganego '{expected}'."
                ),
                expected_fix=f"Ustaw object.definition.type na '{expected}'.",
                details={"expected": expected, "actual": actual},
            ))

    # ------------------------------------------------------------------
    # Etapy 3–4 — aktywności kontekstowe i załączniki
    # ------------------------------------------------------------------

    def _stage_context_activities(self, statement: dict, errors: list[ValidationError]) -> None:
        for relation in ContextRelation:
            required = self._template.context_activity_types.get(relation)
            if not required:
                continue
            activities = _as_list(_get(statement, "context", "contextActivities", relation.value))
            present = {_get(a, "definition", "type") for a in activities}
            missing = [t for t in required if t not in present]
            if missing:
                errors.append(ValidationError(
                    code=ErrorCode.CONTEXT_ACTIVITY_TYPE_MISSING,
                    path=f"$.context.contextActivities.{relation.value}",
                    message=(
                        f"Brak aktywności kontekstowych ({relation.value}) "
                        f"o typach: {_preview(missing)}."
                    ),
                    expected_fix=(
                        f"Dodaj do context.contextActivities.{relation.value} "
                        f"aktywności z definition.type z listy brakujących."
                    ),
                    details={"relation": relation.value, "missing": missing},
                ))

    def _stage_attachments(self, statement: dict, errors: list[ValidationError]) -> None:
        required = self._template.attachment_usage_types
        if not required:
            return
        present = {_get(a, "usageType") for a in _as_list(statement.get("attachments"))}
        missing = [t for t in required if t not in present]
        if missing:
            errors.append(ValidationError(
                code=ErrorCode.ATTACHMENT_USAGE_TYPE_MISSING,
                path="$.attachments",
                message=f"Brak załączników o typach użycia: {_preview(missing)}.",
                expected_fix="Dodaj załączniki z brakującymi usageType.",
                details={"missing": missing},
            ))

    # ------------------------------------------------------------------
    # Etapy 5–6 — StatementRef
    # ------------------------------------------------------------------

    def _stage_statement_refs(self, statement: dict, errors: list[ValidationError]) -> None:
        if self._template.requires_object_statement_ref:
            object_type = _get(statement, "object", "objectType")
            if object_type != "StatementRef":
                errors.append(ValidationError(
                    code=ErrorCode.OBJECT_NOT_STATEMENT_REF,
                    path="$.object.objectType",
                    message=(
                        f"Obiekt musi być StatementRef, jest '{object_type}'."
                    ),
                    expected_fix="Ustaw obiekt na StatementRef (UUID wyrażenia).",
                    details={"actual": object_type},
                ))

        if self._template.requires_context_statement_ref:
            ref_type = _get(statement, "context", "statement", "objectType")
            if ref_type != "StatementRef":
                errors.append(ValidationError(
                    code=ErrorCode.CONTEXT_STATEMENT_REF_MISSING,
                    path="$.context.statement",
                    message="Brak context.statement typu StatementRef.",
                    expected_fix="Dodaj context.statement wskazujące poprzednie wyrażenie.",
                ))

    # ------------------------------------------------------------------
    # Etap 7 — reguły
    # ------------------------------------------------------------------

    def check_rule(
        self,
        statement: dict[str, Any],
        rule: TemplateRule,
        errors: list[ValidationError],
        warnings: list[str],
        index: int = 0,
    ) -> None:
        """Sprawdza jedną regułę; naruszenia dopisuje do errors."""
        path = rule.location
        if rule.selector:
            path = f"{rule.location} → {rule.selector}"

        values = select(statement, split_paths(rule.location))
        has_unmatchable = False
        if rule.selector:
            values, has_unmatchable = select_within(values, split_paths(rule.selector))

        def fail(code: ErrorCode, message: str, fix: str, **details: Any) -> None:
            errors.append(ValidationError(
                code=code,
                path=path,
                message=f"Reguła #{index}: {message}",
                expected_fix=fix,
                details={"rule_index": index, **details},
            ))

        match rule.presence:
            case Presence.INCLUDED:
                if not values:
                    fail(
                        ErrorCode.RULE_INCLUDED_MISSING,
                        f"brak wartości w '{path}' (presence=included).",
                        f"Uzupełnij wyrażenie o wartość w '{path}'.",
                    )
                if has_unmatchable:
                    fail(
                        ErrorCode.RULE_INCLUDED_UNMATCHABLE,
                        f"selektor '{rule.selector}' nie pasuje do części wartości "
                        f"z '{rule.location}' (presence=included).",
                        "Każda wartość z location musi zawierać pole wskazane selektorem.",
                    )
            case Presence.EXCLUDED:
                if values:
                    fail(
                        ErrorCode.RULE_EXCLUDED_PRESENT,
                        f"'{path}' musi być nieobecne (presence=excluded), "
                        f"znaleziono: {_preview(values)}.",
                        f"Usuń wartości z '{path}'.",
                        found=values,
                    )
                return  # excluded: bez sprawdzania wartości
            case Presence.RECOMMENDED:
                if not values:
                    warnings.append(
                        f"Reguła #{index}: brak zalecanej wartości w '{path}'."
                    )
                    return

        self._check_values(rule, values, has_unmatchable, fail)

    @staticmethod
    def _check_values(rule: TemplateRule, values: list[Any], has_unmatchable: bool, fail) -> None:
        if rule.any is not None and not any(_listed(v, rule.any) for v in values):
            fail(
                ErrorCode.RULE_ANY_UNMATCHED,
                f"żadna z wartości {_preview(values)} nie należy do 'any'.",
                f"Użyj co najmniej jednej z: {_preview(list(rule.any))}.",
                allowed=list(rule.any), found=values,
            )

        if rule.all is not None:
            unlisted = [v for v in values if not _listed(v, rule.all)]
            if unlisted:
                fail(
                    ErrorCode.RULE_ALL_UNLISTED,
                    f"wartości spoza 'all': {_preview(unlisted)}.",
                    f"Dozwolone są wyłącznie: {_preview(list(rule.all))}.",
                    allowed=list(rule.all), unlisted=unlisted,
                )
            if has_unmatchable:
                fail(
                    ErrorCode.RULE_ALL_UNMATCHABLE,
                    f"selektor '{rule.selector}' nie pasuje do części wartości (all).",
                    "Każda wartość z location musi zawierać pole wskazane selektorem.",
                )

        if rule.none is not None:
            forbidden = [v for v in values if _listed(v, rule.none)]
            if forbidden:
                fail(
                    ErrorCode.RULE_NONE_FORBIDDEN,
                    f"wartości zakazane: {_preview(forbidden)}.",
                    f"Usuń wartości: {_preview(forbidden)}.",
                    forbidden=forbidden,
                )
