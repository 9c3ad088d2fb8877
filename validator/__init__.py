"""
validator — walidator wyrażeń xAPI względem szablonów profilu.

Interfejs publiczny:
    TemplateValidator  — główny walidator (etapy 1–7)
    ValidationReport, ValidationError, ErrorCode — typy raportu
    TemplateViolation  — wyjątek z pełnym raportem
    select, split_paths — ewaluacja wyrażeń JSONPath reguł

Typowe użycie:
    from validator import TemplateValidator

    validator = TemplateValidator(template)
    report    = validator.check(statement)
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .types import ErrorCode, TemplateViolation, ValidationError, ValidationReport
from .selectors import select, select_within, split_paths
from .template_validator import TemplateValidator

__all__ = [
    "ErrorCode",
    "TemplateViolation",
    "ValidationError",
    "ValidationReport",
    "select",
    "select_within",
    "split_paths",
    "TemplateValidator",
]
