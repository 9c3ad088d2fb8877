"""
lookup — wyrocznie rozwiązujące nazwy i IRI pojęć.

Publiczne API:
  UriOracle, ProfileOracle, CompositeOracle, default_oracle()
  resolve(oracle, identifier, category)     → ConceptRecord  (LookupFailure)
  resolve_id(oracle, identifier, category)  → str
  adapt(record)                             → fragment wyrażenia xAPI
  resolve_template(template, oracle)        → szablon z IRI zamiast nazw
"""

from .oracle import (
    ConceptRecord,
    CompositeOracle,
    LookupFailure,
    Oracle,
    ProfileOracle,
    UriOracle,
    adapt,
    default_oracle,
    resolve,
    resolve_id,
)
from .templates import resolve_template

__all__ = [
    "ConceptRecord",
    "CompositeOracle",
    "LookupFailure",
    "Oracle",
    "ProfileOracle",
    "UriOracle",
    "adapt",
    "default_oracle",
    "resolve",
    "resolve_id",
    "resolve_template",
]
