"""
profile_model — struktury danych profili xAPI.

Użycie:
  from profile_model import Profile, StatementTemplate, TemplateRule, ...

Moduły:
  common    — LanguageMap, Iri, Concept, ConceptType, ProfileVersion, StructuralError
  templates — Presence, ContextRelation, TemplateRule, StatementTemplate
  patterns  — PatternKind, PatternDefinition
  profiles  — Profile, profile_from_dict
  schema    — PROFILE_SCHEMA (JSON Schema dokumentu profilu)
"""

from .common import (
    LanguageMap,
    Iri,
    StructuralError,
    ConceptType,
    Concept,
    ProfileVersion,
)
from .templates import (
    Presence,
    ContextRelation,
    CONTEXT_TYPE_KEYS,
    TemplateRule,
    StatementTemplate,
    rule_from_dict,
    template_from_dict,
)
from .patterns import (
    PatternKind,
    PatternDefinition,
    pattern_definition_from_dict,
)
from .profiles import (
    Profile,
    concept_from_dict,
    profile_from_dict,
)
from .schema import PROFILE_SCHEMA

__all__ = [
    # common
    "LanguageMap",
    "Iri",
    "StructuralError",
    "ConceptType",
    "Concept",
    "ProfileVersion",
    # templates
    "Presence",
    "ContextRelation",
    "CONTEXT_TYPE_KEYS",
    "TemplateRule",
    "StatementTemplate",
    "rule_from_dict",
    "template_from_dict",
    # patterns
    "PatternKind",
    "PatternDefinition",
    "pattern_definition_from_dict",
    # profiles
    "Profile",
    "concept_from_dict",
    "profile_from_dict",
    # schema
    "PROFILE_SCHEMA",
]
