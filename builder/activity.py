"""
builder/activity.py — budowa aktywności (obiekt lub aktywność kontekstowa).

id, typ i klucze rozszerzeń przechodzą przez wyrocznię: można podać IRI
albo nazwę pojęcia z zarejestrowanego profilu.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from lookup import Oracle, adapt, default_oracle, resolve, resolve_id

from .document import Document, DocumentKind


def _activity_document() -> Document:
    return Document.of(DocumentKind.ACTIVITY, {"objectType": "Activity"})


@dataclass(frozen=True)
class ActivityBuilder:
    doc: Document = field(default_factory=_activity_document)
    oracle: Oracle = field(default_factory=default_oracle)

    @classmethod
    def builder(cls, value: "ActivityBuilder | str | dict[str, Any] | None" = None,
                oracle: Oracle | None = None) -> "ActivityBuilder":
        """
        value: budowniczy (zwracany bez zmian), nazwa/IRI aktywności
        (rozwiązywana przez wyrocznię) albo gotowy słownik.
        """
        if isinstance(value, ActivityBuilder):
            return value
        oracle = oracle or default_oracle()
        if isinstance(value, str):
            data = adapt(resolve(oracle, value, "Activity"))
        else:
            data = dict(value or {})
        data.setdefault("objectType", "Activity")
        return cls(Document.of(DocumentKind.ACTIVITY, data), oracle)

    def _with(self, doc: Document) -> "ActivityBuilder":
        return dataclasses.replace(self, doc=doc)

    def _with_definition(self, key: str, value: Any) -> "ActivityBuilder":
        return self._with(self.doc.set(("definition", key), value))

    # ------------------------------------------------------------------
    # Pola rozwiązywane przez wyrocznię
    # ------------------------------------------------------------------

    def with_id(self, activity: str) -> "ActivityBuilder":
        return self._with(self.doc.set(("id",), resolve_id(self.oracle, activity, "Activity")))

    def with_type(self, activity_type: str) -> "ActivityBuilder":
        return self._with_definition("type", resolve_id(self.oracle, activity_type, "ActivityType"))

    def with_extension(self, key: str, value: Any) -> "ActivityBuilder":
        iri = resolve_id(self.oracle, key, "ActivityExtension")
        return self._with(self.doc.set(("definition", "extensions", iri), value))

    # ------------------------------------------------------------------
    # Definicja
    # ------------------------------------------------------------------

    def with_name(self, name: str, language: str = "en-US") -> "ActivityBuilder":
        return self._with(self.doc.set(("definition", "name", language), name))

    def with_description(self, description: str, language: str = "en-US") -> "ActivityBuilder":
        return self._with(self.doc.set(("definition", "description", language), description))

    def with_more_info(self, url: str) -> "ActivityBuilder":
        return self._with_definition("moreInfo", url)

    # Interakcje (cmi.interaction)

    def with_interaction_type(self, interaction_type: str) -> "ActivityBuilder":
        return self._with_definition("interactionType", interaction_type)

    def with_correct_responses_pattern(self, pattern: list[str]) -> "ActivityBuilder":
        return self._with_definition("correctResponsesPattern", list(pattern))

    def with_choices(self, choices: list[dict[str, Any]]) -> "ActivityBuilder":
        return self._with_definition("choices", list(choices))

    def with_scale(self, scale: list[dict[str, Any]]) -> "ActivityBuilder":
        return self._with_definition("scale", list(scale))

    def with_source(self, source: list[dict[str, Any]]) -> "ActivityBuilder":
        return self._with_definition("source", list(source))

    def with_target(self, target: list[dict[str, Any]]) -> "ActivityBuilder":
        return self._with_definition("target", list(target))

    def with_steps(self, steps: list[dict[str, Any]]) -> "ActivityBuilder":
        return self._with_definition("steps", list(steps))

    def build(self) -> dict[str, Any]:
        return self.doc.to_plain()
