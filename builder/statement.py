"""
builder/statement.py — niemutowalny budowniczy wyrażeń xAPI.

Każda metoda with_* / as_* zwraca nowego budowniczego; oryginał pozostaje
bez zmian. Nazwy czasowników, aktywności, typów i rozszerzeń są
rozwiązywane przez wyrocznię (profil dodany przez with_profile()
pozwala używać nazw z prefLabel zamiast IRI).

Budowniczy z szablonem (templated) waliduje wynik build() względem
szablonu i zgłasza TemplateViolation z pełnym raportem.

Przykład::

    statement = (
        StatementBuilder.builder()
        .with_profile(profile)
        .with_actor_email("jan@example.com")
        .with_verb("completed")
        .with_object("http://example.com/course/1")
        .as_succeeded()
        .build()
    )
"""

from __future__ import annotations

import dataclasses
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from lookup import (
    CompositeOracle,
    Oracle,
    ProfileOracle,
    adapt,
    default_oracle,
    resolve,
    resolve_id,
    resolve_template,
)
from profile_model import ContextRelation, Profile, StatementTemplate, template_from_dict
from validator import TemplateValidator

from .activity import ActivityBuilder
from .agent import AgentBuilder
from .attachment import AttachmentBuilder
from .document import DisallowedField, Document, DocumentKind, Path

logger = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Rola aktora → ścieżka w wyrażeniu
AGENT_LOCATIONS: dict[str, Path] = {
    "actor":      ("actor",),
    "authority":  ("authority",),
    "instructor": ("context", "instructor"),
    "team":       ("context", "team"),
    "object":     ("object",),
}


def current_timestamp() -> str:
    """Bieżący czas UTC w ISO 8601 z milisekundami, np. 2026-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _statement_document() -> Document:
    return Document.of(DocumentKind.STATEMENT)


@dataclass(frozen=True)
class StatementBuilder:
    """
    - doc:      budowany dokument (Statement lub SubStatement)
    - oracle:   złożenie wyroczni używanych do rozwiązywania nazw
    - template: szablon, względem którego build() waliduje (opcjonalnie)
    """
    doc: Document = field(default_factory=_statement_document)
    oracle: CompositeOracle = field(default_factory=default_oracle)
    template: StatementTemplate | None = None

    @classmethod
    def builder(cls, value: "StatementBuilder | dict[str, Any] | None" = None,
                oracle: CompositeOracle | None = None) -> "StatementBuilder":
        if isinstance(value, StatementBuilder):
            return value
        data = dict(value or {})
        kind = (
            DocumentKind.SUB_STATEMENT if data.get("objectType") == "SubStatement"
            else DocumentKind.STATEMENT
        )
        return cls(Document.of(kind, data), oracle or default_oracle())

    # ------------------------------------------------------------------
    # Podstawy
    # ------------------------------------------------------------------

    def _with(self, doc: Document) -> "StatementBuilder":
        return dataclasses.replace(self, doc=doc)

    def _with_path(self, path: Path, value: Any) -> "StatementBuilder":
        return self._with(self.doc.set(path, value))

    def with_oracle(self, oracle: Oracle) -> "StatementBuilder":
        return dataclasses.replace(self, oracle=self.oracle.add(oracle))

    def with_profile(self, profile: Profile | dict[str, Any]) -> "StatementBuilder":
        """Rejestruje profil jako wyrocznię (nazwy zamiast IRI w kolejnych wywołaniach)."""
        return self.with_oracle(ProfileOracle.from_profile(profile))

    # ------------------------------------------------------------------
    # Czasownik i obiekt
    # ------------------------------------------------------------------

    def with_verb(self, verb: str | dict[str, Any]) -> "StatementBuilder":
        """Czasownik jako IRI, nazwa z profilu lub gotowy słownik z 'id'."""
        if isinstance(verb, dict) and verb.get("id"):
            full = verb
        else:
            full = adapt(resolve(self.oracle, verb, "Verb"))
        return self._with_path(("verb",), full)

    def with_verb_display(self, language: str, display: str) -> "StatementBuilder":
        return self._with_path(("verb", "display", language), display)

    def with_object(self, obj: Any) -> "StatementBuilder":
        """
        Obiekt wyrażenia:
          - UUID                        → StatementRef
          - nazwa / IRI aktywności      → pełna aktywność z wyroczni
          - StatementBuilder            → SubStatement
          - AgentBuilder / ActivityBuilder → zbudowany dokument
          - słownik                     → bez zmian
        """
        path: Path = ("object",)
        match obj:
            case str() if UUID_RE.match(obj):
                return self._with_path(path, {"objectType": "StatementRef", "id": obj})
            case str():
                return self._with_path(path, adapt(resolve(self.oracle, obj, "Activity")))
            case StatementBuilder():
                if self.doc.kind is DocumentKind.SUB_STATEMENT:
                    raise DisallowedField(DocumentKind.SUB_STATEMENT, "object")
                return self._with_path(path, obj.as_sub_statement().doc.to_plain())
            case AgentBuilder() | ActivityBuilder():
                return self._with_path(path, obj.build())
            case _:
                return self._with_path(path, obj)

    def with_attachment(self, attachment: AttachmentBuilder | dict[str, Any]) -> "StatementBuilder":
        built = AttachmentBuilder.builder(attachment, self.oracle).build()
        return self._with(self.doc.append(("attachments",), built))

    def with_context_statement(self, statement: "str | StatementBuilder | dict[str, Any]") -> "StatementBuilder":
        """context.statement jako StatementRef (UUID, budowniczy lub słownik z 'id')."""
        match statement:
            case str():
                statement_id = statement
            case StatementBuilder():
                statement_id = statement.doc.get(("id",))
            case _:
                statement_id = statement.get("id")
        if not statement_id:
            raise ValueError("Wyrażenie wskazywane przez context.statement nie ma 'id'.")
        return self._with_path(
            ("context", "statement"), {"objectType": "StatementRef", "id": statement_id},
        )

    # ------------------------------------------------------------------
    # Pola wyrażenia
    # ------------------------------------------------------------------

    def with_id(self, statement_id: str) -> "StatementBuilder":
        return self._with_path(("id",), statement_id)

    def with_timestamp(self, timestamp: str) -> "StatementBuilder":
        return self._with_path(("timestamp",), timestamp)

    def with_current_timestamp(self) -> "StatementBuilder":
        return self.with_timestamp(current_timestamp())

    def with_stored(self, timestamp: str) -> "StatementBuilder":
        return self._with_path(("stored",), timestamp)

    def with_version(self, version: str) -> "StatementBuilder":
        return self._with_path(("version",), version)

    # Wynik (result)

    def with_scaled_score(self, score: float) -> "StatementBuilder":
        return self._with_path(("result", "score", "scaled"), score)

    def with_raw_score(self, score: float) -> "StatementBuilder":
        return self._with_path(("result", "score", "raw"), score)

    def with_min_score(self, score: float) -> "StatementBuilder":
        return self._with_path(("result", "score", "min"), score)

    def with_max_score(self, score: float) -> "StatementBuilder":
        return self._with_path(("result", "score", "max"), score)

    def with_success(self, success: bool) -> "StatementBuilder":
        return self._with_path(("result", "success"), success)

    def as_succeeded(self) -> "StatementBuilder":
        return self.with_success(True)

    def as_failed(self) -> "StatementBuilder":
        return self.with_success(False)

    def with_completion(self, completion: bool) -> "StatementBuilder":
        return self._with_path(("result", "completion"), completion)

    def as_complete(self) -> "StatementBuilder":
        return self.with_completion(True)

    def as_incomplete(self) -> "StatementBuilder":
        return self.with_completion(False)

    def with_response(self, response: str) -> "StatementBuilder":
        return self._with_path(("result", "response"), response)

    def with_duration(self, duration: str) -> "StatementBuilder":
        """Czas trwania w formacie ISO 8601, np. 'PT1H30M'."""
        return self._with_path(("result", "duration"), duration)

    def with_result_extension(self, key: str, value: Any) -> "StatementBuilder":
        iri = resolve_id(self.oracle, key, "ResultExtension")
        return self._with_path(("result", "extensions", iri), value)

    # Kontekst

    def with_registration(self, registration: str) -> "StatementBuilder":
        return self._with_path(("context", "registration"), registration)

    def with_revision(self, revision: str) -> "StatementBuilder":
        return self._with_path(("context", "revision"), revision)

    def with_platform(self, platform: str) -> "StatementBuilder":
        return self._with_path(("context", "platform"), platform)

    def with_language(self, language: str) -> "StatementBuilder":
        return self._with_path(("context", "language"), language)

    def with_context_extension(self, key: str, value: Any) -> "StatementBuilder":
        iri = resolve_id(self.oracle, key, "ContextExtension")
        return self._with_path(("context", "extensions", iri), value)

    def with_context_activity(
        self,
        relation: ContextRelation | str,
        activity: ActivityBuilder | str | dict[str, Any],
    ) -> "StatementBuilder":
        """Dokłada aktywność do context.contextActivities.<relation>."""
        relation = ContextRelation(relation)
        built = ActivityBuilder.builder(activity, self.oracle).build()
        return self._with(self.doc.append(("context", "contextActivities", relation.value), built))

    def with_context_parent(self, activity) -> "StatementBuilder":
        return self.with_context_activity(ContextRelation.PARENT, activity)

    def with_context_grouping(self, activity) -> "StatementBuilder":
        return self.with_context_activity(ContextRelation.GROUPING, activity)

    def with_context_category(self, activity) -> "StatementBuilder":
        return self.with_context_activity(ContextRelation.CATEGORY, activity)

    def with_context_other(self, activity) -> "StatementBuilder":
        return self.with_context_activity(ContextRelation.OTHER, activity)

    # ------------------------------------------------------------------
    # Aktorzy
    # ------------------------------------------------------------------

    def with_agent(self, role: str, agent: AgentBuilder | dict[str, Any]) -> "StatementBuilder":
        return self._with_path(AGENT_LOCATIONS[role], AgentBuilder.builder(agent, self.oracle).build())

    def with_actor(self, agent) -> "StatementBuilder":
        return self.with_agent("actor", agent)

    def with_authority(self, agent) -> "StatementBuilder":
        return self.with_agent("authority", agent)

    def with_instructor(self, agent) -> "StatementBuilder":
        return self.with_agent("instructor", agent)

    def with_team(self, agent) -> "StatementBuilder":
        return self.with_agent("team", agent)

    def with_agent_method(self, role: str, method: str, *args: Any) -> "StatementBuilder":
        """
        Wywołuje metodę AgentBuilder na aktorze w danej roli, np.
        with_agent_method("actor", "with_email", "jan@example.com").
        """
        if not method.startswith(("with_", "as_")) or not hasattr(AgentBuilder, method):
            raise AttributeError(f"AgentBuilder nie ma metody '{method}'.")
        path  = AGENT_LOCATIONS[role]
        agent = AgentBuilder.builder(self.doc.get(path), self.oracle)
        return self._with_path(path, getattr(agent, method)(*args).build())

    def with_actor_email(self, email: str) -> "StatementBuilder":
        return self.with_agent_method("actor", "with_email", email)

    def with_actor_name(self, name: str) -> "StatementBuilder":
        return self.with_agent_method("actor", "with_name", name)

    def with_actor_account(self, home_page: str, name: str) -> "StatementBuilder":
        return self.with_agent_method("actor", "with_account", home_page, name)

    def with_actor_member(self, agent) -> "StatementBuilder":
        return self.with_agent_method("actor", "with_member", agent)

    def actor_as_group(self) -> "StatementBuilder":
        return self.with_agent_method("actor", "as_group")

    def with_authority_email(self, email: str) -> "StatementBuilder":
        return self.with_agent_method("authority", "with_email", email)

    def with_authority_name(self, name: str) -> "StatementBuilder":
        return self.with_agent_method("authority", "with_name", name)

    def with_instructor_email(self, email: str) -> "StatementBuilder":
        return self.with_agent_method("instructor", "with_email", email)

    def with_instructor_name(self, name: str) -> "StatementBuilder":
        return self.with_agent_method("instructor", "with_name", name)

    def with_team_email(self, email: str) -> "StatementBuilder":
        return self.with_agent_method("team", "with_email", email)

    def with_team_name(self, name: str) -> "StatementBuilder":
        return self.with_agent_method("team", "with_name", name)

    def with_object_email(self, email: str) -> "StatementBuilder":
        return self.with_agent_method("object", "with_email", email)

    # ------------------------------------------------------------------
    # Obiekt-aktywność
    # ------------------------------------------------------------------

    def with_object_method(self, method: str, *args: Any) -> "StatementBuilder":
        """Wywołuje metodę ActivityBuilder na obiekcie wyrażenia."""
        if not method.startswith("with_") or not hasattr(ActivityBuilder, method):
            raise AttributeError(f"ActivityBuilder nie ma metody '{method}'.")
        activity = ActivityBuilder.builder(self.doc.get(("object",)), self.oracle)
        return self._with_path(("object",), getattr(activity, method)(*args).build())

    def with_object_id(self, activity: str) -> "StatementBuilder":
        return self.with_object_method("with_id", activity)

    def with_object_type(self, activity_type: str) -> "StatementBuilder":
        return self.with_object_method("with_type", activity_type)

    def with_object_extension(self, key: str, value: Any) -> "StatementBuilder":
        return self.with_object_method("with_extension", key, value)

    def with_object_more_info(self, url: str) -> "StatementBuilder":
        return self.with_object_method("with_more_info", url)

    def with_object_interaction_type(self, interaction_type: str) -> "StatementBuilder":
        return self.with_object_method("with_interaction_type", interaction_type)

    def with_object_description(self, description: str, language: str = "en-US") -> "StatementBuilder":
        return self.with_object_method("with_description", description, language)

    def with_object_name(self, name: str, language: str | None = None) -> "StatementBuilder":
        """Bez języka: imię aktora-obiektu; z językiem: definition.name aktywności."""
        if language is None:
            return self.with_agent_method("object", "with_name", name)
        return self.with_object_method("with_name", name, language)

    # ------------------------------------------------------------------
    # Fabryki budowniczych ze wspólną wyrocznią
    # ------------------------------------------------------------------

    def agents(self, value: AgentBuilder | dict[str, Any] | None = None) -> AgentBuilder:
        return AgentBuilder.builder(value, self.oracle)

    def activities(self, value: ActivityBuilder | str | dict[str, Any] | None = None) -> ActivityBuilder:
        return ActivityBuilder.builder(value, self.oracle)

    def attachments(self, value: AttachmentBuilder | dict[str, Any] | None = None) -> AttachmentBuilder:
        return AttachmentBuilder.builder(value, self.oracle)

    # ------------------------------------------------------------------
    # Szablon, SubStatement, build
    # ------------------------------------------------------------------

    def templated(self, template: StatementTemplate | dict[str, Any]) -> "StatementBuilder":
        """
        Wiąże budowniczego z szablonem: rozwiązuje jego właściwości
        determinujące i uzupełnia brakujący czasownik oraz typ obiektu.

        Raises:
            LookupFailure gdy nazwa w szablonie nie wskazuje pojęcia.
        """
        if isinstance(template, dict):
            template = template_from_dict(template)
        resolved = resolve_template(template, self.oracle)
        built = dataclasses.replace(self, template=resolved)
        if resolved.verb and not built.doc.has(("verb",)):
            built = built.with_verb(resolved.verb)
        if resolved.object_activity_type and not built.doc.has(("object", "definition", "type")):
            built = built.with_object_type(resolved.object_activity_type)
        return built

    def as_sub_statement(self) -> "StatementBuilder":
        """
        Raises:
            DisallowedField gdy wyrażenie ma pola niedozwolone w SubStatement
            (id, stored, version, authority) lub samo zawiera SubStatement.
        """
        if self.doc.kind is DocumentKind.SUB_STATEMENT:
            return self
        if self.doc.get(("object", "objectType")) == "SubStatement":
            raise DisallowedField(DocumentKind.SUB_STATEMENT, "object")
        doc = self.doc.with_kind(DocumentKind.SUB_STATEMENT).set(("objectType",), "SubStatement")
        return self._with(doc)

    def build(self) -> dict[str, Any]:
        """
        Zwraca gotowe wyrażenie; uzupełnia brakujące id (UUID4) i timestamp
        (poza SubStatement).

        Raises:
            TemplateViolation gdy budowniczy ma szablon, a wyrażenie go narusza.
        """
        doc = self.doc
        if doc.kind is DocumentKind.STATEMENT:
            if not doc.has(("id",)):
                doc = doc.set(("id",), str(uuid.uuid4()))
            if not doc.has(("timestamp",)):
                doc = doc.set(("timestamp",), current_timestamp())
        statement = doc.to_plain()
        if self.template is not None:
            logger.debug("Walidacja wyrażenia %s szablonem %s", statement.get("id"), self.template.id)
            TemplateValidator(self.template).validate(statement)
        return statement
