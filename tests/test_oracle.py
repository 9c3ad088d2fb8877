"""Testy wyroczni (lookup): UriOracle, ProfileOracle, CompositeOracle."""

from __future__ import annotations

import pytest

from conftest import ACTIVITY_INTRO, T_ATTEMPTED, TYPE_COURSE, VERB_ATTEMPTED, VERB_COMPLETED
from lookup import (
    CompositeOracle,
    LookupFailure,
    ProfileOracle,
    UriOracle,
    adapt,
    default_oracle,
    resolve,
    resolve_id,
    resolve_template,
)
from profile_model import ContextRelation, profile_from_dict, template_from_dict


class StaticOracle:
    def __init__(self, record):
        self.record = record

    def lookup(self, identifier, category):
        return dict(self.record)


class TestUriOracle:

    def test_iri_passthrough(self):
        assert UriOracle().lookup("http://example.com/x", "Verb") == {"id": "http://example.com/x"}

    def test_name_not_resolved(self):
        assert UriOracle().lookup("completed", "Verb") is None


class TestProfileOracle:

    @pytest.fixture
    def oracle(self, sample_profile):
        return ProfileOracle.from_profile(sample_profile)

    def test_by_label_case_insensitive(self, oracle):
        assert oracle.lookup("COMPLETED", "Verb")["id"] == VERB_COMPLETED

    def test_by_id(self, oracle):
        assert oracle.lookup(VERB_ATTEMPTED, "Verb")["prefLabel"] == {"en": "attempted"}

    def test_category_must_match(self, oracle):
        assert oracle.lookup("completed", "ActivityType") is None

    def test_templates_are_searchable(self, oracle):
        assert oracle.lookup("attempted", "StatementTemplate")["id"] == T_ATTEMPTED

    def test_ambiguous_returns_none(self, sample_profile):
        sample_profile["concepts"].append({
            "id": "http://example.com/verbs/completed-too",
            "type": "Verb",
            "prefLabel": {"en": "Completed"},
        })
        assert ProfileOracle.from_profile(sample_profile).lookup("completed", "Verb") is None

    def test_returns_independent_copy(self, oracle):
        record = oracle.lookup("completed", "Verb")
        record["prefLabel"]["en"] = "changed"
        assert oracle.lookup("completed", "Verb")["prefLabel"]["en"] == "completed"

    def test_from_parsed_profile(self, sample_profile):
        oracle = ProfileOracle.from_profile(profile_from_dict(sample_profile))
        assert oracle.lookup("course", "ActivityType")["id"] == TYPE_COURSE


class TestCompositeOracle:

    def test_latest_added_wins(self):
        oracle = CompositeOracle((StaticOracle({"id": "first"}),)).add(StaticOracle({"id": "second"}))
        assert oracle.lookup("x", "Verb") == {"id": "second"}

    def test_falls_back_to_earlier(self, sample_profile):
        oracle = default_oracle().add(ProfileOracle.from_profile(sample_profile))
        assert oracle.lookup("http://unknown.example.com", "Verb") == {"id": "http://unknown.example.com"}
        assert oracle.lookup("completed", "Verb")["id"] == VERB_COMPLETED

    def test_add_returns_new_composite(self):
        base = default_oracle()
        extended = base.add(StaticOracle({"id": "x"}))
        assert len(base.oracles) == 1
        assert len(extended.oracles) == 2

    def test_resolve_failure(self):
        with pytest.raises(LookupFailure) as exc_info:
            resolve(default_oracle(), "completed", "Verb")
        assert exc_info.value.identifier == "completed"
        assert exc_info.value.category == "Verb"

    def test_resolve_id(self, sample_profile):
        oracle = default_oracle().add(ProfileOracle.from_profile(sample_profile))
        assert resolve_id(oracle, "attempted", "Verb") == VERB_ATTEMPTED


class TestAdapt:

    def test_verb(self):
        record = {"id": VERB_COMPLETED, "type": "Verb", "prefLabel": {"en": "completed"}}
        assert adapt(record) == {"id": VERB_COMPLETED, "display": {"en": "completed"}}

    def test_activity_drops_context(self, sample_profile):
        record = ProfileOracle.from_profile(sample_profile).lookup("intro course", "Activity")
        assert adapt(record) == {
            "objectType": "Activity",
            "id": ACTIVITY_INTRO,
            "definition": {"type": TYPE_COURSE, "name": {"en": "Intro"}},
        }

    def test_iri_record_unchanged(self):
        assert adapt({"id": "http://x"}) == {"id": "http://x"}


class TestResolveTemplate:

    def test_names_become_iris(self, sample_profile):
        oracle = default_oracle().add(ProfileOracle.from_profile(sample_profile))
        template = template_from_dict({
            "id": "http://example.com/t",
            "verb": "attempted",
            "objectActivityType": "course",
            "contextParentActivityType": ["course"],
        })
        resolved = resolve_template(template, oracle)
        assert resolved.verb == VERB_ATTEMPTED
        assert resolved.object_activity_type == TYPE_COURSE
        assert resolved.context_activity_types == {ContextRelation.PARENT: (TYPE_COURSE,)}
        assert template.verb == "attempted"

    def test_unknown_name_fails(self):
        template = template_from_dict({"id": "http://example.com/t", "verb": "jumped"})
        with pytest.raises(LookupFailure):
            resolve_template(template, default_oracle())
