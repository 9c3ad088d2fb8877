"""Testy indeksu profilu i parsowania dokumentu profilu."""

from __future__ import annotations

import pytest

from conftest import P_COMPLETIONS, P_MAIN, PROFILE_VERSION, T_ATTEMPTED, T_COMPLETED
from matcher import OneOrMorePattern, SequencePattern, TemplateRef
from profile_model import PatternKind, Presence, StructuralError, profile_from_dict
from registry import ProfileIndex


class TestParsing:

    def test_profile_from_dict(self, sample_profile):
        profile = profile_from_dict(sample_profile)
        assert profile.current_version == PROFILE_VERSION
        assert [p.id for p in profile.primary_patterns] == [P_MAIN]
        completed = next(t for t in profile.templates if t.id == T_COMPLETED)
        assert completed.rules[0].presence is Presence.INCLUDED
        assert completed.rules[1].all == (True,)

    def test_version_history(self, sample_profile):
        sample_profile["versions"].insert(0, {
            "id": "http://example.com/profile/v2",
            "wasRevisionOf": [PROFILE_VERSION],
        })
        profile = profile_from_dict(sample_profile)
        newest, oldest = profile.versions
        assert profile.current_version == "http://example.com/profile/v2"
        assert newest.was_revision_of == (PROFILE_VERSION,)
        assert oldest.generated_at == "2026-01-01T00:00:00Z"

    def test_member_given_as_object(self, sample_profile):
        profile = profile_from_dict(sample_profile)
        completions = next(p for p in profile.patterns if p.id == P_COMPLETIONS)
        assert completions.kind is PatternKind.ONE_OR_MORE
        assert completions.members == (T_COMPLETED,)

    def test_pattern_with_two_operators(self, sample_profile):
        sample_profile["patterns"][1]["zeroOrMore"] = T_COMPLETED
        with pytest.raises(StructuralError):
            profile_from_dict(sample_profile)

    def test_unknown_concept_type(self, sample_profile):
        sample_profile["concepts"][0]["type"] = "Verbish"
        with pytest.raises(StructuralError):
            profile_from_dict(sample_profile)


class TestSchema:
    """Kontrola kształtu dokumentu schematem JSON."""

    def test_missing_versions(self, sample_profile):
        del sample_profile["versions"]
        with pytest.raises(StructuralError) as exc_info:
            ProfileIndex.from_dict(sample_profile)
        assert any("versions" in e for e in exc_info.value.errors)

    def test_reports_every_violation_with_path(self, sample_profile):
        sample_profile["templates"][0]["type"] = "Template"
        sample_profile["patterns"][0]["primary"] = "yes"
        with pytest.raises(StructuralError) as exc_info:
            ProfileIndex(sample_profile)
        paths = sorted(e.split(":")[0] for e in exc_info.value.errors)
        assert paths == ["/patterns/0/primary", "/templates/0/type"]

    def test_bad_presence(self, sample_profile):
        sample_profile["templates"][1]["rules"][0]["presence"] = "required"
        with pytest.raises(StructuralError):
            ProfileIndex(sample_profile)


class TestIndex:

    def test_lookups(self, sample_profile):
        index = ProfileIndex(sample_profile)
        assert index.version == PROFILE_VERSION
        assert index.template(T_ATTEMPTED).verb == "attempted"
        assert index.pattern_definition(P_MAIN).primary
        assert index.template("http://missing") is None
        assert index.template_ids == [T_ATTEMPTED, T_COMPLETED]

    def test_duplicate_id_across_collections(self, sample_profile):
        sample_profile["patterns"][1]["id"] = T_COMPLETED
        sample_profile["patterns"][0]["sequence"] = [T_ATTEMPTED, T_COMPLETED]
        with pytest.raises(StructuralError):
            ProfileIndex(sample_profile)

    def test_from_file(self, profile_file):
        assert ProfileIndex.from_file(profile_file).version == PROFILE_VERSION


class TestCompilePattern:

    def test_nested_pattern(self, sample_profile):
        tree = ProfileIndex(sample_profile).compile_pattern(P_MAIN)
        assert tree == SequencePattern((
            TemplateRef(T_ATTEMPTED),
            OneOrMorePattern(TemplateRef(T_COMPLETED)),
        ))

    def test_cached(self, sample_profile):
        index = ProfileIndex(sample_profile)
        assert index.compile_pattern(P_MAIN) is index.compile_pattern(P_MAIN)

    def test_unknown_member(self, sample_profile):
        sample_profile["patterns"][1]["oneOrMore"] = "http://example.com/templates/missing"
        index = ProfileIndex(sample_profile)
        with pytest.raises(StructuralError):
            index.compile_pattern(P_MAIN)

    def test_cycle(self, sample_profile):
        sample_profile["patterns"][1]["oneOrMore"] = P_MAIN
        index = ProfileIndex(sample_profile)
        with pytest.raises(StructuralError) as exc_info:
            index.compile_pattern(P_MAIN)
        assert "Cykl" in str(exc_info.value)

    def test_unknown_pattern(self, sample_profile):
        with pytest.raises(StructuralError):
            ProfileIndex(sample_profile).compile_pattern("http://example.com/patterns/none")
