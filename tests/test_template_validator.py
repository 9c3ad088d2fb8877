"""Testy walidatora szablonów (validator.TemplateValidator)."""

from __future__ import annotations

import pytest

from profile_model import StructuralError, template_from_dict
from validator import ErrorCode, TemplateValidator, TemplateViolation

VERB   = "http://adlnet.gov/expapi/verbs/completed"
COURSE = "http://adlnet.gov/expapi/activities/course"
MODULE = "http://adlnet.gov/expapi/activities/module"


def _validator(**template) -> TemplateValidator:
    return TemplateValidator(template_from_dict({"id": "http://example.com/t", **template}))


def _rule(**rule) -> TemplateValidator:
    return _validator(rules=[rule])


def _codes(report) -> list[str]:
    return [e.code for e in report.errors]


class TestDeterminingProperties:
    """Etapy 1–6: właściwości determinujące."""

    def test_verb_mismatch(self):
        report = _validator(verb=VERB).check({"verb": {"id": "http://other"}})
        assert _codes(report) == [ErrorCode.VERB_MISMATCH]

    def test_verb_match(self):
        assert _validator(verb=VERB).check({"verb": {"id": VERB}}).is_valid

    def test_object_activity_type(self):
        validator = _validator(objectActivityType=COURSE)
        ok = {"object": {"id": "x", "definition": {"type": COURSE}}}
        bad = {"object": {"id": "x", "definition": {"type": MODULE}}}
        assert validator.check(ok).is_valid
        assert _codes(validator.check(bad)) == [ErrorCode.OBJECT_ACTIVITY_TYPE_MISMATCH]

    def test_context_activity_types_subset(self):
        validator = _validator(contextParentActivityType=[COURSE])
        statement = {"context": {"contextActivities": {"parent": [
            {"id": "p1", "definition": {"type": MODULE}},
            {"id": "p2", "definition": {"type": COURSE}},
        ]}}}
        assert validator.check(statement).is_valid

    def test_context_activity_type_missing(self):
        validator = _validator(contextGroupingActivityType=[COURSE])
        report = validator.check({"context": {"contextActivities": {"parent": [
            {"id": "p1", "definition": {"type": COURSE}},
        ]}}})
        assert _codes(report) == [ErrorCode.CONTEXT_ACTIVITY_TYPE_MISSING]
        assert report.errors[0].details["relation"] == "grouping"

    def test_attachment_usage_types(self):
        validator = _validator(attachmentUsageType=["http://u/1", "http://u/2"])
        report = validator.check({"attachments": [{"usageType": "http://u/1"}]})
        assert _codes(report) == [ErrorCode.ATTACHMENT_USAGE_TYPE_MISSING]
        assert report.errors[0].details["missing"] == ["http://u/2"]

    def test_object_statement_ref_required(self):
        validator = _validator(objectStatementRefTemplate=["http://example.com/t0"])
        ok = {"object": {"objectType": "StatementRef", "id": "x"}}
        assert validator.check(ok).is_valid
        assert _codes(validator.check({"object": {"id": "x"}})) == [ErrorCode.OBJECT_NOT_STATEMENT_REF]

    def test_context_statement_ref_required(self):
        validator = _validator(contextStatementRefTemplate=["http://example.com/t0"])
        assert _codes(validator.check({})) == [ErrorCode.CONTEXT_STATEMENT_REF_MISSING]
        ok = {"context": {"statement": {"objectType": "StatementRef", "id": "x"}}}
        assert validator.check(ok).is_valid


class TestPresence:
    """Reguły: presence."""

    def test_included_missing_raises(self):
        with pytest.raises(TemplateViolation):
            _rule(location="$.result.success", presence="included").validate({})

    def test_included_present_passes(self):
        validator = _rule(location="$.result.success", presence="included")
        validator.validate({"result": {"success": False}})

    def test_excluded(self):
        validator = _rule(location="$.result.response", presence="excluded", any=["never"])
        assert validator.check({}).is_valid
        report = validator.check({"result": {"response": "x"}})
        # excluded pomija sprawdzanie wartości
        assert _codes(report) == [ErrorCode.RULE_EXCLUDED_PRESENT]

    def test_recommended_missing_is_warning(self):
        validator = _rule(location="$.result.score.raw", presence="recommended", any=[1])
        report = validator.check({})
        assert report.is_valid
        assert len(report.warnings) == 1

    def test_recommended_present_checks_values(self):
        validator = _rule(location="$.result.score.raw", presence="recommended", any=[1])
        report = validator.check({"result": {"score": {"raw": 2}}})
        assert _codes(report) == [ErrorCode.RULE_ANY_UNMATCHED]

    def test_included_with_unmatchable_selector(self):
        validator = _rule(
            location="$.context.contextActivities.category[*]",
            selector="$.definition.type",
            presence="included",
        )
        statement = {"context": {"contextActivities": {"category": [
            {"id": "c1", "definition": {"type": COURSE}},
            {"id": "c2"},
        ]}}}
        assert _codes(validator.check(statement)) == [ErrorCode.RULE_INCLUDED_UNMATCHABLE]


class TestValues:
    """Reguły: any / all / none."""

    def test_any(self):
        validator = _rule(location="$.verb.id", any=[VERB, "http://v/2"])
        assert validator.check({"verb": {"id": VERB}}).is_valid
        assert not validator.check({"verb": {"id": "http://v/3"}}).is_valid

    def test_any_with_no_values_fails(self):
        assert not _rule(location="$.verb.id", any=[VERB]).check({}).is_valid

    def test_all_names_unlisted_values(self):
        validator = _rule(location="$.context.contextActivities.other[*].id", all=["x", "y"])
        statement = {"context": {"contextActivities": {"other": [{"id": "x"}, {"id": "z"}]}}}
        with pytest.raises(TemplateViolation) as exc_info:
            validator.validate(statement)
        error = exc_info.value.errors[0]
        assert error.code == ErrorCode.RULE_ALL_UNLISTED
        assert error.details["unlisted"] == ["z"]
        assert "'z'" in str(exc_info.value)

    def test_all_with_unmatchable_selector(self):
        validator = _rule(
            location="$.context.contextActivities.other[*]",
            selector="$.id",
            all=["x"],
        )
        statement = {"context": {"contextActivities": {"other": [{"id": "x"}, {"objectType": "Activity"}]}}}
        assert _codes(validator.check(statement)) == [ErrorCode.RULE_ALL_UNMATCHABLE]

    def test_none(self):
        validator = _rule(location="$.result.response", none=["forbidden"])
        assert validator.check({"result": {"response": "fine"}}).is_valid
        assert _codes(validator.check({"result": {"response": "forbidden"}})) == [
            ErrorCode.RULE_NONE_FORBIDDEN
        ]

    def test_booleans_are_not_numbers(self):
        """true/false w regule nie pasują do liczb 1/0 w wyrażeniu."""
        success = _rule(location="$.result.success", all=[True])
        assert success.check({"result": {"success": True}}).is_valid
        assert _codes(success.check({"result": {"success": 1}})) == [ErrorCode.RULE_ALL_UNLISTED]

        raw = _rule(location="$.result.score.raw", none=[False])
        assert raw.check({"result": {"score": {"raw": 0}}}).is_valid

        numbers = _rule(location="$.result.score.raw", any=[1, 2])
        assert not numbers.check({"result": {"score": {"raw": True}}}).is_valid
        assert numbers.check({"result": {"score": {"raw": 1.0}}}).is_valid

    def test_nested_values_compare_strictly(self):
        validator = _rule(location="$.result.extensions.flags", any=[[True, "a"]])
        assert validator.check({"result": {"extensions": {"flags": [True, "a"]}}}).is_valid
        assert not validator.check({"result": {"extensions": {"flags": [1, "a"]}}}).is_valid

    def test_pipe_location_concatenates(self):
        validator = _rule(location="$.result.response | $.context.platform", all=["a", "b"])
        ok = {"result": {"response": "a"}, "context": {"platform": "b"}}
        bad = {"result": {"response": "a"}, "context": {"platform": "c"}}
        assert validator.check(ok).is_valid
        assert validator.check(bad).errors[0].details["unlisted"] == ["c"]


class TestReport:

    def test_accumulates_in_stage_order(self):
        validator = _validator(
            verb=VERB,
            objectActivityType=COURSE,
            rules=[{"location": "$.result.success", "presence": "included"}],
        )
        report = validator.check({"verb": {"id": "http://other"}})
        assert _codes(report) == [
            ErrorCode.VERB_MISMATCH,
            ErrorCode.OBJECT_ACTIVITY_TYPE_MISMATCH,
            ErrorCode.RULE_INCLUDED_MISSING,
        ]

    def test_violation_carries_report(self):
        validator = _validator(verb=VERB, objectActivityType=COURSE)
        with pytest.raises(TemplateViolation) as exc_info:
            validator.validate({})
        violation = exc_info.value
        assert violation.template_id == "http://example.com/t"
        assert len(violation.report.errors) == 2
        assert "(+1 kolejnych)" in str(violation)

    def test_invalid_location_is_structural_error(self):
        with pytest.raises(StructuralError):
            _rule(location="$.result[", presence="included").check({})
