"""Wspólne fikstury testów: przykładowy profil xAPI i jego rejestracja."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from registry import ProfileRegistration

PROFILE_ID      = "http://example.com/profile"
PROFILE_VERSION = "http://example.com/profile/v1"

VERB_ATTEMPTED = "http://adlnet.gov/expapi/verbs/attempted"
VERB_COMPLETED = "http://adlnet.gov/expapi/verbs/completed"
TYPE_COURSE    = "http://adlnet.gov/expapi/activities/course"
ACTIVITY_INTRO = "http://example.com/activities/intro"
EXT_SESSION    = "http://example.com/extensions/session"
EXT_DETAIL     = "http://example.com/extensions/score-detail"
EXT_LEVEL      = "http://example.com/extensions/level"
USAGE_CERT     = "http://example.com/usage/certificate"

T_ATTEMPTED = "http://example.com/templates/attempted"
T_COMPLETED = "http://example.com/templates/completed"
P_MAIN        = "http://example.com/patterns/main"
P_COMPLETIONS = "http://example.com/patterns/completions"

SAMPLE_PROFILE = {
    "id": PROFILE_ID,
    "type": "Profile",
    "prefLabel": {"en": "Example Profile"},
    "versions": [{"id": PROFILE_VERSION, "generatedAtTime": "2026-01-01T00:00:00Z"}],
    "concepts": [
        {"id": VERB_ATTEMPTED, "type": "Verb", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "attempted"}},
        {"id": VERB_COMPLETED, "type": "Verb", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "completed"}},
        {"id": TYPE_COURSE, "type": "ActivityType", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "course"}},
        {"id": ACTIVITY_INTRO, "type": "Activity", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "Intro Course"},
         "activityDefinition": {
             "@context": "https://w3id.org/xapi/profiles/activity-context",
             "type": TYPE_COURSE,
             "name": {"en": "Intro"},
         }},
        {"id": EXT_SESSION, "type": "ContextExtension", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "session"}},
        {"id": EXT_DETAIL, "type": "ResultExtension", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "score detail"}},
        {"id": EXT_LEVEL, "type": "ActivityExtension", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "level"}},
        {"id": USAGE_CERT, "type": "AttachmentUsageType", "inScheme": PROFILE_VERSION,
         "prefLabel": {"en": "certificate"}},
    ],
    "templates": [
        {
            "id": T_ATTEMPTED,
            "type": "StatementTemplate",
            "inScheme": PROFILE_VERSION,
            "prefLabel": {"en": "Attempted"},
            "verb": "attempted",
            "objectActivityType": "course",
        },
        {
            "id": T_COMPLETED,
            "type": "StatementTemplate",
            "inScheme": PROFILE_VERSION,
            "prefLabel": {"en": "Completed"},
            "verb": VERB_COMPLETED,
            "objectActivityType": TYPE_COURSE,
            "rules": [
                {"location": "$.result.success", "presence": "included"},
                {"location": "$.result.completion", "presence": "included", "all": [True]},
            ],
        },
    ],
    "patterns": [
        {
            "id": P_MAIN,
            "type": "Pattern",
            "inScheme": PROFILE_VERSION,
            "prefLabel": {"en": "Main"},
            "primary": True,
            "sequence": [T_ATTEMPTED, P_COMPLETIONS],
        },
        {
            "id": P_COMPLETIONS,
            "type": "Pattern",
            "inScheme": PROFILE_VERSION,
            "prefLabel": {"en": "Completions"},
            "oneOrMore": {"id": T_COMPLETED},
        },
    ],
}


@pytest.fixture
def sample_profile() -> dict:
    """Świeża (głęboka) kopia przykładowego profilu."""
    return copy.deepcopy(SAMPLE_PROFILE)


@pytest.fixture
def registration(sample_profile: dict) -> ProfileRegistration:
    """Rejestracja z zarejestrowanym przykładowym profilem."""
    return ProfileRegistration.builder().with_profile(sample_profile)


@pytest.fixture
def profile_file(tmp_path: Path, sample_profile: dict) -> Path:
    """Przykładowy profil zapisany do pliku JSON."""
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(sample_profile), encoding="utf-8")
    return path
