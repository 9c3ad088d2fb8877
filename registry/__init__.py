"""
registry — rejestr profili xAPI.

Publiczne API:
  ProfileIndex         indeks jednego profilu + kompilacja wzorców
  ProfileRegistration  niemutowalny rejestr: pattern(), template(), validator_for()
  check_profile_schema kontrola kształtu dokumentu profilu (jsonschema)
"""

from .profile_index import ProfileIndex, check_profile_schema
from .registration import PROFILE_ACTIVITY_TYPE, ProfileRegistration

__all__ = [
    "ProfileIndex",
    "check_profile_schema",
    "PROFILE_ACTIVITY_TYPE",
    "ProfileRegistration",
]
