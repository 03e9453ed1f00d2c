"""rolematch data models for roles, candidates, and recruiters."""

from .base import RoleMatchBaseModel, utc_now
from .candidate import Candidate, RecruiterRef, match_percent
from .enums import InRoleFilter, RecruiterTier, ResponseShape, SortDirection, Tab
from .payloads import (
    Payload,
    RawCandidate,
    RawPerson,
    RawRole,
    RecruitersPayload,
    UsersPayload,
    parse_payload,
)
from .recruiter import Recruiter
from .role import RoleInfo
from .view_model import ViewModel

__all__ = [
    # Base
    "RoleMatchBaseModel",
    "utc_now",
    # Enums
    "ResponseShape",
    "RecruiterTier",
    "SortDirection",
    "InRoleFilter",
    "Tab",
    # Entities
    "RoleInfo",
    "Candidate",
    "RecruiterRef",
    "Recruiter",
    "ViewModel",
    "match_percent",
    # Ingestion
    "Payload",
    "RawRole",
    "RawCandidate",
    "RawPerson",
    "UsersPayload",
    "RecruitersPayload",
    "parse_payload",
]
