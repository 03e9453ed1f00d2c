"""Candidate models for matched candidates (Pydantic only)."""

import math
from datetime import datetime

from pydantic import Field

from .base import RoleMatchBaseModel, utc_now


def match_percent(similarity: float) -> int:
    """Similarity in [0, 1] as a whole percentage, halves rounded up."""
    return int(math.floor(similarity * 100 + 0.5))


class RecruiterRef(RoleMatchBaseModel):
    """Back reference from a candidate to the recruiter who sourced them."""

    id: str = Field(..., description="Recruiter identifier")
    name: str = Field("", description="Recruiter name")
    email: str = Field("", description="Recruiter email")


class Candidate(RoleMatchBaseModel):
    """Candidate matched to a role, with normalized strengths and risks."""

    id: str = Field(..., description="Candidate identifier")
    name: str = Field("", description="Display name")
    linkedin_url: str = Field("", description="LinkedIn profile URL")
    application_url: str = Field("", description="Application URL")
    resume_url: str | None = Field(None, description="Resume URL (legacy shape only)")

    similarity: float = Field(0.0, ge=0.0, le=1.0, description="Upstream match score")

    # Raw explanation strings as delivered; the lists below are authoritative
    reason: str | None = Field(None, description="Newline-delimited strengths")
    risk: str | None = Field(None, description="Newline-delimited risks")
    reasons: list[str] = Field(default_factory=list, description="Strengths")
    risks: list[str] = Field(default_factory=list, description="Risks")

    created_at: datetime = Field(default_factory=utc_now, description="Creation time")
    recruiter: RecruiterRef | None = Field(None, description="Sourcing recruiter")

    @property
    def match_percentage(self) -> int:
        return match_percent(self.similarity)
