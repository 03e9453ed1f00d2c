"""Recruiter (a.k.a. user) models."""

from datetime import datetime

from pydantic import Field

from .base import RoleMatchBaseModel
from .candidate import Candidate, RecruiterRef
from .enums import RecruiterTier


class Recruiter(RoleMatchBaseModel):
    """Recruiter with the candidates they sourced for the role.

    The newer response shape only carries ``in_role``; the legacy shape
    carries the qualitative attributes (rating, tags, tier, last activity).
    """

    id: str = Field(..., description="Recruiter identifier")
    name: str = Field("", description="Full name")
    email: str = Field("", description="Email address")
    linkedin_url: str = Field("", description="LinkedIn profile URL")
    candidates: list[Candidate] = Field(default_factory=list, description="Sourced candidates")

    in_role: bool | None = Field(None, description="Currently working this role")
    tags: list[str] = Field(default_factory=list, description="Platform tags")
    internal_rating: float | None = Field(None, description="Internal rating")
    tier: RecruiterTier | None = Field(None, description="Recruiter tier")
    last_active: datetime | None = Field(None, description="Last activity")

    @property
    def candidate_count(self) -> int:
        return len(self.candidates)

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""

    def to_ref(self) -> RecruiterRef:
        return RecruiterRef(id=self.id, name=self.name, email=self.email)
