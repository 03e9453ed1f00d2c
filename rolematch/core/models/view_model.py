"""Normalized dashboard view model."""

from datetime import datetime

from pydantic import Field

from .base import RoleMatchBaseModel, utc_now
from .candidate import Candidate
from .enums import ResponseShape
from .recruiter import Recruiter
from .role import RoleInfo


class ViewModel(RoleMatchBaseModel):
    """Everything one fetch produced, in a single internal shape."""

    role_id: str | None = Field(None, description="Role identifier that was fetched")
    shape: ResponseShape = Field(..., description="Upstream shape it was built from")
    role: RoleInfo | None = Field(None, description="Role details (newer shape only)")
    candidates: list[Candidate] = Field(default_factory=list)
    recruiters: list[Recruiter] = Field(default_factory=list)
    fetched_at: datetime = Field(default_factory=utc_now)

    def get_candidate(self, candidate_id: str) -> Candidate | None:
        for candidate in self.candidates:
            if candidate.id == candidate_id:
                return candidate
        return None

    def get_recruiter(self, recruiter_id: str) -> Recruiter | None:
        for recruiter in self.recruiters:
            if recruiter.id == recruiter_id:
                return recruiter
        return None

    def recruiter_for(self, candidate: Candidate) -> Recruiter | None:
        """Recruiter record owning ``candidate``, if any."""
        if candidate.recruiter:
            found = self.get_recruiter(candidate.recruiter.id)
            if found:
                return found
        for recruiter in self.recruiters:
            if any(c.id == candidate.id for c in recruiter.candidates):
                return recruiter
        return None
