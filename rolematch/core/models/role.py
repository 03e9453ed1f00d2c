"""Role information attached to the newer upstream response shape."""

from pydantic import Field

from .base import RoleMatchBaseModel


class RoleInfo(RoleMatchBaseModel):
    """Job opening the candidates were matched against."""

    id: str = Field(..., description="Role identifier")
    name: str = Field("", description="Role title")
    company: str = Field("", description="Hiring company")

    @property
    def label(self) -> str:
        if self.name and self.company:
            return f"{self.name} at {self.company}"
        return self.name or self.company or self.id
