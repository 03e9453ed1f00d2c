"""Ingestion schemas for the two upstream response shapes.

The upstream API has returned two layouts over time:

- ``{"role": ..., "candidates": [...], "users": [...]}`` (candidate-centric)
- ``{"candidates": [...], "recruiters": [...]}`` (recruiter-centric, legacy)

Both are parsed loosely here and handed to the normalizer, which is the only
place that knows about the difference.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

from ...observability.logger import get_logger
from .enums import ResponseShape

logger = get_logger(__name__)


def _lenient_datetime(value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> datetime | None:
    """Unparseable timestamps become ``None`` instead of rejecting the record."""
    try:
        return handler(value)
    except ValidationError:
        logger.warning(f"invalid_{info.field_name}", value=str(value))
        return None


LenientDatetime = Annotated[datetime | None, WrapValidator(_lenient_datetime)]


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class RawRole(_RawModel):
    id: str | None = None
    name: str | None = None
    company: str | None = None


class RawCandidate(_RawModel):
    """Full candidate record or an embedded stub (name + LinkedIn URL)."""

    id: str | None = None
    name: str | None = None
    linkedin_url: str | None = None
    application_url: str | None = None
    resume_url: str | None = None
    similarity: float | None = None
    reason: str | None = None
    risk: str | None = None
    reasons: list[str] | None = None
    risks: list[str] | None = None
    created_at: LenientDatetime = None
    user: "RawPerson | None" = None
    recruiter: "RawPerson | None" = None


class RawPerson(_RawModel):
    """A ``user`` (newer shape) or ``recruiter`` (legacy shape)."""

    id: str | None = None
    name: str | None = None
    email: str | None = None
    linkedin_url: str | None = None
    candidates: list[RawCandidate] | None = None
    in_role: bool | None = None
    tags: list[str] | None = None
    internal_rating: float | None = None
    type: str | None = None
    last_active: LenientDatetime = None


RawCandidate.model_rebuild()


class UsersPayload(_RawModel):
    shape: ClassVar[ResponseShape] = ResponseShape.USERS
    role: RawRole | None = None
    candidates: list[RawCandidate] | None = None
    users: list[RawPerson] | None = None


class RecruitersPayload(_RawModel):
    shape: ClassVar[ResponseShape] = ResponseShape.RECRUITERS
    candidates: list[RawCandidate] | None = None
    recruiters: list[RawPerson] | None = None


Payload = Union[UsersPayload, RecruitersPayload]


def parse_payload(raw: dict[str, Any]) -> Payload:
    """Pick the payload schema by which list key the body carries.

    Raises:
        pydantic.ValidationError: If the body does not fit the chosen schema
    """
    if "recruiters" in raw and "users" not in raw:
        return RecruitersPayload.model_validate(raw)
    return UsersPayload.model_validate(raw)
