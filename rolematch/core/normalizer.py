"""View model normalization.

Reconciles the users-shaped and recruiters-shaped upstream payloads into one
``ViewModel``. Nothing past this module branches on the response shape.
"""

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from ..observability.logger import get_logger
from .errors import MalformedResponseError
from .models.base import utc_now
from .models.candidate import Candidate, RecruiterRef
from .models.enums import RecruiterTier, ResponseShape
from .models.payloads import Payload, RawCandidate, RawPerson, parse_payload
from .models.recruiter import Recruiter
from .models.role import RoleInfo
from .models.view_model import ViewModel

logger = get_logger(__name__)

_TIERS = {tier.value for tier in RecruiterTier}


def split_lines(value: str | None) -> list[str]:
    """Split a newline-delimited explanation into non-empty entries."""
    if not value:
        return []
    return [line.strip() for line in value.splitlines() if line.strip()]


def explanation_list(items: list[str] | None, text: str | None) -> list[str]:
    """Pre-split list wins over the delimited string, even when empty."""
    if items is not None:
        return [item.strip() for item in items if item and item.strip()]
    return split_lines(text)


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _clamp(similarity: float | None) -> float:
    """Similarity forced into [0, 1]; missing, NaN and infinite scores become 0."""
    if similarity is None or not math.isfinite(similarity):
        return 0.0
    return min(max(float(similarity), 0.0), 1.0)


def _person_id(person: RawPerson) -> str:
    return person.id or person.email or person.name or "unknown"


def _to_ref(person: RawPerson) -> RecruiterRef:
    return RecruiterRef(id=_person_id(person), name=person.name or "", email=person.email or "")


def normalize_candidate(raw: RawCandidate, now: datetime | None = None) -> Candidate:
    """Build a ``Candidate`` from a full upstream record or a stub."""
    owner = raw.user or raw.recruiter
    return Candidate(
        id=raw.id or raw.linkedin_url or raw.name or "unknown",
        name=raw.name or "",
        linkedin_url=raw.linkedin_url or "",
        application_url=raw.application_url or "",
        resume_url=raw.resume_url,
        similarity=_clamp(raw.similarity),
        reason=raw.reason,
        risk=raw.risk,
        reasons=explanation_list(raw.reasons, raw.reason),
        risks=explanation_list(raw.risks, raw.risk),
        created_at=_aware(raw.created_at) or now or utc_now(),
        recruiter=_to_ref(owner) if owner else None,
    )


def _tier(value: str | None) -> RecruiterTier | None:
    if value in _TIERS:
        return RecruiterTier(value)
    if value:
        logger.warning("unknown_recruiter_tier", tier=value)
    return None


class _CandidateIndex:
    """Lookup of full candidate records by id and by LinkedIn URL."""

    def __init__(self, candidates: list[Candidate]):
        self.candidates = candidates
        self.by_id = {c.id: c for c in candidates}
        self.by_linkedin = {c.linkedin_url: c for c in candidates if c.linkedin_url}

    def resolve(self, stub: RawCandidate, now: datetime) -> Candidate:
        """Full record for ``stub``, falling back to one built from the stub."""
        if stub.id and stub.id in self.by_id:
            return self.by_id[stub.id]
        if not stub.id and stub.linkedin_url and stub.linkedin_url in self.by_linkedin:
            return self.by_linkedin[stub.linkedin_url]

        fallback = normalize_candidate(stub, now)
        if fallback.id in self.by_id:
            return self.by_id[fallback.id]
        logger.warning("candidate_stub_unmatched", candidate_id=fallback.id)
        self.candidates.append(fallback)
        self.by_id[fallback.id] = fallback
        if fallback.linkedin_url:
            self.by_linkedin.setdefault(fallback.linkedin_url, fallback)
        return fallback


def _build_recruiter(person: RawPerson, index: _CandidateIndex, now: datetime) -> Recruiter:
    recruiter = Recruiter(
        id=_person_id(person),
        name=person.name or "",
        email=person.email or "",
        linkedin_url=person.linkedin_url or "",
        in_role=person.in_role,
        tags=[t for t in (person.tags or []) if t],
        internal_rating=person.internal_rating,
        tier=_tier(person.type),
        last_active=_aware(person.last_active),
    )

    members: list[Candidate] = []
    seen: set[str] = set()
    for stub in person.candidates or []:
        candidate = index.resolve(stub, now)
        if candidate.id in seen:
            continue
        seen.add(candidate.id)
        if candidate.recruiter is None:
            candidate.recruiter = recruiter.to_ref()
        members.append(candidate)
    recruiter.candidates = members
    return recruiter


def _attach_orphans(candidates: list[Candidate], recruiters: list[Recruiter]) -> None:
    """Append candidates to the known recruiter their back reference names."""
    by_id = {r.id: r for r in recruiters}
    for candidate in candidates:
        if candidate.recruiter is None:
            continue
        owner = by_id.get(candidate.recruiter.id)
        if owner and all(c.id != candidate.id for c in owner.candidates):
            owner.candidates = owner.candidates + [candidate]


def _build_view(payload: Payload, role_id: str | None, now: datetime) -> ViewModel:
    index = _CandidateIndex([normalize_candidate(c, now) for c in payload.candidates or []])

    people = payload.users if payload.shape == ResponseShape.USERS else payload.recruiters
    recruiters = [_build_recruiter(p, index, now) for p in people or []]
    _attach_orphans(index.candidates, recruiters)

    role = None
    role_raw = getattr(payload, "role", None)
    if role_raw is not None:
        role = RoleInfo(
            id=role_raw.id or role_id or "",
            name=role_raw.name or "",
            company=role_raw.company or "",
        )

    return ViewModel(
        role_id=role_id or (role.id if role else None),
        shape=payload.shape,
        role=role,
        candidates=index.candidates,
        recruiters=recruiters,
        fetched_at=now,
    )


def normalize(raw: Any, role_id: str | None = None, now: datetime | None = None) -> ViewModel:
    """Normalize a decoded upstream body into a ``ViewModel``.

    Args:
        raw: Decoded JSON body
        role_id: Role identifier the body was fetched for
        now: Timestamp for candidates without ``created_at`` (defaults to now)

    Returns:
        ViewModel in the single internal shape

    Raises:
        MalformedResponseError: If the body fits neither response shape or
            yields records that fail validation
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(raw).__name__}")

    now = now or utc_now()
    try:
        view = _build_view(parse_payload(raw), role_id, now)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected response body: {e.error_count()} invalid fields") from e

    logger.info(
        "view_model_normalized",
        role_id=view.role_id,
        shape=view.shape,
        candidates=len(view.candidates),
        recruiters=len(view.recruiters),
    )
    return view
