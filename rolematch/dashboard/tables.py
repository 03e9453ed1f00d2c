"""Filtering and sorting for the candidate and recruiter tables."""

from datetime import date, datetime, time, timezone
from typing import Any, Callable

from pydantic import Field

from ..core.models.base import RoleMatchBaseModel
from ..core.models.candidate import Candidate
from ..core.models.enums import InRoleFilter, SortDirection
from ..core.models.recruiter import Recruiter

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SortState(RoleMatchBaseModel):
    """Active sort column and direction."""

    key: str = Field(..., description="Column key")
    direction: SortDirection = Field(SortDirection.DESCENDING)

    def toggled(self, key: str) -> "SortState":
        """Clicking the ascending column flips it; any other click sorts ascending."""
        if key == self.key and self.direction == SortDirection.ASCENDING:
            return SortState(key=key, direction=SortDirection.DESCENDING)
        return SortState(key=key, direction=SortDirection.ASCENDING)


class CandidateQuery(RoleMatchBaseModel):
    search: str = ""
    since: date | None = None
    sort: SortState = Field(default_factory=lambda: SortState(key="similarity"))


class RecruiterQuery(RoleMatchBaseModel):
    search: str = ""
    in_role: InRoleFilter = InRoleFilter.ALL
    sort: SortState = Field(default_factory=lambda: SortState(key="candidate_count"))


CANDIDATE_SORT_KEYS: dict[str, Callable[[Candidate], Any]] = {
    "similarity": lambda c: c.similarity,
    "traits": lambda c: len(c.reasons),
    "created_at": lambda c: c.created_at,
}

RECRUITER_SORT_KEYS: dict[str, Callable[[Recruiter], Any]] = {
    "candidate_count": lambda r: r.candidate_count,
    "internal_rating": lambda r: r.internal_rating if r.internal_rating is not None else float("-inf"),
    "last_active": lambda r: r.last_active or _EPOCH,
}


def _text_key(field: str) -> Callable[[Any], str]:
    def key(item: Any) -> str:
        value = getattr(item, field, None)
        return "" if value is None else str(value).lower()

    return key


def _sorted(items: list, sort: SortState, numeric: dict[str, Callable[[Any], Any]]) -> list:
    key = numeric.get(sort.key) or _text_key(sort.key)
    return sorted(items, key=key, reverse=sort.direction == SortDirection.DESCENDING)


def filter_candidates(candidates: list[Candidate], search: str = "", since: date | None = None) -> list[Candidate]:
    """Candidates matching a search term and created on or after a date.

    Args:
        candidates: Candidates to filter
        search: Case-insensitive substring of the name, a strength or a risk
        since: Earliest creation day (UTC), inclusive

    Returns:
        Matching candidates in their original order
    """
    result = list(candidates)

    if search:
        term = search.lower()
        result = [
            c for c in result
            if term in c.name.lower()
            or any(term in r.lower() for r in c.reasons)
            or any(term in r.lower() for r in c.risks)
        ]

    if since:
        cutoff = datetime.combine(since, time.min, tzinfo=timezone.utc)
        result = [c for c in result if c.created_at >= cutoff]

    return result


def sort_candidates(candidates: list[Candidate], sort: SortState) -> list[Candidate]:
    """Sort candidates by similarity, trait count, creation time or a text column.

    Args:
        candidates: Candidates to sort
        sort: Column key and direction

    Returns:
        New sorted list
    """
    return _sorted(candidates, sort, CANDIDATE_SORT_KEYS)


def candidate_rows(candidates: list[Candidate], query: CandidateQuery | None = None) -> list[Candidate]:
    """Visible candidate rows for a query (filter, then sort)."""
    query = query or CandidateQuery()
    return sort_candidates(filter_candidates(candidates, query.search, query.since), query.sort)


def filter_recruiters(
    recruiters: list[Recruiter],
    search: str = "",
    in_role: InRoleFilter = InRoleFilter.ALL,
) -> list[Recruiter]:
    """Recruiters matching a search term and the in-role filter.

    Args:
        recruiters: Recruiters to filter
        search: Case-insensitive substring of the name, email or a tag
        in_role: Keep everyone, only in-role, or only out-of-role (unknown counts as out)

    Returns:
        Matching recruiters in their original order
    """
    result = list(recruiters)

    if search:
        term = search.lower()
        result = [
            r for r in result
            if term in r.name.lower()
            or term in r.email.lower()
            or any(term in t.lower() for t in r.tags)
        ]

    if in_role == InRoleFilter.IN_ROLE:
        result = [r for r in result if r.in_role]
    elif in_role == InRoleFilter.OUT_OF_ROLE:
        result = [r for r in result if not r.in_role]

    return result


def sort_recruiters(recruiters: list[Recruiter], sort: SortState) -> list[Recruiter]:
    """Sort recruiters by candidate count, rating, last activity or a text column.

    Missing ratings and activity dates sort as the lowest value.

    Args:
        recruiters: Recruiters to sort
        sort: Column key and direction

    Returns:
        New sorted list
    """
    return _sorted(recruiters, sort, RECRUITER_SORT_KEYS)


def recruiter_rows(recruiters: list[Recruiter], query: RecruiterQuery | None = None) -> list[Recruiter]:
    """Visible recruiter rows for a query (filter, then sort)."""
    query = query or RecruiterQuery()
    return sort_recruiters(filter_recruiters(recruiters, query.search, query.in_role), query.sort)


def candidates_by_match(recruiter: Recruiter) -> list[Candidate]:
    """A recruiter's candidates, best match first."""
    return sorted(recruiter.candidates, key=lambda c: c.similarity, reverse=True)
