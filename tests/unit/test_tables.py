"""Filtering and sorting of the candidate and recruiter tables."""

from datetime import date, datetime, timezone

from rolematch.core.models.candidate import Candidate
from rolematch.core.models.enums import InRoleFilter, SortDirection
from rolematch.core.models.recruiter import Recruiter
from rolematch.dashboard.tables import (
    CandidateQuery,
    RecruiterQuery,
    SortState,
    candidate_rows,
    candidates_by_match,
    filter_candidates,
    filter_recruiters,
    recruiter_rows,
    sort_candidates,
    sort_recruiters,
)


def _candidate(cid, similarity, name="", reasons=(), risks=(), created=None):
    return Candidate(
        id=cid,
        name=name or f"Candidate {cid}",
        similarity=similarity,
        reasons=list(reasons),
        risks=list(risks),
        created_at=created or datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


def _recruiter(rid, name, count=0, email="", tags=(), in_role=None, rating=None):
    return Recruiter(
        id=rid,
        name=name,
        email=email,
        tags=list(tags),
        in_role=in_role,
        internal_rating=rating,
        candidates=[_candidate(f"{rid}-{i}", 0.5) for i in range(count)],
    )


def test_default_sort_is_similarity_descending():
    candidates = [_candidate("a", 0.2), _candidate("b", 0.9), _candidate("c", 0.5)]
    rows = candidate_rows(candidates)
    assert [c.similarity for c in rows] == [0.9, 0.5, 0.2]


def test_toggle_cycle():
    state = SortState(key="similarity")
    assert state.direction == SortDirection.DESCENDING

    first = state.toggled("similarity")
    assert first.direction == SortDirection.ASCENDING

    second = first.toggled("similarity")
    assert second.direction == SortDirection.DESCENDING

    # A different column always starts ascending
    assert first.toggled("name") == SortState(key="name", direction=SortDirection.ASCENDING)


def test_double_toggle_restores_order():
    candidates = [_candidate("a", 0.2), _candidate("b", 0.9), _candidate("c", 0.5)]
    query = CandidateQuery()
    before = [c.id for c in candidate_rows(candidates, query)]

    query.sort = query.sort.toggled("similarity")
    assert [c.id for c in candidate_rows(candidates, query)] == ["a", "c", "b"]

    query.sort = query.sort.toggled("similarity")
    assert [c.id for c in candidate_rows(candidates, query)] == before


def test_sort_by_trait_count_and_name():
    candidates = [
        _candidate("a", 0.1, name="bob", reasons=["x"]),
        _candidate("b", 0.1, name="Alice", reasons=["x", "y", "z"]),
        _candidate("c", 0.1, name="carol"),
    ]
    by_traits = sort_candidates(candidates, SortState(key="traits"))
    assert [c.id for c in by_traits] == ["b", "a", "c"]

    by_name = sort_candidates(candidates, SortState(key="name", direction=SortDirection.ASCENDING))
    assert [c.name for c in by_name] == ["Alice", "bob", "carol"]


def test_search_matches_name_reasons_and_risks():
    candidates = [
        _candidate("a", 0.5, name="Ada Lovelace"),
        _candidate("b", 0.5, reasons=["Compiler work"]),
        _candidate("c", 0.5, risks=["Limited COMPILER exposure"]),
        _candidate("d", 0.5),
    ]
    assert [c.id for c in filter_candidates(candidates, search="compiler")] == ["b", "c"]
    assert [c.id for c in filter_candidates(candidates, search="ADA")] == ["a"]
    assert filter_candidates(candidates, search="") == candidates


def test_since_keeps_candidates_from_that_day_on():
    early = _candidate("a", 0.5, created=datetime(2025, 2, 28, 23, 59, tzinfo=timezone.utc))
    same_day = _candidate("b", 0.5, created=datetime(2025, 3, 1, 0, 0, tzinfo=timezone.utc))
    later = _candidate("c", 0.5, created=datetime(2025, 3, 5, tzinfo=timezone.utc))

    kept = filter_candidates([early, same_day, later], since=date(2025, 3, 1))
    assert [c.id for c in kept] == ["b", "c"]


def test_rows_filter_then_sort():
    candidates = [
        _candidate("a", 0.3, name="Sam Low"),
        _candidate("b", 0.8, name="Sam High"),
        _candidate("c", 0.9, name="Other"),
    ]
    rows = candidate_rows(candidates, CandidateQuery(search="sam"))
    assert [c.id for c in rows] == ["b", "a"]


def test_recruiter_filters():
    recruiters = [
        _recruiter("1", "Jane Smith", email="jane@example.com", tags=["tech_specialist"], in_role=True),
        _recruiter("2", "Robert Brown", email="rob@example.com", tags=["finance"], in_role=False),
        _recruiter("3", "Sarah Wilson", email="sarah@corp.com"),
    ]

    assert [r.id for r in filter_recruiters(recruiters, search="TECH")] == ["1"]
    assert [r.id for r in filter_recruiters(recruiters, search="corp.com")] == ["3"]
    assert [r.id for r in filter_recruiters(recruiters, in_role=InRoleFilter.IN_ROLE)] == ["1"]
    # Unknown in-role counts as out of role
    assert [r.id for r in filter_recruiters(recruiters, in_role=InRoleFilter.OUT_OF_ROLE)] == ["2", "3"]


def test_recruiter_sorts():
    recruiters = [
        _recruiter("1", "Jane", count=2, rating=4.5),
        _recruiter("2", "Robert", count=3, rating=None),
        _recruiter("3", "Sarah", count=0, rating=3.8),
    ]

    assert [r.id for r in recruiter_rows(recruiters)] == ["2", "1", "3"]

    by_rating = sort_recruiters(recruiters, SortState(key="internal_rating"))
    assert [r.id for r in by_rating] == ["1", "3", "2"]

    ascending = RecruiterQuery(sort=SortState(key="candidate_count", direction=SortDirection.ASCENDING))
    assert [r.id for r in recruiter_rows(recruiters, ascending)] == ["3", "1", "2"]


def test_candidates_by_match():
    recruiter = Recruiter(
        id="r",
        name="R",
        candidates=[_candidate("a", 0.4), _candidate("b", 0.95), _candidate("c", 0.7)],
    )
    assert [c.id for c in candidates_by_match(recruiter)] == ["b", "c", "a"]
