"""Normalization of both upstream response shapes into the view model."""

from datetime import datetime, timezone

import pytest

from rolematch.core.errors import MalformedResponseError
from rolematch.core.models.enums import RecruiterTier, ResponseShape
from rolematch.core.normalizer import normalize, split_lines
from rolematch.integrations.mock_data import build_mock_response

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _users_payload():
    return {
        "role": {"id": "role1", "name": "Founding Engineer", "company": "Acme"},
        "candidates": [
            {
                "id": "c1",
                "name": "Ada Lovelace",
                "linkedin_url": "https://linkedin.com/in/ada",
                "application_url": "https://paraform.com/a/c1",
                "reason": "Strong systems background\n\nShipped compilers",
                "risk": "Limited budget\nNo exp",
                "similarity": 0.91,
                "user": {"id": "u1", "name": "Grace Hopper", "email": "grace@example.com"},
            },
            {
                "id": "c2",
                "name": "Alan Turing",
                "linkedin_url": "https://linkedin.com/in/alan",
                "application_url": "https://paraform.com/a/c2",
                "reason": "Theory",
                "risk": "",
                "similarity": 0.4,
                "created_at": "2025-01-15T08:00:00Z",
            },
        ],
        "users": [
            {
                "id": "u1",
                "name": "Grace Hopper",
                "email": "grace@example.com",
                "in_role": True,
                "candidates": [{"id": "c1"}, {"id": "c2"}],
            },
            {
                "id": "u2",
                "name": "Linus Torvalds",
                "email": "linus@example.com",
                "in_role": False,
                "candidates": [{"id": "c9", "name": "Ghost", "linkedin_url": "https://linkedin.com/in/ghost"}],
            },
        ],
    }


def test_split_lines_discards_blank_entries():
    assert split_lines("Limited budget\nNo exp") == ["Limited budget", "No exp"]
    assert split_lines(" a \r\n\n  \nb") == ["a", "b"]
    assert split_lines(None) == []


def test_users_shape():
    view = normalize(_users_payload(), role_id="role1", now=NOW)

    assert view.shape == ResponseShape.USERS
    assert view.role.name == "Founding Engineer"
    assert view.role.label == "Founding Engineer at Acme"

    ada = view.get_candidate("c1")
    assert ada.reasons == ["Strong systems background", "Shipped compilers"]
    assert ada.risks == ["Limited budget", "No exp"]
    assert ada.recruiter.id == "u1"
    assert ada.created_at == NOW

    alan = view.get_candidate("c2")
    assert alan.risks == []
    assert alan.created_at == datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)
    # Back reference filled in from the user listing the candidate
    assert alan.recruiter.email == "grace@example.com"


def test_recruiter_candidates_are_full_records():
    view = normalize(_users_payload(), now=NOW)
    grace = view.get_recruiter("u1")

    assert [c.id for c in grace.candidates] == ["c1", "c2"]
    assert grace.candidates[0].similarity == pytest.approx(0.91)
    assert grace.in_role is True
    assert view.recruiter_for(view.get_candidate("c2")).id == "u1"


def test_unmatched_stub_falls_back_and_joins_candidate_set():
    view = normalize(_users_payload(), now=NOW)
    linus = view.get_recruiter("u2")

    ghost = linus.candidates[0]
    assert ghost.id == "c9"
    assert ghost.name == "Ghost"
    assert ghost.similarity == 0.0
    assert ghost.recruiter.id == "u2"

    candidate_ids = {c.id for c in view.candidates}
    for recruiter in view.recruiters:
        assert {c.id for c in recruiter.candidates} <= candidate_ids


def test_presplit_list_is_kept():
    raw = {"candidates": [{"id": "1", "name": "A", "risks": ["a", "b"]}], "users": []}
    first = normalize(raw, now=NOW)
    assert first.candidates[0].risks == ["a", "b"]

    # Feeding the normalized record back in changes nothing
    again = normalize(
        {"candidates": [first.candidates[0].model_dump(mode="json")], "users": []},
        now=NOW,
    )
    assert again.candidates[0].risks == ["a", "b"]
    assert again.candidates[0].reasons == first.candidates[0].reasons


def test_presplit_list_wins_over_string():
    raw = {"candidates": [{"id": "1", "reasons": [], "reason": "ignored\nstring"}]}
    view = normalize(raw, now=NOW)
    assert view.candidates[0].reasons == []


def test_recruiters_shape_links_stubs_by_linkedin_url():
    view = normalize(build_mock_response(NOW), now=NOW)

    assert view.shape == ResponseShape.RECRUITERS
    assert view.role is None
    assert len(view.candidates) == 5

    jane = view.get_recruiter("1")
    assert [c.id for c in jane.candidates] == ["1", "2"]
    assert jane.tier == RecruiterTier.PREFERRED
    assert jane.internal_rating == 4.5
    assert jane.last_active < NOW

    robert = view.get_recruiter("2")
    assert robert.tier == RecruiterTier.SUPER_PREFERRED
    assert view.get_recruiter("4").candidates == []

    emily = view.get_candidate("3")
    assert emily.recruiter.name == "Robert Brown"
    assert view.recruiter_for(emily) is robert


def test_candidate_listed_only_by_back_reference_is_attached():
    raw = {
        "candidates": [
            {"id": "7", "name": "Late", "similarity": 0.5, "recruiter": {"id": "r1", "name": "Rae"}},
        ],
        "recruiters": [{"id": "r1", "name": "Rae", "email": "rae@example.com", "candidates": []}],
    }
    view = normalize(raw, now=NOW)
    assert [c.id for c in view.get_recruiter("r1").candidates] == ["7"]


def test_numeric_ids_and_out_of_range_similarity():
    raw = {"candidates": [{"id": 42, "name": "N", "similarity": 1.7}], "users": []}
    view = normalize(raw, now=NOW)
    assert view.candidates[0].id == "42"
    assert view.candidates[0].similarity == 1.0


def test_null_lists_are_empty():
    view = normalize({"role": None, "candidates": None, "users": None}, now=NOW)
    assert view.candidates == []
    assert view.recruiters == []


@pytest.mark.parametrize("raw", [[], "oops", None, {"candidates": "nope"}])
def test_malformed_bodies(raw):
    with pytest.raises(MalformedResponseError):
        normalize(raw)


@pytest.mark.parametrize("score", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_similarity_becomes_zero(score):
    view = normalize({"candidates": [{"id": "c1", "similarity": score}], "users": []}, now=NOW)
    assert view.candidates[0].similarity == 0.0


def test_unparseable_timestamps_do_not_reject_other_rows():
    raw = {
        "candidates": [
            {"id": "good", "name": "Good", "created_at": "2025-01-15T08:00:00Z"},
            {"id": "bad", "name": "Bad", "created_at": "March 3rd"},
        ],
        "recruiters": [
            {"id": "r1", "name": "Rae", "last_active": "yesterday-ish", "candidates": [{"id": "good"}]},
        ],
    }
    view = normalize(raw, now=NOW)

    assert [c.id for c in view.candidates] == ["good", "bad"]
    assert view.get_candidate("good").created_at == datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)
    assert view.get_candidate("bad").created_at == NOW
    assert view.get_recruiter("r1").last_active is None
