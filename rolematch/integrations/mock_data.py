"""Sample upstream payload used in test mode.

Recruiter-centric (legacy) shape; recruiters list their candidates as
name + LinkedIn URL stubs and every candidate embeds its recruiter.
"""

from datetime import datetime, timedelta
from typing import Any

from ..core.models.base import utc_now

_RECRUITERS: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "Jane Smith",
        "candidates": [
            {"name": "John Doe", "linkedin_url": "https://linkedin.com/in/johndoe"},
            {"name": "Alice Johnson", "linkedin_url": "https://linkedin.com/in/alicejohnson"},
        ],
        "in_role": True,
        "tags": ["activation_tag", "tech_specialist"],
        "internal_rating": 4.5,
        "linkedin_url": "https://linkedin.com/in/janesmith",
        "email": "jane.smith@example.com",
        "type": "preferred",
        "last_active_days": 2,
    },
    {
        "id": "2",
        "name": "Robert Brown",
        "candidates": [
            {"name": "Emily Davis", "linkedin_url": "https://linkedin.com/in/emilydavis"},
        ],
        "in_role": True,
        "tags": ["activation_tag", "finance_specialist"],
        "internal_rating": 4.2,
        "linkedin_url": "https://linkedin.com/in/robertbrown",
        "email": "robert.brown@example.com",
        "type": "super preferred",
        "last_active_days": 1,
    },
    {
        "id": "3",
        "name": "Sarah Wilson",
        "candidates": [
            {"name": "Michael Wilson", "linkedin_url": "https://linkedin.com/in/michaelwilson"},
            {"name": "David Lee", "linkedin_url": "https://linkedin.com/in/davidlee"},
        ],
        "in_role": False,
        "tags": ["marketing_specialist"],
        "internal_rating": 3.8,
        "linkedin_url": "https://linkedin.com/in/sarahwilson",
        "email": "sarah.wilson@example.com",
        "type": "regular",
        "last_active_days": 15,
    },
    {
        "id": "4",
        "name": "Thomas Johnson",
        "candidates": [],
        "in_role": False,
        "tags": ["sales_specialist"],
        "internal_rating": 3.5,
        "linkedin_url": "https://linkedin.com/in/thomasjohnson",
        "email": "thomas.johnson@example.com",
        "type": "limit",
        "last_active_days": 30,
    },
]

# (id, name, slug, age in days, reasons, risks, similarity, recruiter id)
_CANDIDATES = [
    ("1", "John Doe", "johndoe", 5,
     ["Strong technical background", "Experience with React", "Team leadership"],
     ["Limited enterprise experience"], 0.85, "1"),
    ("2", "Alice Johnson", "alicejohnson", 3,
     ["Product management expertise", "Startup experience", "MBA from top school"],
     ["No experience in our industry"], 0.78, "1"),
    ("3", "Emily Davis", "emilydavis", 7,
     ["Financial analysis skills", "CPA certification", "Big 4 experience"],
     ["No tech company experience"], 0.92, "2"),
    ("4", "Michael Wilson", "michaelwilson", 10,
     ["Marketing strategy", "Growth hacking", "B2B experience"],
     ["Job hopping history"], 0.75, "3"),
    ("5", "David Lee", "davidlee", 12,
     ["Sales leadership", "Exceeded quotas", "Enterprise relationships"],
     ["Salary expectations high"], 0.82, "3"),
]


def _iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def build_mock_response(now: datetime | None = None) -> dict[str, Any]:
    """Fresh copy of the sample payload with dates relative to ``now``."""
    now = now or utc_now()

    recruiters = []
    for entry in _RECRUITERS:
        record = {k: v for k, v in entry.items() if k != "last_active_days"}
        record["candidates"] = [dict(stub) for stub in entry["candidates"]]
        record["tags"] = list(entry["tags"])
        record["last_active"] = _iso(now - timedelta(days=entry["last_active_days"]))
        recruiters.append(record)
    by_id = {r["id"]: r for r in recruiters}

    candidates = []
    for cid, name, slug, age, reasons, risks, similarity, recruiter_id in _CANDIDATES:
        owner = {k: v for k, v in by_id[recruiter_id].items() if k != "candidates"}
        owner["candidates"] = []
        candidates.append(
            {
                "id": cid,
                "name": name,
                "resume_url": f"https://example.com/resumes/{slug}.pdf",
                "linkedin_url": f"https://linkedin.com/in/{slug}",
                "application_url": f"https://jobs.example.com/applications/{cid}",
                "created_at": _iso(now - timedelta(days=age)),
                "reasons": list(reasons),
                "risks": list(risks),
                "similarity": similarity,
                "recruiter": owner,
            }
        )

    return {"recruiters": recruiters, "candidates": candidates}
