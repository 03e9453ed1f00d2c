"""Presentation layer: session state, tables, selection, export."""

from .export import (
    candidates_to_csv,
    grouped_emails,
    recruiter_candidates_to_csv,
    recruiter_csv_filename,
    recruiter_email,
)
from .selection import Selection
from .session import DashboardSession
from .tables import CandidateQuery, RecruiterQuery, SortState, candidate_rows, recruiter_rows

__all__ = [
    "DashboardSession",
    "Selection",
    "SortState",
    "CandidateQuery",
    "RecruiterQuery",
    "candidate_rows",
    "recruiter_rows",
    "candidates_to_csv",
    "recruiter_candidates_to_csv",
    "recruiter_csv_filename",
    "recruiter_email",
    "grouped_emails",
]
