"""CSV export and email templates for selected candidates."""

import csv
import io
import re

from ..core.errors import EmptySelectionError
from ..core.models.candidate import Candidate, RecruiterRef, match_percent
from ..core.models.recruiter import Recruiter
from ..core.models.role import RoleInfo

GROUPED_CSV_HEADER = [
    "Recruiter Name",
    "Recruiter Email",
    "Candidate Name",
    "Candidate LinkedIn URL",
    "Match Percentage",
]
RECRUITER_CSV_HEADER = ["Name", "LinkedIn URL", "Application URL", "Match Percentage"]
GROUPED_CSV_FILENAME = "candidates_by_recruiter.csv"
EMAIL_SEPARATOR = "\n\n---\n\n"
UNKNOWN = "Unknown"

_MD_TEXT_ESCAPES = str.maketrans({"\\": "\\\\", "[": "\\[", "]": "\\]"})
_MD_URL_ESCAPES = str.maketrans({"(": "%28", ")": "%29", " ": "%20"})


def percentage_label(similarity: float) -> str:
    return f"{match_percent(similarity)}%"


def group_by_recruiter(candidates: list[Candidate]) -> list[tuple[RecruiterRef | None, list[Candidate]]]:
    """Group candidates by recruiter id, keeping first-seen order."""
    groups: dict[str, tuple[RecruiterRef | None, list[Candidate]]] = {}
    for candidate in candidates:
        key = candidate.recruiter.id if candidate.recruiter else UNKNOWN.lower()
        if key not in groups:
            groups[key] = (candidate.recruiter, [])
        groups[key][1].append(candidate)
    return list(groups.values())


def _write_csv(header: list[str], rows: list[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def candidates_to_csv(candidates: list[Candidate]) -> str:
    """Selected candidates as CSV, grouped by recruiter.

    Raises:
        EmptySelectionError: If nothing is selected
    """
    if not candidates:
        raise EmptySelectionError("Please select at least one candidate to export")

    rows = []
    for recruiter, members in group_by_recruiter(candidates):
        for candidate in members:
            rows.append([
                (recruiter.name if recruiter else "") or UNKNOWN,
                (recruiter.email if recruiter else "") or UNKNOWN,
                candidate.name,
                candidate.linkedin_url,
                percentage_label(candidate.similarity),
            ])
    return _write_csv(GROUPED_CSV_HEADER, rows)


def recruiter_candidates_to_csv(candidates: list[Candidate]) -> str:
    """One recruiter's selected candidates as CSV."""
    if not candidates:
        raise EmptySelectionError("Please select at least one candidate to export")

    rows = [
        [c.name, c.linkedin_url, c.application_url, percentage_label(c.similarity)]
        for c in candidates
    ]
    return _write_csv(RECRUITER_CSV_HEADER, rows)


def recruiter_csv_filename(recruiter_name: str) -> str:
    stem = re.sub(r"\s+", "_", recruiter_name.strip()) or "recruiter"
    return f"{stem}_candidates.csv"


def markdown_link(text: str, url: str) -> str:
    return f"[{text.translate(_MD_TEXT_ESCAPES)}]({url.translate(_MD_URL_ESCAPES)})"


def recruiter_email(
    recruiter: Recruiter | RecruiterRef,
    candidates: list[Candidate],
    role: RoleInfo | None = None,
) -> str:
    """Outreach email asking a recruiter about their selected candidates.

    Raises:
        EmptySelectionError: If no candidates are given
    """
    if not candidates:
        raise EmptySelectionError("Please select at least one candidate for this recruiter")

    first_name = recruiter.name.split(" ")[0] if recruiter.name else "there"
    if role:
        subject = f"Candidates for {role.label}"
        opening = f"the {role.label}"
    else:
        subject = "Candidates for an open role"
        opening = "the open role"

    links = "\n".join(f"- {markdown_link(c.name, c.linkedin_url)}" for c in candidates)

    return (
        f"To: {recruiter.email}\n"
        f"Subject: {subject}\n"
        f"\n"
        f"Hi {first_name},\n"
        f"\n"
        f"We think your network of candidates could be a fit for {opening}.\n"
        f"\n"
        f"Let us know if any of these candidates are interested in this role"
        f"—if so we can get the ball rolling:\n"
        f"{links}\n"
        f"\n"
        f"Best,\n"
        f"[unfilled name]"
    )


def grouped_emails(candidates: list[Candidate], role: RoleInfo | None = None) -> str:
    """One email per recruiter for a mixed selection, separated by rules."""
    if not candidates:
        raise EmptySelectionError("Please select at least one candidate to generate an email template")

    emails = []
    for recruiter, members in group_by_recruiter(candidates):
        ref = recruiter or RecruiterRef(id=UNKNOWN.lower(), name=UNKNOWN, email=UNKNOWN)
        emails.append(recruiter_email(ref, members, role))
    return EMAIL_SEPARATOR.join(emails)
