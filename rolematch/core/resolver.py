"""Role link resolution.

Turns whatever the user pasted into the role identifier the upstream API
expects. Supported shapes, checked in this order:

- ``...roleId=<id>`` (recruiter ranking endpoint)
- ``...role_id=<id>`` (matched candidates endpoint)
- ``https://host/client/<id>``
- ``https://host/company/<company>/<id>/recruit``
- ``https://host/share/<company>/<id>``
- any URL whose last path segment is a long alphanumeric token
"""

import re
from urllib.parse import urlsplit

from pydantic import Field

from .errors import ResolutionError
from .models.base import RoleMatchBaseModel

QUERY_MARKERS = ("roleId=", "role_id=")

# Path keyword -> offset of the role id from the keyword
SEGMENT_OFFSETS = (("client", 1), ("company", 2), ("share", 2))

MIN_BARE_ID_LENGTH = 21
_BARE_ID = re.compile(r"[A-Za-z0-9]+")


class ResolutionFailure(RoleMatchBaseModel):
    """Outcome of a link that could not be resolved."""

    link: str = Field(..., description="Link as entered, trimmed")
    reason: str = Field(..., description="Why no identifier was found")


def resolve_role_id(link: str) -> str | ResolutionFailure:
    """Extract the role identifier from a role link.

    Never raises; an unusable link yields a ``ResolutionFailure``.
    """
    text = (link or "").strip()
    if not text:
        return ResolutionFailure(link=text, reason="empty link")

    for marker in QUERY_MARKERS:
        if marker in text:
            value = text.split(marker, 1)[1].split("&", 1)[0]
            if value:
                return value
            return ResolutionFailure(link=text, reason=f"empty {marker[:-1]} parameter")

    try:
        parts = urlsplit(text)
    except ValueError:
        return ResolutionFailure(link=text, reason="not a valid URL")
    if not parts.scheme or not parts.netloc:
        return ResolutionFailure(link=text, reason="not a valid URL")

    segments = [s for s in parts.path.split("/") if s]

    for keyword, offset in SEGMENT_OFFSETS:
        if keyword in segments:
            target = segments.index(keyword) + offset
            if target < len(segments):
                return segments[target]

    if segments:
        last = segments[-1]
        if len(last) >= MIN_BARE_ID_LENGTH and _BARE_ID.fullmatch(last):
            return last

    return ResolutionFailure(link=text, reason="no known role link pattern matched")


def require_role_id(link: str) -> str:
    """Like ``resolve_role_id`` but raises ``ResolutionError`` on failure."""
    outcome = resolve_role_id(link)
    if isinstance(outcome, ResolutionFailure):
        raise ResolutionError(outcome.link, outcome.reason)
    return outcome
