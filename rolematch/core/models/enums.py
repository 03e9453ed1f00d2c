"""Enumeration types for rolematch models."""

from enum import Enum


class ResponseShape(str, Enum):
    """Which upstream response layout a payload arrived in."""

    USERS = "users"
    RECRUITERS = "recruiters"


class RecruiterTier(str, Enum):
    """Recruiter tier as reported by the upstream platform."""

    PREFERRED = "preferred"
    SUPER_PREFERRED = "super preferred"
    LIMIT = "limit"
    REGULAR = "regular"


class SortDirection(str, Enum):
    """Table sort direction."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class InRoleFilter(str, Enum):
    """Recruiter table filter on the in-role flag."""

    ALL = "all"
    IN_ROLE = "in_role"
    OUT_OF_ROLE = "out_of_role"


class Tab(str, Enum):
    """Dashboard tabs."""

    CANDIDATES = "candidates"
    RECRUITERS = "recruiters"
