"""Dashboard session state: the one place a view model lives."""

from ..core.errors import RoleMatchError
from ..core.models.candidate import Candidate
from ..core.models.enums import Tab
from ..core.models.recruiter import Recruiter
from ..core.models.view_model import ViewModel
from ..core.resolver import ResolutionFailure, resolve_role_id
from ..integrations.matched_candidates import MatchedCandidatesClient
from ..observability.logger import get_logger
from .export import candidates_to_csv, grouped_emails, recruiter_candidates_to_csv, recruiter_email
from .selection import Selection
from .tables import CandidateQuery, RecruiterQuery, candidate_rows, candidates_by_match, recruiter_rows

logger = get_logger(__name__)

EMPTY_LINK_MESSAGE = "Please enter a role link"
UNRESOLVED_LINK_MESSAGE = "Could not extract a valid role ID from the link"


class DashboardSession:
    """State for one dashboard instance.

    Holds the current view model, the error message shown instead of it,
    the table queries and the checkbox selections. Every submission gets a
    generation number; a response belonging to an older submission is
    dropped instead of replacing the newer view.
    """

    def __init__(self, client: MatchedCandidatesClient):
        self.client = client
        self.view: ViewModel | None = None
        self.error: str | None = None
        self.loading = False
        self.active_tab = Tab.CANDIDATES
        self.candidate_query = CandidateQuery()
        self.recruiter_query = RecruiterQuery()
        self.candidate_selection = Selection()
        self.recruiter_selections: dict[str, Selection] = {}
        self._generation = 0

    async def submit(self, link: str) -> ViewModel | None:
        """Resolve ``link``, fetch its candidates and make them current.

        Failures never raise; they set ``self.error``. A fetch failure also
        clears the view, while an unusable link leaves the current one alone.
        """
        self.error = None

        if not (link or "").strip():
            self.error = EMPTY_LINK_MESSAGE
            return None

        outcome = resolve_role_id(link)
        if isinstance(outcome, ResolutionFailure):
            logger.info("role_link_unresolved", link=outcome.link, reason=outcome.reason)
            self.error = UNRESOLVED_LINK_MESSAGE
            return None

        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            view = await self.client.fetch(outcome)
        except RoleMatchError as e:
            if generation != self._generation:
                logger.info("stale_failure_ignored", role_id=outcome)
                return None
            logger.error("dashboard_fetch_failed", role_id=outcome, error=str(e), kind=type(e).__name__)
            self.view = None
            self.error = e.user_message
            return None
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.info("stale_response_discarded", role_id=outcome)
            return None

        self._replace_view(view)
        return view

    def _replace_view(self, view: ViewModel) -> None:
        self.view = view
        self.error = None
        self.candidate_selection.clear()
        self.recruiter_selections = {}

    def switch_tab(self, tab: Tab | str) -> None:
        self.active_tab = Tab(tab)

    def rows(self) -> list[Candidate] | list[Recruiter]:
        """Visible rows of the active tab."""
        if self.active_tab == Tab.RECRUITERS:
            return self.recruiter_rows()
        return self.candidate_rows()

    # ------------------------------------------------------------------
    # Candidates tab
    # ------------------------------------------------------------------
    def candidate_rows(self) -> list[Candidate]:
        if self.view is None:
            return []
        return candidate_rows(self.view.candidates, self.candidate_query)

    def sort_candidates_by(self, key: str) -> None:
        self.candidate_query.sort = self.candidate_query.sort.toggled(key)

    def selected_candidates(self) -> list[Candidate]:
        return self.candidate_selection.pick(self.candidate_rows())

    def export_selected_csv(self) -> str:
        return candidates_to_csv(self.selected_candidates())

    def selected_emails(self) -> str:
        return grouped_emails(self.selected_candidates(), self.view.role if self.view else None)

    # ------------------------------------------------------------------
    # Recruiters tab
    # ------------------------------------------------------------------
    def recruiter_rows(self) -> list[Recruiter]:
        if self.view is None:
            return []
        return recruiter_rows(self.view.recruiters, self.recruiter_query)

    def sort_recruiters_by(self, key: str) -> None:
        self.recruiter_query.sort = self.recruiter_query.sort.toggled(key)

    def recruiter_selection(self, recruiter_id: str) -> Selection:
        return self.recruiter_selections.setdefault(recruiter_id, Selection())

    def _recruiter(self, recruiter_id: str) -> Recruiter:
        recruiter = self.view.get_recruiter(recruiter_id) if self.view else None
        if recruiter is None:
            raise KeyError(recruiter_id)
        return recruiter

    def selected_for_recruiter(self, recruiter_id: str) -> list[Candidate]:
        recruiter = self._recruiter(recruiter_id)
        return self.recruiter_selection(recruiter_id).pick(candidates_by_match(recruiter))

    def recruiter_csv(self, recruiter_id: str) -> str:
        return recruiter_candidates_to_csv(self.selected_for_recruiter(recruiter_id))

    def recruiter_email(self, recruiter_id: str) -> str:
        recruiter = self._recruiter(recruiter_id)
        return recruiter_email(recruiter, self.selected_for_recruiter(recruiter_id), self.view.role)
