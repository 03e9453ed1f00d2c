"""CLI interface for rolematch using Typer."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..core.config.loader import load_config
from ..core.errors import EmptySelectionError
from ..core.models.enums import InRoleFilter, SortDirection, Tab
from ..core.resolver import ResolutionFailure, resolve_role_id
from ..dashboard.export import GROUPED_CSV_FILENAME, percentage_label, recruiter_csv_filename
from ..dashboard.session import DashboardSession
from ..dashboard.tables import SortState, candidates_by_match
from ..integrations.matched_candidates import MatchedCandidatesClient
from ..observability.logger import get_logger, setup_logging

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="rolematch",
    help="Role link to matched candidates and recruiters",
    add_completion=False,
)

MockOption = Annotated[bool, typer.Option("--mock", help="Use the built-in sample payload")]


@app.callback()
def main() -> None:
    """Configure logging from config before any command runs."""
    config = load_config()
    log_config = config.get("logging", {})
    setup_logging(
        log_level=log_config.get("level", "INFO"),
        log_format=log_config.get("format", "console"),
        log_file=log_config.get("file"),
    )


def _load(link: str, mock: bool) -> DashboardSession:
    """Submit ``link`` on a fresh session; exit 1 with the session's message on failure."""
    client = MatchedCandidatesClient.from_config(load_config(), mock=mock)
    session = DashboardSession(client)

    with console.status("Loading candidates..."):
        asyncio.run(session.submit(link))

    if session.error or session.view is None:
        console.print(f"[red]! Error:[/red] {session.error or 'No data returned from API'}")
        raise typer.Exit(code=1)

    if session.view.role:
        console.print(f"\n[bold blue]{session.view.role.label}[/bold blue]")
    return session


def _write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        console.print(f"\n[green]CSV file written to:[/green] {path}")
    except OSError as e:
        console.print(f"\n[red]! Error writing file:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def resolve(link: Annotated[str, typer.Argument(help="Role link to resolve")]):
    """Print the role identifier a link resolves to."""
    outcome = resolve_role_id(link)
    if isinstance(outcome, ResolutionFailure):
        console.print(f"[red]! Could not extract a valid role ID:[/red] {outcome.reason}")
        raise typer.Exit(code=1)
    console.print(outcome)


@app.command()
def candidates(
    link: Annotated[str, typer.Argument(help="Role link")],
    search: Annotated[str, typer.Option("--search", "-s", help="Filter by name, traits or risks")] = "",
    since: Annotated[
        datetime | None,
        typer.Option("--since", help="Only candidates created on or after this date", formats=["%Y-%m-%d"]),
    ] = None,
    sort: Annotated[str, typer.Option("--sort", help="similarity, traits, created_at or name")] = "similarity",
    ascending: Annotated[bool, typer.Option("--ascending/--descending", help="Sort direction")] = False,
    select: Annotated[list[str] | None, typer.Option("--select", help="Candidate id to select")] = None,
    select_all: Annotated[bool, typer.Option("--select-all", help="Select every visible row")] = False,
    export: Annotated[Path | None, typer.Option("--export", "-e", help="Write selected rows as CSV")] = None,
    emails: Annotated[bool, typer.Option("--emails", help="Print emails for the selected rows")] = False,
    mock: MockOption = False,
):
    """Show the candidates matched to a role."""
    session = _load(link, mock)
    session.switch_tab(Tab.CANDIDATES)
    query = session.candidate_query
    query.search = search
    query.since = since.date() if since else None
    query.sort = SortState(
        key=sort,
        direction=SortDirection.ASCENDING if ascending else SortDirection.DESCENDING,
    )

    rows = session.rows()
    if select_all:
        session.candidate_selection.toggle_all(c.id for c in rows)
    for candidate_id in select or []:
        session.candidate_selection.toggle(candidate_id)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("", width=3)
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Match", justify="right")
    table.add_column("Traits")
    table.add_column("Risks")
    table.add_column("Recruiter")
    table.add_column("Added")

    for candidate in rows:
        table.add_row(
            "x" if candidate.id in session.candidate_selection else "",
            candidate.id,
            candidate.name,
            percentage_label(candidate.similarity),
            "\n".join(candidate.reasons),
            "\n".join(candidate.risks),
            candidate.recruiter.name if candidate.recruiter else "",
            candidate.created_at.strftime("%b %d, %Y"),
        )

    console.print(table)
    console.print(f"[dim]{len(rows)} candidates, {len(session.candidate_selection)} selected[/dim]")

    try:
        if export:
            target = export / GROUPED_CSV_FILENAME if export.is_dir() else export
            _write(target, session.export_selected_csv())
        if emails:
            console.print()
            console.print(session.selected_emails(), markup=False, highlight=False, soft_wrap=True)
    except EmptySelectionError as e:
        console.print(f"[red]! Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def recruiters(
    link: Annotated[str, typer.Argument(help="Role link")],
    search: Annotated[str, typer.Option("--search", "-s", help="Filter by name, email or tags")] = "",
    in_role: Annotated[InRoleFilter, typer.Option("--in-role", help="Filter on the in-role flag")] = InRoleFilter.ALL,
    sort: Annotated[
        str, typer.Option("--sort", help="candidate_count, internal_rating, last_active, name or email")
    ] = "candidate_count",
    ascending: Annotated[bool, typer.Option("--ascending/--descending", help="Sort direction")] = False,
    show_candidates: Annotated[bool, typer.Option("--show-candidates", help="List each recruiter's candidates")] = False,
    mock: MockOption = False,
):
    """Show the recruiters who sourced candidates for a role."""
    session = _load(link, mock)
    session.switch_tab(Tab.RECRUITERS)
    query = session.recruiter_query
    query.search = search
    query.in_role = in_role
    query.sort = SortState(
        key=sort,
        direction=SortDirection.ASCENDING if ascending else SortDirection.DESCENDING,
    )

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Candidates", justify="right")
    table.add_column("In Role")
    table.add_column("Rating", justify="right")
    table.add_column("Tags")

    rows = session.rows()
    for recruiter in rows:
        table.add_row(
            recruiter.id,
            recruiter.name,
            recruiter.email,
            str(recruiter.candidate_count),
            "N/A" if recruiter.in_role is None else ("yes" if recruiter.in_role else "no"),
            f"{recruiter.internal_rating:.1f}" if recruiter.internal_rating is not None else "N/A",
            ", ".join(recruiter.tags),
        )
    console.print(table)

    if show_candidates:
        for recruiter in rows:
            console.print(f"\n[bold]{recruiter.name}[/bold]")
            for candidate in candidates_by_match(recruiter):
                console.print(f"  {percentage_label(candidate.similarity):>4}  {candidate.name}  {candidate.linkedin_url}")


@app.command()
def email(
    link: Annotated[str, typer.Argument(help="Role link")],
    recruiter_id: Annotated[str, typer.Option("--recruiter", "-r", help="Recruiter id")],
    select: Annotated[list[str] | None, typer.Option("--select", help="Candidate id (default: all)")] = None,
    export: Annotated[Path | None, typer.Option("--export", "-e", help="Also write the selection as CSV")] = None,
    mock: MockOption = False,
):
    """Print the outreach email for one recruiter's candidates."""
    session = _load(link, mock)

    recruiter = session.view.get_recruiter(recruiter_id)
    if recruiter is None:
        console.print(f"[red]! Unknown recruiter:[/red] {recruiter_id}")
        raise typer.Exit(code=1)

    selection = session.recruiter_selection(recruiter_id)
    if select:
        for candidate_id in select:
            selection.toggle(candidate_id)
    else:
        selection.toggle_all(c.id for c in recruiter.candidates)

    try:
        console.print(session.recruiter_email(recruiter_id), markup=False, highlight=False, soft_wrap=True)
        if export:
            target = export / recruiter_csv_filename(recruiter.name) if export.is_dir() else export
            _write(target, session.recruiter_csv(recruiter_id))
    except EmptySelectionError as e:
        console.print(f"[red]! Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Flask debug mode")] = False,
):
    """Run the CORS proxy in front of the upstream API."""
    from ..proxy.app import create_app

    config = load_config()
    proxy_config = config.get("proxy", {})
    bind_host = host or proxy_config.get("host", "0.0.0.0")
    bind_port = port or int(proxy_config.get("port", 5000))

    console.print(f"[bold blue]Proxy listening on[/bold blue] {bind_host}:{bind_port}")
    create_app(config).run(host=bind_host, port=bind_port, debug=debug)


if __name__ == "__main__":
    app()
