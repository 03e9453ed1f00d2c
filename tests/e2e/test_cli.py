"""CLI smoke tests against the built-in sample payload."""

from typer.testing import CliRunner

from rolematch.cli.main import app

runner = CliRunner()

LINK = "https://paraform.com/client/cm4aeeweh0064jv0casuba1s9"


def test_resolve():
    result = runner.invoke(app, ["resolve", "https://paraform.com/share/acme/cm4aeeweh0064jv0casuba1s9"])
    assert result.exit_code == 0
    assert "cm4aeeweh0064jv0casuba1s9" in result.output


def test_resolve_failure_exits_nonzero():
    result = runner.invoke(app, ["resolve", "short"])
    assert result.exit_code == 1


def test_candidates_export(tmp_path):
    result = runner.invoke(app, ["candidates", LINK, "--mock", "--select-all", "--export", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "5 candidates, 5 selected" in result.output

    lines = (tmp_path / "candidates_by_recruiter.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0] == '"Recruiter Name","Recruiter Email","Candidate Name","Candidate LinkedIn URL","Match Percentage"'
    assert len(lines) == 6


def test_candidates_export_without_selection_fails(tmp_path):
    result = runner.invoke(app, ["candidates", LINK, "--mock", "--export", str(tmp_path / "out.csv")])
    assert result.exit_code == 1
    assert not (tmp_path / "out.csv").exists()


def test_candidates_search():
    result = runner.invoke(app, ["candidates", LINK, "--mock", "--search", "CPA"])
    assert result.exit_code == 0
    assert "1 candidates, 0 selected" in result.output


def test_recruiters():
    result = runner.invoke(app, ["recruiters", LINK, "--mock", "--in-role", "in_role", "--show-candidates"])
    assert result.exit_code == 0
    assert "https://linkedin.com/in/emilydavis" in result.output
    assert "https://linkedin.com/in/davidlee" not in result.output


def test_email():
    result = runner.invoke(app, ["email", LINK, "--mock", "--recruiter", "3"])
    assert result.exit_code == 0
    assert "To: sarah.wilson@example.com" in result.output
    assert "Hi Sarah," in result.output
    # Best match first
    assert result.output.index("David Lee") < result.output.index("Michael Wilson")


def test_email_unknown_recruiter():
    result = runner.invoke(app, ["email", LINK, "--mock", "--recruiter", "99"])
    assert result.exit_code == 1


def test_unresolvable_link():
    result = runner.invoke(app, ["candidates", "nope", "--mock"])
    assert result.exit_code == 1
    assert "Could not extract a valid role ID from the link" in result.output
