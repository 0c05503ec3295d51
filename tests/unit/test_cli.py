"""Tests for the command-line interface."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from release_maker import __version__
from release_maker.cli import app
from release_maker.cli.commands.generate import read_text_resource
from release_maker.core.release import load_release

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import RepoFixture


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestVersion:
    """Tests for the --version option."""

    def test_version(self, runner: CliRunner):
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestRetrieve:
    """Tests for the retrieve command."""

    def test_retrieve_range(self, runner: CliRunner, linear_repo: RepoFixture):
        """Retrieve prints the commit range as release JSON."""
        c = linear_repo.commits
        result = runner.invoke(
            app,
            ["retrieve", str(linear_repo.path), "--start", c["c2"], "--end", c["c1"]],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["repo_url"] == "https://github.com/o/r"
        assert data["added"] == [
            ["any", "Add parser", "Bob", c["c2"]],
            ["any", "Initial commit", "Alice", c["c1"]],
        ]

    def test_retrieve_output_feeds_generate(self, runner: CliRunner, linear_repo: RepoFixture):
        """Retrieve output is valid generate input."""
        result = runner.invoke(app, ["retrieve", str(linear_repo.path)])

        release = load_release(result.stdout)
        assert len(release.added) == 3

    def test_unknown_branch(self, runner: CliRunner, linear_repo: RepoFixture):
        """An unknown branch exits with an error."""
        result = runner.invoke(app, ["retrieve", str(linear_repo.path), "--branch", "develop"])

        assert result.exit_code == 1

    def test_invalid_hash(self, runner: CliRunner, linear_repo: RepoFixture):
        """An invalid boundary hash exits with an error."""
        result = runner.invoke(app, ["retrieve", str(linear_repo.path), "--end", "zzz"])

        assert result.exit_code == 1

    def test_not_a_repository(self, runner: CliRunner, tmp_path: Path):
        """A path without repository exits with an error."""
        result = runner.invoke(app, ["retrieve", str(tmp_path / "nothing")])

        assert result.exit_code == 1


class TestGenerate:
    """Tests for the generate command."""

    def test_generate_from_file(self, runner: CliRunner, tmp_path: Path):
        """Generate renders the release file as markdown."""
        path = tmp_path / "release.json"
        path.write_text(
            json.dumps(
                {
                    "repo_url": "https://github.com/o/r",
                    "added": [["fix", "Fast parser", "alice", "1234567"]],
                }
            )
        )

        result = runner.invoke(app, ["generate", str(path)])

        assert result.exit_code == 0, result.output
        assert "- [fix] Fast parser ([@alice]) [c:1234567]\n" in result.stdout
        assert "[c:1234567]: https://github.com/o/r/commit/1234567\n" in result.stdout

    def test_generate_from_stdin(self, runner: CliRunner):
        """Generate reads standard input when no path is given."""
        document = json.dumps({"repo_url": "https://github.com/o/r"})

        result = runner.invoke(app, ["generate"], input=document)

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("Thanks to the following for their contributions:")

    def test_generate_invalid_input(self, runner: CliRunner):
        """Invalid input exits with an error."""
        result = runner.invoke(app, ["generate"], input='{"repo_url": "u", "added": [[]]}')

        assert result.exit_code == 1

    def test_generate_output_verbatim(self, runner: CliRunner, tmp_path: Path):
        """Tabs and control characters in change names are printed unchanged."""
        path = tmp_path / "release.json"
        path.write_text(
            json.dumps(
                {
                    "repo_url": "https://github.com/o/r",
                    "added": [["fix", "Fast\tparser\rX", "alice", "1234567"]],
                }
            )
        )

        result = runner.invoke(app, ["generate", str(path)])

        assert result.exit_code == 0, result.output
        assert "- [fix] Fast\tparser\rX ([@alice]) [c:1234567]\n" in result.stdout
        assert result.stdout.endswith("[c:1234567]: https://github.com/o/r/commit/1234567\n\n")

    def test_generate_invalid_utf8(self, runner: CliRunner, tmp_path: Path):
        """Input that is not UTF-8 exits with an error message."""
        path = tmp_path / "release.json"
        path.write_bytes(b'{"repo_url": "\xff"}')

        result = runner.invoke(app, ["generate", str(path)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "not valid UTF-8" in result.output

    def test_generate_missing_file(self, runner: CliRunner, tmp_path: Path):
        """A missing input file exits with an error."""
        result = runner.invoke(app, ["generate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1

    def test_example_is_valid_input(self, runner: CliRunner):
        """The bundled example is a valid release."""
        result = runner.invoke(app, ["generate", "--example"])

        assert result.exit_code == 0
        assert load_release(result.stdout).repo_url.startswith("https://github.com/")

    def test_help_texts_in_order(self, runner: CliRunner):
        """Help texts are printed in a fixed order, separated by a blank line."""
        result = runner.invoke(app, ["generate", "--gotchas", "--explain"])

        assert result.exit_code == 0
        assert result.stdout == (
            read_text_resource("explanation.txt") + "\n" + read_text_resource("gotchas.txt")
        )
