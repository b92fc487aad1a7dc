"""Unit tests for the command line interface."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from breezy.configuration.cli import typer_app
from breezy.configuration.env import Settings
from breezy.release_notes.models import DraftReleaseResult, DraftReleaseStatus

runner = CliRunner()

SYNC_ARGS = ["sync", "--branch", "main", "--language", "python", "--github-token", "token", "--repo", "owner/repo"]


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the real environment."""
    return Settings(  # type: ignore[call-arg]
        _env_file=None, DEBUG=False, HOME=None, GITHUB_REPOSITORY=None, GITHUB_TOKEN=None, GITHUB_WORKSPACE=None
    )


def run_sync(settings: Settings, result: DraftReleaseResult, args: list[str] | None = None) -> tuple[MagicMock, object]:
    """Invoke `sync` with a generator returning `result`."""
    generator_cls = MagicMock()
    generator_cls.return_value.run = AsyncMock(return_value=result)
    with (
        patch("breezy.configuration.cli.Settings", return_value=settings),
        patch("breezy.configuration.cli.DraftReleaseGenerator", generator_cls),
    ):
        cli_result = runner.invoke(typer_app, args or SYNC_ARGS)
    return generator_cls, cli_result


def test_sync_created(settings: Settings) -> None:
    """Test that a created draft is reported."""
    generator_cls, result = run_sync(settings, DraftReleaseResult(status=DraftReleaseStatus.CREATED, release_id=5))

    assert result.exit_code == 0, result.output
    assert "Created draft release for main" in result.output
    run_config = generator_cls.call_args.args[0]
    assert run_config.branch == "main"
    assert run_config.languages == ["python"]
    generator_cls.return_value.run.assert_awaited_once_with(dry_run=False)


def test_sync_updated_with_extras(settings: Settings) -> None:
    """Test that deleted extras and the updated draft are reported."""
    _, result = run_sync(
        settings, DraftReleaseResult(status=DraftReleaseStatus.UPDATED, release_id=11, extra_release_ids=[10, 9])
    )

    assert result.exit_code == 0, result.output
    assert "Deleted extra draft release 10 for main" in result.output
    assert "Deleted extra draft release 9 for main" in result.output
    assert "Updated draft release 11 for main" in result.output


def test_sync_dry_run_prints_body(settings: Settings) -> None:
    """Test that a dry run prints the planned changes and the body."""
    generator_cls, result = run_sync(
        settings,
        DraftReleaseResult(
            status=DraftReleaseStatus.DRY_RUN,
            release_id=None,
            tag_name="v1.2.3",
            release_name="v1.2.3 (main)",
            body="<!-- breezy:branch=main -->\n\nAdd X",
            extra_release_ids=[4],
        ),
        SYNC_ARGS + ["--dry-run"],
    )

    assert result.exit_code == 0, result.output
    assert "Would delete extra draft release 4 for main" in result.output
    assert "Would create draft release for main: v1.2.3 (main) [v1.2.3]" in result.output
    assert "Add X" in result.output
    generator_cls.return_value.run.assert_awaited_once_with(dry_run=True)


def test_sync_error_exits_non_zero(settings: Settings) -> None:
    """Test that a failed run exits with status 1."""
    _, result = run_sync(settings, DraftReleaseResult(status=DraftReleaseStatus.ERROR, error="boom"))

    assert result.exit_code == 1
    assert "Error: boom" in result.output


def test_sync_missing_branch(settings: Settings) -> None:
    """Test that a missing branch is reported before anything runs."""
    args = ["sync", "--branch", " ", "--github-token", "token", "--repo", "owner/repo"]
    generator_cls, result = run_sync(settings, DraftReleaseResult(status=DraftReleaseStatus.CREATED), args)

    assert result.exit_code == 1
    assert "Missing required input: branch" in result.output
    generator_cls.assert_not_called()


def test_check_config_valid(tmp_path: Path) -> None:
    """Test summarizing a valid config file."""
    config_path = tmp_path / "breezy.yml"
    config_path.write_text(
        "exclude-labels: [skip-changelog]\n"
        "categories:\n"
        "  - title: Features\n"
        "    labels: [feature, Enhancement]\n"
        "  - h3: Other\n",
        encoding="utf-8",
    )

    result = runner.invoke(typer_app, ["check-config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "is valid" in result.output
    assert "Excluded labels: skip-changelog" in result.output
    assert "## Features: feature, enhancement" in result.output
    assert "### Other: (no labels)" in result.output


def test_check_config_without_categories(tmp_path: Path) -> None:
    """Test that a config without categories is reported as uncategorized."""
    config_path = tmp_path / "breezy.yml"
    config_path.write_text("change-template: '- $TITLE'\n", encoding="utf-8")

    result = runner.invoke(typer_app, ["check-config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "Change template: - $TITLE" in result.output
    assert "changelog will not be categorized" in result.output


def test_check_config_invalid(tmp_path: Path) -> None:
    """Test that an invalid config exits with status 1."""
    config_path = tmp_path / "breezy.yml"
    config_path.write_text("categories:\n  - title: A\n    h2: B\n", encoding="utf-8")

    result = runner.invoke(typer_app, ["check-config", str(config_path)])

    assert result.exit_code == 1
    assert "Invalid release config" in result.output


def test_check_config_missing_file(tmp_path: Path) -> None:
    """Test that a missing config file exits with status 1."""
    result = runner.invoke(typer_app, ["check-config", str(tmp_path / "missing.yml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output
