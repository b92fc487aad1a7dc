"""Pytest configuration for integration tests."""

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable

import pytest
from dotenv import load_dotenv


@pytest.fixture(autouse=True, scope="session")
def load_env() -> None:
    """Load environment variables from .env file before running integration tests.

    It loads environment variables from:
    1. .env.integration (if it exists)
    2. .env (if it exists)

    The .env.integration file takes precedence over .env.
    """
    project_root = Path(__file__).parent.parent.parent

    integration_env = project_root / ".env.integration"
    if integration_env.exists():
        load_dotenv(dotenv_path=integration_env)

    default_env = project_root / ".env"
    if default_env.exists():
        load_dotenv(dotenv_path=default_env)


@pytest.fixture
def github_repo() -> tuple[str, str]:
    """The repository and token integration tests run against.

    Tests using this fixture are skipped unless REPO and GITHUB_TOKEN are set.
    """
    repo = os.getenv("REPO")
    token = os.getenv("GITHUB_TOKEN")
    if not repo or not token:
        pytest.skip("REPO and GITHUB_TOKEN must be set to run tests against GitHub")
    return repo, token


CliRunner = Callable[..., subprocess.CompletedProcess[str]]


@pytest.fixture
def run_cli() -> CliRunner:
    """Run the breezy CLI as a subprocess of the current interpreter and capture output."""

    def _run(args: list[str], env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
        complete_command = [sys.executable, "-m", "breezy.configuration.cli", *args]
        print(f"Running command: {' '.join(complete_command)}")
        result = subprocess.run(
            complete_command,
            capture_output=True,
            text=True,
            env={**os.environ, **(env or {})},
        )
        print(f"Command result: {result.returncode}")
        print(f"Command stdout: {result.stdout}")
        print(f"Command stderr: {result.stderr}")
        return result

    return _run
