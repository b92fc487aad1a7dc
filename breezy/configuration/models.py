"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ReleaseRunConfig:
    """Reconciled configuration of one draft release run."""

    github_api_url: str
    github_token: str
    repo: str
    branch: str
    workspace: Path
    home: Path | None = None
    languages: list[str] = field(default_factory=list)
    tag_prefix: str = "v"
    config_path: str | None = None
    dry_run: bool = False
    debug: bool = False
