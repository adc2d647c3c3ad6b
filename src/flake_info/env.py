"""Environment variable handling."""

from __future__ import annotations

import os
from pathlib import Path

from flake_info.config import GITHUB_TOKEN_ENV


def load_dotenv(path: Path) -> dict[str, str]:
    """Load environment variables from a .env file. Returns empty dict if file doesn't exist."""
    if not path.exists():
        return {}

    env: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if not sep or key.startswith("#"):
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        env[key.strip()] = value

    return env


def github_token(project_root: Path | None = None) -> str | None:
    """Return the GitHub bearer token, or None when none is configured.

    A GITHUB_TOKEN entry in {project_root}/.env overrides the process
    environment.

    Args:
        project_root: Directory searched for a .env file (defaults to the
            current working directory)
    """
    root = project_root if project_root is not None else Path.cwd()
    token = load_dotenv(root / ".env").get(GITHUB_TOKEN_ENV, os.environ.get(GITHUB_TOKEN_ENV))
    return token or None
