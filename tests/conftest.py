"""Pytest configuration and fixtures for flake-info tests."""

import json
import logging

import pytest

SAMPLE_TOML = """\
# Flakes indexed by the search
[[sources]]
type = "github"
owner = "NixOS"
repo = "nix"
description = "Nix, the purely functional package manager"
ref = "master"

[[sources]]
type = "gitlab"
owner = "pi-rho"
repo = "dotfiles"

[[sources]]
type = "sourcehut"
owner = "~misterio"
repo = "nix-colors"
dir = "flake"

[[sources]]
type = "git"
url = "https://codeberg.org/example/flake.git"
hash = "0123abcd"

[[sources]]
type = "nixpkgs"
channel = "unstable"
git_ref = "deadbeef"
"""

SAMPLE_ENTRIES = [
    {"type": "github", "owner": "NixOS", "repo": "nix", "git_ref": "master"},
    {"type": "git", "url": "git+file:///srv/flakes/local", "rev": "cafe", "revCount": 12},
    {"type": "nixpkgs", "channel": "24.05", "git_ref": "feedface"},
]


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration after each test.

    This ensures that tests which call setup_logging() don't affect
    other tests that rely on caplog fixture for log capture.
    """
    yield

    logger = logging.getLogger("flake_info")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def toml_sources_file(tmp_path):
    """A sources.toml file with one entry of every source type."""
    path = tmp_path / "sources.toml"
    path.write_text(SAMPLE_TOML)
    return path


@pytest.fixture
def json_sources_file(tmp_path):
    """A sources.json file using the field aliases."""
    path = tmp_path / "sources.json"
    path.write_text(json.dumps(SAMPLE_ENTRIES))
    return path
