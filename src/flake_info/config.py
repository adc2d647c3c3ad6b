"""Configuration constants for flake-info."""

# Version
__version__ = "0.1.0"

# Sources files
TOML_EXTENSION = ".toml"
"""Suffix that selects the TOML document format; anything else is read as JSON"""

TOML_SOURCES_KEY = "sources"
"""Top-level key holding the source list in TOML documents"""

# GitHub API
GITHUB_API_URL = "https://api.github.com"

NIXPKGS_BRANCH_URL = GITHUB_API_URL + "/repos/nixos/nixpkgs/branches/{branch}"
"""Branch lookup endpoint used to pin a channel to a commit"""

NIXPKGS_TARBALL_URL = GITHUB_API_URL + "/repos/NixOS/nixpkgs/tarball/{git_ref}"
"""Flake reference for a pinned nixpkgs revision"""

CHANNEL_BRANCH_PREFIX = "nixos-"
"""Channels are published on branches named nixos-{channel}"""

USER_AGENT = "nixos-search"
"""Client identification sent with every GitHub request"""

GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
"""Environment variable holding an optional bearer token"""
