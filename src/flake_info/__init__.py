"""flake-info: typed flake sources, sources files and nixpkgs channel pinning."""

from flake_info.channels import nixpkgs, resolve_nixpkgs
from flake_info.config import __version__
from flake_info.errors import ChannelResolutionError, FlakeInfoError, SourceParseError
from flake_info.logging import get_logger
from flake_info.models.source import (
    FlakeRef,
    FlakeRefAttrs,
    Git,
    Github,
    Gitlab,
    Nixpkgs,
    Source,
    SourceHut,
    source_from_dict,
    to_flake_ref,
)
from flake_info.sources import dumps_sources, read_sources_file, write_sources_file

__all__ = [
    "__version__",
    "FlakeRef",
    "FlakeRefAttrs",
    "Git",
    "Github",
    "Gitlab",
    "Nixpkgs",
    "Source",
    "SourceHut",
    "source_from_dict",
    "to_flake_ref",
    "read_sources_file",
    "dumps_sources",
    "write_sources_file",
    "nixpkgs",
    "resolve_nixpkgs",
    "ChannelResolutionError",
    "FlakeInfoError",
    "SourceParseError",
    "get_logger",
]
