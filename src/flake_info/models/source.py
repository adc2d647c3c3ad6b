"""Source origin models and flake reference construction.

A source is one of a closed set of variants (GitHub, GitLab, SourceHut,
plain Git, or a pinned nixpkgs revision). Sources are stored as tagged
objects whose ``type`` field selects the variant, with the optional
flake reference attributes inlined next to the variant's own fields:

    {"type": "github", "owner": "NixOS", "repo": "nix", "ref": "master"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from flake_info.config import NIXPKGS_TARBALL_URL
from flake_info.errors import SourceParseError

Hash = str
FlakeRef = str


def _require_str(data: dict[str, Any], key: str, source_type: str) -> str:
    """Return a required string field or raise SourceParseError."""
    if key not in data:
        raise SourceParseError(f"missing field '{key}' for source type '{source_type}'")

    value = data[key]
    if not isinstance(value, str):
        raise SourceParseError(
            f"field '{key}' for source type '{source_type}' must be a string, "
            f"got {type(value).__name__}"
        )
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SourceParseError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_uint(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None

    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SourceParseError(f"field '{key}' must be a non-negative integer, got {value!r}")
    return value


def _aliased(data: dict[str, Any], key: str, alias: str) -> str | None:
    """Read a field that may be spelled with either of two keys."""
    if key in data and alias in data:
        raise SourceParseError(f"duplicate field '{key}' (also given as '{alias}')")

    return _optional_str(data, key if key in data else alias)


@dataclass(frozen=True)
class FlakeRefAttrs:
    """Optional attributes qualifying a repository flake reference.

    Every field is independently optional; None means unspecified.

    Values are written into the query string verbatim. A value containing
    ``&``, ``=`` or ``?`` produces an ambiguous reference; this matches what
    downstream consumers of these references already accept.
    """

    ref: str | None = None
    """Branch or tag name (also read from 'git_ref')"""

    rev: Hash | None = None
    """Revision hash (also read from 'hash')"""

    dir: str | None = None
    """Subdirectory of the repository containing the flake"""

    nar_hash: Hash | None = None
    """NAR content hash (narHash)"""

    rev_count: int | None = None
    """Number of commits up to rev (revCount)"""

    last_modified: int | None = None
    """Commit timestamp in seconds since the epoch (lastModified)"""

    def params(self) -> list[tuple[str, str]]:
        """Return the present attributes as (key, value) pairs in query order."""
        candidates = [
            ("ref", self.ref),
            ("rev", self.rev),
            ("dir", self.dir),
            ("narHash", self.nar_hash),
            ("revCount", self.rev_count),
            ("lastModified", self.last_modified),
        ]
        return [(key, str(value)) for key, value in candidates if value is not None]

    def is_empty(self) -> bool:
        return not self.params()

    def query_string(self) -> str:
        """Render the attributes as a query string.

        Returns:
            "?key=value&..." in the fixed order ref, rev, dir, narHash,
            revCount, lastModified, or "" when no attribute is set
        """
        params = self.params()
        if not params:
            return ""
        return "?" + "&".join(f"{key}={value}" for key, value in params)

    def append_to(self, base: str) -> str:
        """Append the attributes to a locator that may already carry a query.

        Args:
            base: Locator to extend

        Returns:
            base unchanged if no attribute is set, otherwise base with the
            attributes joined by '&' (when base already contains '?') or
            the full query string
        """
        query = self.query_string()

        if not query:
            return base
        if "?" in base:
            return f"{base}&{query[1:]}"
        return f"{base}{query}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FlakeRefAttrs:
        """Read the attributes inlined in a source entry."""
        return cls(
            ref=_aliased(data, "ref", "git_ref"),
            rev=_aliased(data, "rev", "hash"),
            dir=_optional_str(data, "dir"),
            nar_hash=_optional_str(data, "narHash"),
            rev_count=_optional_uint(data, "revCount"),
            last_modified=_optional_uint(data, "lastModified"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the present attributes keyed by their stored names."""
        stored = {
            "ref": self.ref,
            "rev": self.rev,
            "dir": self.dir,
            "narHash": self.nar_hash,
            "revCount": self.rev_count,
            "lastModified": self.last_modified,
        }
        return {key: value for key, value in stored.items() if value is not None}


@dataclass(frozen=True)
class _ForgeSource:
    """A repository hosted on a forge, addressed as {scheme}:{owner}/{repo}."""

    owner: str
    repo: str
    attrs: FlakeRefAttrs = field(default_factory=FlakeRefAttrs)

    type: ClassVar[str]

    def to_flake_ref(self) -> FlakeRef:
        return self.attrs.append_to(f"{self.type}:{self.owner}/{self.repo}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(
            owner=_require_str(data, "owner", cls.type),
            repo=_require_str(data, "repo", cls.type),
            attrs=FlakeRefAttrs.from_dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "owner": self.owner, "repo": self.repo, **self.attrs.to_dict()}


@dataclass(frozen=True)
class Github(_ForgeSource):
    """A GitHub repository."""

    description: str | None = None
    """Free-form description, not part of the flake reference"""

    type: ClassVar[str] = "github"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Github:
        return cls(
            owner=_require_str(data, "owner", cls.type),
            repo=_require_str(data, "repo", cls.type),
            description=_optional_str(data, "description"),
            attrs=FlakeRefAttrs.from_dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class Gitlab(_ForgeSource):
    """A GitLab repository."""

    type: ClassVar[str] = "gitlab"


@dataclass(frozen=True)
class SourceHut(_ForgeSource):
    """A SourceHut repository; owner usually includes the leading '~'."""

    type: ClassVar[str] = "sourcehut"


@dataclass(frozen=True)
class Git:
    """Any Git repository reachable by URL, local or remote."""

    url: str
    attrs: FlakeRefAttrs = field(default_factory=FlakeRefAttrs)

    type: ClassVar[str] = "git"

    def to_flake_ref(self) -> FlakeRef:
        return self.attrs.append_to(self.url)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Git:
        return cls(url=_require_str(data, "url", cls.type), attrs=FlakeRefAttrs.from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "url": self.url, **self.attrs.to_dict()}


@dataclass(frozen=True)
class Nixpkgs:
    """A nixpkgs channel pinned to a commit.

    Resolving a channel again produces a new value; git_ref never changes
    on an existing one.
    """

    channel: str
    """Release line the revision was taken from (e.g. 'unstable', '24.05')"""

    git_ref: str
    """Commit the channel pointed at when it was resolved"""

    type: ClassVar[str] = "nixpkgs"

    def to_flake_ref(self) -> FlakeRef:
        # Attributes do not apply; the commit is part of the tarball path.
        return NIXPKGS_TARBALL_URL.format(git_ref=self.git_ref)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Nixpkgs:
        return cls(
            channel=_require_str(data, "channel", cls.type),
            git_ref=_require_str(data, "git_ref", cls.type),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "channel": self.channel, "git_ref": self.git_ref}


Source = Union[Github, Gitlab, SourceHut, Git, Nixpkgs]

# Source type registry, keyed by the stored 'type' tag
SOURCE_TYPES: dict[str, type[Source]] = {
    Github.type: Github,
    Gitlab.type: Gitlab,
    SourceHut.type: SourceHut,
    Git.type: Git,
    Nixpkgs.type: Nixpkgs,
}


def source_from_dict(data: Any) -> Source:
    """Create a Source from a tagged dictionary.

    Args:
        data: Stored source entry with a 'type' field

    Returns:
        Source variant selected by the 'type' tag

    Raises:
        SourceParseError: If the entry is not a table, the tag is missing or
            unknown, or a field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise SourceParseError(f"source entry must be a table, got {type(data).__name__}")

    if "type" not in data:
        raise SourceParseError("missing field 'type'")

    source_type = data["type"]
    if not isinstance(source_type, str) or source_type not in SOURCE_TYPES:
        available = ", ".join(SOURCE_TYPES)
        raise SourceParseError(f"unknown source type {source_type!r}. Available: {available}")

    return SOURCE_TYPES[source_type].from_dict(data)


def to_flake_ref(source: Source) -> FlakeRef:
    """Convert any source variant into its flake reference.

    Raises:
        TypeError: If source is not one of the Source variants
    """
    if not isinstance(source, tuple(SOURCE_TYPES.values())):
        raise TypeError(f"not a source: {source!r}")
    return source.to_flake_ref()
