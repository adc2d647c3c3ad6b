"""Resolve nixpkgs channels to pinned revisions via the GitHub API."""

from __future__ import annotations

import asyncio

import httpx

from flake_info.config import CHANNEL_BRANCH_PREFIX, NIXPKGS_BRANCH_URL, USER_AGENT
from flake_info.errors import ChannelResolutionError
from flake_info.logging import get_logger
from flake_info.models.source import Nixpkgs

logger = get_logger(__name__)


def branch_url(channel: str) -> str:
    """Return the GitHub branch endpoint for a channel."""
    return NIXPKGS_BRANCH_URL.format(branch=f"{CHANNEL_BRANCH_PREFIX}{channel}")


def _headers(token: str | None) -> dict[str, str]:
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def nixpkgs(
    channel: str,
    token: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> Nixpkgs:
    """Pin a nixpkgs channel to the commit its branch currently points at.

    Each call performs one lookup, following redirects, with no timeout of
    its own. The result is not cached, so two calls may return different
    revisions once the branch advances.

    Args:
        channel: Channel name without the 'nixos-' prefix (e.g. 'unstable')
        token: Optional GitHub token sent as a bearer credential
        client: Client to send the request with. A new one is opened and
            closed for the call when omitted.

    Returns:
        Nixpkgs value holding the channel and the resolved commit

    Raises:
        ChannelResolutionError: On a non-success status or a response body
            without commit.sha
        httpx.HTTPError: If the request itself fails
    """
    url = branch_url(channel)
    headers = _headers(token)

    logger.debug(f"Resolving channel {channel} ({'authenticated' if token else 'anonymous'})")

    # GitHub answers renamed or moved branches with a redirect.
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True, timeout=None) as owned_client:
            response = await owned_client.get(url, headers=headers)
    else:
        response = await client.get(url, headers=headers, follow_redirects=True)

    if not response.is_success:
        raise ChannelResolutionError(
            f"GitHub returned {response.status_code} {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        git_ref = response.json()["commit"]["sha"]
    except (ValueError, KeyError, TypeError) as e:
        raise ChannelResolutionError(
            f"Unexpected response for {CHANNEL_BRANCH_PREFIX}{channel}: {e!r}"
        ) from e

    if not isinstance(git_ref, str):
        raise ChannelResolutionError(
            f"Unexpected response for {CHANNEL_BRANCH_PREFIX}{channel}: commit.sha is not a string"
        )

    logger.debug(f"Channel {channel} is at {git_ref}")
    return Nixpkgs(channel=channel, git_ref=git_ref)


def resolve_nixpkgs(channel: str, token: str | None = None) -> Nixpkgs:
    """Blocking variant of nixpkgs() for synchronous callers."""
    return asyncio.run(nixpkgs(channel, token=token))
