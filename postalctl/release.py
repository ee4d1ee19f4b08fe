"""Version resolver: ask the GitHub releases API for the latest postal tag."""

import logging

import httpx

from postalctl.errors import NetworkError, RateLimitError, VersionNotFoundError

logger = logging.getLogger(__name__)

RATE_LIMIT_PHRASE = "rate limit exceeded"


def parse_release(payload):
    """Extract the tag from a decoded release payload.

    The rate-limit check wins over whatever the tag field holds.
    """
    if not isinstance(payload, dict):
        raise VersionNotFoundError("Release API returned an unexpected payload")

    message = payload.get("message") or ""
    if RATE_LIMIT_PHRASE in str(message).lower():
        raise RateLimitError(
            f"GitHub API rate limit exceeded: {message}",
            hint="Wait before retrying, or set GITHUB_TOKEN to use an authenticated request.",
        )

    tag = payload.get("tag_name")
    if tag is None or str(tag) in ("", "null"):
        raise VersionNotFoundError(
            "Could not determine the latest postal version",
            hint="Pass a version explicitly, e.g. 'postal set-version 3.3.4'.",
        )
    return str(tag)


def fetch_latest_version(url, token="", timeout=30.0, transport=None):
    """GET *url* and return the release tag unmodified.

    Args:
        url: releases endpoint
        token: optional GitHub token sent as a bearer credential
        timeout: seconds before the request is abandoned
        transport: optional httpx transport (tests inject a MockTransport)

    Raises:
        NetworkError, RateLimitError, VersionNotFoundError
    """
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    logger.debug(f"GET {url}")
    try:
        with httpx.Client(transport=transport, timeout=timeout) as client:
            resp = client.get(url, headers=headers)
    except httpx.TransportError as e:
        raise NetworkError(
            f"Could not reach {url}: {e}",
            hint="Check network connectivity and DNS resolution.",
        ) from e

    try:
        payload = resp.json()
    except ValueError as e:
        raise VersionNotFoundError(f"Release API returned invalid JSON (HTTP {resp.status_code})") from e

    return parse_release(payload)


def make_fetch_latest_version(settings, transport=None):
    """Create a fetch_latest_version callable bound to *settings*."""

    def fetch():
        return fetch_latest_version(
            settings.releases_url,
            token=settings.github_token,
            timeout=settings.http_timeout,
            transport=transport,
        )

    return fetch
