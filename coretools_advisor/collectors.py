"""
Latest runtime version lookup from the npm registry's distribution tags.
"""

from __future__ import annotations

import json
import logging
import urllib.request
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_DIST_TAGS_URL
from .telemetry import ActionContext
from .versions import RuntimeChannel, SemanticVersion, parse_semver

logger = logging.getLogger(__name__)


class CollectionError(Exception):
    """Raised when version collection fails."""
    pass


class NetworkError(CollectionError):
    """Raised when network requests fail."""
    pass


class ParseError(CollectionError):
    """Raised when response parsing fails."""
    pass


@dataclass(frozen=True)
class DistTags:
    """
    Distribution tags of the Core Tools npm package.

    Attributes:
        core: Newest v2 (preview) version
        latest: Newest v1 (stable) version
        docker: Tag used for container images (not used for comparisons)
    """
    core: str
    latest: str
    docker: str | None = None

    @staticmethod
    def from_dict(data: Any) -> DistTags:
        """
        Create DistTags from a decoded JSON body.

        Raises:
            ParseError: If the body is not an object with string core/latest fields
        """
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
        for key in ("core", "latest"):
            if not isinstance(data.get(key), str):
                raise ParseError(f"Missing or invalid '{key}' tag")
        docker = data.get("docker")
        return DistTags(
            core=data["core"],
            latest=data["latest"],
            docker=docker if isinstance(docker, str) else None,
        )

    def for_channel(self, channel: RuntimeChannel) -> str:
        """Get the tagged version for a runtime channel."""
        return getattr(self, channel.dist_tag)


def http_get(url: str, timeout: int = 5, headers: dict[str, str] | None = None) -> bytes:
    """Perform HTTP GET request.

    Args:
        url: URL to fetch
        timeout: Timeout in seconds
        headers: Optional HTTP headers

    Returns:
        Response body as bytes

    Raises:
        NetworkError: If request fails
    """
    try:
        default_headers = {"User-Agent": "coretools-advisor/1.0", "Accept": "application/json"}
        if headers:
            default_headers.update(headers)

        req = urllib.request.Request(url, headers=default_headers)
        with urllib.request.urlopen(req, timeout=timeout) as response:
            return response.read()
    except Exception as e:
        raise NetworkError(f"Failed to fetch {url}: {e}") from e


def fetch_dist_tags(url: str = DEFAULT_DIST_TAGS_URL, timeout: int = 5) -> DistTags:
    """
    Fetch the distribution tags document.

    Raises:
        NetworkError: If the request fails
        ParseError: If the body is not the expected JSON document
    """
    body = http_get(url, timeout=timeout)
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid JSON from {url}: {e}") from e
    return DistTags.from_dict(data)


def get_newest_version(
    channel: RuntimeChannel,
    context: ActionContext | None = None,
    url: str = DEFAULT_DIST_TAGS_URL,
    timeout: int = 5,
) -> SemanticVersion | None:
    """
    Get the newest published version for a runtime channel.

    Single best-effort attempt: failures are recorded on the context as
    ``latestRuntimeError`` and reported as None.

    Args:
        channel: Runtime channel of the local install
        context: Telemetry context receiving the failure reason
        url: Distribution tags endpoint
        timeout: Request timeout in seconds

    Returns:
        Newest version, or None if it could not be determined
    """
    try:
        tags = fetch_dist_tags(url, timeout=timeout)
        tagged = tags.for_channel(channel)
        version = parse_semver(tagged)
        if version is None:
            raise ParseError(f"Invalid version for '{channel.dist_tag}' tag: {tagged!r}")
        logger.debug("Newest %s version: %s", channel.label, version)
        return version
    except CollectionError as e:
        logger.debug("Latest runtime lookup failed: %s", e)
        if context is not None:
            context.properties["latestRuntimeError"] = str(e)
        return None
