"""
Semantic versions and runtime channels.

A local ``func`` install is classified into a channel by its major version;
the channel decides which registry distribution tag is compared against it.
"""

from __future__ import annotations

from enum import Enum

from semver import Version

# Precedence (prerelease before release, build metadata ignored) is semver's.
SemanticVersion = Version


def parse_semver(text: str) -> SemanticVersion | None:
    """
    Parse text as a semantic version, or None if it is not one.

    Surrounding whitespace and a single leading "v" or "=" are tolerated.
    """
    if not isinstance(text, str):
        return None
    candidate = text.strip()
    if candidate[:1] in ("v", "="):
        candidate = candidate[1:]
    # semver's grammar matches any Unicode digit
    if not candidate.isascii() or not SemanticVersion.is_valid(candidate):
        return None
    return SemanticVersion.parse(candidate)


def valid_semver(text: str) -> str | None:
    """Return the canonical form of a valid semantic version, else None."""
    version = parse_semver(text)
    return str(version) if version is not None else None


class RuntimeChannel(Enum):
    """
    Stability track of the Functions runtime.

    Each value is (label, dist-tag field, npm package suffix).
    """
    STABLE = ("v1", "latest", "")
    PREVIEW = ("v2", "core", "@core")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def dist_tag(self) -> str:
        return self.value[1]

    @property
    def npm_suffix(self) -> str:
        return self.value[2]

    @staticmethod
    def from_label(label: str) -> RuntimeChannel | None:
        for channel in RuntimeChannel:
            if channel.label == label:
                return channel
        return None


class _UnknownChannel:
    """Result of classifying a major version with no channel."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNKNOWN_CHANNEL"


UNKNOWN_CHANNEL = _UnknownChannel()

CHANNEL_BY_MAJOR: dict[int, RuntimeChannel] = {
    1: RuntimeChannel.STABLE,
    2: RuntimeChannel.PREVIEW,
}


def _check_channel_table(table: dict[int, RuntimeChannel]) -> None:
    for major, channel in table.items():
        if not isinstance(major, int) or major < 1:
            raise ValueError(f"Invalid major version in channel table: {major!r}")
        if not isinstance(channel, RuntimeChannel):
            raise ValueError(f"Invalid channel for major {major}: {channel!r}")
    missing = set(RuntimeChannel) - set(table.values())
    if missing:
        names = ", ".join(sorted(c.name for c in missing))
        raise ValueError(f"Channel table has no major version for: {names}")


_check_channel_table(CHANNEL_BY_MAJOR)


def classify(major: int) -> RuntimeChannel | _UnknownChannel:
    """
    Map a major version to its runtime channel.

    Args:
        major: Major version of the local runtime

    Returns:
        The channel, or UNKNOWN_CHANNEL for unmapped majors
    """
    return CHANNEL_BY_MAJOR.get(major, UNKNOWN_CHANNEL)


class ProjectRuntime(Enum):
    """Runtime a new Functions project targets."""
    ONE = "~1"
    BETA = "beta"
