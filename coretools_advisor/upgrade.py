"""
Upgrade decision for the local runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from .versions import RuntimeChannel, SemanticVersion

PREVIEW_WARNING = "v2 is in preview and may have breaking changes (which are automatically applied to Azure)."


@dataclass(frozen=True)
class UpgradeRecommendation:
    """
    A newer runtime is available for the local install's channel.

    Attributes:
        local_version: Installed version
        remote_version: Newest published version for the channel
        channel: Runtime channel of the install
    """
    local_version: SemanticVersion
    remote_version: SemanticVersion
    channel: RuntimeChannel

    def message(self) -> str:
        """User-facing upgrade message."""
        text = (
            f"Update your Azure Functions Core Tools ({self.local_version}) "
            f"to the latest ({self.remote_version}) for the best experience."
        )
        if self.channel is RuntimeChannel.PREVIEW:
            text += f" {PREVIEW_WARNING}"
        return text


def decide_upgrade(
    local: SemanticVersion,
    remote: SemanticVersion,
    channel: RuntimeChannel,
) -> UpgradeRecommendation | None:
    """
    Recommend an upgrade iff the remote version is strictly newer.

    Returns:
        UpgradeRecommendation, or None when the local install is current
    """
    if remote > local:
        return UpgradeRecommendation(local_version=local, remote_version=remote, channel=channel)
    return None
