"""
URI Rebaser - Translate local document uris into artifact uris of analysis logs
"""

from __future__ import annotations

from typing import Any


class UriRebaser:
    """Prefix mappings from local uris to artifact uris; longest local prefix wins"""

    def __init__(self, mappings: list[dict[str, str]] | None = None):
        self.mappings = sorted(
            ((m["local"], m.get("artifact", "")) for m in mappings or [] if m.get("local")),
            key=lambda pair: len(pair[0]),
            reverse=True,
        )

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "UriRebaser":
        return cls(config.get("uriMappings", []))

    async def translate_local_to_artifact(self, local_uri: str) -> str | None:
        if not local_uri:
            return None
        for local_prefix, artifact_prefix in self.mappings:
            if local_uri.startswith(local_prefix):
                return artifact_prefix + local_uri[len(local_prefix) :]
        return local_uri
