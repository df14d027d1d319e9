"""
Baseline snapshots - Fetch and cache the text an analysis ran against
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import unquote, urlparse

import aiohttp


class BaselineProvider(Protocol):
    """Source of baseline document text"""

    async def fetch(self, revision: str, uri: str) -> str | None: ...


def uri_to_path(uri: str) -> Path | None:
    """Filesystem path of a file:// uri (plain paths pass through)"""
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if not parsed.scheme or len(parsed.scheme) == 1:  # bare path or windows drive
        return Path(uri)
    return None


class NullBaselineProvider:
    """No baseline source configured; every projection degrades to identity"""

    async def fetch(self, revision: str, uri: str) -> str | None:
        return None


class GitBaselineProvider:
    """Read file content at a commit with `git show`"""

    def __init__(self, repo_root: str | Path):
        self.repo_root = Path(repo_root)

    def relative_path(self, uri: str) -> str | None:
        path = uri_to_path(uri)
        if path is None:
            return None
        try:
            return path.resolve().relative_to(self.repo_root.resolve()).as_posix()
        except ValueError:
            return None

    async def fetch(self, revision: str, uri: str) -> str | None:
        relative = self.relative_path(uri)
        if relative is None:
            print(f"[Baseline] {uri} is outside {self.repo_root}")
            return None

        try:
            process = await asyncio.create_subprocess_exec(
                "git",
                "show",
                f"{revision}:{relative}",
                cwd=str(self.repo_root),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            print(f"[Baseline] Cannot run git: {e}")
            return None

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            print(f"[Baseline] git show {revision}:{relative} failed: {stderr.decode(errors='replace').strip()}")
            return None
        return stdout.decode("utf-8", errors="replace")


class HttpBaselineProvider:
    """Fetch raw file content from a URL template with {revision} and {path}"""

    def __init__(self, url_template: str, timeout_seconds: float = 10):
        self.url_template = url_template
        self.timeout_seconds = timeout_seconds

    async def fetch(self, revision: str, uri: str) -> str | None:
        path = uri_to_path(uri)
        url = self.url_template.format(
            revision=revision,
            path=path.as_posix().lstrip("/") if path else uri,
        )
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    print(f"[Baseline] GET {url} returned HTTP {response.status}")
                    return None
                return await response.text()


def create_provider(config: dict[str, Any]) -> BaselineProvider:
    """Build the provider named by the `baseline` config section"""
    cfg = config.get("baseline", {})
    source = cfg.get("source", "git")

    if source == "git":
        return GitBaselineProvider(cfg.get("repoRoot") or Path.cwd())
    if source == "http":
        template = cfg.get("urlTemplate")
        if not template:
            raise ValueError("baseline.urlTemplate is required for the http source")
        return HttpBaselineProvider(template, cfg.get("timeout", 10))
    if source == "none":
        return NullBaselineProvider()
    raise ValueError(f"Unknown baseline source: {source}")


class BaselineCache:
    """Append-only cache of baseline text keyed by (revision, uri).

    The first request for a key stores a shared task, so concurrent requests
    fetch once. Failures are cached as "no snapshot".
    """

    def __init__(self, provider: BaselineProvider):
        self.provider = provider
        self._entries: dict[tuple[str, str], asyncio.Task] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, revision: str | None, uri: str) -> str | None:
        if not revision:
            return None
        key = (revision, uri)
        task = self._entries.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(revision, uri))
            self._entries[key] = task
        return await asyncio.shield(task)

    async def _fetch(self, revision: str, uri: str) -> str | None:
        try:
            return await self.provider.fetch(revision, uri)
        except Exception as e:
            print(f"[Baseline] Fetching {uri}@{revision} failed: {e}")
            return None
