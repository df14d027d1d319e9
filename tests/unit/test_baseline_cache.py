from __future__ import annotations

import asyncio
import shutil
import subprocess
from pathlib import Path

import pytest

from services.baseline import (
    BaselineCache,
    GitBaselineProvider,
    HttpBaselineProvider,
    NullBaselineProvider,
    create_provider,
    uri_to_path,
)


class CountingProvider:
    def __init__(self, texts: dict[tuple[str, str], str], delay: float = 0.0):
        self.texts = texts
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    async def fetch(self, revision: str, uri: str) -> str | None:
        self.calls.append((revision, uri))
        await asyncio.sleep(self.delay)
        return self.texts.get((revision, uri))


class FailingProvider:
    def __init__(self):
        self.calls = 0

    async def fetch(self, revision: str, uri: str) -> str | None:
        self.calls += 1
        raise ConnectionError("network down")


def test_concurrent_requests_fetch_once() -> None:
    provider = CountingProvider({("abc123", "file:///a.py"): "baseline"}, delay=0.01)
    cache = BaselineCache(provider)

    async def scenario():
        return await asyncio.gather(*(cache.get("abc123", "file:///a.py") for _ in range(5)))

    assert asyncio.run(scenario()) == ["baseline"] * 5
    assert provider.calls == [("abc123", "file:///a.py")]


def test_keys_are_revision_and_uri() -> None:
    provider = CountingProvider({("r1", "file:///a.py"): "one", ("r2", "file:///a.py"): "two"})
    cache = BaselineCache(provider)

    async def scenario():
        return [
            await cache.get("r1", "file:///a.py"),
            await cache.get("r2", "file:///a.py"),
            await cache.get("r1", "file:///a.py"),
            await cache.get("r1", "file:///b.py"),
        ]

    assert asyncio.run(scenario()) == ["one", "two", "one", None]
    assert len(provider.calls) == 3
    assert len(cache) == 3


def test_missing_revision_never_fetches() -> None:
    provider = CountingProvider({})
    cache = BaselineCache(provider)

    assert asyncio.run(cache.get(None, "file:///a.py")) is None
    assert provider.calls == []


def test_provider_errors_degrade_to_no_snapshot() -> None:
    provider = FailingProvider()
    cache = BaselineCache(provider)

    async def scenario():
        return [await cache.get("r1", "file:///a.py"), await cache.get("r1", "file:///a.py")]

    assert asyncio.run(scenario()) == [None, None]
    assert provider.calls == 1


def test_uri_to_path() -> None:
    assert uri_to_path("file:///work/src/a%20b.py") == Path("/work/src/a b.py")
    assert uri_to_path("/work/src/a.py") == Path("/work/src/a.py")
    assert uri_to_path("untitled:Untitled-1") is None


def test_create_provider_by_source(tmp_path: Path) -> None:
    git = create_provider({"baseline": {"source": "git", "repoRoot": str(tmp_path)}})
    http = create_provider({"baseline": {"source": "http", "urlTemplate": "https://h/{revision}/{path}"}})

    assert isinstance(git, GitBaselineProvider)
    assert git.repo_root == tmp_path
    assert isinstance(http, HttpBaselineProvider)
    assert isinstance(create_provider({"baseline": {"source": "none"}}), NullBaselineProvider)
    with pytest.raises(ValueError):
        create_provider({"baseline": {"source": "http"}})
    with pytest.raises(ValueError):
        create_provider({"baseline": {"source": "svn"}})


def test_git_provider_rejects_paths_outside_repo(tmp_path: Path) -> None:
    provider = GitBaselineProvider(tmp_path / "repo")

    assert provider.relative_path((tmp_path / "other" / "a.py").as_uri()) is None
    assert provider.relative_path((tmp_path / "repo" / "src" / "a.py").as_uri()) == "src/a.py"


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_git_provider_reads_file_at_commit(tmp_path: Path) -> None:
    def git(*args: str) -> str:
        return subprocess.run(
            ["git", *args], cwd=tmp_path, check=True, capture_output=True, text=True
        ).stdout.strip()

    git("init", "-q")
    git("config", "user.email", "dev@example.com")
    git("config", "user.name", "Dev")
    source = tmp_path / "main.py"
    source.write_text("print('baseline')\n", encoding="utf-8")
    git("add", "main.py")
    git("commit", "-q", "-m", "baseline")
    commit = git("rev-parse", "HEAD")
    source.write_text("print('edited')\n", encoding="utf-8")

    provider = GitBaselineProvider(tmp_path)

    assert asyncio.run(provider.fetch(commit, source.as_uri())) == "print('baseline')\n"
    assert asyncio.run(provider.fetch(commit, (tmp_path / "missing.py").as_uri())) is None
