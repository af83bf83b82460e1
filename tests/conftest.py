import time
from collections.abc import Callable
from collections.abc import Mapping

import pytest

from commits_bot.github_api import GitHubAPIError
from commits_bot.models import CommitRecord


class FakeFetcher:
    """Stands in for CommitFetcher and records the query of each call."""

    def __init__(
        self,
        commits: list[CommitRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.commits = commits or []
        self.error = error
        self.calls: list[dict[str, str]] = []

    async def fetch(self, params: Mapping[str, str] | None = None) -> list[CommitRecord]:
        self.calls.append(dict(params or {}))
        if self.error is not None:
            raise self.error
        return list(self.commits)


class FakeChat:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def send_message(self, text: str) -> None:
        self.messages.append(text)


@pytest.fixture(autouse=True)
def utc_local_time(monkeypatch: pytest.MonkeyPatch):
    """Pin the process local time zone so local commit days are stable."""

    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(error=GitHubAPIError("GitHub API request failed"))


@pytest.fixture
def chat() -> FakeChat:
    return FakeChat()


def commit(author_date: str, message: str = "Update bot") -> CommitRecord:
    return CommitRecord(author_date=author_date, message=message)


@pytest.fixture
def make_commit() -> Callable[..., CommitRecord]:
    return commit
