import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from commits_bot.models import CommitRecord
from commits_bot.settings import Settings


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the commit listing cannot be fetched or parsed."""


def parse_commit(item: Any) -> CommitRecord:
    """Build a CommitRecord from one element of the commits listing."""

    if not isinstance(item, Mapping):
        raise ValueError("GitHub commit item is invalid")

    commit = item.get("commit")
    if not isinstance(commit, Mapping):
        raise ValueError("GitHub commit payload is missing")

    author = commit.get("author")
    if not isinstance(author, Mapping):
        raise ValueError("GitHub commit author is missing")

    raw_date = author.get("date")
    raw_message = commit.get("message")
    if not isinstance(raw_date, str) or not isinstance(raw_message, str):
        raise ValueError("GitHub commit is missing required fields")

    return CommitRecord(author_date=raw_date, message=raw_message)


class CommitFetcher:
    """Fetches the commit listing of one repository from GitHub REST API."""

    def __init__(
        self,
        repo: str,
        api_base_url: str = "https://api.github.com",
        user_agent: str = "commits-bot",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not repo:
            raise ValueError("repository identifier is required")
        self.repo = repo
        self.api_base_url = api_base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "CommitFetcher":
        if not app_settings.github_repo:
            raise ValueError("GITHUB_REPO is not set")
        return cls(
            repo=app_settings.github_repo,
            api_base_url=app_settings.github_api_base_url,
            user_agent=app_settings.github_user_agent,
            timeout=app_settings.github_timeout_seconds,
        )

    @property
    def commits_url(self) -> str:
        return f"{self.api_base_url}/repos/{self.repo}/commits"

    async def fetch(self, params: Mapping[str, str] | None = None) -> list[CommitRecord]:
        """Issue one GET for the commit listing and parse the JSON array.

        The body is decoded incrementally as chunks arrive, so multi-byte
        characters split across chunk boundaries survive intact.

        Raises:
            GitHubAPIError: On transport failure, non-2xx status or a body
                that is not a JSON array of commits.
        """

        logger.debug("Fetching commits for %s with params %s", self.repo, params)

        try:
            chunks = await self._read_body(dict(params or {}))
        except httpx.HTTPError as exc:
            raise GitHubAPIError("GitHub API request failed") from exc

        try:
            payload: Any = json.loads("".join(chunks))
        except ValueError as exc:
            raise GitHubAPIError("GitHub commits response is not JSON") from exc

        if not isinstance(payload, list):
            raise GitHubAPIError("GitHub commits response is not a list")

        try:
            commits = [parse_commit(item) for item in payload]
        except ValueError as exc:
            raise GitHubAPIError("GitHub commits response is invalid") from exc

        logger.debug("Fetched %d commits for %s", len(commits), self.repo)
        return commits

    async def _read_body(self, params: dict[str, str]) -> list[str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
        }
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            default_encoding="utf-8",
        ) as client:
            async with client.stream(
                "GET", self.commits_url, params=params, headers=headers
            ) as response:
                response.raise_for_status()
                return [chunk async for chunk in response.aiter_text()]
