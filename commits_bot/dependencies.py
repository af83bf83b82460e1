from fastapi import HTTPException

from commits_bot.github_api import CommitFetcher
from commits_bot.settings import Settings


def get_commit_fetcher() -> CommitFetcher:
    """Provide a fetcher for the configured repository."""

    settings = Settings()
    if not settings.github_repo:
        raise HTTPException(status_code=500, detail="GITHUB_REPO is not set")
    return CommitFetcher.from_settings(settings)
