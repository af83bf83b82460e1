import logging
from collections.abc import Sequence
from datetime import date
from datetime import datetime
from datetime import timedelta
from datetime import UTC

from commits_bot.github_api import CommitFetcher
from commits_bot.models import CommitRecord
from commits_bot.models import Week


logger = logging.getLogger(__name__)

RECENT_COMMITS_LIMIT = 3
MIN_SUMMARY_WEEKS = 1
MAX_SUMMARY_WEEKS = 5
DAYS_PER_WEEK = 7
EMPTY_DAY_CELL = " _ "


def render_recent_commits(commits: Sequence[CommitRecord]) -> str:
    """Format up to three commits as a numbered chat report."""

    lines = [
        f"{position}. {commit.local_day.isoformat()} - {commit.message}"
        for position, commit in enumerate(commits[:RECENT_COMMITS_LIMIT], start=1)
    ]
    if not lines:
        return "No commits!"

    return f"Last {RECENT_COMMITS_LIMIT} commits:\n" + "\n".join(lines)


async def recent_commits_report(fetcher: CommitFetcher) -> str:
    commits = await fetcher.fetch()
    return render_recent_commits(commits)


def clamp_weeks(requested: int) -> int:
    """Keep a requested week count inside the supported summary range."""

    return max(MIN_SUMMARY_WEEKS, min(MAX_SUMMARY_WEEKS, requested))


def build_weeks(today: date, number_of_weeks: int) -> list[Week]:
    """Split the days ending today into consecutive weeks, newest week first."""

    weeks: list[Week] = []
    for offset in range(number_of_weeks):
        end_date = today - timedelta(days=offset * DAYS_PER_WEEK)
        start_date = end_date - timedelta(days=DAYS_PER_WEEK - 1)
        days = tuple(start_date + timedelta(days=day) for day in range(DAYS_PER_WEEK))
        weeks.append(
            Week(index=offset + 1, start_date=start_date, end_date=end_date, days=days)
        )
    return weeks


def summary_since(now: datetime, number_of_weeks: int) -> str:
    """Return the `since` filter covering the whole summary window."""

    start = now - timedelta(weeks=number_of_weeks)
    return start.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def count_commits_by_day(
    weeks: Sequence[Week], commits: Sequence[CommitRecord]
) -> dict[date, int]:
    """Count commits per local author day for every day in the window.

    Commits whose day falls outside the window are left out.
    """

    counts = {day: 0 for week in weeks for day in week.days}
    for commit in commits:
        day = commit.local_day
        if day not in counts:
            logger.debug("Skipping commit outside summary window on %s", day)
            continue
        counts[day] += 1
    return counts


def render_day_cell(count: int) -> str:
    return EMPTY_DAY_CELL if count == 0 else f" {count} "


def render_weekly_summary(weeks: Sequence[Week], counts: dict[date, int]) -> str:
    week_word = "week" if len(weeks) == 1 else "weeks"
    lines = [
        f"{week.label}: " + "".join(render_day_cell(counts[day]) for day in week.days)
        for week in weeks
    ]
    return f"Commits for the last {len(weeks)} {week_word}:\n" + "\n".join(lines)


async def weekly_summary_report(
    fetcher: CommitFetcher,
    number_of_weeks: int,
    now: datetime | None = None,
) -> str:
    """Fetch commits for the last weeks and render the per-day graph."""

    number_of_weeks = clamp_weeks(number_of_weeks)
    if now is None:
        now = datetime.now().astimezone()

    weeks = build_weeks(now.astimezone().date(), number_of_weeks)
    commits = await fetcher.fetch({"since": summary_since(now, number_of_weeks)})
    counts = count_commits_by_day(weeks, commits)
    return render_weekly_summary(weeks, counts)
