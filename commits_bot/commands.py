import logging
import re
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel

from commits_bot.github_api import CommitFetcher
from commits_bot.services.report_service import recent_commits_report
from commits_bot.services.report_service import weekly_summary_report


logger = logging.getLogger(__name__)

COMMITS_PATTERN = re.compile(r"(!|/)commits", re.ASCII)
COMMITS_SUMMARY_PATTERN = re.compile(r"(!|/)commits\ssummary\s(\d)", re.ASCII)


class ChatOutput(Protocol):
    def send_message(self, text: str) -> None: ...


class IncomingMessage(BaseModel):
    """Chat message delivered to the bot by the chat framework."""

    text: str
    type: str = "message"


CommandAction = Callable[[ChatOutput, IncomingMessage], Awaitable[None]]


@dataclass(frozen=True)
class Command:
    """Chat command entry as registered with the chat framework."""

    name: str
    help: str
    types: tuple[str, ...]
    pattern: re.Pattern[str]
    action: CommandAction

    def matches(self, message: IncomingMessage) -> bool:
        if message.type not in self.types:
            return False
        return self.pattern.fullmatch(message.text) is not None


def build_commands(fetcher: CommitFetcher) -> list[Command]:
    """Create the commit commands bound to one repository fetcher."""

    async def list_recent_commits(chat: ChatOutput, message: IncomingMessage) -> None:
        chat.send_message(await recent_commits_report(fetcher))

    async def summarize_commits(chat: ChatOutput, message: IncomingMessage) -> None:
        match = COMMITS_SUMMARY_PATTERN.fullmatch(message.text)
        if match is None:
            raise ValueError(f"not a summary command: {message.text!r}")
        chat.send_message(await weekly_summary_report(fetcher, int(match.group(2))))

    return [
        Command(
            name="!commits",
            help="List 3 latest commits for the bot's repository.",
            types=("message",),
            pattern=COMMITS_PATTERN,
            action=list_recent_commits,
        ),
        Command(
            name="!commits summary {X}",
            help="Draw graph of commits over last X weeks.",
            types=("message",),
            pattern=COMMITS_SUMMARY_PATTERN,
            action=summarize_commits,
        ),
    ]


def find_command(
    commands: Iterable[Command], message: IncomingMessage
) -> Command | None:
    for command in commands:
        if command.matches(message):
            logger.info("Message matched command %s", command.name)
            return command
    return None
