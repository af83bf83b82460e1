import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException

from commits_bot.api.schemas.commands import CommandInfo
from commits_bot.api.schemas.commands import CommandRequest
from commits_bot.api.schemas.commands import CommandResponse
from commits_bot.commands import IncomingMessage
from commits_bot.commands import build_commands
from commits_bot.commands import find_command
from commits_bot.dependencies import get_commit_fetcher
from commits_bot.github_api import CommitFetcher
from commits_bot.github_api import GitHubAPIError


logger = logging.getLogger(__name__)

router = APIRouter()


class BufferedChat:
    """Chat output that keeps sent messages for the HTTP response."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def send_message(self, text: str) -> None:
        self.messages.append(text)


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/commands")
def list_commands(
    fetcher: CommitFetcher = Depends(get_commit_fetcher),
) -> list[CommandInfo]:
    """Return the registered commands with their help text."""

    return [
        CommandInfo(name=command.name, help=command.help, types=list(command.types))
        for command in build_commands(fetcher)
    ]


@router.post("/commands")
async def run_command(
    payload: CommandRequest,
    fetcher: CommitFetcher = Depends(get_commit_fetcher),
) -> CommandResponse:
    """Dispatch a chat message to the matching command and relay its replies."""

    message = IncomingMessage(text=payload.message.strip(), type=payload.type)
    command = find_command(build_commands(fetcher), message)
    if command is None:
        raise HTTPException(status_code=404, detail="no command matches message")

    chat = BufferedChat()
    try:
        await command.action(chat, message)
    except GitHubAPIError as exc:
        logger.warning("Command %s failed: %s", command.name, exc)
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc

    return CommandResponse(command=command.name, messages=chat.messages)
