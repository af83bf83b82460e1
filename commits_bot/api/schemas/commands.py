from pydantic import BaseModel
from pydantic import Field


class CommandRequest(BaseModel):
    """Chat message forwarded by the chat framework."""

    message: str = Field(min_length=1)
    type: str = "message"


class CommandResponse(BaseModel):
    """Messages the matched command sent back to the chat."""

    command: str
    messages: list[str]


class CommandInfo(BaseModel):
    name: str
    help: str
    types: list[str]
