from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class CommitRecord(BaseModel):
    """Commit fields the reports need, taken from one GitHub API item."""

    model_config = ConfigDict(frozen=True)

    author_date: datetime
    message: str

    @property
    def local_day(self) -> date:
        """Author date as a calendar day in the server's local time zone."""

        return self.author_date.astimezone().date()


class Week(BaseModel):
    """Seven consecutive days of the summary window, oldest day first."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    start_date: date
    end_date: date
    days: tuple[date, ...] = Field(min_length=7, max_length=7)

    @property
    def label(self) -> str:
        return f"{self.start_date:%m/%d} - {self.end_date:%m/%d}"
