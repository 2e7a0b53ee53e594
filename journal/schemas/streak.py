from typing import Optional
from pydantic import BaseModel, Field


class StreakResponse(BaseModel):
    current: int = Field(description="Consecutive UTC days with at least one log.")
    longest: int = Field(description="Highest streak ever reached.")
    last_log_date: Optional[str] = Field(
        default=None, description="UTC timestamp of the log that last moved the streak."
    )
