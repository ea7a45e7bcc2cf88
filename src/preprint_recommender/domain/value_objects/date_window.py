"""Date window value object bounding which preprints are considered recent."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from preprint_recommender.shared.utils.timezone import ensure_aware


class DateWindow(BaseModel):
    """Inclusive, day-aligned time range in the caller's local time zone.

    Attributes:
        start: Local midnight of the first day in the window
        end: Local 23:59:59.999 of the last day in the window
    """

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="Start of the window (inclusive)")
    end: datetime = Field(..., description="End of the window (inclusive)")

    @model_validator(mode="after")
    def validate_order(self) -> "DateWindow":
        """Ensure the window is not inverted."""
        if self.start > self.end:
            raise ValueError(f"Window start {self.start} is after end {self.end}")
        return self

    def contains(self, moment: datetime) -> bool:
        """Check whether ``moment`` falls inside the window, bounds included."""
        return self.start <= ensure_aware(moment) <= self.end
