"""
Payload sent to the Analytics Service when a short link is followed.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ClickEvent(BaseModel):
    short_code: str = Field(..., description="The short code that was followed")
    clicked_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the redirect was served"
    )

    def to_payload(self) -> dict:
        """JSON body with an RFC3339 timestamp"""
        return {
            "short_code": self.short_code,
            "clicked_at": self.clicked_at.isoformat(timespec="seconds").replace("+00:00", "Z"),
        }
