from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class WaitlistEntry(BaseModel):
    email: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "created_at": "2026-01-01T00:00:00+00:00"
            }
        }

    def to_row(self) -> Dict[str, str]:
        """Row payload for the waitlist table, timestamp as ISO-8601."""
        return {
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }


class EmailMessage(BaseModel):
    sender: str
    to: str
    subject: str
    html: str
    text: Optional[str] = None

    def to_payload(self) -> Dict[str, str]:
        payload = {
            "from": self.sender,
            "to": self.to,
            "subject": self.subject,
            "html": self.html,
        }
        if self.text:
            payload["text"] = self.text
        return payload


class EnrollmentResult(BaseModel):
    entry: WaitlistEntry
    rows: List[Dict[str, Any]]
    notified: bool = False


class ConnectionReport(BaseModel):
    ok: bool
    code: Optional[str] = None
    message: Optional[str] = None
    details: Optional[str] = None
