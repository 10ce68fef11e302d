from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from elevenfortyfour.api.main import app
from elevenfortyfour.api.routes.waitlist_routes import get_waitlist_service
from elevenfortyfour.config.constants import UNIQUE_VIOLATION_CODE
from elevenfortyfour.core.exceptions import DuplicateEmailError
from elevenfortyfour.core.models.waitlist import EmailMessage, WaitlistEntry
from elevenfortyfour.core.services.waitlist_service import WaitlistService
from elevenfortyfour.core.utils.email_utils import ConfirmationEmailTemplate

SENDER = "Admin @ 11:34 <admin@1134.world>"


class FakeStore:
    """In-memory waitlist table with a unique email constraint."""

    def __init__(self, error: Optional[Exception] = None):
        self.rows: List[Dict[str, Any]] = []
        self.error = error
        self.insert_calls = 0

    async def insert(self, entry: WaitlistEntry) -> List[Dict[str, Any]]:
        self.insert_calls += 1
        if self.error is not None:
            raise self.error
        if any(row["email"] == entry.email for row in self.rows):
            raise DuplicateEmailError("duplicate key value violates unique constraint", code=UNIQUE_VIOLATION_CODE)
        row = {"id": len(self.rows) + 1, **entry.to_row()}
        self.rows.append(row)
        return [row]


class FakeNotifier:
    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[EmailMessage] = []
        self.error = error

    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        if self.error is not None:
            raise self.error
        self.sent.append(message)
        return {"id": f"email-{len(self.sent)}"}

    async def close(self):
        pass


@pytest.fixture
def template():
    return ConfirmationEmailTemplate("plain", sender=SENDER, subject="You're on the list")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def service(store, notifier, template):
    return WaitlistService(store, notifier, template)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_waitlist_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
