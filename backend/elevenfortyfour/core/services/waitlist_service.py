import logging
import re
from typing import Any

from elevenfortyfour.config.constants import EMAIL_PATTERN
from elevenfortyfour.core.exceptions import InvalidEmailError
from elevenfortyfour.core.models.waitlist import EnrollmentResult, WaitlistEntry
from elevenfortyfour.core.services.notifier import ResendNotifier
from elevenfortyfour.core.services.waitlist_store import WaitlistStore
from elevenfortyfour.core.utils.email_utils import ConfirmationEmailTemplate

logger = logging.getLogger("elevenfortyfour.waitlist")

EMAIL_RE = re.compile(EMAIL_PATTERN)


def extract_email(payload: Any) -> str:
    """Pulls a non-empty string ``email`` out of a decoded JSON body."""
    email = payload.get("email") if isinstance(payload, dict) else None
    if not email or not isinstance(email, str):
        raise InvalidEmailError(InvalidEmailError.EMAIL_REQUIRED)
    return email


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> str:
    if not EMAIL_RE.match(email):
        raise InvalidEmailError(InvalidEmailError.INVALID_FORMAT)
    return email


class WaitlistService:
    """Enrolls an address on the waitlist and sends the confirmation email.

    Store errors propagate to the caller. Notifier errors are logged and
    dropped because the entry already exists by then.
    """

    def __init__(self, store: WaitlistStore, notifier: ResendNotifier, template: ConfirmationEmailTemplate):
        self.store = store
        self.notifier = notifier
        self.template = template

    async def join(self, payload: Any) -> EnrollmentResult:
        email = validate_email(normalize_email(extract_email(payload)))

        entry = WaitlistEntry(email=email)
        rows = await self.store.insert(entry)
        logger.info(f"Added {email} to the waitlist")

        notified = await self.send_confirmation(email)
        return EnrollmentResult(entry=entry, rows=rows, notified=notified)

    async def send_confirmation(self, email: str) -> bool:
        try:
            message = self.template.render(email)
            result = await self.notifier.send(message) or {}
            logger.info(f"Confirmation email sent to {email} (id={result.get('id')})")
        except Exception as e:
            logger.error(f"Failed to send confirmation email to {email}: {e}", exc_info=True)
            return False
        return True
