import logging
from typing import Any, Dict, Optional

import httpx

from elevenfortyfour.config.constants import RESEND_API_URL
from elevenfortyfour.core.exceptions import ConfigurationError, NotificationError
from elevenfortyfour.core.models.waitlist import EmailMessage

logger = logging.getLogger(__name__)


class ResendNotifier:
    """Sends transactional email through the Resend HTTP API.

    One ``httpx.AsyncClient`` is kept for the life of the process and shared
    between requests.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = RESEND_API_URL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ConfigurationError("Missing RESEND_API_KEY environment variable")
        self.api_url = api_url
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json"
        }
        self._client = client or httpx.AsyncClient()

    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        """
        Sends one email.

        Args:
            message (EmailMessage): Sender, recipient, subject and bodies.

        Returns:
            dict: JSON response from the Resend API (contains the email ``id``).

        Raises:
            NotificationError: If the request fails or Resend rejects it.
        """
        try:
            response = await self._client.post(self.api_url, json=message.to_payload(), headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"Resend rejected email to {message.to}: {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise NotificationError(f"Resend request failed for {message.to}: {e}") from e
        return response.json()

    async def close(self):
        await self._client.aclose()
