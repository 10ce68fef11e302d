import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from elevenfortyfour.config.constants import DEFAULT_WAITLIST_TABLE, UNIQUE_VIOLATION_CODE
from elevenfortyfour.core.exceptions import DuplicateEmailError, WaitlistStoreError
from elevenfortyfour.core.models.waitlist import ConnectionReport, WaitlistEntry

logger = logging.getLogger(__name__)


class WaitlistStore:
    """Waitlist table on the hosted Supabase backend.

    The table owns uniqueness of ``email``; this class only translates its
    errors into domain exceptions.
    """

    def __init__(self, client: AsyncClient, table: str = DEFAULT_WAITLIST_TABLE):
        self.client = client
        self.table = table

    @classmethod
    async def connect(cls, url: str, key: str, table: str = DEFAULT_WAITLIST_TABLE) -> "WaitlistStore":
        client = await acreate_client(url, key)
        logger.info(f"Supabase client created for table '{table}'")
        return cls(client, table)

    async def insert(self, entry: WaitlistEntry) -> List[Dict[str, Any]]:
        """
        Insert one entry and return the inserted rows.

        Raises:
            DuplicateEmailError: If the email is already in the table.
            WaitlistStoreError: For any other API or transport failure.
        """
        try:
            response = await self.client.table(self.table).insert([entry.to_row()]).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION_CODE:
                raise DuplicateEmailError(e.message or "duplicate key", code=e.code, details=_as_text(e.details))
            raise WaitlistStoreError(e.message or "Supabase API error", code=e.code, details=_as_text(e.details))
        except httpx.HTTPError as e:
            raise WaitlistStoreError(f"Supabase request failed: {e}")
        return response.data or []

    async def check_connection(self) -> ConnectionReport:
        try:
            await self.client.table(self.table).select("count").limit(1).execute()
        except APIError as e:
            return ConnectionReport(ok=False, code=e.code, message=e.message, details=_as_text(e.details))
        except httpx.HTTPError as e:
            return ConnectionReport(ok=False, message=str(e))
        return ConnectionReport(ok=True)


def _as_text(value: Optional[Any]) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
