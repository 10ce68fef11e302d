import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from elevenfortyfour.config.constants import (
    DEFAULT_EMAIL_SUBJECT,
    DEFAULT_EMAIL_TEMPLATE,
    DEFAULT_SITE_URL,
    DEFAULT_WAITLIST_TABLE,
    EMAIL_TEMPLATES,
)
from elevenfortyfour.core.exceptions import ConfigurationError


def _required(name: str, *fallbacks: str) -> str:
    for key in (name, *fallbacks):
        value = os.getenv(key)
        if value and value.strip():
            return value.strip()
    raise ConfigurationError(f"Missing {name} environment variable")


def cors_origins_from_env() -> List[str]:
    """CORS_ORIGINS as a comma-separated list, else the site URL and local dev servers."""
    raw_origins = os.getenv("CORS_ORIGINS", "")
    origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    if origins:
        return origins
    site_url = os.getenv("SITE_URL", DEFAULT_SITE_URL).rstrip("/")
    return [
        site_url,
        "http://localhost:4321",
        "http://127.0.0.1:4321",
        "http://localhost:3000",
    ]


class Settings(BaseModel):
    supabase_url: str
    supabase_key: str
    resend_api_key: Optional[str] = None
    email_from: str
    email_subject: str = DEFAULT_EMAIL_SUBJECT
    email_template: str = DEFAULT_EMAIL_TEMPLATE
    waitlist_table: str = DEFAULT_WAITLIST_TABLE
    site_url: str = DEFAULT_SITE_URL

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Build settings from the process environment.

        A local .env file is loaded first when present. The Resend key is read
        here but only enforced when the notifier is constructed, so the
        connection check script can run without it.

        Raises:
            ConfigurationError: If a required variable is missing or the
                template identifier is unknown.
        """
        if load_env_file:
            load_dotenv()

        site_url = os.getenv("SITE_URL", DEFAULT_SITE_URL).rstrip("/")
        template = os.getenv("WAITLIST_EMAIL_TEMPLATE", DEFAULT_EMAIL_TEMPLATE).strip()
        if template not in EMAIL_TEMPLATES:
            raise ConfigurationError(
                f"Unknown WAITLIST_EMAIL_TEMPLATE '{template}', expected one of {sorted(EMAIL_TEMPLATES)}"
            )

        return cls(
            supabase_url=_required("SUPABASE_URL"),
            supabase_key=_required("SUPABASE_KEY", "SUPABASE_ANON_KEY"),
            resend_api_key=os.getenv("RESEND_API_KEY"),
            email_from=_required("WAITLIST_EMAIL_FROM"),
            email_subject=os.getenv("WAITLIST_EMAIL_SUBJECT", DEFAULT_EMAIL_SUBJECT),
            email_template=template,
            waitlist_table=os.getenv("WAITLIST_TABLE", DEFAULT_WAITLIST_TABLE),
            site_url=site_url,
        )
