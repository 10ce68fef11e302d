from typing import Dict, Literal

# Postgres error codes surfaced by the hosted store
UNIQUE_VIOLATION_CODE = "23505"
UNDEFINED_TABLE_CODE = "42P01"
JWT_INVALID_CODE = "PGRST301"

# Email address shape accepted by the waitlist form
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

RESEND_API_URL = "https://api.resend.com/emails"

DEFAULT_SITE_URL = "https://1134.world"
DEFAULT_WAITLIST_TABLE = "waitlist"
DEFAULT_EMAIL_SUBJECT = "You're on the list"

TemplateVariantLiteral = Literal["inline_logo", "hosted_logo", "plain"]
DEFAULT_EMAIL_TEMPLATE: TemplateVariantLiteral = "inline_logo"

EMAIL_TEMPLATES: Dict[str, Dict[str, str]] = {
    "inline_logo": {
        "html": "waitlist/confirmation.html",
        "text": "waitlist/confirmation.txt",
        "logo": "inline",  # Logo embedded as a base64 data URI
    },
    "hosted_logo": {
        "html": "waitlist/confirmation.html",
        "text": "waitlist/confirmation.txt",
        "logo": "hosted",  # Logo served from SITE_URL
    },
    "plain": {
        "html": "waitlist/plain.html",
        "text": "waitlist/confirmation.txt",
        "logo": "none",
    },
}

# Response bodies returned by POST /api/subscribe
SUCCESS_MESSAGE = "Successfully joined the waitlist! Check your email for confirmation."
DUPLICATE_MESSAGE = "This email is already on the waitlist"
STORE_FAILURE_MESSAGE = "Failed to join waitlist. Please try again."
INTERNAL_ERROR_MESSAGE = "Internal server error"
