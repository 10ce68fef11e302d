import base64
import os
from datetime import datetime
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from elevenfortyfour.config.constants import DEFAULT_SITE_URL, EMAIL_TEMPLATES
from elevenfortyfour.core.exceptions import ConfigurationError
from elevenfortyfour.core.models.waitlist import EmailMessage

# Set up Jinja2 environment to load templates from the templates directory.
TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), 'templates')
LOGO_PATH = os.path.join(TEMPLATES_DIR, 'assets', 'logo.png')
jinja_env = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=True)
text_env = Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=False)

SITE_NAME = "11:34"
SIGNATURE = "Admin @ 11:34"


def load_inline_logo() -> str:
    """Returns the bundled logo as a base64 data URI."""
    with open(LOGO_PATH, 'rb') as f:
        encoded = base64.b64encode(f.read()).decode('ascii')
    return f"data:image/png;base64,{encoded}"


def resolve_logo_src(mode: str, site_url: str) -> Optional[str]:
    if mode == "inline":
        return load_inline_logo()
    if mode == "hosted":
        return f"{site_url.rstrip('/')}/logo.png"
    return None


class ConfirmationEmailTemplate:
    """
    Waitlist confirmation email selected by template identifier.

    The logo source is resolved once at construction, so a missing asset or an
    unknown identifier fails at startup rather than on the first signup.
    """

    def __init__(self, template_id: str, sender: str, subject: str, site_url: str = DEFAULT_SITE_URL):
        if template_id not in EMAIL_TEMPLATES:
            raise ConfigurationError(f"Unknown email template '{template_id}'")
        if not sender:
            raise ConfigurationError("Missing WAITLIST_EMAIL_FROM environment variable")

        variant = EMAIL_TEMPLATES[template_id]
        self.template_id = template_id
        self.sender = sender
        self.subject = subject
        self.html_template = jinja_env.get_template(variant["html"])
        self.text_template = text_env.get_template(variant["text"])
        try:
            self.logo_src = resolve_logo_src(variant["logo"], site_url)
        except OSError as e:
            raise ConfigurationError(f"Email logo asset not readable: {e}") from e

    def render(self, to_email: str, current_year: Optional[int] = None) -> EmailMessage:
        """
        Renders the confirmation for one recipient.

        Args:
            to_email (str): Normalized recipient address.
            current_year (int, optional): Year for the footer. Defaults to now.

        Returns:
            EmailMessage: Ready to hand to the notifier.
        """
        context = {
            "logo_src": self.logo_src,
            "site_name": SITE_NAME,
            "signature": SIGNATURE,
            "current_year": current_year or datetime.now().year,
        }
        return EmailMessage(
            sender=self.sender,
            to=to_email,
            subject=self.subject,
            html=self.html_template.render(**context),
            text=self.text_template.render(**context),
        )
