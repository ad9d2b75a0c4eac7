"""Runtime settings for TooDoo.

Values come from the environment (optionally a local `.env` file). Settings
that tests override are read through functions so changes take effect
without re-importing.
"""

import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

# Database URL - SQLite by default
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./toodoo.db")

DEFAULT_LOCALE = "en"


def is_debug() -> bool:
    return os.getenv("DEBUG", "False").lower() == "true"


def get_locale() -> str:
    """Active locale for string lookups (TOODOO_LOCALE, defaults to English)."""
    return os.getenv("TOODOO_LOCALE", DEFAULT_LOCALE) or DEFAULT_LOCALE


def get_notification_message() -> Optional[str]:
    """User-configured reminder title template, if any.

    The `@` placeholder in the template is replaced by the category name.
    """
    message = os.getenv("TOODOO_NOTIFICATION_MESSAGE")
    if message is None or not message.strip():
        return None
    return message
