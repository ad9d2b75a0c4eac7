"""Localized string lookup for TooDoo.

Keys follow the app's dotted naming (e.g. `setup.default-category`). Lookups
fall back to English, then to the key itself.
"""

import logging
from typing import Dict, Optional

from toodoo.config import DEFAULT_LOCALE, get_locale

logger = logging.getLogger(__name__)


STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "setup.default-category": "Personal",
        "setup.default-category-alt": "Work",
        "Get started": "Get started",
        "notifications.todo.due.title": "@ - To-do is due",
    },
    "zh-Hans": {
        "setup.default-category": "个人",
        "setup.default-category-alt": "工作",
        "Get started": "开始使用",
        "notifications.todo.due.title": "@ - 待办事项到期",
    },
}


def localized(key: str, locale: Optional[str] = None) -> str:
    """Resolve a string key for the given (or configured) locale."""
    locale = locale or get_locale()
    table = STRINGS.get(locale)
    if table is None:
        logger.debug(f"Unknown locale {locale}, falling back to {DEFAULT_LOCALE}")
        table = STRINGS[DEFAULT_LOCALE]
    if key in table:
        return table[key]
    return STRINGS[DEFAULT_LOCALE].get(key, key)
