"""Typed application events and an explicit publish/subscribe bus.

Events form a closed set; there is no string-keyed global registry. Bus
instances are created by the application and passed to whoever needs them.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class AppEvent(str, Enum):
    """Named application events."""
    # User
    USER_HAS_SETUP = "user-has-setup"
    USER_NAME_CHANGED = "user-name-changed"
    USER_AVATAR_CHANGED = "user-avatar-changed"
    USER_AUTHENTICATED = "user-authenticated"
    USER_AUTHENTICATION_REDIRECT = "user-authentication-redirect"
    # Show page
    SHOW_ADD_CATEGORY = "show-add-category"
    SHOW_ADD_TODO = "show-add-todo"
    SHOW_SETTINGS = "show-settings"
    # Status change
    DRAGGED_WHILE_ADDING_TODO = "dragged-while-adding-todo"
    UPDATE_STATUS_BAR = "update-status-bar"
    # Settings
    SETTING_MOTION_EFFECTS_CHANGED = "setting-motion-effects-changed"
    SETTING_THEME_CHANGED = "setting-theme-changed"
    SETTING_LOCALE_CHANGED = "setting-locale-changed"
    SETTING_APP_ICON_CHANGED = "setting-app-icon-changed"
    SETTING_PASSCODE_SETUP = "setting-passcode-setup"


class LocalNotification(str, Enum):
    """Notification categories used to group scheduled alerts."""
    TODO_DUE = "TODO_DUE"


Handler = Callable[[AppEvent, Any], None]


class EventBus:
    """In-process publish/subscribe for AppEvent."""

    def __init__(self):
        self._handlers: Dict[AppEvent, List[Handler]] = {}

    def listen(self, event: AppEvent, handler: Handler) -> None:
        """Subscribe a handler to an event. Subscribing twice is a no-op."""
        event = AppEvent(event)
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def send(self, event: AppEvent, payload: Any = None) -> int:
        """Deliver an event to its handlers in subscription order.

        A failing handler is logged and does not stop delivery to the rest.

        Returns:
            Number of handlers that ran without raising
        """
        event = AppEvent(event)
        delivered = 0
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(event, payload)
                delivered += 1
            except Exception as e:
                logger.error(f"Handler for {event.value} failed: {type(e).__name__}: {str(e)}")
        return delivered

    def remove(self, handler: Handler, event: Optional[AppEvent] = None) -> None:
        """Unsubscribe a handler from one event, or from all events."""
        events = [AppEvent(event)] if event is not None else list(self._handlers)
        for key in events:
            handlers = self._handlers.get(key, [])
            if handler in handlers:
                handlers.remove(handler)

    def handlers_for(self, event: AppEvent) -> List[Handler]:
        return list(self._handlers.get(AppEvent(event), []))
