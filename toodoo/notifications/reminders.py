"""Reminder scheduling for to-dos.

The scheduler keeps no state of its own: whether a to-do should have a
pending alert is a pure function of its `remind_at`, `completed`, and
`trashed` fields. Scheduling never mutates the to-do or its category; it
only adds or removes requests on the alarm facility, keyed by the to-do's
identifier.

Un-completing or restoring a to-do does not bring its reminder back. Callers
re-register explicitly.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from toodoo.config import get_notification_message
from toodoo.exceptions import RegistrationError
from toodoo.localization import localized
from toodoo.models.category import Category
from toodoo.models.constants import (
    DUE_NOTIFICATION_SOUND,
    REMINDER_TITLE_KEY,
    REMINDER_TITLE_PLACEHOLDER,
)
from toodoo.models.identity import identifier
from toodoo.models.todo import ToDo
from toodoo.notifications.alarm import AlarmFacility, CalendarTrigger, ReminderRequest
from toodoo.notifications.events import LocalNotification

logger = logging.getLogger(__name__)


class ReminderAction(str, Enum):
    """What the alarm facility should hold for a to-do."""
    REGISTER = "register"
    CANCEL = "cancel"
    NONE = "none"


def desired_action(todo: ToDo) -> ReminderAction:
    """Map to-do fields to the registration it should have.

    - completed or trashed -> CANCEL
    - active with remind_at -> REGISTER
    - active without remind_at -> NONE
    """
    if todo.completed or todo.trashed:
        return ReminderAction.CANCEL
    if todo.remind_at is not None:
        return ReminderAction.REGISTER
    return ReminderAction.NONE


def build_trigger(remind_at: datetime) -> CalendarTrigger:
    """Calendar fields (minute through year) of remind_at in local time.

    Timezone-aware datetimes are converted to local time; naive ones are
    taken as already local.
    """
    if remind_at.tzinfo is not None:
        remind_at = remind_at.astimezone()
    return CalendarTrigger(
        minute=remind_at.minute,
        hour=remind_at.hour,
        day=remind_at.day,
        month=remind_at.month,
        year=remind_at.year,
    )


def reminder_title(category: Category) -> str:
    template = get_notification_message() or localized(REMINDER_TITLE_KEY)
    return template.replace(REMINDER_TITLE_PLACEHOLDER, category.name)


def build_request(todo: ToDo, category: Category) -> ReminderRequest:
    """Build the alert payload for a to-do with a remind time.

    Raises:
        ValueError: If the to-do has no remind_at or belongs to another category
    """
    if todo.remind_at is None:
        raise ValueError(f"ToDo {todo.id} has no remind time")
    if todo.category_id != category.id:
        raise ValueError(f"ToDo {todo.id} does not belong to category {category.id}")
    return ReminderRequest(
        identifier=identifier(todo),
        trigger=build_trigger(todo.remind_at),
        title=reminder_title(category),
        body=todo.goal,
        sound=DUE_NOTIFICATION_SOUND,
        category=LocalNotification.TODO_DUE.value,
    )


class ReminderScheduler:
    """Registers and cancels to-do reminders on an alarm facility."""

    def __init__(
        self,
        facility: AlarmFacility,
        on_error: Optional[Callable[[RegistrationError], None]] = None,
    ):
        """Initialize scheduler.

        Args:
            facility: Where alerts are scheduled
            on_error: Called with a RegistrationError when the facility
                      rejects a request. Errors are logged either way.
        """
        self.facility = facility
        self.on_error = on_error

    def register(self, todo: ToDo, category: Category) -> bool:
        """Schedule the to-do's reminder, replacing any pending one.

        The existing request is always cancelled first; a pending request is
        never modified in place. Completion is handled asynchronously and
        does not touch the to-do.

        Returns:
            True if a request was handed to the facility, False if the to-do
            is not reminder-eligible
        """
        if not todo.is_reminder_eligible:
            logger.debug(f"ToDo {todo.id} not eligible for a reminder ({todo.status.value})")
            return False

        request = build_request(todo, category)
        self.cancel(todo)
        try:
            self.facility.add(request, self._completion_for(request.identifier))
        except Exception as e:
            self._report(RegistrationError(request.identifier, f"{type(e).__name__}: {str(e)}"))
        return True

    def remove(self, todo: ToDo) -> bool:
        """Cancel the reminder of a completed or trashed to-do.

        Returns:
            True if a cancellation was requested
        """
        if not (todo.completed or todo.trashed):
            return False
        self.cancel(todo)
        return True

    def cancel(self, todo: ToDo) -> None:
        """Cancel any pending reminder for the to-do. Safe to repeat."""
        key = identifier(todo)
        try:
            self.facility.remove_pending([key])
        except Exception as e:
            logger.warning(f"Failed to cancel reminder {key}: {type(e).__name__}: {str(e)}")

    def sync(self, todo: ToDo, category: Category) -> ReminderAction:
        """Bring the facility in line with the to-do's current fields."""
        action = desired_action(todo)
        if action == ReminderAction.REGISTER:
            self.register(todo, category)
        elif action == ReminderAction.CANCEL:
            self.cancel(todo)
        return action

    def _completion_for(self, key: str) -> Callable[[Optional[Exception]], None]:
        def completion(error: Optional[Exception]) -> None:
            if error is None:
                logger.debug(f"Registered reminder {key}")
                return
            self._report(RegistrationError(key, f"{type(error).__name__}: {str(error)}"))
        return completion

    def _report(self, error: RegistrationError) -> None:
        logger.warning(str(error))
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception as e:
            logger.error(f"Reminder error hook failed: {type(e).__name__}: {str(e)}")
