"""One-shot alarm facility used for to-do reminders.

`AlarmFacility` is the boundary to whatever actually delivers scheduled
alerts. Requests are keyed purely by identifier. `add` reports completion
through a callback instead of returning a result, so callers never wait on
it.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class CalendarTrigger(BaseModel):
    """Calendar fields an alert fires on (local time, non-repeating)."""

    minute: int = Field(..., ge=0, le=59)
    hour: int = Field(..., ge=0, le=23)
    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., description="Four-digit year")
    repeats: bool = Field(False, description="Always False for to-do reminders")

    def to_datetime(self) -> datetime:
        """Naive local datetime this trigger matches."""
        return datetime(self.year, self.month, self.day, self.hour, self.minute)


class ReminderRequest(BaseModel):
    """A scheduled alert for one to-do."""

    identifier: str = Field(..., description="Alarm key (the to-do identifier)")
    trigger: CalendarTrigger
    title: str
    body: str
    sound: str = Field(..., description="Sound asset file name")
    category: str = Field(..., description="Notification category used for grouping")


Completion = Callable[[Optional[Exception]], None]


class AlarmFacility:
    """Boundary to the scheduled-alert service."""

    def add(self, request: ReminderRequest, completion: Optional[Completion] = None) -> None:
        """Schedule a request; report the outcome through `completion`."""
        raise NotImplementedError

    def remove_pending(self, identifiers: Iterable[str]) -> None:
        """Drop pending requests. Unknown identifiers are ignored."""
        raise NotImplementedError


class InMemoryAlarmFacility(AlarmFacility):
    """Alarm facility that keeps pending requests in a dict.

    Adding a request with an identifier that is already pending replaces it.
    Set `fail_with` to make `add` report that error instead of scheduling.
    """

    def __init__(self):
        self._pending: Dict[str, ReminderRequest] = {}
        self.fail_with: Optional[Exception] = None

    def add(self, request: ReminderRequest, completion: Optional[Completion] = None) -> None:
        error = self.fail_with
        if error is None:
            self._pending[request.identifier] = request
            logger.debug(f"Scheduled alert {request.identifier} at {request.trigger.to_datetime().isoformat()}")
        if completion is not None:
            completion(error)

    def remove_pending(self, identifiers: Iterable[str]) -> None:
        for identifier in identifiers:
            if self._pending.pop(identifier, None) is not None:
                logger.debug(f"Removed alert {identifier}")

    def pending(self) -> List[ReminderRequest]:
        return list(self._pending.values())

    def pending_identifiers(self) -> List[str]:
        return list(self._pending)

    def get(self, identifier: str) -> Optional[ReminderRequest]:
        return self._pending.get(identifier)
