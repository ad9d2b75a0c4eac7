"""Reminders, alarm facility, and application events for TooDoo."""

from toodoo.notifications.alarm import AlarmFacility, InMemoryAlarmFacility, CalendarTrigger, ReminderRequest
from toodoo.notifications.events import AppEvent, EventBus, LocalNotification
from toodoo.notifications.reminders import ReminderAction, ReminderScheduler, desired_action, build_trigger, build_request

__all__ = [
    "AlarmFacility",
    "InMemoryAlarmFacility",
    "CalendarTrigger",
    "ReminderRequest",
    "AppEvent",
    "EventBus",
    "LocalNotification",
    "ReminderAction",
    "ReminderScheduler",
    "desired_action",
    "build_trigger",
    "build_request",
]
