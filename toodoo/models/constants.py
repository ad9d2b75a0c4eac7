"""Constants for TooDoo.

Palette, default seed values, and reminder payload settings live here so the
models, seeding, and scheduler agree on them.
"""

# Category color palette (six-digit hex, no leading '#'). The first entry is
# the fallback color for categories without one.
DEFAULT_COLORS = [
    "EE6352",
    "4F7CAC",
    "59CD90",
    "FAC05E",
    "8E6C8A",
    "3FA7D6",
    "F79D84",
    "5B5F97",
    "2EC4B6",
    "A3A3A3",
]

# Default seeded categories: (localization key, palette index, icon)
DEFAULT_PERSONAL_CATEGORY = ("setup.default-category", 0, "progress")
DEFAULT_WORK_CATEGORY = ("setup.default-category-alt", 1, "briefcase")
DEFAULT_TODO_GOAL_KEY = "Get started"

# Icon asset naming
ICON_ASSET_PREFIX = "category-icon-"

# Reminder payload
REMINDER_TITLE_KEY = "notifications.todo.due.title"
REMINDER_TITLE_PLACEHOLDER = "@"
DUE_NOTIFICATION_SOUND = "due-notification.caf"
