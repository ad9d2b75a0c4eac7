"""TooDoo: categories, to-dos, and due reminders."""

__version__ = "0.1.0"
