"""Application services for TooDoo."""

from toodoo.services.todo_service import ToDoService

__all__ = ["ToDoService"]
