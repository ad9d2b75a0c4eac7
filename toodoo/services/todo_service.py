"""To-do lifecycle: state changes, persistence, and reminder side effects.

Every operation validates first, persists the state change, then asks the
reminder scheduler to follow. Scheduler failures are logged by the scheduler
and never undo the state change.
"""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from toodoo.database.repository import CategoryRepository, ToDoRepository
from toodoo.exceptions import NotFoundError
from toodoo.models.category import Category
from toodoo.models.factory import create_category, create_todo
from toodoo.models.todo import ToDo
from toodoo.notifications.reminders import ReminderAction, ReminderScheduler
from toodoo.ordering import next_order

logger = logging.getLogger(__name__)


class ToDoService:
    """Category and to-do operations with reminder scheduling."""

    def __init__(self, db: Session, scheduler: ReminderScheduler):
        self.categories = CategoryRepository(db)
        self.todos = ToDoRepository(db)
        self.scheduler = scheduler

    # Categories

    def create_category(self, name: str, color: Optional[str] = None, icon: Optional[str] = None,
                        order: Optional[int] = None) -> Category:
        """Create a category, appended after the existing ones unless order is given."""
        category = create_category(name, color=color, icon=icon)
        if order is None:
            order = next_order(self.categories.get_all())
        category.set_order(order)
        return self.categories.create(category)

    def get_category(self, category_id: str) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    # To-dos

    def get_todo(self, todo_id: str) -> ToDo:
        todo = self.todos.get(todo_id)
        if todo is None:
            raise NotFoundError("ToDo", todo_id)
        return todo

    def create_todo(self, goal: str, category_id: str, remind_at: Optional[datetime] = None) -> ToDo:
        """Create a to-do and schedule its reminder if it has a remind time.

        Raises:
            ValidationError: If goal is blank
            NotFoundError: If the category doesn't exist
        """
        todo = create_todo(goal, category_id, remind_at=remind_at)
        category = self.get_category(category_id)
        created = self.todos.create(todo)
        if created.remind_at is not None:
            self.scheduler.register(created, category)
        return created

    def set_remind_at(self, todo_id: str, remind_at: Optional[datetime]) -> ToDo:
        """Set or clear a to-do's remind time.

        Setting a time replaces any pending reminder (cancel, then register).
        Clearing it cancels the pending reminder.
        """
        todo = self.get_todo(todo_id)
        todo.remind_at = remind_at
        todo = self._save(todo)
        if todo.remind_at is None:
            self.scheduler.cancel(todo)
        else:
            self.scheduler.register(todo, self.get_category(todo.category_id))
        return todo

    def complete(self, todo_id: str) -> ToDo:
        todo = self.get_todo(todo_id)
        if not todo.completed:
            todo.completed = True
            todo.completed_at = datetime.utcnow()
            todo = self._save(todo)
        self.scheduler.remove(todo)
        return todo

    def uncomplete(self, todo_id: str) -> ToDo:
        """Mark a to-do as not done. Its reminder is not re-registered."""
        todo = self.get_todo(todo_id)
        if todo.completed:
            todo.completed = False
            todo.completed_at = None
            todo = self._save(todo)
        return todo

    def trash(self, todo_id: str) -> ToDo:
        todo = self.get_todo(todo_id)
        if not todo.trashed:
            todo.trashed = True
            todo.trashed_at = datetime.utcnow()
            todo = self._save(todo)
        self.scheduler.remove(todo)
        return todo

    def restore(self, todo_id: str) -> ToDo:
        """Move a to-do out of the trash. Its reminder is not re-registered."""
        todo = self.get_todo(todo_id)
        if todo.trashed:
            todo.trashed = False
            todo.trashed_at = None
            todo = self._save(todo)
        return todo

    def valid_todos(self, category_id: str) -> List[ToDo]:
        self.get_category(category_id)
        return self.categories.get_valid_todos(category_id)

    def resync_reminders(self) -> int:
        """Re-register reminders for every active to-do with a remind time.

        Used after the alarm facility lost its pending requests (e.g. on a
        fresh process).

        Returns:
            Number of reminders handed to the scheduler
        """
        count = 0
        categories = {}
        for todo in self.todos.get_with_reminders():
            if todo.category_id not in categories:
                categories[todo.category_id] = self.get_category(todo.category_id)
            if self.scheduler.sync(todo, categories[todo.category_id]) == ReminderAction.REGISTER:
                count += 1
        logger.info(f"Re-registered {count} reminders")
        return count

    def _save(self, todo: ToDo) -> ToDo:
        todo.updated_at = datetime.utcnow()
        return self.todos.update(todo)
