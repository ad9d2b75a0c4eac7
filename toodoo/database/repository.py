"""Repository layer for database operations."""

import logging
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from toodoo.models.category import Category
from toodoo.models.todo import ToDo
from toodoo.database.models import CategoryDB, ToDoDB
from toodoo.ordering import SortDescriptor, default_ordering, order_by_clauses, reorder

logger = logging.getLogger(__name__)


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, category: Category) -> Category:
        """Create a new category."""
        try:
            category_db = CategoryDB.from_pydantic(category)
            self.db.add(category_db)
            self.db.commit()
            self.db.refresh(category_db)
            logger.debug(f"Created category {category.id}: {category.name[:50]}")
            return category_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create category {category.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        category_db = self.db.query(CategoryDB).filter(CategoryDB.id == category_id).first()
        return category_db.to_pydantic() if category_db else None

    def get_all(
        self,
        sort_descriptors: Optional[Sequence[SortDescriptor]] = None,
        limit: Optional[int] = None,
    ) -> List[Category]:
        """Get categories, sorted by the given descriptors (default ordering if omitted)."""
        descriptors = sort_descriptors if sort_descriptors is not None else default_ordering()
        query = self.db.query(CategoryDB).order_by(*order_by_clauses(CategoryDB, descriptors))
        if limit is not None:
            query = query.limit(limit)
        return [category_db.to_pydantic() for category_db in query.all()]

    def get_default(self) -> Optional[Category]:
        """The category with the smallest order, or None if there are no categories."""
        categories = self.get_all(default_ordering(), limit=1)
        return categories[0] if categories else None

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        category_db = self.db.query(CategoryDB).filter(CategoryDB.id == category.id).first()
        if not category_db:
            raise ValueError(f"Category {category.id} not found")

        category_db.name = category.name
        category_db.color = category.color
        category_db.icon = category.icon
        category_db.order = category.order

        try:
            self.db.commit()
            self.db.refresh(category_db)
            logger.debug(f"Updated category {category.id}: {category.name[:50]}")
            return category_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update category {category.id}: {type(e).__name__}: {str(e)}")
            raise

    def set_order(self, category_id: str, position: int) -> Optional[Category]:
        """Set one category's position. Other categories are left as they are."""
        category = self.get(category_id)
        if category is None:
            return None
        category.set_order(position)
        return self.update(category)

    def move(self, from_index: int, to_index: int) -> List[Category]:
        """Move a category within the display order and renumber all positions.

        Raises:
            IndexError: If either index is outside the current list
        """
        rows = self.db.query(CategoryDB).order_by(*order_by_clauses(CategoryDB, default_ordering())).all()
        reordered = reorder(rows, from_index, to_index)
        try:
            self.db.commit()
            logger.debug(f"Moved category from {from_index} to {to_index}")
            return [row.to_pydantic() for row in reordered]
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to reorder categories: {type(e).__name__}: {str(e)}")
            raise

    def get_valid_todos(self, category_id: str) -> List[ToDo]:
        """Active to-dos of a category, in the category's to-do order."""
        category_db = self.db.query(CategoryDB).filter(CategoryDB.id == category_id).first()
        if not category_db:
            return []
        return [
            todo for todo in (todo_db.to_pydantic() for todo_db in category_db.todos)
            if todo.is_valid
        ]


class ToDoRepository:
    """Repository for ToDo database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, todo: ToDo) -> ToDo:
        """Create a new to-do."""
        try:
            todo_db = ToDoDB.from_pydantic(todo)
            self.db.add(todo_db)
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Created todo {todo.id}: {todo.goal[:50]}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create todo {todo.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, todo_id: str) -> Optional[ToDo]:
        """Get to-do by ID (trashed ones included)."""
        todo_db = self.db.query(ToDoDB).filter(ToDoDB.id == todo_id).first()
        return todo_db.to_pydantic() if todo_db else None

    def get_with_reminders(self) -> List[ToDo]:
        """Active to-dos that have a remind time."""
        todos_db = self.db.query(ToDoDB).filter(
            ToDoDB.remind_at.isnot(None),
            ToDoDB.completed.is_(False),
            ToDoDB.trashed.is_(False),
        ).order_by(ToDoDB.remind_at).all()
        return [todo_db.to_pydantic() for todo_db in todos_db]

    def update(self, todo: ToDo) -> ToDo:
        """Update an existing to-do."""
        todo_db = self.db.query(ToDoDB).filter(ToDoDB.id == todo.id).first()
        if not todo_db:
            raise ValueError(f"ToDo {todo.id} not found")

        todo_db.goal = todo.goal
        todo_db.category_id = todo.category_id
        todo_db.updated_at = todo.updated_at
        todo_db.remind_at = todo.remind_at
        todo_db.completed = todo.completed
        todo_db.completed_at = todo.completed_at
        todo_db.trashed = todo.trashed
        todo_db.trashed_at = todo.trashed_at

        try:
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Updated todo {todo.id}: {todo.goal[:50]}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update todo {todo.id}: {type(e).__name__}: {str(e)}")
            raise
