"""First-run default data.

Creates the "personal" and "work" categories and a starter to-do in a single
transaction: either all three rows are committed or none are.
"""

import logging
import threading
from typing import List, NamedTuple
from sqlalchemy.orm import Session

from toodoo.database.models import CategoryDB, ToDoDB
from toodoo.exceptions import AlreadySetUpError
from toodoo.localization import localized
from toodoo.models.category import Category
from toodoo.models.constants import (
    DEFAULT_COLORS,
    DEFAULT_PERSONAL_CATEGORY,
    DEFAULT_TODO_GOAL_KEY,
    DEFAULT_WORK_CATEGORY,
)
from toodoo.models.factory import create_category, create_todo
from toodoo.models.todo import ToDo

logger = logging.getLogger(__name__)

_seed_lock = threading.Lock()


class SeedResult(NamedTuple):
    categories: List[Category]
    todo: ToDo


def build_defaults() -> SeedResult:
    """Build (but do not persist) the default categories and starter to-do."""
    categories = []
    for position, (name_key, color_index, icon) in enumerate([DEFAULT_PERSONAL_CATEGORY, DEFAULT_WORK_CATEGORY]):
        category = create_category(localized(name_key), color=DEFAULT_COLORS[color_index], icon=icon)
        category.set_order(position)
        categories.append(category)

    todo = create_todo(localized(DEFAULT_TODO_GOAL_KEY), categories[0].id)
    return SeedResult(categories=categories, todo=todo)


def seed_defaults(db: Session) -> SeedResult:
    """Persist the default categories and starter to-do atomically.

    The store must have no categories yet. The check runs in the same
    transaction as the inserts, and concurrent callers are serialized.

    Raises:
        AlreadySetUpError: If any category already exists
    """
    result = build_defaults()
    with _seed_lock:
        return _seed(db, result)


def _seed(db: Session, result: SeedResult) -> SeedResult:
    try:
        existing = db.query(CategoryDB).count()
        if existing > 0:
            raise AlreadySetUpError(existing)
        rows = [CategoryDB.from_pydantic(category) for category in result.categories]
        rows.append(ToDoDB.from_pydantic(result.todo))
        db.add_all(rows)
        db.commit()
        logger.debug(f"Seeded {len(result.categories)} categories and todo {result.todo.id}")
        return result
    except AlreadySetUpError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to seed default data: {type(e).__name__}: {str(e)}")
        raise
