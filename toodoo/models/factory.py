"""Entity creation for TooDoo.

Validation happens here, before any model is built or written, so a blank
name or goal never reaches the store.
"""

import uuid
from datetime import datetime
from typing import Optional

from toodoo.exceptions import ValidationError
from toodoo.models.category import Category
from toodoo.models.todo import ToDo


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(field)
    return value.strip()


def create_category(
    name: str,
    color: Optional[str] = None,
    icon: Optional[str] = None,
) -> Category:
    """Create a category with a fresh ID and creation timestamp.

    `order` is left unset; the caller (or the ordering helpers) assigns it.

    Raises:
        ValidationError: If name is blank
    """
    name = _require_text(name, "name")
    return Category(
        id=str(uuid.uuid4()),
        name=name,
        color=color,
        icon=icon,
        order=None,
        created_at=datetime.utcnow(),
    )


def create_todo(
    goal: str,
    category_id: str,
    remind_at: Optional[datetime] = None,
) -> ToDo:
    """Create an active to-do in the given category.

    Raises:
        ValidationError: If goal or category_id is blank
    """
    goal = _require_text(goal, "goal")
    category_id = _require_text(category_id, "category_id")
    now = datetime.utcnow()
    return ToDo(
        id=str(uuid.uuid4()),
        goal=goal,
        category_id=category_id,
        created_at=now,
        updated_at=now,
        remind_at=remind_at,
        completed=False,
        trashed=False,
    )
