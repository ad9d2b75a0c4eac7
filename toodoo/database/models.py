"""SQLAlchemy database models for TooDoo."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from toodoo.database.database import Base


class CategoryDB(Base):
    """Database model for Category."""

    __tablename__ = "categories"

    ENTITY_KIND = "Category"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String, nullable=False)
    color = Column(String(6), nullable=True)
    icon = Column(String, nullable=True)

    # "order" is a reserved word; keep the attribute name, rename the column.
    order = Column("sort_order", Integer, nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    todos = relationship("ToDoDB", back_populates="category", order_by="ToDoDB.created_at")

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from toodoo.models.category import Category
        return Category(
            id=self.id,
            name=self.name,
            color=self.color,
            icon=self.icon,
            order=self.order,
            created_at=self.created_at,
        )

    @classmethod
    def from_pydantic(cls, category):
        """Create database model from Pydantic model."""
        return cls(
            id=category.id,
            name=category.name,
            color=category.color,
            icon=category.icon,
            order=category.order,
            created_at=category.created_at,
        )


class ToDoDB(Base):
    """Database model for ToDo."""

    __tablename__ = "todos"

    ENTITY_KIND = "ToDo"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Owning category. No cascade: deleting a category with to-dos fails.
    category_id = Column(String, ForeignKey("categories.id"), nullable=False, index=True)

    goal = Column(String, nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    remind_at = Column(DateTime, nullable=True)

    # Flags
    completed = Column(Boolean, nullable=False, default=False, index=True)
    completed_at = Column(DateTime, nullable=True)
    trashed = Column(Boolean, nullable=False, default=False, index=True)
    trashed_at = Column(DateTime, nullable=True)

    category = relationship("CategoryDB", back_populates="todos")

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from toodoo.models.todo import ToDo
        return ToDo(
            id=self.id,
            goal=self.goal,
            category_id=self.category_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            remind_at=self.remind_at,
            completed=bool(self.completed),
            completed_at=self.completed_at,
            trashed=bool(self.trashed),
            trashed_at=self.trashed_at,
        )

    @classmethod
    def from_pydantic(cls, todo):
        """Create database model from Pydantic model."""
        return cls(
            id=todo.id,
            category_id=todo.category_id,
            goal=todo.goal,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
            remind_at=todo.remind_at,
            completed=todo.completed,
            completed_at=todo.completed_at,
            trashed=todo.trashed,
            trashed_at=todo.trashed_at,
        )
