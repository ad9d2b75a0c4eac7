"""Category data model for TooDoo."""

from datetime import datetime
from typing import ClassVar, Iterable, List, Optional
from pydantic import BaseModel, Field, field_validator

from toodoo.models.color import Color, canonical_hex, decode_color, encode_color
from toodoo.models.constants import DEFAULT_COLORS, ICON_ASSET_PREFIX


class Category(BaseModel):
    """A user-defined group of to-dos."""

    ENTITY_KIND: ClassVar[str] = "Category"

    id: str = Field(..., frozen=True, description="Unique category identifier (UUID v4), assigned once")
    name: str = Field(..., description="Display name")
    color: Optional[str] = Field(None, description="Six uppercase hex digits, no leading '#'")
    icon: Optional[str] = Field(None, description="Symbolic icon name")
    order: Optional[int] = Field(None, description="Display position (not necessarily contiguous)")
    created_at: datetime = Field(..., description="Category creation timestamp")

    class Config:
        """Pydantic configuration."""
        validate_assignment = True

    @field_validator("color")
    @classmethod
    def _canonical_color(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return canonical_hex(value)

    def color_value(self) -> Color:
        """Decode the stored color, falling back to the first palette color."""
        if not self.color:
            return decode_color(DEFAULT_COLORS[0])
        return decode_color(self.color)

    def set_color(self, color: Color) -> None:
        self.color = encode_color(color)

    def set_order(self, position: int) -> None:
        """Set the display position. Callers keep positions consistent."""
        self.order = position

    def icon_asset_name(self) -> Optional[str]:
        if not self.icon:
            return None
        return f"{ICON_ASSET_PREFIX}{self.icon}"


def active_todos(category: Category, todos: Iterable) -> List:
    """To-dos owned by the category that are neither completed nor trashed.

    Keeps the incoming order and is recomputed on every call.
    """
    return [
        todo for todo in todos
        if todo.category_id == category.id and todo.is_valid
    ]
