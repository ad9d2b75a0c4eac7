"""Data models for TooDoo."""

from toodoo.models.category import Category, active_todos
from toodoo.models.color import Color, decode_color, encode_color
from toodoo.models.todo import ToDo, ToDoStatus
from toodoo.models.identity import identifier
from toodoo.models.factory import create_category, create_todo

__all__ = [
    "Category",
    "active_todos",
    "Color",
    "decode_color",
    "encode_color",
    "ToDo",
    "ToDoStatus",
    "identifier",
    "create_category",
    "create_todo",
]
