"""FastAPI web application for TooDoo."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from toodoo import __version__
from toodoo.database.database import SessionLocal, get_db, init_db
from toodoo.database.repository import CategoryRepository
from toodoo.database.seed import seed_defaults
from toodoo.exceptions import AlreadySetUpError, NotFoundError, ValidationError
from toodoo.models.category import Category
from toodoo.models.todo import ToDo
from toodoo.notifications.alarm import InMemoryAlarmFacility
from toodoo.notifications.events import AppEvent, EventBus
from toodoo.notifications.reminders import ReminderScheduler
from toodoo.ordering import sort_by_created_at, sort_by_order
from toodoo.services.todo_service import ToDoService

logger = logging.getLogger(__name__)

# Process-wide collaborators
alarm_facility = InMemoryAlarmFacility()
reminder_scheduler = ReminderScheduler(alarm_facility)
event_bus = EventBus()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    # The alarm facility starts empty; rebuild it from stored to-dos.
    db = SessionLocal()
    try:
        ToDoService(db, reminder_scheduler).resync_reminders()
    finally:
        db.close()
    yield


app = FastAPI(
    title="TooDoo API",
    description="Categories, to-dos, and due reminders",
    version=__version__,
    lifespan=lifespan,
)


def get_reminder_scheduler() -> ReminderScheduler:
    return reminder_scheduler


def get_event_bus() -> EventBus:
    return event_bus


def get_service(
    db: Session = Depends(get_db),
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
) -> ToDoService:
    return ToDoService(db, scheduler)


# Request/response models
class CategoryCreateRequest(BaseModel):
    name: str
    color: Optional[str] = Field(None, description="Six hex digits, '#' optional")
    icon: Optional[str] = None
    order: Optional[int] = None


class CategoryOrderRequest(BaseModel):
    order: int


class CategoryMoveRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class CategoryResponse(BaseModel):
    category: Category


class CategoryListResponse(BaseModel):
    categories: List[Category]
    count: int


class ToDoCreateRequest(BaseModel):
    goal: str
    category_id: str
    remind_at: Optional[datetime] = None


class ToDoUpdateRequest(BaseModel):
    """Partial update. Send `remind_at: null` to clear the remind time."""
    remind_at: Optional[datetime] = None
    completed: Optional[bool] = None
    trashed: Optional[bool] = None


class ToDoResponse(BaseModel):
    todo: ToDo


class ToDoListResponse(BaseModel):
    todos: List[ToDo]
    count: int


class SetupResponse(BaseModel):
    categories: List[Category]
    todo: ToDo


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/setup", response_model=SetupResponse, status_code=status.HTTP_201_CREATED)
def setup(db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus)):
    """Create the default categories and starter to-do on first run."""
    try:
        result = seed_defaults(db)
    except AlreadySetUpError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    bus.send(AppEvent.USER_HAS_SETUP)
    return SetupResponse(categories=result.categories, todo=result.todo)


@app.get("/categories", response_model=CategoryListResponse)
def list_categories(sort: str = "order", ascending: bool = True, limit: Optional[int] = None,
                    db: Session = Depends(get_db)):
    """List categories by display order (default) or creation time."""
    if sort == "order":
        descriptors = [sort_by_order(ascending), sort_by_created_at(True)]
    elif sort == "created_at":
        descriptors = [sort_by_created_at(ascending)]
    else:
        raise HTTPException(status_code=400, detail=f"Unknown sort: {sort}")
    categories = CategoryRepository(db).get_all(descriptors, limit=limit)
    return CategoryListResponse(categories=categories, count=len(categories))


@app.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(request: CategoryCreateRequest, service: ToDoService = Depends(get_service)):
    try:
        category = service.create_category(request.name, color=request.color, icon=request.icon,
                                           order=request.order)
    except ValidationError:
        raise
    except ValueError as e:
        # Malformed color encoding
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return CategoryResponse(category=category)


@app.get("/categories/default", response_model=CategoryResponse)
def default_category(db: Session = Depends(get_db)):
    category = CategoryRepository(db).get_default()
    if category is None:
        raise HTTPException(status_code=404, detail="No categories yet")
    return CategoryResponse(category=category)


@app.put("/categories/{category_id}/order", response_model=CategoryResponse)
def set_category_order(category_id: str, request: CategoryOrderRequest, db: Session = Depends(get_db)):
    category = CategoryRepository(db).set_order(category_id, request.order)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return CategoryResponse(category=category)


@app.post("/categories/move", response_model=CategoryListResponse)
def move_category(request: CategoryMoveRequest, db: Session = Depends(get_db)):
    try:
        categories = CategoryRepository(db).move(request.from_index, request.to_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return CategoryListResponse(categories=categories, count=len(categories))


@app.get("/categories/{category_id}/todos", response_model=ToDoListResponse)
def list_valid_todos(category_id: str, service: ToDoService = Depends(get_service)):
    """Active (not completed, not trashed) to-dos of a category."""
    todos = service.valid_todos(category_id)
    return ToDoListResponse(todos=todos, count=len(todos))


@app.post("/todos", response_model=ToDoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(request: ToDoCreateRequest, service: ToDoService = Depends(get_service)):
    todo = service.create_todo(request.goal, request.category_id, remind_at=request.remind_at)
    return ToDoResponse(todo=todo)


@app.get("/todos/{todo_id}", response_model=ToDoResponse)
def get_todo(todo_id: str, service: ToDoService = Depends(get_service)):
    return ToDoResponse(todo=service.get_todo(todo_id))


@app.patch("/todos/{todo_id}", response_model=ToDoResponse)
def update_todo(todo_id: str, request: ToDoUpdateRequest, service: ToDoService = Depends(get_service)):
    """Apply un-complete and restore, then the remind time, then complete and trash.

    A remind time sent together with `completed: false` or `trashed: false`
    is registered against the re-activated to-do.
    """
    fields = request.model_fields_set
    todo = service.get_todo(todo_id)
    if request.completed is False:
        todo = service.uncomplete(todo_id)
    if request.trashed is False:
        todo = service.restore(todo_id)
    if "remind_at" in fields:
        todo = service.set_remind_at(todo_id, request.remind_at)
    if request.completed is True:
        todo = service.complete(todo_id)
    if request.trashed is True:
        todo = service.trash(todo_id)
    return ToDoResponse(todo=todo)
