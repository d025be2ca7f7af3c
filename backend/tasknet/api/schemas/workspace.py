import uuid
from datetime import datetime
from typing import Literal

from tasknet.api.schemas.common import CamelModel

TaskStatus = Literal["todo", "in-progress", "done"]
TaskPriority = Literal["low", "medium", "high"]
ProjectStatus = Literal["active", "paused", "completed", "archived"]


class NoteResponse(CamelModel):
    id: str
    title: str
    content: str
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime


class TaskResponse(CamelModel):
    id: str
    title: str
    description: str | None = None
    tags: list[str] = []
    status: str
    priority: str
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProjectResponse(CamelModel):
    id: str
    name: str
    description: str | None = None
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class WikiResponse(CamelModel):
    id: str
    title: str
    content: str
    tags: list[str] = []
    parent_id: str | None = None
    created_at: datetime
    updated_at: datetime


class DocumentResponse(CamelModel):
    id: str
    name: str
    path: str
    file_type: str
    size: int
    created_at: datetime


class NoteListResponse(CamelModel):
    notes: list[NoteResponse]


class TaskListResponse(CamelModel):
    tasks: list[TaskResponse]


class ProjectListResponse(CamelModel):
    projects: list[ProjectResponse]


class WikiListResponse(CamelModel):
    wikis: list[WikiResponse]


class DocumentListResponse(CamelModel):
    documents: list[DocumentResponse]


# Write models. Update bodies are partial: omitted fields keep their value,
# an explicit null clears a nullable field and is ignored for required ones.


class NoteCreate(CamelModel):
    title: str
    content: str = ""
    tags: list[str] = []


class NoteUpdate(CamelModel):
    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None


class TaskCreate(CamelModel):
    title: str
    description: str | None = None
    tags: list[str] = []
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: datetime | None = None


class TaskUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None


class ProjectCreate(CamelModel):
    name: str
    description: str | None = None
    status: ProjectStatus = "active"
    start_date: datetime | None = None
    end_date: datetime | None = None


class ProjectUpdate(CamelModel):
    name: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class WikiCreate(CamelModel):
    title: str
    content: str = ""
    tags: list[str] = []
    parent_id: uuid.UUID | None = None


class WikiUpdate(CamelModel):
    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    parent_id: uuid.UUID | None = None
