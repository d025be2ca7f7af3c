import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class NoteRecord(BaseModel):
    """Note as it appears in an export file. Keys follow the table columns."""

    id: uuid.UUID | None = None
    title: str
    content: str = ""
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskRecord(BaseModel):
    id: uuid.UUID | None = None
    title: str
    description: str | None = None
    tags: list[str] = []
    status: Literal["todo", "in-progress", "done"] = "todo"
    priority: Literal["low", "medium", "high"] = "medium"
    due_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ExportResponse(BaseModel):
    notes: list[NoteRecord]
    tasks: list[TaskRecord]
    exported_at: datetime = Field(alias="exportedAt")

    model_config = ConfigDict(populate_by_name=True)


class ImportRequest(BaseModel):
    notes: list[NoteRecord] | None = None
    tasks: list[TaskRecord] | None = None
    overwrite: bool = False


class ImportCounts(BaseModel):
    notes: int = 0
    tasks: int = 0


class ImportResponse(BaseModel):
    imported: ImportCounts
