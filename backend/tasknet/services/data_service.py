from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.data import (
    ExportResponse,
    ImportCounts,
    ImportRequest,
    NoteRecord,
    TaskRecord,
)
from tasknet.models import Note, Task
from tasknet.models.base import naive_utc
from tasknet.services.relevance import dump_tags, parse_tags

logger = logging.getLogger(__name__)


class DataService:
    """Bulk export and import of notes and tasks.

    Import is last-write-wins: an incoming record replaces the stored one
    with the same id, no versions are compared.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def export_data(self) -> ExportResponse:
        notes = (await self.session.execute(select(Note).order_by(Note.created_at.desc()))).scalars().all()
        tasks = (await self.session.execute(select(Task).order_by(Task.created_at.desc()))).scalars().all()

        return ExportResponse(
            notes=[
                NoteRecord(
                    id=n.id,
                    title=n.title,
                    content=n.content,
                    tags=parse_tags(n.tags),
                    created_at=n.created_at,
                    updated_at=n.updated_at,
                )
                for n in notes
            ],
            tasks=[
                TaskRecord(
                    id=t.id,
                    title=t.title,
                    description=t.description,
                    tags=parse_tags(t.tags),
                    status=t.status,
                    priority=t.priority,
                    due_date=t.due_date,
                    created_at=t.created_at,
                    updated_at=t.updated_at,
                )
                for t in tasks
            ],
            exported_at=datetime.utcnow(),
        )

    async def import_data(self, request: ImportRequest) -> ImportCounts:
        counts = ImportCounts()

        if request.overwrite:
            await self.session.execute(delete(Note))
            await self.session.execute(delete(Task))
            logger.info("Import overwrite: cleared notes and tasks")

        for record in request.notes or []:
            await self._upsert_note(record)
            counts.notes += 1

        for record in request.tasks or []:
            await self._upsert_task(record)
            counts.tasks += 1

        await self.session.flush()
        logger.info("Imported %d notes and %d tasks", counts.notes, counts.tasks)
        return counts

    async def _upsert_note(self, record: NoteRecord) -> None:
        now = datetime.utcnow()
        note_id = record.id or uuid.uuid4()
        note = await self.session.get(Note, note_id)

        if note:
            note.title = record.title
            note.content = record.content
            note.tags = dump_tags(record.tags)
            note.updated_at = naive_utc(record.updated_at) or now
        else:
            self.session.add(
                Note(
                    id=note_id,
                    title=record.title,
                    content=record.content,
                    tags=dump_tags(record.tags),
                    created_at=naive_utc(record.created_at) or now,
                    updated_at=naive_utc(record.updated_at) or now,
                )
            )

    async def _upsert_task(self, record: TaskRecord) -> None:
        now = datetime.utcnow()
        task_id = record.id or uuid.uuid4()
        task = await self.session.get(Task, task_id)

        if task:
            task.title = record.title
            task.description = record.description
            task.tags = dump_tags(record.tags)
            task.status = record.status
            task.priority = record.priority
            task.due_date = naive_utc(record.due_date)
            task.updated_at = naive_utc(record.updated_at) or now
        else:
            self.session.add(
                Task(
                    id=task_id,
                    title=record.title,
                    description=record.description,
                    tags=dump_tags(record.tags),
                    status=record.status,
                    priority=record.priority,
                    due_date=naive_utc(record.due_date),
                    created_at=naive_utc(record.created_at) or now,
                    updated_at=naive_utc(record.updated_at) or now,
                )
            )
