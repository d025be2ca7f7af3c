from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.workspace import (
    DocumentResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
    WikiCreate,
    WikiResponse,
    WikiUpdate,
)
from tasknet.models import Document, Note, Project, Task, Wiki
from tasknet.models.base import naive_utc, utcnow
from tasknet.services.relevance import TAG_SEPARATOR, dump_tags, parse_tags

logger = logging.getLogger(__name__)

DATETIME_FIELDS = {"due_date", "start_date", "end_date"}


def _tag_pattern(tag: str) -> str:
    # Exact tag: the separators on both sides anchor it in the tag index.
    return f"{TAG_SEPARATOR}{tag}{TAG_SEPARATOR}"


def _apply_changes(row: Any, changes: dict[str, Any], nullable: set[str]) -> None:
    for field, value in changes.items():
        if value is None and field not in nullable:
            continue
        if field == "tags":
            value = dump_tags(value)
        elif field in DATETIME_FIELDS:
            value = naive_utc(value)
        setattr(row, field, value)
    row.updated_at = utcnow()


class WikiParentError(ValueError):
    pass


class WorkspaceService:
    """CRUD for the workspace tables behind the notes, tasks, projects,
    wikis and documents endpoints.

    Lookups return None for a missing id and deletes return False, the
    routes turn both into 404s.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # Notes

    async def list_notes(self, search: str | None = None, tag: str | None = None) -> list[NoteResponse]:
        stmt = select(Note)
        if search:
            stmt = stmt.where(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.content.icontains(search, autoescape=True),
                )
            )
        if tag:
            stmt = stmt.where(Note.tag_index.icontains(_tag_pattern(tag), autoescape=True))

        result = await self.session.execute(stmt.order_by(Note.updated_at.desc()))
        return [self._note_to_response(n) for n in result.scalars().all()]

    async def get_note(self, note_id: uuid.UUID) -> NoteResponse | None:
        note = await self.session.get(Note, note_id)
        return self._note_to_response(note) if note else None

    async def create_note(self, body: NoteCreate) -> NoteResponse:
        now = utcnow()
        note = Note(
            id=uuid.uuid4(),
            title=body.title,
            content=body.content,
            tags=dump_tags(body.tags),
            created_at=now,
            updated_at=now,
        )
        self.session.add(note)
        await self.session.flush()
        logger.info("Created note %s", note.id)
        return self._note_to_response(note)

    async def update_note(self, note_id: uuid.UUID, body: NoteUpdate) -> NoteResponse | None:
        note = await self.session.get(Note, note_id)
        if not note:
            return None
        _apply_changes(note, body.model_dump(exclude_unset=True), nullable=set())
        await self.session.flush()
        return self._note_to_response(note)

    async def delete_note(self, note_id: uuid.UUID) -> bool:
        return await self._delete(Note, note_id)

    # Tasks

    async def list_tasks(self, status: str | None = None, tag: str | None = None) -> list[TaskResponse]:
        stmt = select(Task)
        if status:
            stmt = stmt.where(Task.status == status)
        if tag:
            stmt = stmt.where(Task.tag_index.icontains(_tag_pattern(tag), autoescape=True))

        result = await self.session.execute(stmt.order_by(Task.created_at.desc()))
        return [self._task_to_response(t) for t in result.scalars().all()]

    async def get_task(self, task_id: uuid.UUID) -> TaskResponse | None:
        task = await self.session.get(Task, task_id)
        return self._task_to_response(task) if task else None

    async def create_task(self, body: TaskCreate) -> TaskResponse:
        now = utcnow()
        task = Task(
            id=uuid.uuid4(),
            title=body.title,
            description=body.description,
            tags=dump_tags(body.tags),
            status=body.status,
            priority=body.priority,
            due_date=naive_utc(body.due_date),
            created_at=now,
            updated_at=now,
        )
        self.session.add(task)
        await self.session.flush()
        logger.info("Created task %s", task.id)
        return self._task_to_response(task)

    async def update_task(self, task_id: uuid.UUID, body: TaskUpdate) -> TaskResponse | None:
        task = await self.session.get(Task, task_id)
        if not task:
            return None
        _apply_changes(
            task, body.model_dump(exclude_unset=True), nullable={"description", "due_date"}
        )
        await self.session.flush()
        return self._task_to_response(task)

    async def delete_task(self, task_id: uuid.UUID) -> bool:
        return await self._delete(Task, task_id)

    # Projects

    async def list_projects(self, status: str | None = None) -> list[ProjectResponse]:
        stmt = select(Project)
        if status:
            stmt = stmt.where(Project.status == status)

        result = await self.session.execute(stmt.order_by(Project.created_at.desc()))
        return [self._project_to_response(p) for p in result.scalars().all()]

    async def get_project(self, project_id: uuid.UUID) -> ProjectResponse | None:
        project = await self.session.get(Project, project_id)
        return self._project_to_response(project) if project else None

    async def create_project(self, body: ProjectCreate) -> ProjectResponse:
        now = utcnow()
        project = Project(
            id=uuid.uuid4(),
            name=body.name,
            description=body.description,
            status=body.status,
            start_date=naive_utc(body.start_date),
            end_date=naive_utc(body.end_date),
            created_at=now,
            updated_at=now,
        )
        self.session.add(project)
        await self.session.flush()
        logger.info("Created project %s", project.id)
        return self._project_to_response(project)

    async def update_project(self, project_id: uuid.UUID, body: ProjectUpdate) -> ProjectResponse | None:
        project = await self.session.get(Project, project_id)
        if not project:
            return None
        _apply_changes(
            project,
            body.model_dump(exclude_unset=True),
            nullable={"description", "start_date", "end_date"},
        )
        await self.session.flush()
        return self._project_to_response(project)

    async def delete_project(self, project_id: uuid.UUID) -> bool:
        return await self._delete(Project, project_id)

    # Wikis

    async def list_wikis(
        self,
        parent_id: uuid.UUID | None = None,
        root_only: bool = False,
        search: str | None = None,
    ) -> list[WikiResponse]:
        stmt = select(Wiki)
        if parent_id:
            stmt = stmt.where(Wiki.parent_id == parent_id)
        elif root_only:
            stmt = stmt.where(Wiki.parent_id.is_(None))
        if search:
            stmt = stmt.where(
                or_(
                    Wiki.title.icontains(search, autoescape=True),
                    Wiki.content.icontains(search, autoescape=True),
                )
            )

        result = await self.session.execute(stmt.order_by(Wiki.updated_at.desc()))
        return [self._wiki_to_response(w) for w in result.scalars().all()]

    async def get_wiki(self, wiki_id: uuid.UUID) -> WikiResponse | None:
        wiki = await self.session.get(Wiki, wiki_id)
        return self._wiki_to_response(wiki) if wiki else None

    async def create_wiki(self, body: WikiCreate) -> WikiResponse:
        await self._check_parent(body.parent_id)
        now = utcnow()
        wiki = Wiki(
            id=uuid.uuid4(),
            title=body.title,
            content=body.content,
            tags=dump_tags(body.tags),
            parent_id=body.parent_id,
            created_at=now,
            updated_at=now,
        )
        self.session.add(wiki)
        await self.session.flush()
        logger.info("Created wiki page %s", wiki.id)
        return self._wiki_to_response(wiki)

    async def update_wiki(self, wiki_id: uuid.UUID, body: WikiUpdate) -> WikiResponse | None:
        wiki = await self.session.get(Wiki, wiki_id)
        if not wiki:
            return None
        changes = body.model_dump(exclude_unset=True)
        if changes.get("parent_id") is not None:
            if changes["parent_id"] == wiki_id:
                raise WikiParentError("A wiki page cannot be its own parent")
            await self._check_parent(changes["parent_id"])
        _apply_changes(wiki, changes, nullable={"parent_id"})
        await self.session.flush()
        return self._wiki_to_response(wiki)

    async def delete_wiki(self, wiki_id: uuid.UUID) -> bool:
        # Same effect as ON DELETE SET NULL, for backends that do not enforce it.
        await self.session.execute(
            update(Wiki).where(Wiki.parent_id == wiki_id).values(parent_id=None)
        )
        return await self._delete(Wiki, wiki_id)

    async def _check_parent(self, parent_id: uuid.UUID | None) -> None:
        if parent_id is not None and not await self.session.get(Wiki, parent_id):
            raise WikiParentError("Parent wiki page not found")

    # Documents

    async def list_documents(self) -> list[DocumentResponse]:
        result = await self.session.execute(select(Document).order_by(Document.created_at.desc()))
        return [self._document_to_response(d) for d in result.scalars().all()]

    async def get_document(self, document_id: uuid.UUID) -> DocumentResponse | None:
        document = await self.session.get(Document, document_id)
        return self._document_to_response(document) if document else None

    async def delete_document(self, document_id: uuid.UUID) -> bool:
        return await self._delete(Document, document_id)

    async def _delete(self, model: type[Any], row_id: uuid.UUID) -> bool:
        row = await self.session.get(model, row_id)
        if not row:
            return False
        await self.session.delete(row)
        await self.session.flush()
        logger.info("Deleted %s %s", model.__tablename__, row_id)
        return True

    @staticmethod
    def _note_to_response(note: Note) -> NoteResponse:
        return NoteResponse(
            id=str(note.id),
            title=note.title,
            content=note.content,
            tags=parse_tags(note.tags),
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    @staticmethod
    def _task_to_response(task: Task) -> TaskResponse:
        return TaskResponse(
            id=str(task.id),
            title=task.title,
            description=task.description,
            tags=parse_tags(task.tags),
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    @staticmethod
    def _project_to_response(project: Project) -> ProjectResponse:
        return ProjectResponse(
            id=str(project.id),
            name=project.name,
            description=project.description,
            status=project.status,
            start_date=project.start_date,
            end_date=project.end_date,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )

    @staticmethod
    def _wiki_to_response(wiki: Wiki) -> WikiResponse:
        return WikiResponse(
            id=str(wiki.id),
            title=wiki.title,
            content=wiki.content,
            tags=parse_tags(wiki.tags),
            parent_id=str(wiki.parent_id) if wiki.parent_id else None,
            created_at=wiki.created_at,
            updated_at=wiki.updated_at,
        )

    @staticmethod
    def _document_to_response(document: Document) -> DocumentResponse:
        return DocumentResponse(
            id=str(document.id),
            name=document.name,
            path=document.path,
            file_type=document.file_type,
            size=document.size,
            created_at=document.created_at,
        )
