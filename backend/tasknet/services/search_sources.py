from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar, NamedTuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.search import (
    DocumentMetadata,
    DocumentResult,
    NoteMetadata,
    NoteResult,
    ProjectMetadata,
    ProjectResult,
    ResultType,
    SearchResult,
    SearchScope,
    TaskMetadata,
    TaskResult,
    WikiMetadata,
    WikiResult,
)
from tasknet.models import Document, Note, Project, Task, Wiki
from tasknet.services.relevance import (
    TAG_SEPARATOR,
    TITLE_SCORE,
    contains,
    make_excerpt,
    parse_tags,
    score_match,
)

logger = logging.getLogger(__name__)


class SourceHits(NamedTuple):
    results: list[SearchResult]
    total: int


class BaseSearchSource(ABC):
    """One searchable table.

    Subclasses declare which model, columns and recency column to use and
    how a row becomes a SearchResult.
    """

    result_type: ClassVar[ResultType]
    scope: ClassVar[SearchScope]
    model: ClassVar[type[Any]]

    @abstractmethod
    def match_columns(self) -> Sequence[Any]:
        """Columns tested with a case-insensitive contains for inclusion."""
        ...

    def tag_column(self) -> Any:
        """Separator-wrapped tag index, or None for tables without tags."""
        return None

    @abstractmethod
    def recency_column(self) -> Any:
        ...

    @abstractmethod
    def to_result(self, row: Any, query: str) -> SearchResult:
        ...

    def match_clause(self, query: str) -> Any:
        clauses = [col.icontains(query, autoescape=True) for col in self.match_columns()]
        tag_column = self.tag_column()
        # A query spanning the separator would match across two tags.
        if tag_column is not None and TAG_SEPARATOR not in query:
            clauses.append(tag_column.icontains(query, autoescape=True))
        return or_(*clauses)

    async def count(self, session: AsyncSession, query: str) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.match_clause(query))
        return (await session.execute(stmt)).scalar() or 0

    async def fetch(self, session: AsyncSession, query: str, limit: int) -> list[Any]:
        stmt = (
            select(self.model)
            .where(self.match_clause(query))
            .order_by(self.recency_column().desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, session: AsyncSession, query: str, limit: int) -> SourceHits:
        """Top ``limit`` rows by recency plus the number of rows that matched overall."""
        rows = await self.fetch(session, query, limit)
        total = len(rows) if len(rows) < limit else await self.count(session, query)
        return SourceHits([self.to_result(row, query) for row in rows], total)


class NoteSource(BaseSearchSource):
    result_type = ResultType.NOTE
    scope = SearchScope.NOTES
    model = Note

    def match_columns(self):
        return (Note.title, Note.content)

    def tag_column(self):
        return Note.tag_index

    def recency_column(self):
        return Note.updated_at

    def to_result(self, row: Note, query: str) -> NoteResult:
        tags = parse_tags(row.tags)
        return NoteResult(
            id=str(row.id),
            title=row.title,
            content=row.content,
            excerpt=make_excerpt(row.content, query),
            score=score_match(query, row.title, row.content, tags),
            metadata=NoteMetadata(tags=tags, created_at=row.created_at, updated_at=row.updated_at),
        )


class TaskSource(BaseSearchSource):
    result_type = ResultType.TASK
    scope = SearchScope.TASKS
    model = Task

    def match_columns(self):
        return (Task.title, Task.description)

    def tag_column(self):
        return Task.tag_index

    def recency_column(self):
        return Task.updated_at

    def to_result(self, row: Task, query: str) -> TaskResult:
        tags = parse_tags(row.tags)
        return TaskResult(
            id=str(row.id),
            title=row.title,
            content=row.description,
            excerpt=make_excerpt(row.description, query),
            score=score_match(query, row.title, row.description, tags),
            metadata=TaskMetadata(
                status=row.status,
                priority=row.priority,
                due_date=row.due_date,
                tags=tags,
                created_at=row.created_at,
                updated_at=row.updated_at,
            ),
        )


class ProjectSource(BaseSearchSource):
    result_type = ResultType.PROJECT
    scope = SearchScope.PROJECTS
    model = Project

    def match_columns(self):
        return (Project.name, Project.description)

    def recency_column(self):
        return Project.updated_at

    def to_result(self, row: Project, query: str) -> ProjectResult:
        return ProjectResult(
            id=str(row.id),
            title=row.name,
            content=row.description,
            excerpt=make_excerpt(row.description, query),
            score=score_match(query, row.name, row.description),
            metadata=ProjectMetadata(
                status=row.status,
                start_date=row.start_date,
                end_date=row.end_date,
                created_at=row.created_at,
                updated_at=row.updated_at,
            ),
        )


class WikiSource(BaseSearchSource):
    result_type = ResultType.WIKI
    scope = SearchScope.WIKIS
    model = Wiki

    def match_columns(self):
        return (Wiki.title, Wiki.content)

    def tag_column(self):
        return Wiki.tag_index

    def recency_column(self):
        return Wiki.updated_at

    def to_result(self, row: Wiki, query: str) -> WikiResult:
        tags = parse_tags(row.tags)
        return WikiResult(
            id=str(row.id),
            title=row.title,
            content=row.content,
            excerpt=make_excerpt(row.content, query),
            score=score_match(query, row.title, row.content, tags),
            metadata=WikiMetadata(
                tags=tags,
                parent_id=str(row.parent_id) if row.parent_id else None,
                created_at=row.created_at,
                updated_at=row.updated_at,
            ),
        )


class DocumentSource(BaseSearchSource):
    result_type = ResultType.DOCUMENT
    scope = SearchScope.DOCUMENTS
    model = Document

    def match_columns(self):
        return (Document.name, Document.file_type)

    def recency_column(self):
        return Document.created_at

    def to_result(self, row: Document, query: str) -> DocumentResult:
        # No body to search: the file name scores as a title, the file type as a tag.
        score = TITLE_SCORE if contains(row.name, query) else score_match(query, None, None, [row.file_type])
        return DocumentResult(
            id=str(row.id),
            title=row.name,
            excerpt=make_excerpt(row.name, query),
            score=score,
            metadata=DocumentMetadata(
                file_type=row.file_type,
                size=row.size,
                path=row.path,
                created_at=row.created_at,
            ),
        )


class SearchSourceRegistry:
    """Ordered collection of searchable sources keyed by their ``type`` filter."""

    def __init__(self) -> None:
        self._sources: dict[SearchScope, BaseSearchSource] = {}

    def register(self, source: BaseSearchSource) -> None:
        if source.scope in self._sources:
            raise ValueError(f"Search source '{source.scope.value}' is already registered")
        self._sources[source.scope] = source
        logger.debug("Registered search source: %s", source.scope.value)

    def get(self, scope: SearchScope) -> BaseSearchSource:
        if scope not in self._sources:
            raise KeyError(f"Search source '{scope.value}' not found in registry")
        return self._sources[scope]

    def list_all(self) -> list[BaseSearchSource]:
        return list(self._sources.values())

    def select(self, scope: SearchScope) -> list[BaseSearchSource]:
        if scope == SearchScope.ALL:
            return self.list_all()
        return [self.get(scope)]


def default_registry() -> SearchSourceRegistry:
    registry = SearchSourceRegistry()
    for source_cls in (NoteSource, TaskSource, ProjectSource, WikiSource, DocumentSource):
        registry.register(source_cls())
    return registry
