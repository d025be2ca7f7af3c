from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from tasknet.api.schemas.common import CamelModel


class ResultType(str, Enum):
    NOTE = "note"
    TASK = "task"
    PROJECT = "project"
    WIKI = "wiki"
    DOCUMENT = "document"


class SearchScope(str, Enum):
    """Values accepted by the ``type`` query parameter."""

    ALL = "all"
    NOTES = "notes"
    TASKS = "tasks"
    PROJECTS = "projects"
    WIKIS = "wikis"
    DOCUMENTS = "documents"


class NoteMetadata(CamelModel):
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskMetadata(CamelModel):
    status: str
    priority: str
    due_date: datetime | None = None
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProjectMetadata(CamelModel):
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WikiMetadata(CamelModel):
    tags: list[str] = []
    parent_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentMetadata(CamelModel):
    file_type: str
    size: int
    path: str
    created_at: datetime | None = None


class _BaseResult(CamelModel):
    id: str
    title: str
    content: str | None = None
    excerpt: str = ""
    score: float = Field(ge=0)


class NoteResult(_BaseResult):
    type: Literal[ResultType.NOTE] = ResultType.NOTE
    metadata: NoteMetadata


class TaskResult(_BaseResult):
    type: Literal[ResultType.TASK] = ResultType.TASK
    metadata: TaskMetadata


class ProjectResult(_BaseResult):
    type: Literal[ResultType.PROJECT] = ResultType.PROJECT
    metadata: ProjectMetadata


class WikiResult(_BaseResult):
    type: Literal[ResultType.WIKI] = ResultType.WIKI
    metadata: WikiMetadata


class DocumentResult(_BaseResult):
    type: Literal[ResultType.DOCUMENT] = ResultType.DOCUMENT
    metadata: DocumentMetadata


SearchResult = Annotated[
    Union[NoteResult, TaskResult, ProjectResult, WikiResult, DocumentResult],
    Field(discriminator="type"),
]


class TypeFacet(CamelModel):
    type: ResultType
    count: int = Field(ge=1)


class TagFacet(CamelModel):
    tag: str
    count: int = Field(ge=1)


class SearchFacets(CamelModel):
    types: list[TypeFacet] = []
    tags: list[TagFacet] = []


class SearchResponse(CamelModel):
    results: list[SearchResult] = []
    total_count: int = 0
    facets: SearchFacets = Field(default_factory=SearchFacets)
