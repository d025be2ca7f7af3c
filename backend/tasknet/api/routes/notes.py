import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.common import ErrorResponse
from tasknet.api.schemas.workspace import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from tasknet.db.postgres import get_db_session
from tasknet.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("/", response_model=NoteListResponse)
async def list_notes(
    search: str | None = Query(None, description="Substring of title or content"),
    tag: str | None = Query(None, description="Only notes carrying this tag"),
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    return NoteListResponse(notes=await service.list_notes(search=search, tag=tag))


@router.post("/", response_model=NoteResponse, status_code=201)
async def create_note(
    body: NoteCreate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    return await service.create_note(body)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_note(
    note_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    note = await service.get_note(note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_note(
    note_id: uuid.UUID,
    body: NoteUpdate,
    session: AsyncSession = Depends(get_db_session),
):
    """Partial update: fields left out of the body are unchanged."""
    service = WorkspaceService(session)
    note = await service.update_note(note_id, body)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.delete("/{note_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_note(
    note_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    if not await service.delete_note(note_id):
        raise HTTPException(status_code=404, detail="Note not found")
