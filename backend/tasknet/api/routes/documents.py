import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.common import ErrorResponse
from tasknet.api.schemas.workspace import DocumentListResponse, DocumentResponse
from tasknet.db.postgres import get_db_session
from tasknet.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("/", response_model=DocumentListResponse)
async def list_documents(session: AsyncSession = Depends(get_db_session)):
    service = WorkspaceService(session)
    return DocumentListResponse(documents=await service.list_documents())


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_document(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    document = await service.get_document(document_id)
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.delete("/{document_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_document(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    """Remove the document record. Stored file contents are managed elsewhere."""
    service = WorkspaceService(session)
    if not await service.delete_document(document_id):
        raise HTTPException(status_code=404, detail="Document not found")
