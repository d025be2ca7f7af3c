import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.common import ErrorResponse
from tasknet.api.schemas.workspace import WikiCreate, WikiListResponse, WikiResponse, WikiUpdate
from tasknet.db.postgres import get_db_session
from tasknet.services.workspace_service import WikiParentError, WorkspaceService

router = APIRouter()


@router.get("/", response_model=WikiListResponse)
async def list_wikis(
    parent_id: uuid.UUID | None = Query(None, description="Only children of this page"),
    root_only: bool = Query(False, description="Only top-level pages"),
    search: str | None = Query(None, description="Substring of title or content"),
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    wikis = await service.list_wikis(parent_id=parent_id, root_only=root_only, search=search)
    return WikiListResponse(wikis=wikis)


@router.post(
    "/",
    response_model=WikiResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_wiki(
    body: WikiCreate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    try:
        return await service.create_wiki(body)
    except WikiParentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{wiki_id}", response_model=WikiResponse, responses={404: {"model": ErrorResponse}})
async def get_wiki(
    wiki_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    wiki = await service.get_wiki(wiki_id)
    if not wiki:
        raise HTTPException(status_code=404, detail="Wiki page not found")
    return wiki


@router.put(
    "/{wiki_id}",
    response_model=WikiResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_wiki(
    wiki_id: uuid.UUID,
    body: WikiUpdate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    try:
        wiki = await service.update_wiki(wiki_id, body)
    except WikiParentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not wiki:
        raise HTTPException(status_code=404, detail="Wiki page not found")
    return wiki


@router.delete("/{wiki_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_wiki(
    wiki_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    """Child pages are kept and become top-level pages."""
    service = WorkspaceService(session)
    if not await service.delete_wiki(wiki_id):
        raise HTTPException(status_code=404, detail="Wiki page not found")
