import uuid
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.common import ErrorResponse
from tasknet.api.schemas.workspace import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from tasknet.db.postgres import get_db_session
from tasknet.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("/", response_model=ProjectListResponse)
async def list_projects(
    status: Literal["active", "paused", "completed", "archived"] | None = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    return ProjectListResponse(projects=await service.list_projects(status=status))


@router.post("/", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    return await service.create_project(body)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    project = await service.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    project = await service.update_project(project_id, body)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.delete("/{project_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    if not await service.delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
