import uuid
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.common import ErrorResponse
from tasknet.api.schemas.workspace import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate
from tasknet.db.postgres import get_db_session
from tasknet.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("/", response_model=TaskListResponse)
async def list_tasks(
    status: Literal["todo", "in-progress", "done"] | None = Query(None),
    tag: str | None = Query(None, description="Only tasks carrying this tag"),
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    return TaskListResponse(tasks=await service.list_tasks(status=status, tag=tag))


@router.post("/", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    return await service.create_task(body)


@router.get("/{task_id}", response_model=TaskResponse, responses={404: {"model": ErrorResponse}})
async def get_task(
    task_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    task = await service.get_task(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.put("/{task_id}", response_model=TaskResponse, responses={404: {"model": ErrorResponse}})
async def update_task(
    task_id: uuid.UUID,
    body: TaskUpdate,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    task = await service.update_task(task_id, body)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/{task_id}", status_code=204, responses={404: {"model": ErrorResponse}})
async def delete_task(
    task_id: uuid.UUID,
    session: AsyncSession = Depends(get_db_session),
):
    service = WorkspaceService(session)
    if not await service.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
