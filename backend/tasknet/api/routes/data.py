from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasknet.api.schemas.data import ExportResponse, ImportRequest, ImportResponse
from tasknet.db.postgres import get_db_session
from tasknet.services.data_service import DataService

router = APIRouter()


@router.get("/export", response_model=ExportResponse)
async def export_data(session: AsyncSession = Depends(get_db_session)):
    """Dump every note and task, newest first."""
    service = DataService(session)
    return await service.export_data()


@router.post("/import", response_model=ImportResponse)
async def import_data(
    body: ImportRequest,
    session: AsyncSession = Depends(get_db_session),
):
    """Upsert notes and tasks by id. With ``overwrite`` both tables are emptied first."""
    service = DataService(session)
    counts = await service.import_data(body)
    return ImportResponse(imported=counts)
