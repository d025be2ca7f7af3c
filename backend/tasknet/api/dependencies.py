from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasknet.db.postgres import get_session_factory
from tasknet.services.search_service import SearchService
from tasknet.services.search_sources import SearchSourceRegistry


def get_search_registry(request: Request) -> SearchSourceRegistry:
    return request.app.state.search_registry


def get_search_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    registry: SearchSourceRegistry = Depends(get_search_registry),
) -> SearchService:
    return SearchService(session_factory, registry)
