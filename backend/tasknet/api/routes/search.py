from fastapi import APIRouter, Depends, Query

from tasknet.api.dependencies import get_search_service
from tasknet.api.schemas.search import SearchResponse, SearchScope
from tasknet.services.search_service import SearchService

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search(
    query: str | None = Query(None, description="Case-insensitive substring to look for"),
    type: SearchScope = Query(SearchScope.ALL, description="Restrict to one content type"),
    limit: str | None = Query(
        None, description="Maximum results (clamped to 1-200, default 50)"
    ),
    service: SearchService = Depends(get_search_service),
):
    """Search notes, tasks, projects, wikis and documents in one call.

    ``limit`` is taken as a raw string so that junk values fall back to the
    default instead of failing validation.
    """
    return await service.search(query=query, scope=type, limit=limit)
