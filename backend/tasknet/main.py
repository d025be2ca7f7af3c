import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasknet.api.routes import data, documents, notes, projects, search, tasks, wikis
from tasknet.config import settings
from tasknet.db.postgres import engine
from tasknet.services.search_sources import default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s"
    )
    logger.info(
        "Search sources registered: %s",
        [s.scope.value for s in app.state.search_registry.list_all()],
    )

    yield

    await engine.dispose()


app = FastAPI(
    title="TaskNet Workspace",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.search_registry = default_registry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search.router, prefix="/api/search", tags=["search"])
app.include_router(notes.router, prefix="/api/notes", tags=["notes"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(wikis.router, prefix="/api/wikis", tags=["wikis"])
app.include_router(documents.router, prefix="/api/documents", tags=["documents"])
app.include_router(data.router, prefix="/api/data", tags=["data"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
