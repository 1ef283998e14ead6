import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskhub.config import settings
from taskhub.database import Database
from taskhub.errors import register_exception_handlers
from taskhub.routers.projects import router as projects_router
from taskhub.routers.tasks import router as tasks_router
from taskhub.routers.comments import router as comments_router
from taskhub.routers.tags import router as tags_router
from taskhub.routers.users import router as users_router
from taskhub.utils.log import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.db
    await database.connect(create_schema=settings.AUTO_CREATE_SCHEMA)
    logger.info("[APP] Task Manager API started")

    yield

    # Clean up
    await database.disconnect()
    logger.info("[APP] Task Manager API shut down")


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the application around an explicitly constructed store.
    Tests pass their own (already connected) Database.
    """
    setup_logging(settings.LOG_LEVEL, settings.ERROR_LOG_FILE)

    app = FastAPI(
        lifespan=lifespan,
        title="TaskHub API",
        description="Team projects, tasks, tags and comments with membership-based access",
        version="1.0.0",
    )
    app.state.db = database or Database(settings.async_database_url)

    # Enable CORS for the frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(projects_router)
    app.include_router(tasks_router)
    app.include_router(comments_router)
    app.include_router(tags_router)
    app.include_router(users_router)

    @app.get("/")
    def root():
        return {"message": "TaskHub API running"}

    return app


app = create_app()
