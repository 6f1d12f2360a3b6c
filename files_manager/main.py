import logging
from contextlib import asynccontextmanager

import redis
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from files_manager.core.config import Settings, get_settings
from files_manager.core.errors import FilesManagerError
from files_manager.core.logging import configure_logging
from files_manager.routers import app as app_routes, auth, files, users
from files_manager.services.blobs import BlobStorage
from files_manager.services.sessions import SessionManager
from files_manager.services.tree import FileTreeManager
from files_manager.services.users import UserRegistry
from files_manager.stores.documents import DocumentStore
from files_manager.stores.queues import JobQueue
from files_manager.stores.tokens import RedisTokenStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    documents: DocumentStore | None = None,
    tokens: RedisTokenStore | None = None,
    queue: JobQueue | None = None,
) -> FastAPI:
    """Build the API. Collaborators that are not passed in are created from settings."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = app.state
        state.documents = documents or DocumentStore(settings.database_url)
        state.tokens = tokens or RedisTokenStore(settings.redis_url)
        state.queue = queue or JobQueue(settings.broker_url)

        # reachability is reported by /status, startup goes on either way
        state.documents.connect()
        state.tokens.connect()

        state.sessions = SessionManager(state.documents, state.tokens, ttl=settings.token_ttl)
        state.users = UserRegistry(state.documents, state.sessions, state.queue)
        state.tree = FileTreeManager(
            state.documents,
            BlobStorage(settings.folder_path),
            state.queue,
            page_size=settings.page_size,
        )
        logger.info("files_manager started, blobs in %s", settings.folder_path)
        try:
            yield
        finally:
            state.queue.close()
            state.tokens.close()
            state.documents.close()
            logger.info("files_manager stopped")

    app = FastAPI(title="files_manager", lifespan=lifespan)

    @app.exception_handler(FilesManagerError)
    async def files_manager_error_handler(request: Request, exc: FilesManagerError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(redis.RedisError)
    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: Exception):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Bad request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    # include our routers
    app.include_router(app_routes.router)
    app.include_router(users.router)
    app.include_router(auth.router)
    app.include_router(files.router)
    return app
