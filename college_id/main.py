import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from college_id.config.settings import settings
from college_id.db.session import create_mongo_client, get_database
from college_id.db.student_store import StudentStore
from college_id.middlewares import RequestIDMiddleware
from college_id.routers import main_router, root_router
from college_id.utils.errors import StorageError, setup_error_handlers
from college_id.utils.logging import get_logger

# Initialize the logger
logger = get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info(f"{settings.NAME} is starting up...")

    mongo_client = None
    if getattr(application.state, "student_store", None) is None:
        mongo_client = create_mongo_client(settings)
        database = get_database(mongo_client, settings)
        store = StudentStore(database[settings.MONGO_COLLECTION])
        try:
            await run_in_threadpool(store.ensure_indexes)
            logger.info(f"MongoDB connected, database '{settings.MONGO_DB_NAME}'")
        except StorageError as e:
            # Keep serving; each request reports the outage as a 503
            logger.error(f"MongoDB connection error: {e.message}")
        application.state.student_store = store

    yield

    if mongo_client is not None:
        mongo_client.close()
        logger.info("MongoDB connection closed")
    logger.info(f"{settings.NAME} is shutting down...")


def create_application(store: Optional[StudentStore] = None) -> FastAPI:
    """Initialize the FastAPI application.

    ``store`` replaces the MongoDB-backed store that the lifespan would
    otherwise open, which is how tests run the app against mongomock.
    """
    application = FastAPI(
        title=settings.NAME, version=settings.VERSION, lifespan=lifespan
    )
    if store is not None:
        application.state.student_store = store

    # Setup error handlers
    setup_error_handlers(application)

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(RequestIDMiddleware)

    # Routers
    application.include_router(root_router)
    application.include_router(main_router, prefix=settings.API_PREFIX)

    return application


app = create_application()


def run():
    """Start the server, refusing to do so without a database URI."""
    if not settings.MONGO_URI:
        logger.critical("MONGO_URI is missing, set it in the environment or .env")
        sys.exit(1)

    import uvicorn

    uvicorn.run(
        "college_id.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
        log_level=None,
    )


if __name__ == "__main__":
    run()
