from contextlib import asynccontextmanager
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from dental_clinic.core.config import settings
from dental_clinic.core.exceptions import register_exception_handlers
from dental_clinic.api.api import api_router
from dental_clinic.infrastructure.database import SessionLocal, init_db, close_db
from dental_clinic.infrastructure.seed import seed_defaults
from dental_clinic.middleware.request_logging import RequestLoggingMiddleware

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()
    logger.info(f"{settings.PROJECT_NAME} started")
    yield
    close_db()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/health")
def health_check():
    return {"status": "ok"}
