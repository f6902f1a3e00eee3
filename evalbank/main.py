"""
Main FastAPI application entry point.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from prometheus_fastapi_instrumentator import Instrumentator

from evalbank.core.config import settings
from evalbank.core.database import init_db
from evalbank.core.errors import EvaluationPurgedError, InvalidTransitionError, NotFoundError
from evalbank.api.auth import router as auth_router
from evalbank.api.archive import router as archive_router
from evalbank.api.evaluations import router as evaluations_router, student_router
from evalbank.api.questions import router as questions_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry if configured
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} API...")
    if settings.DATABASE_CREATE_ALL:
        init_db()
    yield
    logger.info("Shutdown complete")

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url=None if settings.is_production() else "/docs",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

def _error(status_code: int, message: str, error_type: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "type": error_type, "status_code": status_code, **extra}},
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, exc.detail, "http_error")

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation error", "validation_error", details=jsonable_encoder(exc.errors()))

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, str(exc), "not_found")

@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    return _error(status.HTTP_400_BAD_REQUEST, str(exc), "invalid_transition")

@app.exception_handler(EvaluationPurgedError)
async def purged_handler(request: Request, exc: EvaluationPurgedError):
    return _error(status.HTTP_410_GONE, str(exc), "evaluation_purged")

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    message = "An internal error occurred" if settings.is_production() else str(exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "internal_error")

app.include_router(auth_router, prefix=f"{settings.API_V1_PREFIX}/auth", tags=["auth"])
app.include_router(archive_router, prefix=f"{settings.API_V1_PREFIX}/admin", tags=["archival"])
app.include_router(student_router, prefix=settings.API_V1_PREFIX, tags=["students"])
app.include_router(evaluations_router, prefix=settings.API_V1_PREFIX, tags=["evaluations"])
app.include_router(questions_router, prefix=settings.API_V1_PREFIX, tags=["questions"])

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok", "version": settings.APP_VERSION}
