import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobtracker.core.config import settings
from jobtracker.core.exceptions import AppError
from jobtracker.db.base import Base
from jobtracker.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from jobtracker.models import Job, User  # noqa: F401

# Import API router
from jobtracker.api.api import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger("errors")

UNEXPECTED_ERROR_MESSAGE = "Something went wrong, try again later"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    Base.metadata.create_all(bind=engine)
    yield


# ============== Exception Handlers ==============


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies or query strings are reported as 400s, like other bad input."""
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{field}: {message}" if field else message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": ", ".join(messages) or "Invalid request"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Route does not exist"

    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": str(message)},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": UNEXPECTED_ERROR_MESSAGE},
    )


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Job application tracker",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS Middleware - allowlist from env (comma-separated)
    allowed_origins = [
        origin.strip()
        for origin in settings.BACKEND_CORS_ORIGINS.split(",")
        if origin.strip()
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {"msg": f"Welcome to {settings.APP_NAME} API"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Include API router with /api/v1 prefix
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_application()
