import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import router as directory_router
from .config import Settings, get_settings
from .crud.directory import DirectoryStore
from .errors import (
    HTTP_422_UNPROCESSABLE,
    AppError,
    InternalError,
    ValidationError,
    error_payload,
    resolve_error_code,
)
from .seed import build_demo_store
from .services.directory_service import DirectoryService
from .services.notifications import LoggingNotifier

logger = logging.getLogger("rbac_directory")


def _resolve_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_name: str) -> None:
    log_level = _resolve_log_level(level_name)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(log_level)


def build_directory_service(settings: Settings) -> DirectoryService:
    store = build_demo_store() if settings.seed_demo_data else DirectoryStore()
    notifier = LoggingNotifier(duration_ms=settings.notification_duration_ms)
    return DirectoryService(store, notifier)


def _log_error(request: Request, status_code: int, code: str, message: str, exc: Exception | None = None) -> None:
    request_id = request.headers.get("x-request-id")
    log_message = f"[{code}] path={request.url.path} request_id={request_id or 'n/a'} message={message}"
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(log_message, exc_info=exc)
    else:
        logger.warning(log_message)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    _log_error(request, exc.status_code, exc.code, exc.message, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(exc.code, exc.message, exc.details),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = resolve_error_code(exc.status_code)
    message = str(exc.detail).strip() if exc.detail else "Request failed"
    _log_error(request, exc.status_code, code, message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(code, message, None),
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "Request validation failed"
    _log_error(request, HTTP_422_UNPROCESSABLE, ValidationError.code, message)
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE,
        content=error_payload(ValidationError.code, message, exc.errors()),
    )


async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    _log_error(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        InternalError.code,
        InternalError.message,
        exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload(InternalError.code, InternalError.message, None),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    summary = app.state.directory_service.summary()
    logger.info(
        "Starting application users=%s roles=%s permissions=%s",
        summary.total_users,
        summary.total_roles,
        summary.total_permissions,
    )
    if app.debug:
        logger.warning("DEBUG=true - do not use in production")

    yield

    logger.info("Stopping application")


def create_app(
    settings: Settings | None = None,
    service: DirectoryService | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        settings: Settings to use; read from the environment when omitted
        service: Directory service to expose; built from ``settings`` when omitted
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.state.directory_service = service or build_directory_service(settings)

    app.include_router(directory_router)
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unhandled_exception)

    @app.get("/health", tags=["health"])
    async def healthcheck() -> JSONResponse:
        logger.debug("Healthcheck passed")
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})

    return app


app = create_app()
