"""FileGate Service API main application module."""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from filegate.config import env
from filegate.config.logging import get_logger
from filegate.config.validation import EnvValidator
from filegate.exceptions import FileGateError, UpstreamError
from filegate.middleware.logging import (
  SecurityLoggingMiddleware,
  StructuredLoggingMiddleware,
)
from filegate.operations.email import NotificationService
from filegate.operations.folders import FolderStore, InMemoryFolderStore
from filegate.operations.storage import B2StorageService
from filegate.routers import (
  files_router,
  folders_router,
  notifications_router,
  status_router,
)

logger = get_logger("filegate.api")

GENERIC_ERROR_MESSAGE = "Internal server error"

BASE_RESPONSE_HEADERS = {
  "X-Content-Type-Options": "nosniff",
  "X-Frame-Options": "DENY",
  "Referrer-Policy": "no-referrer",
}


def error_response(status_code: int, message: str) -> JSONResponse:
  return JSONResponse(
    status_code=status_code, content={"success": False, "error": message}
  )


def describe_validation_error(exc: RequestValidationError) -> str:
  """First request validation problem as a single line."""
  errors = exc.errors()
  if not errors:
    return "Invalid request"
  first = errors[0]
  location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
  message = first.get("msg", "is invalid")
  if location:
    return f"Invalid request: {location} {message}"
  return f"Invalid request: {message}"


def create_app(
  folder_store: Optional[FolderStore] = None,
  storage: Optional[B2StorageService] = None,
  notifier: Optional[NotificationService] = None,
) -> FastAPI:
  """
  Create the FastAPI app and include the routers.

  Collaborators default to the real implementations configured from the
  environment; pass them explicitly to build an app around test doubles.

  Returns:
      FastAPI: The configured FastAPI application.
  """
  app = FastAPI(
    title="FileGate API",
    description="Per-user file storage, folders and email notifications",
    docs_url="/docs",
    redoc_url=None,
    openapi_url="/openapi.json",
  )

  app.state.folder_store = folder_store or InMemoryFolderStore()
  app.state.storage = storage or B2StorageService()
  app.state.notifier = notifier or NotificationService()

  @app.on_event("startup")
  async def check_environment():
    try:
      EnvValidator.validate_required_vars(env)
    except Exception as e:
      logger.error(f"Invalid configuration: {e}")
      if env.is_production():
        raise
      return
    logger.info(
      "FileGate API ready",
      extra={"action": "startup", "metadata": EnvValidator.get_config_summary(env)},
    )

  app.add_middleware(
    CORSMiddleware,
    allow_origins=env.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
    expose_headers=["X-Request-ID"],
    max_age=3600,
  )

  # First added is outermost
  app.add_middleware(StructuredLoggingMiddleware)
  app.add_middleware(SecurityLoggingMiddleware)

  @app.middleware("http")
  async def response_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(BASE_RESPONSE_HEADERS)
    if env.ENVIRONMENT in ("prod", "staging"):
      response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    # Signed URLs carry a bearer token
    if request.url.path == "/download":
      response.headers["Cache-Control"] = "no-store, private"
    return response

  @app.exception_handler(FileGateError)
  async def filegate_exception_handler(
    request: Request, exc: FileGateError
  ) -> JSONResponse:
    """Map typed application errors to their status and the error envelope."""
    request_id = getattr(request.state, "request_id", None)
    message = exc.message

    if isinstance(exc, UpstreamError) or exc.status_code >= 500:
      logger.error(
        f"{exc.error_code}: {exc.message}",
        exc_info=exc,
        extra={
          "component": exc.details.get("service", "api"),
          "action": exc.details.get("operation", "request"),
          "error_category": "upstream",
          "request_id": request_id,
          "metadata": exc.details,
        },
      )
      if not env.EXPOSE_UPSTREAM_ERRORS:
        message = GENERIC_ERROR_MESSAGE
    else:
      logger.warning(
        f"{exc.error_code}: {exc.message}",
        extra={"request_id": request_id, "metadata": exc.details},
      )

    return error_response(exc.status_code, message)

  @app.exception_handler(RequestValidationError)
  async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
  ) -> JSONResponse:
    message = describe_validation_error(exc)
    logger.warning(message, extra={"request_id": getattr(request.state, "request_id", None)})
    return error_response(status.HTTP_400_BAD_REQUEST, message)

  @app.exception_handler(Exception)
  async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything untyped becomes a 500 with a generic message."""
    request_id = getattr(request.state, "request_id", None)
    logger.error("Unhandled exception", extra={"request_id": request_id}, exc_info=exc)

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)

  app.include_router(status_router)
  app.include_router(folders_router)
  app.include_router(files_router)
  app.include_router(notifications_router)

  return app


app = create_app()


if __name__ == "__main__":
  import uvicorn

  uvicorn.run("main:app", host=env.HOST, port=env.PORT, reload=env.is_development())
