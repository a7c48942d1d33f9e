"""Domain errors raised by the approval, audit and catalog services.

Each error carries the HTTP status it maps to; ``register_exception_handlers``
wires them into the FastAPI app so routes can let them propagate.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CatalogAdminError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request could not be completed"

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        self.detail = detail or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class PolicyViolation(CatalogAdminError):
    """The caller's role does not allow the attempted action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Action not permitted for this role"


class NotFound(CatalogAdminError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class InvalidState(CatalogAdminError):
    """A state transition was attempted from a state that does not allow it."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid state for this operation"


class ValidationError(CatalogAdminError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class StorageFailure(CatalogAdminError):
    """The persistence layer could not complete the operation."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors into ``{"detail": ...}`` responses."""

    @app.exception_handler(CatalogAdminError)
    async def handle_catalog_admin_error(request: Request, exc: CatalogAdminError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
