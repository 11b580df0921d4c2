"""
Error taxonomy for the account service.

Every failure a handler can produce maps onto one of these kinds. They are
HTTPException subclasses so FastAPI propagates them like any other HTTP
error; ``register_error_handlers`` renders them with the service's
``{status, message, statusCode}`` envelope.
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from .validation import collect_field_errors

logger = logging.getLogger(__name__)


class ServiceError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    status_label = "Bad request"
    default_message = "Bad request"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        self.message = message or self.default_message
        super().__init__(status_code=self.status_code, detail=self.message, headers=headers)

    def to_dict(self) -> dict:
        return {
            "status": self.status_label,
            "message": self.message,
            "statusCode": self.status_code,
        }


class BadRequestError(ServiceError):
    pass


class ValidationError(ServiceError):
    """422 carrying every failing field, never just the first one."""

    status_code = 422
    default_message = "Validation failed"

    def __init__(self, errors: List[dict], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"errors": self.errors}


class AuthenticationError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    status_label = "fail"
    default_message = "Forbidden"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    status_label = "fail"
    default_message = "Not found"


class ConflictError(ServiceError):
    status_code = 422
    default_message = "User already exists"


class InternalError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    status_label = "error"
    default_message = "Internal server error"


async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(collect_field_errors(exc.errors()))
    logger.info("Request rejected by validation: fields=%s", [e["field"] for e in error.errors])
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
