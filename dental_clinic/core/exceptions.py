from typing import Dict, Any, List, Optional
from datetime import datetime
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import logging

logger = logging.getLogger(__name__)


class BaseCustomException(Exception):
    """Base class for domain errors rendered as JSON by the API.

    Subclasses pick the HTTP status and the fallback message/error code;
    callers may override both per raise.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error"
    default_error_code: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        self.error_code = error_code or self.default_error_code
        super().__init__(self.message)


class ValidationError(BaseCustomException):
    """Input that passed schema parsing but breaks a domain rule"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"
    default_error_code = "VALIDATION_ERROR"


class AuthenticationError(BaseCustomException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication failed"
    default_error_code = "AUTHENTICATION_ERROR"


class AuthorizationError(BaseCustomException):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"
    default_error_code = "AUTHORIZATION_ERROR"


class NotFoundError(BaseCustomException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"
    default_error_code = "NOT_FOUND_ERROR"


class ConflictError(BaseCustomException):
    """Unique field already taken"""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource conflict"
    default_error_code = "CONFLICT_ERROR"


class DatabaseError(BaseCustomException):
    default_message = "Database operation failed"
    default_error_code = "DATABASE_ERROR"


class BusinessLogicError(BaseCustomException):
    """Well-formed request refused by the current state (slot taken, record in use...)"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Business logic error"
    default_error_code = "BUSINESS_LOGIC_ERROR"


# OpenAPI models for the bodies produced below
class ErrorResponse(BaseModel):
    error: str
    message: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: Optional[str] = None


class FieldError(BaseModel):
    field: str
    message: str
    type: str


class ValidationErrorResponse(BaseModel):
    error: str = "Validation Error"
    message: str
    error_code: Optional[str] = None
    validation_errors: List[FieldError] = []
    timestamp: Optional[str] = None


ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


def create_error_response(exception: BaseCustomException) -> Dict[str, Any]:
    body = {
        "error": exception.__class__.__name__.replace("Error", " Error"),
        "message": exception.message,
        "error_code": exception.error_code,
        "timestamp": datetime.utcnow().isoformat(),
    }
    if exception.details:
        body["details"] = exception.details
    return body


def create_validation_error_response(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Turn pydantic error entries into the field/message/type list clients render"""
    validation_errors = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the "body"/"query"/"path" prefix unless it is all there is
        field = ".".join(loc[1:]) if len(loc) > 1 else "".join(loc)
        validation_errors.append({
            "field": field,
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        })

    return {
        "error": "Validation Error",
        "message": "Invalid request data",
        "error_code": "VALIDATION_ERROR",
        "validation_errors": validation_errors,
        "timestamp": datetime.utcnow().isoformat(),
    }


def handle_database_error(error: Exception, operation: str = "database operation") -> DatabaseError:
    """Log a driver failure and wrap it so the handler returns a 500 body"""
    logger.error(f"Database error during {operation}: {error}")

    text = str(error).lower()
    if "connection" in text:
        message = "Database connection failed"
    elif "constraint" in text:
        message = "Database constraint violation"
    else:
        message = None

    return DatabaseError(message, details={"operation": operation}, error_code="DATABASE_OPERATION_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Render domain and validation failures as JSON error bodies"""

    @app.exception_handler(BaseCustomException)
    async def custom_exception_handler(request: Request, exc: BaseCustomException):
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=create_error_response(exc),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=create_validation_error_response(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred",
                "error_code": "UNEXPECTED_ERROR",
                "timestamp": datetime.utcnow().isoformat(),
            },
        )
