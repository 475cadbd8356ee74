"""Custom exceptions and helpers for consistent error responses."""

import functools
import json
import uuid
from typing import Any, Callable, Dict, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from ticketdesk.utils.logging_config import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Raised when required input is missing or malformed."""

    def __init__(self, message: str = "Invalid input", details: Optional[str] = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConsistencyError(AppError):
    """Raised when a write the store acknowledged cannot be read back."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, status_code=500, details=details)


class StoreError(AppError):
    """Raised when the backing data store fails."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, status_code=500, details=details)


def store_operation(label: str) -> Callable:
    """
    Map data-access failures inside the wrapped call to ``StoreError``.

    ``label`` becomes the ``error`` field the dashboard shows; the botocore
    message goes into ``details``. Application errors pass through untouched.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except (ClientError, BotoCoreError) as exc:
                raise StoreError(label, details=str(exc)) from exc

        return wrapper

    return decorator


def json_response(status: int, body: Union[Dict[str, Any], BaseModel]) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": body.model_dump_json() if isinstance(body, BaseModel) else json.dumps(body),
    }


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return json_response(error.status_code, error.to_body())


def api_handler(func: Callable) -> Callable:
    """
    Wrap a Lambda route handler that returns a pydantic model.

    Every failure is turned into a JSON error response here; nothing escapes
    to the Lambda runtime.
    """

    @functools.wraps(func)
    def wrapper(event, context):
        correlation_id = getattr(context, "aws_request_id", None) or str(uuid.uuid4())
        try:
            result = func(event, context)
        except AppError as exc:
            log = logger.warning if exc.status_code < 500 else logger.error
            log(
                exc.message,
                extra={
                    "correlation_id": correlation_id,
                    "status_code": exc.status_code,
                    "details": exc.details,
                },
            )
            return to_response(exc)
        except Exception as exc:
            logger.exception("Unhandled error", extra={"correlation_id": correlation_id})
            return to_response(AppError("Internal server error", 500, details=str(exc)))
        return json_response(200, result)

    return wrapper
