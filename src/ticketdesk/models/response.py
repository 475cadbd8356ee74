"""Common response wrappers."""

from typing import Optional

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    environment: str
    timestamp: str
