"""Comment and IVR call models."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ticketdesk.models.agent import AgentRef


class CommentCreate(BaseModel):
    """Body of POST /api/tickets/{id}/comments."""

    model_config = ConfigDict(extra="ignore")

    comment: Optional[str] = None
    is_internal: Optional[bool] = False
    agent_id: Optional[str] = None

    @field_validator("is_internal")
    @classmethod
    def default_internal(cls, value: Optional[bool]) -> bool:
        return bool(value)


class CommentView(BaseModel):
    """Comment with its author embedded when known."""

    id: str
    ticket_id: Optional[str] = None
    agent_id: Optional[str] = None
    comment: Optional[str] = None
    is_internal: bool = False
    created_at: Optional[str] = None
    agents: Optional[AgentRef] = None


class CommentListResponse(BaseModel):
    comments: List[CommentView]


class CommentCreatedResponse(BaseModel):
    success: bool = True
    comment_id: str


class IvrCallCreate(BaseModel):
    """Body of POST /api/ivr-calls. Duration is coerced by the service."""

    model_config = ConfigDict(extra="ignore")

    phone_number: Optional[str] = None
    call_duration: Optional[Any] = None
    call_type: Optional[str] = None
    customer_id: Optional[str] = None
    ticket_id: Optional[str] = None
    notes: Optional[str] = None


class IvrCallCreatedResponse(BaseModel):
    success: bool = True
    call_id: str
