"""Pydantic models for API payloads."""

from ticketdesk.models.activity import (  # noqa: F401
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    CommentView,
    IvrCallCreate,
    IvrCallCreatedResponse,
)
from ticketdesk.models.agent import Agent, AgentListResponse, AgentRef  # noqa: F401
from ticketdesk.models.customer import (  # noqa: F401
    ContactFields,
    Customer,
    CustomerListResponse,
    CustomerRef,
)
from ticketdesk.models.response import ErrorResponse, HealthResponse, SuccessResponse  # noqa: F401
from ticketdesk.models.ticket import (  # noqa: F401
    CreateTicketRequest,
    CreateTicketResponse,
    OpenTicketListResponse,
    OpenTicketView,
    Ticket,
    TicketListResponse,
    TicketView,
)
