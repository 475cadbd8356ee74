"""
Helpdesk core.

The single entry point the Lambda handlers and the FastAPI app call into.
It parses request payloads, runs the operation, and reports store failures
as ``StoreError`` with a label the dashboard can show.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, Optional

from ticketdesk.config.settings import Settings
from ticketdesk.models.activity import (
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    IvrCallCreate,
    IvrCallCreatedResponse,
)
from ticketdesk.models.agent import AgentListResponse
from ticketdesk.models.customer import CustomerListResponse
from ticketdesk.models.response import SuccessResponse
from ticketdesk.models.ticket import (
    CreateTicketRequest,
    CreateTicketResponse,
    OpenTicketListResponse,
    TicketListResponse,
)
from ticketdesk.repositories.activity_repo import (
    AgentRepository,
    CommentRepository,
    IvrCallRepository,
)
from ticketdesk.repositories.customer_repo import CustomerRepository
from ticketdesk.repositories.dynamodb_repo import DynamoDbStore
from ticketdesk.repositories.ticket_repo import TicketRepository
from ticketdesk.services.activity_service import ActivityService
from ticketdesk.services.identity_resolver import IdentityResolver
from ticketdesk.services.ticket_service import TicketService
from ticketdesk.services.view_assembler import ViewAssembler
from ticketdesk.utils.error_handling import store_operation
from ticketdesk.utils.validators import parse_model


class HelpdeskService:
    """Ticketing operations over a set of table repositories."""

    def __init__(self, *, customers, tickets, comments, agents, ivr_calls):
        self.resolver = IdentityResolver(customers)
        self.ticket_service = TicketService(tickets, self.resolver)
        self.views = ViewAssembler(tickets, customers, comments, agents)
        self.activity = ActivityService(comments, ivr_calls)

    @classmethod
    def from_settings(
        cls, settings: Settings, store: Optional[DynamoDbStore] = None
    ) -> "HelpdeskService":
        store = store or DynamoDbStore(
            region_name=settings.aws_region,
            endpoint_url=settings.dynamodb_endpoint_url,
        )
        return cls(
            customers=CustomerRepository(store, settings.customers_table),
            tickets=TicketRepository(store, settings.tickets_table),
            comments=CommentRepository(store, settings.comments_table),
            agents=AgentRepository(store, settings.agents_table),
            ivr_calls=IvrCallRepository(store, settings.ivr_calls_table),
        )

    @store_operation("Internal server error")
    def create_ticket(self, payload: Any) -> CreateTicketResponse:
        request = parse_model(CreateTicketRequest, payload)
        return CreateTicketResponse(ticket=self.ticket_service.create_ticket(request))

    @store_operation("Failed to fetch tickets")
    def list_tickets(self) -> TicketListResponse:
        return TicketListResponse(tickets=self.views.list_tickets())

    @store_operation("Failed to fetch tickets")
    def list_open_tickets(self) -> OpenTicketListResponse:
        return OpenTicketListResponse(tickets=self.views.list_open_tickets())

    @store_operation("Failed to fetch customers")
    def list_customers(self) -> CustomerListResponse:
        return CustomerListResponse(customers=self.views.list_customers())

    @store_operation("Failed to fetch agents")
    def list_agents(self) -> AgentListResponse:
        return AgentListResponse(agents=self.views.list_active_agents())

    @store_operation("Failed to fetch comments")
    def list_comments(self, ticket_id: str) -> CommentListResponse:
        return CommentListResponse(comments=self.views.list_comments(ticket_id))

    @store_operation("Failed to add comment")
    def add_comment(self, ticket_id: str, payload: Any) -> CommentCreatedResponse:
        request = parse_model(CommentCreate, payload)
        return CommentCreatedResponse(comment_id=self.activity.add_comment(ticket_id, request))

    @store_operation("Failed to update ticket")
    def update_ticket(self, ticket_id: str, patch: Any) -> SuccessResponse:
        self.ticket_service.update_ticket(ticket_id, patch)
        return SuccessResponse()

    @store_operation("Failed to log IVR call")
    def log_ivr_call(self, payload: Any) -> IvrCallCreatedResponse:
        request = parse_model(IvrCallCreate, payload)
        return IvrCallCreatedResponse(call_id=self.activity.log_ivr_call(request))


_helpdesk_service: Optional[HelpdeskService] = None
_init_lock = Lock()


def get_helpdesk_service() -> HelpdeskService:
    """Lazy-load the process-wide HelpdeskService (one store handle per container)."""
    global _helpdesk_service
    if _helpdesk_service is None:
        with _init_lock:
            if _helpdesk_service is None:
                _helpdesk_service = HelpdeskService.from_settings(Settings.from_environment())
    return _helpdesk_service
