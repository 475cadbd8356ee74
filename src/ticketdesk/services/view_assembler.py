"""
Read-side views for the dashboard.

Tickets, comments, customers and agents are stored as separate documents;
the functions here left-join them (a missing related record becomes
``None``, never an error), order them and project them to response shapes.
"""

from typing import Any, Dict, Iterable, List, Optional

from ticketdesk.models.activity import CommentView
from ticketdesk.models.agent import Agent, AgentRef
from ticketdesk.models.customer import Customer, CustomerRef
from ticketdesk.models.ticket import OPEN_STATUSES, OpenTicketView, TicketView

OPEN_TICKETS_LIMIT = 20

Doc = Dict[str, Any]


def token(value: Any) -> Optional[str]:
    """Render a stored id or scalar as a string; numbers come back from DynamoDB as Decimal."""
    return None if value is None else str(value)


def newest_first(docs: Iterable[Doc]) -> List[Doc]:
    return sorted(docs, key=lambda d: d.get("created_at") or "", reverse=True)


def by_name(docs: Iterable[Doc]) -> List[Doc]:
    return sorted(docs, key=lambda d: token(d.get("name")) or "")


def customer_view(doc: Doc) -> Customer:
    return Customer(
        id=token(doc["id"]),
        name=token(doc.get("name")),
        email=token(doc.get("email")),
        phone=token(doc.get("phone")),
        company_name=token(doc.get("company_name")),
        address=token(doc.get("address")),
        created_at=token(doc.get("created_at")),
    )


def ticket_view(doc: Doc, customer: Optional[Doc]) -> TicketView:
    return TicketView(
        id=token(doc["id"]),
        ticket_number=token(doc.get("ticket_number")),
        customer_id=token(doc.get("customer_id")),
        assigned_to=token(doc.get("assigned_to")),
        title=token(doc.get("title")),
        description=token(doc.get("description")),
        type=token(doc.get("type")),
        status=token(doc.get("status")),
        priority=token(doc.get("priority")),
        source=token(doc.get("source")),
        tracking_number=token(doc.get("tracking_number")),
        created_at=token(doc.get("created_at")),
        updated_at=token(doc.get("updated_at")),
        closed_at=token(doc.get("closed_at")),
        customers=customer_view(customer) if customer else None,
        agents=None,
    )


def open_ticket_view(doc: Doc, customer: Optional[Doc]) -> OpenTicketView:
    return OpenTicketView(
        id=token(doc["id"]),
        ticket_number=token(doc.get("ticket_number")),
        title=token(doc.get("title")),
        status=token(doc.get("status")),
        customers=(
            CustomerRef(id=token(customer["id"]), name=token(customer.get("name")))
            if customer
            else None
        ),
    )


def agent_view(doc: Doc) -> Agent:
    return Agent(
        id=token(doc["id"]),
        name=doc.get("name"),
        email=doc.get("email"),
        role=doc.get("role"),
        is_active=bool(doc.get("is_active")),
        created_at=doc.get("created_at"),
    )


def comment_view(doc: Doc, agent: Optional[Doc]) -> CommentView:
    return CommentView(
        id=token(doc["id"]),
        ticket_id=token(doc.get("ticket_id")),
        agent_id=token(doc.get("agent_id")),
        comment=doc.get("comment"),
        is_internal=bool(doc.get("is_internal")),
        created_at=doc.get("created_at"),
        agents=(
            AgentRef(
                id=token(agent["id"]),
                name=agent.get("name"),
                email=agent.get("email"),
                role=agent.get("role"),
            )
            if agent
            else None
        ),
    )


class ViewAssembler:
    """Compose list views from the table repositories."""

    def __init__(self, tickets, customers, comments, agents):
        self.tickets = tickets
        self.customers = customers
        self.comments = comments
        self.agents = agents

    def list_tickets(self) -> List[TicketView]:
        docs = newest_first(self.tickets.list_all())
        customers = self.customers.get_many(d.get("customer_id") for d in docs)
        return [ticket_view(d, customers.get(d.get("customer_id"))) for d in docs]

    def list_open_tickets(self, limit: int = OPEN_TICKETS_LIMIT) -> List[OpenTicketView]:
        docs = newest_first(self.tickets.list_by_status(OPEN_STATUSES))[:limit]
        customers = self.customers.get_many(d.get("customer_id") for d in docs)
        return [open_ticket_view(d, customers.get(d.get("customer_id"))) for d in docs]

    def list_comments(self, ticket_id: str) -> List[CommentView]:
        docs = newest_first(self.comments.list_for_ticket(ticket_id))
        agents = self.agents.get_many(d.get("agent_id") for d in docs)
        return [comment_view(d, agents.get(d.get("agent_id"))) for d in docs]

    def list_customers(self) -> List[Customer]:
        return [customer_view(d) for d in by_name(self.customers.list_all())]

    def list_active_agents(self) -> List[Agent]:
        active = (d for d in self.agents.list_active() if d.get("is_active") is True)
        return [agent_view(d) for d in by_name(active)]
