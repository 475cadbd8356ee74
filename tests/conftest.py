"""
Pytest configuration: import paths, offline AWS defaults, and in-memory
repositories for exercising the helpdesk core without DynamoDB.
"""

import os
import sys
from pathlib import Path
from types import SimpleNamespace

import boto3
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The repo root makes ``infrastructure.*`` importable; src/ makes the
    ``ticketdesk`` package importable without an editable install, the same
    layout the Lambda bundle uses.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Table names the handlers read
os.environ.setdefault("CUSTOMERS_TABLE", "test-customers")
os.environ.setdefault("TICKETS_TABLE", "test-tickets")
os.environ.setdefault("AGENTS_TABLE", "test-agents")
os.environ.setdefault("COMMENTS_TABLE", "test-ticket-comments")
os.environ.setdefault("IVR_CALLS_TABLE", "test-ivr-calls")

boto3.setup_default_session(region_name="eu-west-2")


class InMemoryCustomers:
    """Customer repository with the same upsert semantics as the DynamoDB one."""

    def __init__(self):
        self.items = {}
        self.by_email = {}
        self.lose_upserts = False

    def upsert_by_email(self, email, fields, created_at):
        if self.lose_upserts:
            return
        customer_id = self.by_email.get(email)
        if customer_id is None:
            customer_id = f"cust-{len(self.items) + 1}"
            self.by_email[email] = customer_id
            self.items[customer_id] = {"id": customer_id, "created_at": created_at}
        self.items[customer_id].update(fields, email=email)

    def get_by_email(self, email):
        customer_id = self.by_email.get(email)
        return dict(self.items[customer_id]) if customer_id else None

    def insert(self, item):
        self.items[item["id"]] = dict(item)

    def get_many(self, keys):
        return {k: dict(self.items[k]) for k in keys if k in self.items}

    def list_all(self):
        return [dict(item) for item in self.items.values()]


class InMemoryTickets:
    def __init__(self):
        self.items = {}

    def insert(self, item):
        self.items[item["id"]] = dict(item)

    def list_all(self):
        return [dict(item) for item in self.items.values()]

    def list_by_status(self, statuses):
        wanted = set(statuses)
        return [dict(item) for item in self.items.values() if item.get("status") in wanted]

    def update(self, ticket_id, fields):
        if ticket_id not in self.items:
            return False
        self.items[ticket_id].update(fields)
        return True


class InMemoryComments:
    def __init__(self):
        self.items = {}

    def insert(self, item):
        self.items[item["id"]] = dict(item)

    def list_for_ticket(self, ticket_id):
        return [dict(item) for item in self.items.values() if item.get("ticket_id") == ticket_id]


class InMemoryAgents:
    def __init__(self):
        self.items = {}

    def add(self, **agent):
        self.items[agent["id"]] = agent

    def list_active(self):
        return [dict(item) for item in self.items.values() if item.get("is_active") is True]

    def get_many(self, keys):
        return {k: dict(self.items[k]) for k in keys if k in self.items}


class InMemoryIvrCalls:
    def __init__(self):
        self.items = {}

    def insert(self, item):
        self.items[item["id"]] = dict(item)


@pytest.fixture()
def repos():
    return SimpleNamespace(
        customers=InMemoryCustomers(),
        tickets=InMemoryTickets(),
        comments=InMemoryComments(),
        agents=InMemoryAgents(),
        ivr_calls=InMemoryIvrCalls(),
    )


@pytest.fixture()
def service(repos):
    from ticketdesk.services.helpdesk_service import HelpdeskService

    return HelpdeskService(
        customers=repos.customers,
        tickets=repos.tickets,
        comments=repos.comments,
        agents=repos.agents,
        ivr_calls=repos.ivr_calls,
    )


@pytest.fixture()
def use_service(monkeypatch, service):
    """Make the Lambda handlers use the in-memory service."""
    from ticketdesk.services import helpdesk_service

    monkeypatch.setattr(helpdesk_service, "get_helpdesk_service", lambda: service)
    return service
