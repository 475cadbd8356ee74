"""Customer models."""

from typing import List, Optional

from pydantic import BaseModel


class ContactFields(BaseModel):
    """Raw contact data handed to the identity resolver."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company_name: Optional[str] = None
    address: Optional[str] = None


class Customer(BaseModel):
    """Canonical customer record as returned to the dashboard."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company_name: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[str] = None


class CustomerRef(BaseModel):
    """Reduced customer shape embedded in the open-tickets summary."""

    id: str
    name: Optional[str] = None


class CustomerListResponse(BaseModel):
    customers: List[Customer]
