"""Support agent models."""

from typing import List, Optional

from pydantic import BaseModel


class Agent(BaseModel):
    """Agent record; agents are read-only for this service."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    is_active: bool = False
    created_at: Optional[str] = None


class AgentRef(BaseModel):
    """Agent shape embedded in a comment."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class AgentListResponse(BaseModel):
    agents: List[Agent]
