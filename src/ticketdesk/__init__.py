"""Ticketdesk: support-ticket backend for the agent dashboard."""

__version__ = "1.0.0"
