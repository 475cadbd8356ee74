"""Lambda adapter: API Gateway HTTP API events in, JSON responses out."""
