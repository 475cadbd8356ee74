"""Business logic used by the Lambda handlers and the API server.

Handlers reach the core through ``helpdesk_service.get_helpdesk_service()``,
so no DynamoDB resource is created until the first request needs one.
"""
