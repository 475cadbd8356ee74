"""
Long-running API server.

Serves the same routes as the Lambda entrypoint from a FastAPI app, for
running on a container host or locally against DynamoDB Local:

    DYNAMODB_ENDPOINT_URL=http://localhost:8001 ticketdesk-server
"""

import uuid
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketdesk import __version__
from ticketdesk.config.settings import Settings
from ticketdesk.handlers.health_check import health_payload
from ticketdesk.models.activity import (
    CommentCreatedResponse,
    CommentListResponse,
    IvrCallCreatedResponse,
)
from ticketdesk.models.agent import AgentListResponse
from ticketdesk.models.customer import CustomerListResponse
from ticketdesk.models.response import HealthResponse, SuccessResponse
from ticketdesk.models.ticket import (
    CreateTicketResponse,
    OpenTicketListResponse,
    TicketListResponse,
)
from ticketdesk.services.helpdesk_service import HelpdeskService, get_helpdesk_service
from ticketdesk.utils.error_handling import AppError
from ticketdesk.utils.logging_config import get_logger

logger = get_logger(__name__)
settings = Settings.from_environment()

app = FastAPI(
    title="Ticketdesk API",
    description="Tickets, customers, comments and IVR calls for the support dashboard",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or f"req-{uuid.uuid4().hex[:12]}"
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        exc.message,
        extra={
            "request_id": _request_id(request),
            "path": request.url.path,
            "status_code": exc.status_code,
            "details": exc.details,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        "Request validation failed",
        extra={"request_id": _request_id(request), "path": request.url.path},
    )
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": str(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error",
        extra={"request_id": _request_id(request), "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return health_payload()


@app.post("/api/create-ticket", response_model=CreateTicketResponse)
def create_ticket(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: HelpdeskService = Depends(get_helpdesk_service),
):
    return service.create_ticket(payload or {})


@app.get("/api/tickets", response_model=TicketListResponse)
def list_tickets(service: HelpdeskService = Depends(get_helpdesk_service)):
    return service.list_tickets()


@app.get("/api/open-tickets", response_model=OpenTicketListResponse)
def list_open_tickets(service: HelpdeskService = Depends(get_helpdesk_service)):
    return service.list_open_tickets()


@app.get("/api/customers", response_model=CustomerListResponse)
def list_customers(service: HelpdeskService = Depends(get_helpdesk_service)):
    return service.list_customers()


@app.get("/api/agents", response_model=AgentListResponse)
def list_agents(service: HelpdeskService = Depends(get_helpdesk_service)):
    return service.list_agents()


@app.get("/api/tickets/{ticket_id}/comments", response_model=CommentListResponse)
def list_comments(ticket_id: str, service: HelpdeskService = Depends(get_helpdesk_service)):
    return service.list_comments(ticket_id)


@app.post("/api/tickets/{ticket_id}/comments", response_model=CommentCreatedResponse)
def add_comment(
    ticket_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: HelpdeskService = Depends(get_helpdesk_service),
):
    return service.add_comment(ticket_id, payload or {})


@app.patch("/api/tickets/{ticket_id}", response_model=SuccessResponse)
def update_ticket(
    ticket_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: HelpdeskService = Depends(get_helpdesk_service),
):
    return service.update_ticket(ticket_id, payload or {})


@app.post("/api/ivr-calls", response_model=IvrCallCreatedResponse)
def log_ivr_call(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: HelpdeskService = Depends(get_helpdesk_service),
):
    return service.log_ivr_call(payload or {})


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
