"""Append-only writes: ticket comments and IVR call logs."""

import uuid

from ticketdesk.models.activity import CommentCreate, IvrCallCreate
from ticketdesk.utils.error_handling import ValidationError
from ticketdesk.utils.logging_config import get_logger
from ticketdesk.utils.timestamps import utc_now_iso
from ticketdesk.utils.validators import clean, ensure_present, to_number

logger = get_logger(__name__)


class ActivityService:
    """Record comments and phone calls. Referenced ids are not verified."""

    def __init__(self, comments, ivr_calls):
        self.comments = comments
        self.ivr_calls = ivr_calls

    def add_comment(self, ticket_id: str, request: CommentCreate) -> str:
        text = clean(request.comment)
        ensure_present(comment=text)

        item = {
            "id": str(uuid.uuid4()),
            "ticket_id": ticket_id,
            "agent_id": clean(request.agent_id),
            "comment": text,
            "is_internal": bool(request.is_internal),
            "created_at": utc_now_iso(),
        }
        self.comments.insert(item)
        logger.info(
            "Comment added",
            extra={"ticket_id": ticket_id, "comment_id": item["id"], "internal": item["is_internal"]},
        )
        return item["id"]

    def log_ivr_call(self, request: IvrCallCreate) -> str:
        phone_number = clean(request.phone_number)
        call_type = clean(request.call_type)
        duration = request.call_duration
        if isinstance(duration, str):
            duration = clean(duration)

        missing = [
            name
            for name, value in (
                ("phone_number", phone_number),
                ("call_duration", duration),
                ("call_type", call_type),
            )
            if value is None
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        item = {
            "id": str(uuid.uuid4()),
            "customer_id": clean(request.customer_id),
            "ticket_id": clean(request.ticket_id),
            "phone_number": phone_number,
            "call_duration": to_number(duration, "call_duration"),
            "call_type": call_type,
            "notes": clean(request.notes),
            "created_at": utc_now_iso(),
        }
        self.ivr_calls.insert(item)
        logger.info(
            "IVR call logged",
            extra={"call_id": item["id"], "call_type": call_type, "ticket_id": item["ticket_id"]},
        )
        return item["id"]
