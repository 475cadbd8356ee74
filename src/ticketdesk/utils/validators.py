"""Input normalization and presence checks shared by the core services."""

import base64
import binascii
import json
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ticketdesk.utils.error_handling import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def clean(value: Any) -> Optional[str]:
    """Trim a string; absent or blank values become ``None``."""
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def ensure_present(**fields: Any) -> None:
    """Raise ValidationError naming every field that has no value."""
    missing = [name for name, value in fields.items() if value in (None, "", [])]
    if not missing:
        return
    verb = "is" if len(missing) == 1 else "are"
    raise ValidationError(f"{' and '.join(missing)} {verb} required")


def to_number(value: Any, field: str) -> Decimal:
    """Coerce a JSON number or numeric string to a Decimal for storage."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be numeric")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be numeric") from exc
    if not number.is_finite():
        raise ValidationError(f"{field} must be numeric")
    return number


def parse_model(model: Type[ModelT], payload: Any) -> ModelT:
    """Validate a request payload, reporting failures as a 400."""
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        fields = _error_fields(exc.errors())
        raise ValidationError(f"Invalid value for {fields}", details=str(exc)) from exc


def parse_json_body(event: Dict[str, Any]) -> Any:
    """Decode the JSON body of an API Gateway event."""
    raw = event.get("body") or ""
    if event.get("isBase64Encoded") and raw:
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValidationError("Request body must be valid JSON", details=str(exc)) from exc
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("Request body must be valid JSON", details=str(exc)) from exc


def _error_fields(errors: Iterable[Dict[str, Any]]) -> str:
    names = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", ()))
        if loc and loc not in names:
            names.append(loc)
    return ", ".join(names) or "request body"
