"""Input validation helpers."""

from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from daily_journal.core.errors import ValidationFailed

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err and not isinstance(err["input"], (str, int, float, bool, list, dict, type(None))):
            err["input"] = str(err["input"])
    return errors


def validate_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Validate ``data`` against ``schema`` or raise ValidationFailed."""
    try:
        return schema.model_validate(data if data is not None else {})
    except ValidationError as exc:
        errors = jsonable_errors(exc)
        first = errors[0] if errors else {}
        loc = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{loc}: {first.get('msg')}" if loc else first.get("msg")
        raise ValidationFailed(message, details=errors) from exc
