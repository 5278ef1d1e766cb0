"""Model validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from core.models.errors import StorefrontError, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _friendly_message(err: dict[str, Any]) -> str:
    msg = err.get("msg", "Invalid value").replace("Value error,", "").strip()
    ctx = err.get("ctx") or {}
    msg_lower = msg.lower()

    if "field required" in msg_lower:
        return "This field is required"
    if "ge" in ctx:
        return f"Must be at least {ctx['ge']}"
    if "gt" in ctx:
        return f"Must be greater than {ctx['gt']}"
    if "le" in ctx:
        return f"Must be at most {ctx['le']}"
    if "valid integer" in msg_lower or "valid number" in msg_lower:
        return "Must be a number"
    if "type" in msg_lower:
        return "Invalid value type"
    return msg


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten Pydantic errors into ``[{field, message}]`` for callers and logs.

    Only the location and a readable message survive; ``input``, ``ctx``
    and ``url`` are dropped so raw filter values never reach the logs.
    Numeric bounds are spelled out, e.g. ``Must be at most 100``.
    """
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": _friendly_message(err),
        }
        for err in errors
    ]


def parse_model(
    model: type[ModelT],
    data: dict[str, Any],
    *,
    message: str = "Invalid request parameters",
    error_cls: type[StorefrontError] = ValidationError,
) -> ModelT:
    """Validate data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate
        message: Error message used when validation fails
        error_cls: Domain error raised on failure

    Returns:
        The validated model instance

    Raises:
        StorefrontError: ``error_cls`` with sanitized field errors in
            ``details["errors"]``
    """
    try:
        return model.model_validate(data)

    except PydanticValidationError as exc:
        sanitized_errors = sanitize_validation_errors(exc.errors())
        raise error_cls(
            message=message,
            details={"errors": sanitized_errors},
        ) from exc
