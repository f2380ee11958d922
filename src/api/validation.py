"""Declarative request-body validation.

Each route declares an ordered tuple of ``Rule`` objects. Every rule is
checked against the raw JSON body before the handler runs, and all
failures are reported together, one entry per failed rule.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from email_validator import EmailNotValidError, validate_email
from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import RequestValidationFailedError

Predicate = Callable[[Any], bool]

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class Rule:
    """A single field check: the field, the message shown when it fails, and the check."""

    field: str
    message: str
    check: Predicate


def not_empty(value: Any) -> bool:
    """Present and not blank."""
    if value is None:
        return False
    if isinstance(value, (list, dict)):
        return bool(value)
    return str(value).strip() != ""


def exists(value: Any) -> bool:
    """Present at all, even if empty."""
    return value is not None


def is_email(value: Any) -> bool:
    """A syntactically valid email address (no DNS lookup)."""
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def min_length(length: int) -> Predicate:
    """A string of at least ``length`` characters."""

    def check(value: Any) -> bool:
        return isinstance(value, str) and len(value) >= length

    return check


def validation_error(field: str, message: str) -> dict[str, Any]:
    return {"msg": message, "param": field, "location": "body"}


def collect_errors(payload: dict[str, Any], rules: Sequence[Rule]) -> list[dict[str, Any]]:
    """Evaluate every rule and return one error per failure, in rule order."""
    return [
        validation_error(rule.field, rule.message)
        for rule in rules
        if not rule.check(payload.get(rule.field))
    ]


async def read_json_object(request: Request) -> dict[str, Any]:
    """Read the request body as a JSON object; an empty body counts as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise RequestValidationFailedError(
            [validation_error("body", "Request body must be valid JSON")]
        ) from exc
    if not isinstance(payload, dict):
        raise RequestValidationFailedError(
            [validation_error("body", "Request body must be a JSON object")]
        )
    return payload


class ValidatedBody(Generic[ModelT]):
    """FastAPI dependency that applies a rule set, then parses the body into ``model``.

    Usage::

        body: Annotated[RegisterRequest, Depends(ValidatedBody(RegisterRequest, REGISTER_RULES))]
    """

    def __init__(self, model: type[ModelT], rules: Sequence[Rule]) -> None:
        self._model = model
        self._rules = tuple(rules)

    async def __call__(self, request: Request) -> ModelT:
        payload = await read_json_object(request)

        errors = collect_errors(payload, self._rules)
        if errors:
            raise RequestValidationFailedError(errors)

        try:
            return self._model.model_validate(payload)
        except PydanticValidationError as exc:
            raise RequestValidationFailedError(
                [
                    validation_error(
                        ".".join(str(part) for part in error["loc"]),
                        error["msg"],
                    )
                    for error in exc.errors()
                ]
            ) from exc
