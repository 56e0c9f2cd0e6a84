"""Mapping between engine documents and caller-facing replies."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .errors import (
    IsolationError,
    MalformedInputError,
    RuleValidationError,
    SerializationError,
    UnpaidLeaveError,
)
from .schemas import EvaluationReply, UnpaidLeaveResponse


def to_response(result: dict[str, Any]) -> UnpaidLeaveResponse:
    """Deserialize the engine result document into the response envelope.

    The values are passed through as the decision table produced them.
    """
    try:
        return UnpaidLeaveResponse.model_validate(result)
    except ValidationError as e:
        raise SerializationError(str(e)) from e


def render_response(response: UnpaidLeaveResponse) -> str:
    """Pretty JSON text of a successful response, absent members omitted."""
    return response.model_dump_json(indent=2, exclude_none=True)


def success_reply(response: UnpaidLeaveResponse) -> EvaluationReply:
    return EvaluationReply(text=render_response(response), response=response)


def error_reply(error: UnpaidLeaveError) -> EvaluationReply:
    """Turn any evaluation failure into its caller-facing reply."""
    if isinstance(error, RuleValidationError):
        return EvaluationReply(
            is_error=True,
            error_kind=error.kind,
            text=str(error),
            errors=error.errors,
        )

    if isinstance(error, MalformedInputError):
        text = f"Invalid input: {error}"
    elif isinstance(error, IsolationError):
        text = f"Internal error: {error}"
    else:
        text = f"Evaluation error: {error}"

    return EvaluationReply(is_error=True, error_kind=error.kind, text=text)
