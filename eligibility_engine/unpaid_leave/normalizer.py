"""Input normalization: caller payload -> canonical engine request.

Only the two loosely-typed fields are coerced here. ``relationship`` and
``situation`` pass through verbatim; the decision table owns their
vocabulary.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .errors import MalformedInputError
from .schemas import CallerPayload, UnpaidLeaveInput, UnpaidLeaveRequest


def coerce_bool(value: Any) -> bool:
    """Accept a native bool or the strings "true"/"false" in any case."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise MalformedInputError(f"invalid boolean string: {value}")
    raise MalformedInputError(f"invalid boolean value: {value!r}")


def coerce_optional_float(value: Any) -> float | None:
    """Accept a native number, a numeric string, or None for "no value"."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedInputError(f"invalid number value: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise MalformedInputError(f"invalid number string: {value}") from None
    raise MalformedInputError(f"invalid number value: {value!r}")


def normalize(payload: CallerPayload | dict[str, Any]) -> UnpaidLeaveRequest:
    """Build the canonical request, raising MalformedInputError on bad input."""
    if not isinstance(payload, CallerPayload):
        try:
            payload = CallerPayload.model_validate(payload)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise MalformedInputError(problems) from None

    return UnpaidLeaveRequest(
        input=UnpaidLeaveInput(
            relationship=payload.relationship,
            situation=payload.situation,
            is_single_parent=coerce_bool(payload.is_single_parent),
            total_children_after=coerce_optional_float(payload.total_children_after),
        )
    )
