"""Error taxonomy for unpaid leave evaluations."""

from __future__ import annotations

from .schemas import FieldError


class UnpaidLeaveError(Exception):
    """Base class for every failure an evaluation can end in."""

    kind = "evaluation"
    caller_fault = False


class MalformedInputError(UnpaidLeaveError):
    """The caller payload failed type coercion."""

    kind = "malformed_input"
    caller_fault = True


class TableLoadError(UnpaidLeaveError):
    """The decision-table artifact could not be loaded."""


class EngineEvaluationError(UnpaidLeaveError):
    """The rule engine failed and the failure carried no usable structure."""

    def __init__(self, cause: BaseException | str):
        self.cause = cause
        self.detail = str(cause)
        super().__init__(self.detail)

    def __str__(self) -> str:
        return f"Decision engine error: {self.detail}"


class RuleValidationError(UnpaidLeaveError):
    """The decision table rejected one or more fields."""

    kind = "validation"
    caller_fault = True

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__(self._render())

    def _render(self) -> str:
        lines = ["Validation errors:"]
        for error in self.errors:
            lines.append(f"  - Field '{error.path}': {error.message}")
        return "\n".join(lines) + "\n"


class SerializationError(UnpaidLeaveError):
    """The engine result did not match the expected output shape."""

    kind = "serialization"

    def __str__(self) -> str:
        return f"Serialization error: {self.args[0] if self.args else ''}"


class IsolationError(UnpaidLeaveError):
    """The worker running the evaluation did not complete."""

    kind = "internal"
