"""Pydantic models for unpaid leave evaluation requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

RELATIONSHIPS = (
    "father",
    "mother",
    "parent",
    "son",
    "daughter",
    "spouse",
    "partner",
    "husband",
    "wife",
    "foster_parent",
)

SITUATIONS = (
    "birth",
    "adoption",
    "foster_care",
    "multiple_birth",
    "multiple_adoption",
    "multiple_foster_care",
    "illness",
    "accident",
)

RELATIONSHIP_DESCRIPTION = (
    "Family relationship with the person who needs care. VALID VALUES: "
    + ", ".join(f"'{value}'" for value in RELATIONSHIPS)
    + ". Example: My mother had an accident and I'm taking care of her => 'son'; "
    "I had a baby => 'mother' or 'parent'"
)

SITUATION_DESCRIPTION = (
    "Situation that motivates the need for care. VALID VALUES: "
    + ", ".join(f"'{value}'" for value in SITUATIONS)
    + ". If more than one child is born, adopted or fostered at the same time, use "
    "'multiple_birth', 'multiple_adoption' or 'multiple_foster_care'"
)

SINGLE_PARENT_DESCRIPTION = (
    "Are you a single parent? Only relevant for birth/adoption situations, "
    "otherwise it should always be false"
)

CHILDREN_DESCRIPTION = (
    "Total number of children you'll have after birth/adoption "
    "(0 for illness/accident care)"
)


# =============================================================================
# Input Models
# =============================================================================


class CallerPayload(BaseModel):
    """Flat, loosely-typed payload as submitted by a caller.

    ``is_single_parent`` and ``total_children_after`` may arrive as their
    string representations; the normalizer turns them into real types.
    Both are strict: numbers are never read as booleans and booleans are
    never read as numbers.
    """

    model_config = ConfigDict(frozen=True)

    relationship: str = Field(..., description=RELATIONSHIP_DESCRIPTION)
    situation: str = Field(..., description=SITUATION_DESCRIPTION)
    is_single_parent: StrictBool | StrictStr = Field(..., description=SINGLE_PARENT_DESCRIPTION)
    total_children_after: StrictInt | StrictFloat | StrictStr | None = Field(
        None, description=CHILDREN_DESCRIPTION
    )


class UnpaidLeaveInput(BaseModel):
    """Strictly-typed applicant data, as the decision table reads it."""

    model_config = ConfigDict(frozen=True)

    relationship: str
    situation: str
    is_single_parent: bool
    total_children_after: float | None = None


class UnpaidLeaveRequest(BaseModel):
    """Canonical request: the input wrapped in the document the engine expects."""

    model_config = ConfigDict(frozen=True)

    input: UnpaidLeaveInput

    def to_document(self) -> dict:
        """Generic document form; an absent children count is omitted."""
        return self.model_dump(exclude_none=True)


# =============================================================================
# Output Models
# =============================================================================


class UnpaidLeaveOutput(BaseModel):
    """Evaluation result produced by the decision table."""

    description: str = Field(..., description="Description of the applicable case")
    monthly_benefit: int = Field(
        ...,
        description=(
            "Monthly benefit amount in euros. 725 for case A (family care), "
            "500 for other valid cases, 0 if not eligible"
        ),
    )
    additional_requirements: str = Field(
        "", description="Additional requirements that must be met"
    )
    case: str = Field(
        ...,
        description="Letter of the applicable case (A, B, C, D, E) or empty if not eligible",
    )
    potentially_eligible: bool = Field(
        ...,
        description="Does it meet the intrinsic requirements to potentially be entitled to the benefit?",
    )
    errores: list[str] = Field(
        default_factory=list, description="List of errors or unmet requirements"
    )
    warnings: list[str] = Field(
        default_factory=list, description="List of warnings or additional relevant information"
    )


class UnpaidLeaveResponse(BaseModel):
    """Success envelope: the output plus the optional echo of the input."""

    output: UnpaidLeaveOutput
    input: UnpaidLeaveInput | None = None
    relationship_valid: bool | None = None


# =============================================================================
# Failure Models
# =============================================================================


class FieldError(BaseModel):
    """One field rejected by the decision table."""

    message: str
    path: str


class ValidationErrorSource(BaseModel):
    errors: list[FieldError]


class ValidationErrorDetails(BaseModel):
    source: ValidationErrorSource
    type: str | None = None


class EvaluationReply(BaseModel):
    """Caller-facing outcome of one evaluation, success or failure."""

    is_error: bool = False
    error_kind: str | None = None
    text: str
    response: UnpaidLeaveResponse | None = None
    errors: list[FieldError] = Field(default_factory=list)
