"""Unpaid leave domain - normalization, decision table evaluation, error recovery."""

from .errors import (
    UnpaidLeaveError,
    MalformedInputError,
    TableLoadError,
    EngineEvaluationError,
    RuleValidationError,
    SerializationError,
    IsolationError,
)
from .schemas import (
    RELATIONSHIPS,
    SITUATIONS,
    CallerPayload,
    UnpaidLeaveInput,
    UnpaidLeaveRequest,
    UnpaidLeaveOutput,
    UnpaidLeaveResponse,
    FieldError,
    EvaluationReply,
)
from .normalizer import normalize, coerce_bool, coerce_optional_float
from .engine import (
    DecisionTable,
    DecisionEngineAdapter,
    load_decision_table,
    parse_decision_table,
)
from .extraction import (
    ErrorExtractor,
    StructuredEnvelope,
    ManualKeyScan,
    SourceLine,
    extract_validation_errors,
)
from .mapper import to_response, render_response, success_reply, error_reply
from .service import EligibilityService
from .router import router
from .tool import create_mcp_server

__all__ = [
    # Errors
    "UnpaidLeaveError",
    "MalformedInputError",
    "TableLoadError",
    "EngineEvaluationError",
    "RuleValidationError",
    "SerializationError",
    "IsolationError",
    # Schemas
    "RELATIONSHIPS",
    "SITUATIONS",
    "CallerPayload",
    "UnpaidLeaveInput",
    "UnpaidLeaveRequest",
    "UnpaidLeaveOutput",
    "UnpaidLeaveResponse",
    "FieldError",
    "EvaluationReply",
    # Normalizer
    "normalize",
    "coerce_bool",
    "coerce_optional_float",
    # Engine
    "DecisionTable",
    "DecisionEngineAdapter",
    "load_decision_table",
    "parse_decision_table",
    # Extraction
    "ErrorExtractor",
    "StructuredEnvelope",
    "ManualKeyScan",
    "SourceLine",
    "extract_validation_errors",
    # Mapper
    "to_response",
    "render_response",
    "success_reply",
    "error_reply",
    # Service & bindings
    "EligibilityService",
    "router",
    "create_mcp_server",
]
