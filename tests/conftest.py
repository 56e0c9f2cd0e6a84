"""Pytest fixtures for test suite."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

import pytest

from eligibility_engine.core import EligibilityMetrics
from eligibility_engine.unpaid_leave import (
    DecisionEngineAdapter,
    EligibilityService,
    EngineEvaluationError,
    UnpaidLeaveRequest,
)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def decision_table_path() -> Path:
    """Path to the bundled decision table."""
    return (
        Path(__file__).parent.parent
        / "eligibility_engine"
        / "unpaid_leave"
        / "data"
        / "unpaid-leave-assistance-2025.json"
    )


@pytest.fixture(scope="session")
def adapter(decision_table_path: Path) -> DecisionEngineAdapter:
    """Decision engine adapter over the bundled table."""
    return DecisionEngineAdapter.from_file(decision_table_path)


@pytest.fixture
def metrics() -> EligibilityMetrics:
    return EligibilityMetrics()


@pytest.fixture
def service(adapter: DecisionEngineAdapter, metrics: EligibilityMetrics):
    """Evaluation service over the real decision table."""
    svc = EligibilityService(adapter, metrics, max_workers=2)
    yield svc
    svc.shutdown()


# =============================================================================
# Diagnostic Samples
# =============================================================================


# Engine rendering of an enum violation on the input node.
ENGINE_ENUM_SOURCE = (
    '/input/relationship: "brother" is not one of "father", "mother" or 8 other candidates'
)

BACKTRACE_TAIL = "\n\nStack backtrace:\n   0: zen_engine::decision::evaluate\n"

# Validation envelope form, as found embedded in other diagnostics.
ENUM_MESSAGE = (
    '"brother" is not one of ["father","mother","parent","son","daughter",'
    '"spouse","partner","husband","wife","foster_parent"]'
)

VALIDATION_ENVELOPE = {
    "source": {
        "errors": [
            {"message": ENUM_MESSAGE, "path": "/input/relationship"},
        ]
    },
    "type": "Validation",
}


def _node_error_text(source: Any) -> str:
    if not isinstance(source, str):
        source = json.dumps(source, separators=(",", ":"))
    return json.dumps(
        {"type": "NodeError", "source": source, "nodeId": "request"},
        separators=(",", ":"),
    )


@pytest.fixture
def node_error_text():
    """Render a failure the way the engine reports a node error."""
    return _node_error_text


@pytest.fixture
def engine_error_text():
    """The error text raised for an unknown relationship, optionally with a backtrace."""

    def _render(backtrace: bool = False) -> str:
        text = _node_error_text(ENGINE_ENUM_SOURCE)
        return text + BACKTRACE_TAIL if backtrace else text

    return _render


@pytest.fixture
def validation_envelope() -> dict:
    return json.loads(json.dumps(VALIDATION_ENVELOPE))


@pytest.fixture
def sample_result() -> dict:
    """A well-formed result document, as the decision table returns it."""
    return {
        "input": {
            "relationship": "mother",
            "situation": "illness",
            "is_single_parent": False,
        },
        "output": {
            "case": "A",
            "monthly_benefit": 725,
            "potentially_eligible": True,
            "description": "Case A: care of a family member",
            "additional_requirements": "Continuous care certified",
            "errores": [],
            "warnings": ["Limited to the period of care"],
        },
        "relationship_valid": True,
    }


# =============================================================================
# Stub Adapter
# =============================================================================


class StubAdapter:
    """Stands in for the engine adapter: returns a fixed document or fails."""

    def __init__(self, result: dict | None = None, failure: BaseException | str | None = None):
        self.result = result
        self.failure = failure
        self.requests: list[UnpaidLeaveRequest] = []

    def evaluate(self, request: UnpaidLeaveRequest) -> dict:
        self.requests.append(request)
        if isinstance(self.failure, BaseException):
            raise self.failure
        if self.failure is not None:
            raise EngineEvaluationError(self.failure)
        return self.result


@pytest.fixture
def stub_service(metrics: EligibilityMetrics):
    """Factory for services over a StubAdapter."""
    created = []

    def _make(result: dict | None = None, failure: BaseException | str | None = None):
        stub = StubAdapter(result=result, failure=failure)
        svc = EligibilityService(stub, metrics, executor=ThreadPoolExecutor(max_workers=1))
        created.append(svc)
        return svc, stub

    yield _make
    for svc in created:
        svc.executor.shutdown(wait=True)
