"""Decision engine adapter over the ZEN rule engine.

The decision table is a JDM graph loaded once and never mutated. The
adapter serializes a canonical request, evaluates it and hands back the
raw result document; failure content is left to the error extractor.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

import zen
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from .errors import EngineEvaluationError, TableLoadError
from .schemas import UnpaidLeaveRequest

logger = logging.getLogger(__name__)


class DecisionGraphNode(BaseModel):
    """A node of the JDM graph. Node content is opaque here."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    name: str | None = None
    content: Any = None


class DecisionGraphEdge(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    source_id: str = Field(..., alias="sourceId")
    target_id: str = Field(..., alias="targetId")


class DecisionTable(BaseModel):
    """The decision-table artifact: a JDM graph of nodes and edges."""

    model_config = ConfigDict(extra="allow", frozen=True)

    nodes: list[DecisionGraphNode]
    edges: list[DecisionGraphEdge] = Field(default_factory=list)

    _document: dict = PrivateAttr(default_factory=dict)

    @property
    def raw(self) -> str:
        """JSON text handed to the engine, exactly as it was loaded."""
        return json.dumps(self._document)

    def node_types(self) -> list[str]:
        return [node.type for node in self.nodes]


def load_decision_table(path: str | Path) -> DecisionTable:
    """Load and shape-check a JDM decision table from disk."""
    path = Path(path)
    if not path.exists():
        raise TableLoadError(f"Decision table not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TableLoadError(f"Decision table {path} is not valid JSON: {e}") from e

    return parse_decision_table(content, source=str(path))


def parse_decision_table(content: Any, source: str = "<memory>") -> DecisionTable:
    """Validate an already-decoded JDM document."""
    try:
        table = DecisionTable.model_validate(content)
    except ValidationError as e:
        raise TableLoadError(f"Decision table {source} is malformed: {e}") from e
    table._document = content

    types = table.node_types()
    if "inputNode" not in types or "outputNode" not in types:
        raise TableLoadError(
            f"Decision table {source} needs an inputNode and an outputNode, got {types}"
        )
    return table


class DecisionEngineAdapter:
    """Evaluates canonical requests against one decision table.

    ZEN decision handles are created per worker thread from the shared,
    immutable table; the native handle is never passed between threads.
    """

    def __init__(self, table: DecisionTable):
        self.table = table
        self._content = table.raw
        self._local = threading.local()

        # Build one handle up front so a bad graph fails at startup.
        self._decision()
        logger.info("Decision table loaded with %d nodes", len(table.nodes))

    @classmethod
    def from_file(cls, path: str | Path) -> DecisionEngineAdapter:
        return cls(load_decision_table(path))

    def _decision(self) -> Any:
        decision = getattr(self._local, "decision", None)
        if decision is None:
            try:
                decision = zen.ZenEngine().create_decision(self._content)
            except Exception as e:
                raise TableLoadError(f"Rule engine rejected the decision table: {e}") from e
            self._local.decision = decision
        return decision

    def evaluate(self, request: UnpaidLeaveRequest) -> dict[str, Any]:
        """Evaluate a request and return the engine's result document.

        Raises EngineEvaluationError wrapping whatever the engine reported.
        """
        document = request.to_document()
        decision = self._decision()
        try:
            evaluation = decision.evaluate(document)
        except Exception as e:
            raise EngineEvaluationError(e) from e

        return evaluation.get("result", {})
