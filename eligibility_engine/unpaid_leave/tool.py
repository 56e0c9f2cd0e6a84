"""MCP tool exposing the eligibility evaluation.

The same FastMCP server is served over streamable HTTP (mounted in the
FastAPI app) and over stdio.
"""

from __future__ import annotations

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr

from .schemas import (
    CHILDREN_DESCRIPTION,
    RELATIONSHIP_DESCRIPTION,
    RELATIONSHIPS,
    SINGLE_PARENT_DESCRIPTION,
    SITUATION_DESCRIPTION,
    SITUATIONS,
    CallerPayload,
    EvaluationReply,
)
from .service import EligibilityService

SERVER_NAME = "eligibility-engine"

TOOL_NAME = "evaluate_unpaid_leave_eligibility"

TOOL_DESCRIPTION = (
    "Evaluates unpaid leave assistance eligibility according to legal regulations. "
    "Determines case (A-E) and amount (0/500/725 EUR). CASES: A=Sick family care (725), "
    "B=Third child+ (500), C=Adoption (500), D=Multiple (500), E=Single-parent (500). "
    "USE EXACT VALUES: relationship ("
    + "/".join(f"'{value}'" for value in RELATIONSHIPS)
    + "), situation ("
    + "/".join(f"'{value}'" for value in SITUATIONS)
    + "), is_single_parent (true/false), total_children_after (number)."
)

INSTRUCTIONS = f"""Eligibility Engine for leave assistance according to legal regulations.

** IMPORTANT TOOL USAGE INSTRUCTIONS **

1. ALWAYS use the EXACT values specified for each parameter, CASE SENSITIVE
2. For relationship, use ONLY: {", ".join(RELATIONSHIPS)}
3. For situation, use ONLY: {", ".join(SITUATIONS)}. If the number of children is greater than one, use multiple_birth, multiple_adoption or multiple_foster_care
4. For is_single_parent, use ONLY true (single-parent family) or false. If there is no information about the family structure use false
5. For total_children_after, use whole numbers, and only for birth, adoption or foster care situations. If there is no information use 0

CORRECT USAGE EXAMPLES:
- Single father with baby: relationship='father', situation='birth', is_single_parent=true, total_children_after=1
- Son caring for sick father: relationship='son', situation='illness', is_single_parent=false, total_children_after=0
- Family with third child: relationship='mother', situation='birth', is_single_parent=false, total_children_after=3
- Family with twins: relationship='mother', situation='multiple_birth', is_single_parent=false, total_children_after=3

CASES EVALUATED:
A) Sick/injured family care (725 EUR/month)
B) Third child+ with newborn (500 EUR/month)
C) Adoption/foster care (500 EUR/month)
D) Multiple births/adoptions (500 EUR/month)
E) Single-parent families (500 EUR/month)"""


def reply_to_tool_result(reply: EvaluationReply) -> str:
    """Success text for the client, or a ToolError carrying the failure text."""
    if reply.is_error:
        raise ToolError(reply.text)
    return reply.text


def create_mcp_server(service: EligibilityService) -> FastMCP:
    """Build the MCP server with the evaluation tool bound to ``service``."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def evaluate_unpaid_leave_eligibility(
        relationship: Annotated[str, Field(description=RELATIONSHIP_DESCRIPTION)],
        situation: Annotated[str, Field(description=SITUATION_DESCRIPTION)],
        is_single_parent: Annotated[
            StrictBool | StrictStr, Field(description=SINGLE_PARENT_DESCRIPTION)
        ],
        total_children_after: Annotated[
            StrictInt | StrictFloat | StrictStr | None, Field(description=CHILDREN_DESCRIPTION)
        ] = None,
    ) -> str:
        payload = CallerPayload(
            relationship=relationship,
            situation=situation,
            is_single_parent=is_single_parent,
            total_children_after=total_children_after,
        )
        return reply_to_tool_result(await service.evaluate(payload))

    return mcp
