"""Evaluation service: normalize, evaluate, map, and count.

The engine call is blocking, so it runs on a dedicated worker-thread
pool and the calling task awaits it without holding up the event loop.
If the calling task is cancelled the worker still runs to completion
and its result is dropped.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol

from eligibility_engine.core.metrics import EligibilityMetrics
from .errors import (
    EngineEvaluationError,
    IsolationError,
    RuleValidationError,
    UnpaidLeaveError,
)
from .extraction import ErrorExtractor
from .mapper import error_reply, success_reply, to_response
from .normalizer import normalize
from .schemas import CallerPayload, EvaluationReply, UnpaidLeaveRequest, UnpaidLeaveResponse

logger = logging.getLogger(__name__)


class RuleEvaluator(Protocol):
    """Anything that turns a canonical request into a result document."""

    def evaluate(self, request: UnpaidLeaveRequest) -> dict[str, Any]: ...


class EligibilityService:
    """Runs one eligibility evaluation per call, isolated from the event loop."""

    def __init__(
        self,
        adapter: RuleEvaluator,
        metrics: EligibilityMetrics,
        extractor: ErrorExtractor | None = None,
        executor: ThreadPoolExecutor | None = None,
        max_workers: int = 4,
    ):
        self.adapter = adapter
        self.metrics = metrics
        self.extractor = extractor or ErrorExtractor()
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="eligibility-eval"
        )

    def evaluate_request(self, request: UnpaidLeaveRequest) -> UnpaidLeaveResponse:
        """Synchronous evaluation of a canonical request.

        Raises RuleValidationError when field errors can be recovered from
        an engine failure, EngineEvaluationError when they cannot, and
        SerializationError when the result does not fit the response shape.
        """
        try:
            result = self.adapter.evaluate(request)
        except EngineEvaluationError as e:
            errors = self.extractor.extract(e)
            if errors:
                raise RuleValidationError(errors) from e
            raise

        return to_response(result)

    async def evaluate(self, payload: CallerPayload | dict[str, Any]) -> EvaluationReply:
        """Evaluate one caller payload; every failure becomes an error reply."""
        self.metrics.increment_requests()
        with self.metrics.track_request():
            try:
                request = normalize(payload)
                response = await self._run_isolated(request)
            except UnpaidLeaveError as e:
                self.metrics.increment_errors()
                self._log_failure(e)
                return error_reply(e)

            return success_reply(response)

    async def _run_isolated(self, request: UnpaidLeaveRequest) -> UnpaidLeaveResponse:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self.executor, self.evaluate_request, request)
        except UnpaidLeaveError:
            raise
        except Exception as e:
            raise IsolationError(f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _log_failure(error: UnpaidLeaveError) -> None:
        if error.caller_fault:
            logger.warning("Evaluation rejected (%s): %s", error.kind, error)
        else:
            logger.error("Evaluation failed (%s): %s", error.kind, error)

    def shutdown(self) -> None:
        """Release the worker pool if this service created it."""
        if self._owns_executor:
            self.executor.shutdown(wait=True)
