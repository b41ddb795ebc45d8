"""Query admission control Strawberry extension."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from strawberry.extensions import SchemaExtension
from strawberry.types import ExecutionContext

from query_guard.admission.gate import AdmissionGate, Evaluation, Rejected
from query_guard.cache.policy import CacheDirective, CachePolicySelector
from query_guard.metrics import (
    graphql_admission_decisions_total,
    graphql_admission_rejections_total,
    graphql_cache_directives_total,
    graphql_query_complexity,
    graphql_query_depth,
)


def _response_of(context: Any) -> Optional[Any]:
    if isinstance(context, dict):
        return context.get("response")
    return getattr(context, "response", None)


class AdmissionControlExtension(SchemaExtension):
    """Score each operation and reject it before any resolver runs.

    The Cache-Control header is attached whether or not the operation was
    admitted, so rejected responses also carry a directive.
    """

    def __init__(
        self,
        gate: Optional[AdmissionGate] = None,
        cache_selector: Optional[CachePolicySelector] = None,
        *,
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        if execution_context is not None:
            self.execution_context = execution_context
        self.gate = gate or AdmissionGate()
        self.cache_selector = cache_selector or CachePolicySelector()

    def on_execute(self) -> Iterator[None]:
        ctx = self.execution_context
        document = ctx.graphql_document
        if document is not None:
            evaluation = self.gate.evaluate(document, ctx.operation_name)
            if evaluation.operation is not None:
                _record(evaluation)
                self._attach_cache_directive(ctx.context, evaluation)
            if isinstance(evaluation.decision, Rejected):
                raise evaluation.decision.to_graphql_error()
        yield

    def _attach_cache_directive(self, context: Any, evaluation: Evaluation) -> CacheDirective:
        directive = self.cache_selector.for_response(
            evaluation.operation_type,
            evaluation.operation_name,
            rejected=not evaluation.allowed,
        )
        graphql_cache_directives_total.labels(directive=directive.name.lower()).inc()
        response = _response_of(context)
        if response is not None:
            response.headers["Cache-Control"] = directive.value
        return directive


def _record(evaluation: Evaluation) -> None:
    op_type = evaluation.operation_type or "unknown"
    graphql_query_complexity.labels(operation_type=op_type).observe(evaluation.complexity)
    graphql_query_depth.labels(operation_type=op_type).observe(evaluation.depth)
    outcome = "allowed" if evaluation.allowed else "rejected"
    graphql_admission_decisions_total.labels(operation_type=op_type, outcome=outcome).inc()
    if isinstance(evaluation.decision, Rejected):
        graphql_admission_rejections_total.labels(code=evaluation.decision.kind.value).inc()
