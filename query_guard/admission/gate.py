"""Admission gate: allow or reject an operation before any resolver runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from graphql import DocumentNode, GraphQLError, OperationDefinitionNode

from query_guard.analysis.complexity import ComplexityScorer
from query_guard.analysis.depth import DepthCalculator
from query_guard.analysis.document import (
    collect_fragments,
    operation_name_of,
    operation_type_of,
    select_operation,
)


DEFAULT_MAX_COMPLEXITY = 500
DEFAULT_MAX_DEPTH = 10


class RejectionKind(str, Enum):
    QUERY_TOO_COMPLEX = "QUERY_TOO_COMPLEX"
    QUERY_TOO_DEEP = "QUERY_TOO_DEEP"


@dataclass(frozen=True)
class AdmissionPolicy:
    max_complexity: float = DEFAULT_MAX_COMPLEXITY
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_complexity < 0:
            raise ValueError(f"max_complexity must be non-negative, got {self.max_complexity}.")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}.")


@dataclass(frozen=True)
class Allowed:
    allowed = True


@dataclass(frozen=True)
class Rejected:
    """A policy violation, with the observed value and the configured limit."""

    kind: RejectionKind
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)

    allowed = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def message(self) -> str:
        if self.kind is RejectionKind.QUERY_TOO_COMPLEX:
            return (
                f"Query complexity ({self.details['complexity']}) exceeds maximum "
                f"allowed ({self.details['maxComplexity']})"
            )
        return (
            f"Query depth ({self.details['depth']}) exceeds maximum "
            f"allowed ({self.details['maxDepth']})"
        )

    def to_graphql_error(self) -> GraphQLError:
        return GraphQLError(
            self.message,
            extensions={"code": self.kind.value, **self.details},
        )


AdmissionDecision = Union[Allowed, Rejected]

ALLOWED = Allowed()


@dataclass(frozen=True)
class Evaluation:
    """Everything the gate computed for one request."""

    operation: Optional[OperationDefinitionNode]
    complexity: float
    depth: int
    decision: AdmissionDecision

    @property
    def allowed(self) -> bool:
        return self.decision.allowed

    @property
    def operation_type(self) -> Optional[str]:
        return operation_type_of(self.operation) if self.operation is not None else None

    @property
    def operation_name(self) -> Optional[str]:
        return operation_name_of(self.operation) if self.operation is not None else None


class AdmissionGate:
    """Compare static complexity and depth against an :class:`AdmissionPolicy`.

    Complexity is checked before depth and only the first violated limit is
    reported. With ``log_evaluations`` enabled every evaluated operation is
    logged at INFO for threshold tuning; keep it off under production load.
    """

    def __init__(
        self,
        policy: Optional[AdmissionPolicy] = None,
        scorer: Optional[ComplexityScorer] = None,
        depth_calculator: Optional[DepthCalculator] = None,
        resolve_fragments: bool = True,
        log_evaluations: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.policy = policy or AdmissionPolicy()
        self.scorer = scorer or ComplexityScorer()
        if self.scorer.cutoff > self.policy.max_depth:
            raise ValueError(
                f"Scorer cutoff ({self.scorer.cutoff}) must not exceed "
                f"max_depth ({self.policy.max_depth})."
            )
        # One level past the limit is enough to report a violation.
        self.depth_calculator = depth_calculator or DepthCalculator(
            depth_cap=self.policy.max_depth + 1
        )
        self.resolve_fragments = resolve_fragments
        self.log_evaluations = log_evaluations
        self.logger = logger or logging.getLogger(__name__)

    def decide(
        self,
        operation: Optional[OperationDefinitionNode],
        complexity: float,
        depth: int,
    ) -> AdmissionDecision:
        if operation is None:
            return ALLOWED
        if complexity > self.policy.max_complexity:
            return Rejected(
                RejectionKind.QUERY_TOO_COMPLEX,
                {"complexity": complexity, "maxComplexity": self.policy.max_complexity},
            )
        if depth > self.policy.max_depth:
            return Rejected(
                RejectionKind.QUERY_TOO_DEEP,
                {"depth": depth, "maxDepth": self.policy.max_depth},
            )
        return ALLOWED

    def evaluate(
        self, document: Optional[DocumentNode], operation_name: Optional[str] = None
    ) -> Evaluation:
        operation = select_operation(document, operation_name)
        if operation is None:
            return Evaluation(operation=None, complexity=0.0, depth=0, decision=ALLOWED)

        scorer, depth_calculator = self.scorer, self.depth_calculator
        if self.resolve_fragments:
            fragments = collect_fragments(document)
            scorer = scorer.with_fragments(fragments)
            depth_calculator = depth_calculator.with_fragments(fragments)

        complexity = scorer.score(operation.selection_set)
        depth = depth_calculator.depth(operation.selection_set)
        decision = self.decide(operation, complexity, depth)
        evaluation = Evaluation(
            operation=operation, complexity=complexity, depth=depth, decision=decision
        )
        self._log(evaluation)
        return evaluation

    def _log(self, evaluation: Evaluation) -> None:
        name = evaluation.operation_name or "anonymous"
        if self.log_evaluations:
            self.logger.info(
                "[GraphQL] %s %s: complexity=%s, depth=%d",
                evaluation.operation_type,
                name,
                evaluation.complexity,
                evaluation.depth,
            )
        if isinstance(evaluation.decision, Rejected):
            self.logger.warning(
                "Rejected %s %s: %s",
                evaluation.operation_type,
                name,
                evaluation.decision.message,
            )
