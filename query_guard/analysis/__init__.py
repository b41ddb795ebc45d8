"""Static analysis of parsed GraphQL documents."""

from query_guard.analysis.complexity import ComplexityScorer
from query_guard.analysis.costs import DEFAULT_FIELD_COSTS, FieldCostTable
from query_guard.analysis.depth import DepthCalculator
from query_guard.analysis.document import (
    collect_fragments,
    operation_name_of,
    operation_type_of,
    select_operation,
)

__all__ = [
    "ComplexityScorer",
    "DEFAULT_FIELD_COSTS",
    "DepthCalculator",
    "FieldCostTable",
    "collect_fragments",
    "operation_name_of",
    "operation_type_of",
    "select_operation",
]
