"""Prometheus metrics for static query admission."""

from prometheus_client import Counter, Histogram

graphql_query_complexity = Histogram(
    "graphql_query_complexity",
    "Static complexity score of evaluated GraphQL operations",
    ["operation_type"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, 2500],
)

graphql_query_depth = Histogram(
    "graphql_query_depth",
    "Nesting depth of evaluated GraphQL operations",
    ["operation_type"],
    buckets=[1, 2, 3, 4, 5, 6, 8, 10, 15, 20],
)

graphql_admission_decisions_total = Counter(
    "graphql_admission_decisions_total",
    "Admission decisions by outcome",
    ["operation_type", "outcome"],
)

graphql_admission_rejections_total = Counter(
    "graphql_admission_rejections_total",
    "Operations rejected before execution",
    ["code"],
)

graphql_cache_directives_total = Counter(
    "graphql_cache_directives_total",
    "Cache-Control directives attached to GraphQL responses",
    ["directive"],
)
