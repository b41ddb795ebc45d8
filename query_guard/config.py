"""Application configuration from environment variables (QUERY_GUARD_ prefix)."""

from __future__ import annotations

import logging

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from query_guard.admission.gate import AdmissionGate, AdmissionPolicy
from query_guard.analysis.complexity import ComplexityScorer
from query_guard.analysis.costs import DEFAULT_FIELD_COSTS, FieldCostTable
from query_guard.analysis.depth import DepthCalculator
from query_guard.cache.policy import DEFAULT_PUBLIC_QUERIES, CachePolicySelector


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    enable_graphiql: bool = True

    # Admission policy
    max_complexity: float = Field(default=500, ge=0)
    max_depth: int = Field(default=10, ge=0)

    # Scoring
    complexity_cutoff: int = Field(default=7, ge=0)
    default_field_cost: float = Field(default=1, ge=0)
    field_costs: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_FIELD_COSTS))
    resolve_fragments: bool = True
    depth_node_budget: int = Field(default=10_000, gt=0)

    # Caching
    public_queries: list[str] = Field(default_factory=lambda: sorted(DEFAULT_PUBLIC_QUERIES))
    no_store_on_rejection: bool = True

    # Logging
    log_level: str = "INFO"
    log_evaluations: bool = False  # per-operation score logging, for threshold tuning

    model_config = {
        "env_prefix": "QUERY_GUARD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @model_validator(mode="after")
    def _cutoff_within_depth(self) -> "Settings":
        if self.complexity_cutoff > self.max_depth:
            raise ValueError(
                f"complexity_cutoff ({self.complexity_cutoff}) must not exceed "
                f"max_depth ({self.max_depth})"
            )
        return self


def build_gate(settings: Settings) -> AdmissionGate:
    scorer = ComplexityScorer(
        cost_table=FieldCostTable(settings.field_costs, settings.default_field_cost),
        cutoff=settings.complexity_cutoff,
    )
    depth_calculator = DepthCalculator(
        depth_cap=settings.max_depth + 1,
        node_budget=settings.depth_node_budget,
    )
    return AdmissionGate(
        policy=AdmissionPolicy(
            max_complexity=settings.max_complexity,
            max_depth=settings.max_depth,
        ),
        scorer=scorer,
        depth_calculator=depth_calculator,
        resolve_fragments=settings.resolve_fragments,
        log_evaluations=settings.log_evaluations,
        logger=logging.getLogger("query_guard.admission"),
    )


def build_cache_selector(settings: Settings) -> CachePolicySelector:
    return CachePolicySelector(
        public_queries=settings.public_queries,
        no_store_on_rejection=settings.no_store_on_rejection,
    )


settings = Settings()
