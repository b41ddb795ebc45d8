"""Shared test fixtures for query_guard tests."""

from __future__ import annotations

import copy
from types import SimpleNamespace

import pytest
from graphql import DocumentNode, OperationDefinitionNode, parse

from query_guard.admission.gate import AdmissionGate, AdmissionPolicy
from query_guard.cache.policy import CachePolicySelector
from query_guard.schema import store


# ─── Sample queries ───────────────────────────────────────────────────────────

# members(10) -> artifacts(10) -> owner(5) -> createdBy(5)
MEMBERS_CHAIN_QUERY = "{ members { artifacts { owner { createdBy } } } }"


def nested_query(levels: int, name: str = "f") -> str:
    """Build ``{ f1 { f2 { ... fN } } }`` with ``levels`` fields in one chain."""
    query = f"{name}{levels}"
    for i in range(levels - 1, 0, -1):
        query = f"{name}{i} {{ {query} }}"
    return "{ " + query + " }"


def fragment_fan_out(levels: int, copies: int) -> str:
    """``{ ...F<levels> }`` where every fragment spreads the one below ``copies`` times."""
    parts = [f"query {{ ...F{levels} }}", "fragment F0 on Query { x }"]
    for i in range(1, levels + 1):
        spreads = " ".join([f"...F{i - 1}"] * copies)
        parts.append(f"fragment F{i} on Query {{ {spreads} }}")
    return "\n".join(parts)


def wide_then_deep(width: int = 10_000) -> str:
    """Nine nested fields, then ``width`` leaves ahead of a three-level chain (depth 12)."""
    leaves = " ".join(f"x{i}" for i in range(width))
    inner = f"{leaves} d9 {{ d10 {{ d11 {{ end }} }} }}"
    for i in range(8, -1, -1):
        inner = f"a{i} {{ {inner} }}"
    return "{ " + inner + " }"


def first_operation(document: DocumentNode) -> OperationDefinitionNode:
    return next(d for d in document.definitions if isinstance(d, OperationDefinitionNode))


def root_selection_set(query: str):
    return first_operation(parse(query)).selection_set


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def default_gate() -> AdmissionGate:
    return AdmissionGate()


@pytest.fixture
def cache_selector() -> CachePolicySelector:
    return CachePolicySelector()


@pytest.fixture
def make_gate():
    def _make(max_complexity: float = 500, max_depth: int = 10, **kwargs) -> AdmissionGate:
        policy = AdmissionPolicy(max_complexity=max_complexity, max_depth=max_depth)
        return AdmissionGate(policy=policy, **kwargs)

    return _make


@pytest.fixture
def response_context() -> dict:
    return {"response": SimpleNamespace(headers={})}


@pytest.fixture
def fresh_store(monkeypatch):
    """Isolate mutations from the module-level sample records."""
    monkeypatch.setattr(store, "NOTIFICATIONS", copy.deepcopy(store.NOTIFICATIONS))
    return store
