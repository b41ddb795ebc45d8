"""Maximum nesting depth of a GraphQL selection tree."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from graphql import FragmentDefinitionNode, FragmentSpreadNode, SelectionNode, SelectionSetNode

logger = logging.getLogger(__name__)

DEFAULT_NODE_BUDGET = 10_000


class DepthCalculator:
    """Compute the longest chain of nested selection sets.

    Fields, inline fragments and (when fragment definitions are supplied)
    fragment spreads each open a new level. Traversal uses an explicit
    work-list: ``depth_cap`` stops descending once a level is reached and
    ``node_budget`` caps the number of selections visited, so pathological
    documents never exhaust the interpreter stack. A document that runs out
    of budget reports ``depth_cap`` (or ``node_budget`` when uncapped).
    """

    def __init__(
        self,
        fragments: Optional[Mapping[str, FragmentDefinitionNode]] = None,
        depth_cap: Optional[int] = None,
        node_budget: int = DEFAULT_NODE_BUDGET,
    ) -> None:
        if node_budget <= 0:
            raise ValueError(f"Node budget must be positive, got {node_budget}.")
        self.fragments = fragments
        self.depth_cap = depth_cap
        self.node_budget = node_budget

    def with_fragments(
        self, fragments: Optional[Mapping[str, FragmentDefinitionNode]]
    ) -> "DepthCalculator":
        return DepthCalculator(
            fragments=fragments, depth_cap=self.depth_cap, node_budget=self.node_budget
        )

    def depth(self, selection_set: Optional[SelectionSetNode], depth: int = 0) -> int:
        deepest = depth
        if selection_set is None:
            return deepest

        # (selection set, its depth, fragments expanded on the way down)
        stack: list[tuple[SelectionSetNode, int, frozenset[str]]] = [
            (selection_set, depth, frozenset())
        ]
        visited = 0
        while stack:
            current, level, expanding = stack.pop()
            for selection in current.selections:
                visited += 1
                if visited > self.node_budget:
                    exhausted = self._exhausted_depth(deepest)
                    logger.warning(
                        "Depth traversal stopped after %d selections; reporting depth %d",
                        self.node_budget,
                        exhausted,
                    )
                    return exhausted
                nested, expanded = self._nested(selection, expanding)
                if nested is None:
                    continue
                child_level = level + 1
                deepest = max(deepest, child_level)
                if self.depth_cap is not None and child_level >= self.depth_cap:
                    continue
                stack.append((nested, child_level, expanded))
        return deepest

    def _exhausted_depth(self, deepest: int) -> int:
        # Unvisited selections may nest arbitrarily deep; report the cap (or
        # the budget itself) so the result never understates the true depth.
        limit = self.depth_cap if self.depth_cap is not None else self.node_budget
        return max(deepest, limit)

    def _nested(
        self, selection: SelectionNode, expanding: frozenset[str]
    ) -> tuple[Optional[SelectionSetNode], frozenset[str]]:
        nested = getattr(selection, "selection_set", None)
        if nested is not None or not isinstance(selection, FragmentSpreadNode):
            return nested, expanding
        if self.fragments is None:
            return None, expanding
        name = selection.name.value
        fragment = self.fragments.get(name)
        if fragment is None or name in expanding:
            return None, expanding
        return fragment.selection_set, expanding | {name}
