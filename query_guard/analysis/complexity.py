"""Static complexity scoring of a GraphQL selection tree."""

from __future__ import annotations

from typing import Mapping, Optional

from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    IntValueNode,
    SelectionSetNode,
)

from query_guard.analysis.costs import FieldCostTable

DEFAULT_CUTOFF = 7
PAGINATION_ARGUMENT = "limit"
PAGINATION_CAP = 50
PAGINATION_WEIGHT = 0.5


class ComplexityScorer:
    """Accumulate a weighted cost over a selection tree.

    Every field adds its base cost from the cost table, a literal ``limit``
    argument adds a capped surcharge, and nested selection sets are scored one
    level deeper and added on top. Anything below ``cutoff`` contributes
    nothing, which bounds the work done on adversarially deep documents
    independently of the admission policy.

    Fragment spreads are only scored when the scorer is bound to the
    document's fragment definitions (see :meth:`with_fragments`); an unbound
    scorer treats them as free. Resolved fragments are scored once per level,
    so repeated spreads cost a lookup rather than a fresh walk.
    """

    def __init__(
        self,
        cost_table: Optional[FieldCostTable] = None,
        cutoff: int = DEFAULT_CUTOFF,
        fragments: Optional[Mapping[str, FragmentDefinitionNode]] = None,
        pagination_argument: str = PAGINATION_ARGUMENT,
        pagination_cap: int = PAGINATION_CAP,
        pagination_weight: float = PAGINATION_WEIGHT,
    ) -> None:
        if cutoff < 0:
            raise ValueError(f"Scorer cutoff must be non-negative, got {cutoff}.")
        self.cost_table = cost_table or FieldCostTable()
        self.cutoff = cutoff
        self.fragments = fragments
        self.pagination_argument = pagination_argument
        self.pagination_cap = pagination_cap
        self.pagination_weight = pagination_weight

    def with_fragments(
        self, fragments: Optional[Mapping[str, FragmentDefinitionNode]]
    ) -> "ComplexityScorer":
        """Return a scorer with the same settings that resolves ``fragments``."""
        return ComplexityScorer(
            cost_table=self.cost_table,
            cutoff=self.cutoff,
            fragments=fragments,
            pagination_argument=self.pagination_argument,
            pagination_cap=self.pagination_cap,
            pagination_weight=self.pagination_weight,
        )

    def score(self, selection_set: Optional[SelectionSetNode], depth: int = 0) -> float:
        return self._score(selection_set, depth, {})

    def _score(
        self,
        selection_set: Optional[SelectionSetNode],
        depth: int,
        memo: dict[tuple[str, int], float],
    ) -> float:
        if selection_set is None or not selection_set.selections or depth > self.cutoff:
            return 0.0

        total = 0.0
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                total += self.cost_table.cost_of(selection.name.value)
                total += self.pagination_surcharge(selection)
                if selection.selection_set is not None:
                    total += self._score(selection.selection_set, depth + 1, memo)
            elif isinstance(selection, InlineFragmentNode):
                total += self._score(selection.selection_set, depth + 1, memo)
            elif isinstance(selection, FragmentSpreadNode):
                total += self._score_spread(selection, depth, memo)
        return total

    def _score_spread(
        self, spread: FragmentSpreadNode, depth: int, memo: dict[tuple[str, int], float]
    ) -> float:
        # Unresolved spreads carry no selection set of their own.
        nested = getattr(spread, "selection_set", None)
        if nested is not None:
            return self._score(nested, depth + 1, memo)
        if self.fragments is None:
            return 0.0
        name = spread.name.value
        fragment = self.fragments.get(name)
        if fragment is None:
            return 0.0
        # A fragment's score depends only on the level it is expanded at, so
        # each (fragment, level) pair is walked once per score() call. Cyclic
        # spreads end at the cutoff like any other deep chain.
        key = (name, depth + 1)
        if key not in memo:
            memo[key] = self._score(fragment.selection_set, depth + 1, memo)
        return memo[key]

    def pagination_surcharge(self, field: FieldNode) -> float:
        surcharge = 0.0
        for argument in field.arguments or ():
            if argument.name.value != self.pagination_argument:
                continue
            if not isinstance(argument.value, IntValueNode):
                continue
            limit = max(int(argument.value.value), 0)
            surcharge += min(limit, self.pagination_cap) * self.pagination_weight
        return surcharge
