"""Tests for static complexity scoring."""

from __future__ import annotations

from unittest import mock

import pytest
from graphql import FieldNode, NameNode, SelectionSetNode, parse

from query_guard.analysis.complexity import ComplexityScorer
from query_guard.analysis.costs import FieldCostTable
from query_guard.analysis.document import collect_fragments
from tests.conftest import (
    MEMBERS_CHAIN_QUERY,
    first_operation,
    fragment_fan_out,
    nested_query,
    root_selection_set,
)


def _score(query: str, **kwargs) -> float:
    return ComplexityScorer(**kwargs).score(root_selection_set(query))


def _chain(levels: int) -> SelectionSetNode:
    """Selection set nested ``levels`` deep, built without the recursive parser."""
    node = FieldNode(name=NameNode(value="leaf"))
    for _ in range(levels - 1):
        node = FieldNode(
            name=NameNode(value="f"),
            selection_set=SelectionSetNode(selections=(node,)),
        )
    return SelectionSetNode(selections=(node,))


class TestBaseCosts:
    def test_absent_selection_set_scores_zero(self):
        assert ComplexityScorer().score(None) == 0

    def test_empty_selection_set_scores_zero(self):
        assert ComplexityScorer().score(SelectionSetNode(selections=())) == 0

    def test_unlisted_fields_cost_one_each(self):
        assert _score("{ foo bar baz }") == 3

    def test_listed_field_plus_children(self):
        assert _score("{ members { id } }") == 11

    def test_members_chain(self):
        assert _score(MEMBERS_CHAIN_QUERY) == 30

    def test_aliases_use_the_field_name(self):
        assert _score("{ a: members { id } b: members { id } }") == 22

    def test_custom_cost_table(self):
        table = FieldCostTable({"search": 20}, default_cost=0)
        assert _score("{ search { id name } }", cost_table=table) == 20


class TestPaginationSurcharge:
    def test_large_limit_is_capped(self):
        assert _score("{ foo(limit: 200) }") == 1 + 25

    def test_small_limit(self):
        assert _score("{ foo(limit: 10) }") == 1 + 5

    def test_limit_on_listed_field(self):
        assert _score("{ notifications(limit: 4) { id } }") == 10 + 2 + 1

    def test_variable_limit_adds_nothing(self):
        assert _score("query Q($n: Int) { foo(limit: $n) }") == 1

    def test_non_integer_limit_adds_nothing(self):
        assert _score('{ foo(limit: "10") }') == 1
        assert _score("{ foo(limit: 10.5) }") == 1

    def test_negative_limit_never_lowers_score(self):
        assert _score("{ foo(limit: -40) }") == 1

    def test_other_arguments_ignored(self):
        assert _score("{ foo(first: 50, offset: 10) }") == 1


class TestCutoff:
    def test_levels_below_cutoff_score_zero(self):
        # Fields on levels 1..8 sit in selection sets at depth 0..7.
        assert _score(nested_query(10)) == 8

    def test_deeper_queries_score_the_same(self):
        assert _score(nested_query(30)) == _score(nested_query(10))

    def test_custom_cutoff(self):
        assert _score(nested_query(10), cutoff=2) == 3

    def test_starting_depth_past_cutoff(self):
        assert ComplexityScorer().score(root_selection_set("{ a b }"), depth=8) == 0

    def test_very_deep_tree_does_not_recurse_past_cutoff(self):
        assert ComplexityScorer().score(_chain(5000)) == 8

    def test_negative_cutoff_rejected(self):
        with pytest.raises(ValueError):
            ComplexityScorer(cutoff=-1)


class TestFragments:
    def test_inline_fragment_is_scored(self):
        assert _score("{ me { ... on User { members { id } } } }") == 1 + 10 + 1

    def test_unresolved_spread_is_free(self):
        doc = parse("query { me { ...F } } fragment F on User { members { id } }")
        assert ComplexityScorer().score(first_operation(doc).selection_set) == 1

    def test_resolved_spread_is_scored(self):
        doc = parse("query { me { ...F } } fragment F on User { members { id } }")
        scorer = ComplexityScorer().with_fragments(collect_fragments(doc))
        assert scorer.score(first_operation(doc).selection_set) == 1 + 10 + 1

    def test_unknown_fragment_is_free(self):
        doc = parse("query { me { ...Missing } }")
        scorer = ComplexityScorer().with_fragments(collect_fragments(doc))
        assert scorer.score(first_operation(doc).selection_set) == 1

    def test_cyclic_fragments_end_at_cutoff(self):
        doc = parse(
            """
            query { me { ...A } }
            fragment A on User { a ...B }
            fragment B on User { b ...A }
            """
        )
        scorer = ComplexityScorer().with_fragments(collect_fragments(doc))
        assert scorer.score(first_operation(doc).selection_set) == 1 + 6

    def test_repeated_spreads_are_walked_once_per_level(self):
        doc = parse(fragment_fan_out(levels=6, copies=12))
        scorer = ComplexityScorer().with_fragments(collect_fragments(doc))
        with mock.patch.object(FieldCostTable, "cost_of", autospec=True, return_value=1) as cost_of:
            score = scorer.score(first_operation(doc).selection_set)
        # F6 > F5 > ... > F0 > x sits at level 7, inside the cutoff.
        assert score == 12**6
        assert cost_of.call_count == 1

    def test_fan_out_score_matches_inlined_expansion(self):
        def inline(level: int) -> str:
            if level == 0:
                return "... on Query { x }"
            return "... on Query { " + " ".join([inline(level - 1)] * 2) + " }"

        doc = parse(fragment_fan_out(levels=3, copies=2))
        scorer = ComplexityScorer().with_fragments(collect_fragments(doc))
        assert scorer.score(first_operation(doc).selection_set) == 8
        assert _score("{ " + inline(3) + " }") == 8

    def test_with_fragments_keeps_settings(self):
        scorer = ComplexityScorer(cutoff=3, pagination_cap=10)
        bound = scorer.with_fragments({})
        assert bound.cutoff == 3
        assert bound.pagination_cap == 10
        assert bound.cost_table is scorer.cost_table


class TestProperties:
    def test_scoring_is_deterministic(self):
        selection_set = root_selection_set(MEMBERS_CHAIN_QUERY)
        scorer = ComplexityScorer()
        assert scorer.score(selection_set) == scorer.score(selection_set)

    @pytest.mark.parametrize(
        "smaller,larger",
        [
            ("{ members { id } }", "{ members { id name } }"),
            ("{ members { id } }", "{ members { id } me }"),
            ("{ members { id } }", "{ members(limit: 3) { id } }"),
            ("{ me { id } }", "{ me { id ... on User { owner } } }"),
        ],
    )
    def test_adding_nodes_never_lowers_score(self, smaller, larger):
        assert _score(larger) >= _score(smaller)
