"""Tests for tree node types and structural helpers."""

from __future__ import annotations

from pytest_check import check

from texttree.text_block import TextBlock
from texttree.tree.nodes import Decision, Leaf, count_decisions, count_leaves, depth, iter_preorder


class TestDecisionRoute:
    """Tests for `Decision.route` and `Decision.goes_left`."""

    def test_value_below_threshold_goes_left(self) -> None:
        """A probability strictly below the threshold selects the left child."""
        decision = Decision(feature="offer", threshold=0.267, left=Leaf("Spam"), right=Leaf("Ham"))
        assert decision.route(TextBlock(probabilities={"offer": 0.1})) is decision.left

    def test_value_equal_to_threshold_goes_right(self) -> None:
        """A probability equal to the threshold selects the right child."""
        decision = Decision(feature="offer", threshold=0.25, left=Leaf("Spam"), right=Leaf("Ham"))
        assert decision.route(TextBlock(probabilities={"offer": 0.25})) is decision.right

    def test_absent_feature_counts_as_zero(self) -> None:
        """An instance without the feature has probability 0 and goes left of a positive threshold."""
        decision = Decision(feature="offer", threshold=0.1, left=Leaf("Spam"), right=Leaf("Ham"))
        with check:
            assert decision.goes_left(TextBlock())
        with check:
            assert decision.route(TextBlock(probabilities={"other": 0.9})) is decision.left


class TestStructuralHelpers:
    """Tests for `iter_preorder`, `count_leaves`, `count_decisions`, and `depth`."""

    def test_preorder_visits_node_then_left_then_right(self) -> None:
        """Preorder lists each decision before its left subtree, and left before right."""
        # Arrange
        tree = _make_unbalanced_tree()

        # Act
        visited = [node.feature if isinstance(node, Decision) else node.label for node in iter_preorder(tree)]

        # Assert
        assert visited == ["offer", "free", "Spam", "Promo", "Ham"]

    def test_counts_and_depth(self) -> None:
        """An unbalanced tree with three leaves has two decisions and depth 2."""
        tree = _make_unbalanced_tree()
        with check:
            assert count_leaves(tree) == 3
        with check:
            assert count_decisions(tree) == 2
        with check:
            assert depth(tree) == 2

    def test_single_leaf_tree(self) -> None:
        """A lone leaf is one leaf, no decisions, and depth 0."""
        leaf = Leaf("Ham")
        with check:
            assert list(iter_preorder(leaf)) == [leaf]
        with check:
            assert (count_leaves(leaf), count_decisions(leaf), depth(leaf)) == (1, 0, 0)

    def test_leaf_defaults_to_no_example(self) -> None:
        """A leaf built without an example reports none."""
        assert Leaf("Ham").example is None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_unbalanced_tree() -> Decision:
    """Return `offer < 0.3 ? (free < 0.2 ? Spam : Promo) : Ham`."""
    return Decision(
        feature="offer",
        threshold=0.3,
        left=Decision(feature="free", threshold=0.2, left=Leaf("Spam"), right=Leaf("Promo")),
        right=Leaf("Ham"),
    )
