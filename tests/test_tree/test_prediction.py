"""Tests for tree prediction: predict and decision_path."""

from __future__ import annotations

from pytest_check import check

from texttree.text_block import TextBlock
from texttree.tree.nodes import Decision, Leaf
from texttree.tree.prediction import DecisionStep, decision_path, predict


class TestPredict:
    """Tests for `predict`: walks from the root to a leaf label."""

    def test_documented_example_tree(self) -> None:
        """`offer < 0.267` predicts Spam, otherwise Ham."""
        # Arrange
        tree = Decision(feature="offer", threshold=0.267, left=Leaf("Spam"), right=Leaf("Ham"))

        # Act & Assert
        with check:
            assert predict(tree, TextBlock(probabilities={"offer": 0.1})) == "Spam"
        with check:
            assert predict(tree, TextBlock(probabilities={"offer": 0.267})) == "Ham"
        with check:
            assert predict(tree, TextBlock(probabilities={"offer": 0.9})) == "Ham"

    def test_single_leaf_predicts_its_label(self) -> None:
        """A single-leaf tree predicts its label for any input."""
        assert predict(Leaf("Only"), TextBlock.from_text("anything at all")) == "Only"

    def test_nested_tree(self) -> None:
        """Prediction follows several decisions down to the right leaf."""
        # Arrange
        tree = Decision(
            feature="goal",
            threshold=0.1,
            left=Decision(feature="vote", threshold=0.1, left=Leaf("Cooking"), right=Leaf("Politics")),
            right=Leaf("Sports"),
        )

        # Act & Assert
        with check:
            assert predict(tree, TextBlock(probabilities={"goal": 0.3})) == "Sports"
        with check:
            assert predict(tree, TextBlock(probabilities={"vote": 0.2})) == "Politics"
        with check:
            assert predict(tree, TextBlock(probabilities={"salt": 0.5})) == "Cooking"


class TestDecisionPath:
    """Tests for `decision_path`: records every decision taken."""

    def test_records_each_step(self) -> None:
        """Each decision is recorded with the instance value and the branch taken."""
        # Arrange
        tree = Decision(
            feature="goal",
            threshold=0.1,
            left=Decision(feature="vote", threshold=0.1, left=Leaf("Cooking"), right=Leaf("Politics")),
            right=Leaf("Sports"),
        )

        # Act
        steps, label = decision_path(tree, TextBlock(probabilities={"vote": 0.2}))

        # Assert
        with check:
            assert label == "Politics"
        with check:
            assert steps == [
                DecisionStep(feature="goal", threshold=0.1, value=0.0, went_left=True),
                DecisionStep(feature="vote", threshold=0.1, value=0.2, went_left=False),
            ]
        with check:
            assert str(steps[1]) == "vote = 0.2 >= 0.1"

    def test_single_leaf_has_no_steps(self) -> None:
        """A single-leaf tree yields an empty path."""
        assert decision_path(Leaf("Ham"), TextBlock()) == ([], "Ham")
