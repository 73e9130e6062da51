"""Prediction by walking a classification tree from the root to a leaf."""

from __future__ import annotations

from typing import NamedTuple

from texttree.text_block import TextBlock
from texttree.tree.nodes import Decision, Node

__all__ = ["DecisionStep", "decision_path", "predict"]


class DecisionStep(NamedTuple):
    """One decision taken while routing an instance through the tree.

    Attributes:
        feature (str): Feature compared at the decision node.
        threshold (float): The node's threshold.
        value (float): The instance's probability for `feature`.
        went_left (bool): True when `value < threshold`.
    """

    feature: str
    threshold: float
    value: float
    went_left: bool

    def __str__(self) -> str:
        """Return the step as `"<feature> = <value> < <threshold>"` or with `>=`."""
        op = "<" if self.went_left else ">="
        return f"{self.feature} = {self.value} {op} {self.threshold}"


def predict(root: Node, instance: TextBlock) -> str:
    """Return the label of the leaf `instance` is routed to."""
    node = root
    while isinstance(node, Decision):
        node = node.route(instance)
    return node.label


def decision_path(root: Node, instance: TextBlock) -> tuple[list[DecisionStep], str]:
    """Route `instance` through the tree, recording every decision.

    Args:
        root (Node): Root of the tree.
        instance (TextBlock): The instance to route.

    Returns:
        tuple[list[DecisionStep], str]: The decisions from the root down, and
            the predicted label. A single-leaf tree yields no steps.
    """
    steps: list[DecisionStep] = []
    node = root
    while isinstance(node, Decision):
        value = instance.get(node.feature)
        went_left = value < node.threshold
        steps.append(DecisionStep(feature=node.feature, threshold=node.threshold, value=value, went_left=went_left))
        node = node.left if went_left else node.right
    return steps, node.label
