"""Incremental construction of a classification tree from labeled text blocks.

Training starts from a single leaf holding the first example. Each later
example is routed down the existing tree; if it reaches a leaf with a
different label, that leaf is replaced by a decision node separating the
leaf's stored example from the new one. Decision nodes are never changed once
created, so an example that created its own leaf keeps being routed to it.
An example absorbed by an agreeing leaf has no such guarantee: a later split
of that leaf only looks at the leaf's stored example.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from texttree.exceptions import InvalidInputError, ReadOnlyModelError
from texttree.logging import SPLIT_LEVEL
from texttree.text_block import TextBlock
from texttree.tree.nodes import Decision, Leaf, Node

__all__ = ["build_tree", "insert", "midpoint", "split_leaf"]


def midpoint(one: float, two: float) -> float:
    """Return the value halfway between `one` and `two`.

    Examples:
        >>> midpoint(0.2, 0.6)
        0.4
        >>> midpoint(0.5, 0.5)
        0.5
    """
    return min(one, two) + abs(one - two) / 2.0


def split_leaf(leaf: Leaf, instance: TextBlock, label: str) -> Decision:
    """Replace a disagreeing leaf with a decision node separating two examples.

    The split feature is the one whose probability differs most between the
    leaf's stored example and `instance`; the threshold is the midpoint of the
    two probabilities. Whichever example falls below the threshold becomes the
    left child. When both probabilities are equal neither is below the
    midpoint, so the new example's leaf goes left and the existing leaf right.

    Args:
        leaf (Leaf): The leaf reached by `instance`. Must carry an example.
        instance (TextBlock): The new training example.
        label (str): The label of `instance`, different from `leaf.label`.

    Returns:
        Decision: A decision node with `leaf` and a fresh leaf for `instance`
            as its children.

    Raises:
        ReadOnlyModelError: If `leaf` has no stored example to compare against.
    """
    if leaf.example is None:
        raise ReadOnlyModelError(
            f"Cannot split leaf {leaf.label!r}: it has no training example (the tree was loaded from text)",
        )
    feature = leaf.example.biggest_difference(instance)
    leaf_probability = leaf.example.get(feature)
    instance_probability = instance.get(feature)
    threshold = midpoint(leaf_probability, instance_probability)
    new_leaf = Leaf(label=label, example=instance)
    if leaf_probability < threshold:
        decision = Decision(feature=feature, threshold=threshold, left=leaf, right=new_leaf)
    else:
        decision = Decision(feature=feature, threshold=threshold, left=new_leaf, right=leaf)
    logger.log(
        SPLIT_LEVEL,
        "Split leaf {old!r} on {feature!r} at {threshold}",
        old=leaf.label,
        new=label,
        feature=feature,
        threshold=threshold,
    )
    return decision


def insert(root: Node | None, instance: TextBlock, label: str) -> Node:
    """Add one labeled example to a tree.

    The example is routed from `root` to a leaf. A leaf with the same label is
    left untouched; a leaf with a different label is replaced in place by
    `split_leaf`. No existing decision node is modified.

    Args:
        root (Node | None): Root of the tree, or `None` for an empty tree.
        instance (TextBlock): The training example.
        label (str): Its label.

    Returns:
        Node: The root of the updated tree. This is a new node when the tree
            was empty or when the root itself was a leaf that got split;
            otherwise it is `root`.

    Raises:
        ReadOnlyModelError: If the example reaches a disagreeing leaf that
            carries no training example.
    """
    if root is None:
        return Leaf(label=label, example=instance)

    parent: Decision | None = None
    went_left = False
    node = root
    while isinstance(node, Decision):
        parent = node
        went_left = node.goes_left(instance)
        node = node.left if went_left else node.right

    if node.label == label:
        logger.debug("Example agrees with leaf {label!r}", label=label)
        return root

    replacement = split_leaf(node, instance, label)
    if parent is None:
        return replacement
    if went_left:
        parent.left = replacement
    else:
        parent.right = replacement
    return root


def build_tree(instances: Sequence[TextBlock], labels: Sequence[str]) -> Node:
    """Grow a tree by inserting labeled examples in order.

    The first example becomes a single-leaf tree, and every following example
    is added with `insert`.

    Args:
        instances (Sequence[TextBlock]): Training examples.
        labels (Sequence[str]): Label of each example, in the same order.

    Returns:
        Node: Root of the trained tree.

    Raises:
        InvalidInputError: If either sequence is empty or their lengths differ.
    """
    if not instances or not labels:
        raise InvalidInputError(
            "instances and labels must both be non-empty",
            argument="instances" if not instances else "labels",
        )
    if len(instances) != len(labels):
        raise InvalidInputError(
            f"Length of instances [{len(instances)}] doesn't match labels [{len(labels)}]",
            argument="labels",
        )
    root: Node = Leaf(label=labels[0], example=instances[0])
    for instance, label in zip(instances[1:], labels[1:], strict=True):
        root = insert(root, instance, label)
    logger.info("Tree built", examples=len(instances))
    return root
