"""Node types of a binary classification tree and structural helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from texttree.text_block import TextBlock

__all__ = [
    "Decision",
    "Leaf",
    "Node",
    "count_decisions",
    "count_leaves",
    "depth",
    "iter_preorder",
]


@dataclass(frozen=True)
class Leaf:
    """A terminal node predicting `label`.

    Attributes:
        label (str): The label predicted for every instance reaching this leaf.
        example (TextBlock | None): The training instance that created this
            leaf. Present only for leaves grown by incremental training; a
            leaf read back from saved text has none.
    """

    label: str
    example: TextBlock | None = None


@dataclass
class Decision:
    """An internal node sending instances left or right by one feature.

    Instances whose probability for `feature` is strictly below `threshold`
    go to `left`; all others go to `right`. Both children are always present.

    Attributes:
        feature (str): The feature compared at this node.
        threshold (float): The decision boundary for `feature`.
        left (Node): Subtree for `instance.get(feature) < threshold`.
        right (Node): Subtree for `instance.get(feature) >= threshold`.
    """

    feature: str
    threshold: float
    left: Node
    right: Node

    def goes_left(self, instance: TextBlock) -> bool:
        """Return True when `instance` belongs in the left subtree."""
        return instance.get(self.feature) < self.threshold

    def route(self, instance: TextBlock) -> Node:
        """Return the child subtree that `instance` belongs in."""
        return self.left if self.goes_left(instance) else self.right


type Node = Decision | Leaf


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield every node of the tree in preorder: node, left subtree, right subtree.

    Uses an explicit stack, so arbitrarily deep trees are safe to walk.

    Args:
        root (Node): Root of the tree to walk.

    Yields:
        Node: Each node of the tree, parents before children, left before right.
    """
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Decision):
            stack.append(node.right)
            stack.append(node.left)


def count_leaves(root: Node) -> int:
    """Return the number of leaves in the tree."""
    return sum(1 for node in iter_preorder(root) if isinstance(node, Leaf))


def count_decisions(root: Node) -> int:
    """Return the number of decision nodes in the tree."""
    return sum(1 for node in iter_preorder(root) if isinstance(node, Decision))


def depth(root: Node) -> int:
    """Return the number of decision nodes on the longest root-to-leaf path.

    A tree made of a single leaf has depth 0.
    """
    deepest = 0
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, Decision):
            stack.append((node.left, level + 1))
            stack.append((node.right, level + 1))
        else:
            deepest = max(deepest, level)
    return deepest
