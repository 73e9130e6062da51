"""Tree sub-package: nodes, induction, prediction, serialization, and evaluation."""

from __future__ import annotations

from texttree.tree.evaluation import OVERALL_KEY, accuracy
from texttree.tree.induction import build_tree, insert, midpoint, split_leaf
from texttree.tree.nodes import (
    Decision,
    Leaf,
    Node,
    count_decisions,
    count_leaves,
    depth,
    iter_preorder,
)
from texttree.tree.prediction import DecisionStep, decision_path, predict
from texttree.tree.serialization import dump, dumps, load, loads

__all__ = [
    "OVERALL_KEY",
    "Decision",
    "DecisionStep",
    "Leaf",
    "Node",
    "accuracy",
    "build_tree",
    "count_decisions",
    "count_leaves",
    "decision_path",
    "depth",
    "dump",
    "dumps",
    "insert",
    "iter_preorder",
    "load",
    "loads",
    "midpoint",
    "predict",
    "split_leaf",
]
