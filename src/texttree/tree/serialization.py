"""Reading and writing classification trees in the preorder text format.

A tree is written one token per line, parents before children and left
subtrees before right subtrees. A decision node takes two lines::

    Feature: <feature>
    Threshold: <threshold>

followed by its left and right subtrees. A leaf is a single line holding its
label verbatim. Training examples attached to leaves are not written, so a
tree read back from text can predict but cannot learn further.
"""

from __future__ import annotations

import io
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final, Protocol

from loguru import logger

from texttree.exceptions import InvalidInputError, TreeParseError
from texttree.tree.nodes import Decision, Leaf, Node

__all__ = [
    "FEATURE_PREFIX",
    "THRESHOLD_PREFIX",
    "TextSink",
    "check_label",
    "dump",
    "dumps",
    "format_threshold",
    "load",
    "loads",
]

FEATURE_PREFIX: Final[str] = "Feature: "
THRESHOLD_PREFIX: Final[str] = "Threshold: "
_LINE_BREAKS: Final[frozenset[str]] = frozenset("\r\n")


class TextSink(Protocol):
    """Anything text can be written to, such as an open file or `io.StringIO`."""

    def write(self, text: str, /) -> object: ...


# ---------------------------------------------------------------------------
# Public interface -- Writing
# ---------------------------------------------------------------------------


def check_label(label: str) -> None:
    """Raise if `label` cannot be written as a leaf line and read back unchanged.

    Args:
        label (str): The label to check.

    Raises:
        InvalidInputError: If the label contains a line break or starts with
            the `"Feature: "` marker that introduces decision nodes.

    Examples:
        >>> check_label("Spam")
        >>> check_label("Feature: offer")
        Traceback (most recent call last):
        ...
        texttree.exceptions.InvalidInputError: Label 'Feature: offer' starts with the 'Feature: ' marker
    """
    if _LINE_BREAKS.intersection(label):
        raise InvalidInputError(f"Label {label!r} contains a line break", argument="label")
    if label.startswith(FEATURE_PREFIX):
        raise InvalidInputError(f"Label {label!r} starts with the {FEATURE_PREFIX!r} marker", argument="label")


def format_threshold(threshold: float) -> str:
    """Render a threshold as the shortest decimal text that reads back as the same float.

    Examples:
        >>> format_threshold(0.5)
        '0.5'
        >>> format_threshold(0.267)
        '0.267'
    """
    return repr(float(threshold))


def dump(root: Node, sink: TextSink) -> None:
    """Write a tree to `sink` in preorder, one token per line.

    Args:
        root (Node): Root of the tree to write.
        sink (TextSink): Destination with a `write` method.

    Raises:
        InvalidInputError: If `sink` is None, or a label or feature cannot be
            represented in the format.
    """
    if sink is None:
        raise InvalidInputError("Output cannot be None", argument="sink")
    lines = 0
    for line in _iter_lines(root):
        sink.write(line + "\n")
        lines += 1
    logger.debug("Tree written", lines=lines)


def dumps(root: Node) -> str:
    """Return a tree in the preorder text format.

    Examples:
        >>> tree = Decision(feature="offer", threshold=0.267, left=Leaf("Spam"), right=Leaf("Ham"))
        >>> print(dumps(tree), end="")
        Feature: offer
        Threshold: 0.267
        Spam
        Ham
    """
    buffer = io.StringIO()
    dump(root, buffer)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Public interface -- Reading
# ---------------------------------------------------------------------------


def load(source: Iterable[str]) -> Node:
    """Rebuild a tree from lines in the preorder text format.

    Args:
        source (Iterable[str]): The lines to parse, with or without their
            terminators, e.g. an open text file, `io.StringIO`, or a list.

    Returns:
        Node: Root of the rebuilt tree. Its leaves carry no training example.

    Raises:
        InvalidInputError: If `source` is None.
        TreeParseError: If the input is empty, a `Feature:` line is not
            followed by a valid `Threshold:` line, the input ends before every
            decision node has two children, or non-blank lines follow a
            complete tree.
    """
    if source is None:
        raise InvalidInputError("Input cannot be None", argument="source")

    lines: Iterator[tuple[int, str]] = ((number, _strip_terminator(raw)) for number, raw in enumerate(source, 1))
    pending: list[_PendingDecision] = []
    root: Node | None = None

    for line_number, line in lines:
        if root is not None:
            if line.strip():
                raise TreeParseError("Unexpected content after a complete tree", line_number=line_number, line=line)
            continue

        if line.startswith(FEATURE_PREFIX):
            threshold = _parse_threshold(next(lines, None))
            pending.append(_PendingDecision(feature=line.removeprefix(FEATURE_PREFIX), threshold=threshold))
            continue

        # A finished subtree fills the first open slot of the innermost decision,
        # completing every ancestor whose right child it turns out to be.
        node: Node = Leaf(label=line)
        while pending and pending[-1].left is not None:
            finished = pending.pop()
            node = Decision(feature=finished.feature, threshold=finished.threshold, left=finished.left, right=node)
        if pending:
            pending[-1].left = node
        else:
            root = node

    if root is None:
        if pending:
            raise TreeParseError(f"Unexpected end of input: {len(pending)} decision node(s) are missing children")
        raise TreeParseError("Input contains no tree")
    logger.debug("Tree read", lines=line_number)
    return root


def loads(text: str) -> Node:
    """Rebuild a tree from a string in the preorder text format.

    Examples:
        >>> tree = loads("Feature: offer\\nThreshold: 0.267\\nSpam\\nHam\\n")
        >>> tree.feature, tree.threshold, tree.left.label, tree.right.label
        ('offer', 0.267, 'Spam', 'Ham')
    """
    return load(io.StringIO(text))


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


@dataclass
class _PendingDecision:
    """A decision node whose header has been read but whose children are incomplete."""

    feature: str
    threshold: float
    left: Node | None = None


def _strip_terminator(raw: str) -> str:
    return raw.removesuffix("\n").removesuffix("\r")


def _parse_threshold(entry: tuple[int, str] | None) -> float:
    """Parse the `Threshold:` line that must follow a `Feature:` line.

    Args:
        entry (tuple[int, str] | None): The line number and text of the line
            after the `Feature:` line, or None at end of input.

    Returns:
        float: The parsed threshold.

    Raises:
        TreeParseError: If the line is missing, lacks the prefix, or does not
            hold a finite number.
    """
    if entry is None:
        raise TreeParseError(f"Unexpected end of input: expected a {THRESHOLD_PREFIX!r} line")
    line_number, line = entry
    if not line.startswith(THRESHOLD_PREFIX):
        raise TreeParseError(f"Expected a {THRESHOLD_PREFIX!r} line", line_number=line_number, line=line)
    text = line.removeprefix(THRESHOLD_PREFIX)
    try:
        threshold = float(text)
    except ValueError as exc:
        raise TreeParseError(f"Threshold {text!r} is not a number", line_number=line_number, line=line) from exc
    if not math.isfinite(threshold):
        raise TreeParseError(f"Threshold {text!r} is not finite", line_number=line_number, line=line)
    return threshold


def _iter_lines(root: Node) -> Iterator[str]:
    """Yield the lines of the preorder text format for a tree."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Decision):
            if _LINE_BREAKS.intersection(node.feature):
                raise InvalidInputError(f"Feature {node.feature!r} contains a line break", argument="feature")
            yield f"{FEATURE_PREFIX}{node.feature}"
            yield f"{THRESHOLD_PREFIX}{format_threshold(node.threshold)}"
            stack.append(node.right)
            stack.append(node.left)
        else:
            check_label(node.label)
            yield node.label
