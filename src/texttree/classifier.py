"""Text classifier backed by an incrementally trained binary decision tree.

The classifier owns a single tree. It is either trained from labeled text
blocks, in which case every leaf remembers the example that created it and the
tree can keep learning, or loaded from the preorder text format, in which case
it can only predict.

Design Note:
    The classifier is not thread-safe. Training mutates the tree in place, so
    callers sharing one instance across threads must serialize access.
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Sequence

from loguru import logger

from texttree.exceptions import InvalidInputError, ReadOnlyModelError, UninitializedModelError
from texttree.text_block import TextBlock
from texttree.tree import evaluation, induction, nodes, prediction, serialization
from texttree.tree.nodes import Node
from texttree.tree.prediction import DecisionStep
from texttree.tree.serialization import TextSink

__all__ = ["TextClassifier"]


class TextClassifier:
    """Labels text blocks with a binary decision tree over word probabilities.

    Examples:
        Train on two examples and predict:
        >>> spam = TextBlock(probabilities={"buy": 0.9})
        >>> ham = TextBlock(probabilities={"buy": 0.1})
        >>> classifier = TextClassifier.train([spam, ham], ["Spam", "Ham"])
        >>> classifier.classify(TextBlock(probabilities={"buy": 0.95}))
        'Spam'

        Save and reload:
        >>> print(classifier.dumps(), end="")
        Feature: buy
        Threshold: 0.5
        Ham
        Spam
        >>> reloaded = TextClassifier.loads(classifier.dumps())
        >>> reloaded.classify(TextBlock(probabilities={"buy": 0.05}))
        'Ham'
        >>> reloaded.is_trainable
        False
    """

    def __init__(self, root: Node | None = None, *, trainable: bool = True) -> None:
        """Initialize the classifier with an optional tree.

        Args:
            root (Node | None): An existing tree to take ownership of. If None,
                the classifier starts empty and the first `insert` creates the
                tree. Defaults to None.
            trainable (bool): Whether the tree's leaves carry training examples
                so further examples can be inserted. Defaults to True.
        """
        self._root = root
        self._trainable = trainable

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def train(cls, instances: Sequence[TextBlock], labels: Sequence[str]) -> TextClassifier:
        """Build a classifier by inserting labeled examples in order.

        Every example that created its own leaf is classified as its own label
        right after insertion. An example absorbed by an agreeing leaf keeps no
        leaf of its own, so a later split may route it elsewhere.

        Args:
            instances (Sequence[TextBlock]): Training examples. Must be non-empty.
            labels (Sequence[str]): Label of each example, in the same order.

        Returns:
            TextClassifier: A trainable classifier holding the grown tree.

        Raises:
            InvalidInputError: If either argument is None or empty, their
                lengths differ, or a label cannot be saved in the text format.
        """
        if instances is None or labels is None:
            raise InvalidInputError(
                "instances and labels cannot be None",
                argument="instances" if instances is None else "labels",
            )
        for label in labels:
            serialization.check_label(label)
        classifier = cls(induction.build_tree(instances, labels))
        logger.info(
            "Classifier trained",
            examples=len(instances),
            leaves=classifier.leaf_count,
            depth=classifier.depth,
        )
        return classifier

    @classmethod
    def load(cls, source: Iterable[str]) -> TextClassifier:
        """Read a classifier saved in the preorder text format.

        Args:
            source (Iterable[str]): Lines of saved text, e.g. an open file.

        Returns:
            TextClassifier: A prediction-only classifier.

        Raises:
            InvalidInputError: If `source` is None.
            TreeParseError: If the text is malformed.
        """
        root = serialization.load(source)
        classifier = cls(root, trainable=False)
        logger.info("Classifier loaded", leaves=classifier.leaf_count, depth=classifier.depth)
        return classifier

    @classmethod
    def loads(cls, text: str) -> TextClassifier:
        """Read a classifier from a string in the preorder text format."""
        if text is None:
            raise InvalidInputError("Input cannot be None", argument="text")
        return cls.load(io.StringIO(text))

    # ------------------------------------------------------------------
    # Learning and prediction
    # ------------------------------------------------------------------

    def insert(self, instance: TextBlock, label: str) -> None:
        """Learn one more labeled example.

        The example is routed to a leaf; if that leaf predicts a different
        label it is split so that the example gets its own leaf. On an empty
        classifier the example becomes the single-leaf tree.

        Args:
            instance (TextBlock): The training example.
            label (str): Its label.

        Raises:
            InvalidInputError: If an argument is None or the label cannot be
                saved in the text format.
            ReadOnlyModelError: If the classifier was loaded from text.
        """
        if instance is None or label is None:
            raise InvalidInputError(
                "instance and label cannot be None",
                argument="instance" if instance is None else "label",
            )
        if not self._trainable:
            msg = "A classifier loaded from text cannot learn new examples"
            logger.warning("Insert rejected", label=label, reason=msg)
            raise ReadOnlyModelError(msg)
        serialization.check_label(label)
        self._root = induction.insert(self._root, instance, label)

    def classify(self, instance: TextBlock) -> str:
        """Return the predicted label for `instance`.

        Raises:
            InvalidInputError: If `instance` is None.
            UninitializedModelError: If the classifier has no tree.
        """
        if instance is None:
            raise InvalidInputError("Input cannot be None", argument="instance")
        return prediction.predict(self._require_root("classify"), instance)

    def explain(self, instance: TextBlock) -> tuple[list[DecisionStep], str]:
        """Return the decisions taken for `instance` and its predicted label.

        Raises:
            InvalidInputError: If `instance` is None.
            UninitializedModelError: If the classifier has no tree.
        """
        if instance is None:
            raise InvalidInputError("Input cannot be None", argument="instance")
        return prediction.decision_path(self._require_root("explain"), instance)

    def accuracy(self, instances: Sequence[TextBlock], labels: Sequence[str]) -> dict[str, float]:
        """Classify labeled examples and report accuracy per label and overall.

        See `texttree.tree.evaluation.accuracy` for how the ratios are formed.

        Args:
            instances (Sequence[TextBlock]): Examples to classify.
            labels (Sequence[str]): True label of each example.

        Returns:
            dict[str, float]: Accuracy per correctly predicted label and under
                the `"Overall"` key.

        Raises:
            InvalidInputError: If an argument is None, empty, or the lengths differ.
            UninitializedModelError: If the classifier has no tree.
        """
        if instances is None or labels is None:
            raise InvalidInputError(
                "instances and labels cannot be None",
                argument="instances" if instances is None else "labels",
            )
        root = self._require_root("compute accuracy")
        scores = evaluation.accuracy(lambda instance: prediction.predict(root, instance), instances, labels)
        logger.info("Accuracy computed", examples=len(instances), overall=scores[evaluation.OVERALL_KEY])
        return scores

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self, sink: TextSink) -> None:
        """Write the tree to `sink` in the preorder text format.

        Training examples are not written.

        Raises:
            InvalidInputError: If `sink` is None.
            UninitializedModelError: If the classifier has no tree.
        """
        if sink is None:
            raise InvalidInputError("Output cannot be None", argument="sink")
        serialization.dump(self._require_root("save"), sink)
        logger.info("Classifier saved", leaves=self.leaf_count)

    def dumps(self) -> str:
        """Return the tree in the preorder text format.

        Raises:
            UninitializedModelError: If the classifier has no tree.
        """
        return serialization.dumps(self._require_root("save"))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def root(self) -> Node | None:
        """The root node of the tree, or None before training or loading."""
        return self._root

    @property
    def is_trained(self) -> bool:
        """True once the classifier holds a tree."""
        return self._root is not None

    @property
    def is_trainable(self) -> bool:
        """True unless the classifier was loaded from text."""
        return self._trainable

    @property
    def leaf_count(self) -> int:
        """Number of leaves, 0 for an empty classifier."""
        return nodes.count_leaves(self._root) if self._root is not None else 0

    @property
    def decision_count(self) -> int:
        """Number of decision nodes, 0 for an empty classifier."""
        return nodes.count_decisions(self._root) if self._root is not None else 0

    @property
    def depth(self) -> int:
        """Length of the longest root-to-leaf path, 0 for an empty classifier."""
        return nodes.depth(self._root) if self._root is not None else 0

    def __repr__(self) -> str:
        """Return a summary of the classifier's tree."""
        return (
            f"{self.__class__.__name__}("
            f"leaves={self.leaf_count}, depth={self.depth}, trainable={self._trainable})"
        )

    def _require_root(self, operation: str) -> Node:
        if self._root is None:
            logger.warning("Classifier used before training", operation=operation)
            raise UninitializedModelError(operation)
        return self._root
