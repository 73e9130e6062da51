"""Per-label and overall accuracy of a classifier on labeled examples."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from typing import Final

from texttree.exceptions import InvalidInputError
from texttree.text_block import TextBlock

__all__ = ["OVERALL_KEY", "accuracy"]

OVERALL_KEY: Final[str] = "Overall"


def accuracy(
    predict: Callable[[TextBlock], str],
    instances: Sequence[TextBlock],
    labels: Sequence[str],
) -> dict[str, float]:
    """Compute classification accuracy per label and overall.

    Each example counts toward the total of its true label and the overall
    total. A correct prediction counts toward the correct tally of the
    predicted label and the overall correct tally. The result holds, for every
    key with at least one correct prediction plus `"Overall"`, the ratio of
    correct to total. A label that is never predicted correctly does not
    appear in the result.

    Args:
        predict (Callable[[TextBlock], str]): Returns the predicted label for
            one instance.
        instances (Sequence[TextBlock]): The examples to classify.
        labels (Sequence[str]): The true label of each example.

    Returns:
        dict[str, float]: Mapping of label (and `"Overall"`) to accuracy in
            `[0.0, 1.0]`. `"Overall"` is the fraction of all examples
            classified correctly.

    Raises:
        InvalidInputError: If the sequences are empty or differ in length.

    Examples:
        >>> blocks = [TextBlock(probabilities={"buy": p}) for p in (0.9, 0.1, 0.8)]
        >>> accuracy(lambda b: "Spam" if b.get("buy") >= 0.5 else "Ham", blocks, ["Spam", "Ham", "Ham"])
        {'Overall': 0.6666666666666666, 'Spam': 1.0, 'Ham': 0.5}
    """
    if len(instances) != len(labels):
        raise InvalidInputError(
            f"Length of provided data [{len(instances)}] doesn't match provided labels [{len(labels)}]",
            argument="labels",
        )
    if not instances:
        raise InvalidInputError("Cannot compute accuracy on zero examples", argument="instances")

    totals: Counter[str] = Counter()
    correct: Counter[str] = Counter({OVERALL_KEY: 0})
    for instance, label in zip(instances, labels, strict=True):
        predicted = predict(instance)
        totals[label] += 1
        totals[OVERALL_KEY] += 1
        if predicted == label:
            correct[predicted] += 1
            correct[OVERALL_KEY] += 1

    return {key: count / totals[key] for key, count in correct.items()}
