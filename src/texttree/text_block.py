"""Word-probability features extracted from a block of text."""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from texttree.exceptions import InvalidInputError

__all__ = ["TextBlock"]

# Letters and digits in any script; an apostrophe only joins two such runs ("don't").
_WORD_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


class TextBlock(BaseModel):
    """The feature vector of one text sample: each word's share of the text.

    A `TextBlock` is the instance type the classifier trains on and predicts
    for. It maps feature names (words) to probabilities; words that do not
    occur have probability `0.0`.

    Attributes:
        probabilities (Mapping[str, float]): Read-only word to probability mapping.

    Examples:
        >>> block = TextBlock.from_text("Buy now, buy today")
        >>> block.get("buy")
        0.5
        >>> block.get("mom")
        0.0
        >>> block.biggest_difference(TextBlock.from_text("Hi mom"))
        'buy'
    """

    model_config = ConfigDict(frozen=True)

    probabilities: Mapping[str, float] = Field(
        default_factory=dict,
        validate_default=True,
        description="Mapping of feature name (word) to its probability within the text.",
    )

    @field_validator("probabilities", mode="after")
    @classmethod
    def _freeze_finite_probabilities(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        """Reject NaN and infinite probabilities, then store a read-only copy.

        Non-finite values cannot be ordered against a threshold. The copy keeps
        later changes to the caller's dict from reaching a trained tree.

        Args:
            value (Mapping[str, float]): The probability mapping to validate.

        Returns:
            Mapping[str, float]: A `MappingProxyType` over a private copy of `value`.

        Raises:
            ValueError: If any probability is NaN or infinite.
        """
        bad = sorted(feature for feature, probability in value.items() if not math.isfinite(probability))
        if bad:
            raise ValueError(f"probabilities must be finite, got non-finite values for {bad}")
        return MappingProxyType(dict(value))

    @classmethod
    def from_text(cls, text: str) -> TextBlock:
        """Build a `TextBlock` from raw text.

        The text is lower-cased and split into words: runs of letters and digits
        in any script, where an inner apostrophe keeps a word whole ("don't").
        Each word's probability is its number of occurrences divided by the
        total number of words.

        Args:
            text (str): The raw text sample.

        Returns:
            TextBlock: The word-probability features of `text`. Text with no
                words yields an empty mapping.
        """
        words = _WORD_PATTERN.findall(text.lower())
        if not words:
            return cls()
        counts = Counter(words)
        total = len(words)
        return cls(probabilities={word: count / total for word, count in counts.items()})

    def get(self, feature: str) -> float:
        """Return the probability of `feature`, or `0.0` when it does not occur."""
        return self.probabilities.get(feature, 0.0)

    def biggest_difference(self, other: TextBlock) -> str:
        """Return the feature whose probability differs most between two blocks.

        Every feature present in either block is considered. When several
        features tie for the largest absolute difference, the lexicographically
        smallest name wins, so the result never depends on insertion order.

        Args:
            other (TextBlock): The block to compare against.

        Returns:
            str: The feature name with the largest `|self.get(f) - other.get(f)|`.

        Raises:
            InvalidInputError: If neither block has any feature.
        """
        features = sorted(self.probabilities.keys() | other.probabilities.keys())
        if not features:
            raise InvalidInputError("Cannot compare two text blocks that have no features", argument="other")
        best_feature = features[0]
        best_difference = abs(self.get(best_feature) - other.get(best_feature))
        for feature in features[1:]:
            difference = abs(self.get(feature) - other.get(feature))
            if difference > best_difference:
                best_feature = feature
                best_difference = difference
        return best_feature
