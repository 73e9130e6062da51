"""Tests for TextBlock feature extraction and comparison."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from texttree.exceptions import InvalidInputError
from texttree.text_block import TextBlock


class TestFromText:
    """Tests for `TextBlock.from_text`."""

    def test_probabilities_are_word_shares(self) -> None:
        """Each word's probability is its count over the total number of words."""
        # Act
        block = TextBlock.from_text("the cat saw the dog")

        # Assert
        with check:
            assert block.get("the") == pytest.approx(0.4)
        with check:
            assert block.get("cat") == pytest.approx(0.2)
        with check:
            assert sum(block.probabilities.values()) == pytest.approx(1.0)

    def test_lowercases_and_strips_punctuation(self) -> None:
        """Case and punctuation do not create distinct features; apostrophes stay inside words."""
        block = TextBlock.from_text("Don't STOP, don't!")
        assert block.probabilities == pytest.approx({"don't": 2 / 3, "stop": 1 / 3})

    def test_digits_are_words(self) -> None:
        """Numbers count as words."""
        block = TextBlock.from_text("Win 100 dollars")
        assert set(block.probabilities) == {"win", "100", "dollars"}

    def test_accented_letters_stay_inside_words(self) -> None:
        """Accented letters are word characters, not separators."""
        block = TextBlock.from_text("Café naïve, CAFÉ")
        assert block.probabilities == pytest.approx({"café": 2 / 3, "naïve": 1 / 3})

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Купите сейчас, купите!", {"купите": 2 / 3, "сейчас": 1 / 3}),
            ("Καλημέρα κόσμε", {"καλημέρα": 0.5, "κόσμε": 0.5}),
            ("今天 买药。", {"今天": 0.5, "买药": 0.5}),
        ],
    )
    def test_non_latin_scripts_produce_words(self, text: str, expected: dict[str, float]) -> None:
        """Letters of any script form words, lower-cased where the script has case.

        Args:
            text (str): Text written in a non-Latin script.
            expected (dict[str, float]): The word shares of `text`.
        """
        assert TextBlock.from_text(text).probabilities == pytest.approx(expected)

    def test_apostrophe_only_joins_letters(self) -> None:
        """Quotes around a word and underscores inside it are separators."""
        block = TextBlock.from_text("'quoted' snake_case")
        assert set(block.probabilities) == {"quoted", "snake", "case"}

    @pytest.mark.parametrize("text", ["", "   ", "!!! ... ???"])
    def test_text_without_words_is_empty(self, text: str) -> None:
        """Text with no words yields no features.

        Args:
            text (str): Text containing no word characters.
        """
        assert TextBlock.from_text(text).probabilities == {}


class TestGet:
    """Tests for `TextBlock.get`."""

    def test_absent_feature_is_zero(self) -> None:
        """A word that does not occur has probability 0."""
        block = TextBlock(probabilities={"offer": 0.3})
        with check:
            assert block.get("offer") == 0.3
        with check:
            assert block.get("missing") == 0.0


class TestBiggestDifference:
    """Tests for `TextBlock.biggest_difference`."""

    def test_picks_largest_absolute_difference(self) -> None:
        """The feature with the largest gap wins, whichever block holds more."""
        # Arrange
        first = TextBlock(probabilities={"offer": 0.1, "free": 0.5, "mom": 0.0})
        second = TextBlock(probabilities={"offer": 0.8, "free": 0.4})

        # Act & Assert
        with check:
            assert first.biggest_difference(second) == "offer"
        with check:
            assert second.biggest_difference(first) == "offer"

    def test_considers_features_of_either_block(self) -> None:
        """A feature present in only one block is compared against 0."""
        first = TextBlock(probabilities={"a": 0.2})
        second = TextBlock(probabilities={"a": 0.3, "z": 0.6})
        assert first.biggest_difference(second) == "z"

    def test_ties_resolve_to_smallest_name(self) -> None:
        """Equal differences resolve to the lexicographically smallest feature."""
        # Arrange
        first = TextBlock(probabilities={"zebra": 0.5, "apple": 0.0})
        second = TextBlock(probabilities={"mango": 0.5, "apple": 0.5})

        # Act & Assert
        with check:
            assert first.biggest_difference(second) == "apple"
        with check:
            assert second.biggest_difference(first) == "apple"

    def test_one_empty_block(self) -> None:
        """An empty block differs from a non-empty one by the other block's largest word."""
        block = TextBlock.from_text("buy buy now")
        assert TextBlock().biggest_difference(block) == "buy"

    def test_two_empty_blocks_raise(self) -> None:
        """Two blocks without features have nothing to compare."""
        with pytest.raises(InvalidInputError):
            TextBlock().biggest_difference(TextBlock())


class TestValidation:
    """Tests for TextBlock model validation."""

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_probability_rejected(self, value: float) -> None:
        """NaN and infinite probabilities cannot be ordered against a threshold.

        Args:
            value (float): A non-finite probability.
        """
        with pytest.raises(ValidationError, match="finite"):
            TextBlock(probabilities={"offer": value})

    def test_block_is_frozen(self) -> None:
        """Reassigning the probabilities of a built block is rejected."""
        block = TextBlock.from_text("hello")
        with pytest.raises(ValidationError):
            block.probabilities = {}  # type: ignore[misc]

    def test_probabilities_cannot_be_mutated_in_place(self) -> None:
        """Item assignment and deletion on the stored mapping are rejected."""
        # Arrange
        block = TextBlock.from_text("buy now")

        # Act & Assert
        with check.raises(TypeError):
            block.probabilities["buy"] = 9.0  # type: ignore[index]
        with check.raises(TypeError):
            del block.probabilities["now"]  # type: ignore[attr-defined]
        with check:
            assert block.get("buy") == 0.5

    def test_source_dict_changes_do_not_reach_block(self) -> None:
        """The block keeps its own copy of the mapping it was built from."""
        # Arrange
        source = {"buy": 0.9}
        block = TextBlock(probabilities=source)

        # Act
        source["buy"] = 0.1
        source["mom"] = 0.5

        # Assert
        assert dict(block.probabilities) == {"buy": 0.9}

    def test_default_mapping_is_read_only(self) -> None:
        """An empty block built without arguments is read-only too."""
        with pytest.raises(TypeError):
            TextBlock().probabilities["buy"] = 1.0  # type: ignore[index]
