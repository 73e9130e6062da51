"""Loading labeled text from CSV files and tabulating results with Polars."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import IO, NamedTuple

import polars as pl

from texttree.exceptions import ColumnsNotFoundError
from texttree.text_block import TextBlock
from texttree.tree.evaluation import OVERALL_KEY

__all__ = [
    "LabeledExamples",
    "accuracy_table",
    "read_labeled_csv",
    "to_examples",
    "train_test_split",
]


class LabeledExamples(NamedTuple):
    """Parallel lists of text blocks and their labels.

    Attributes:
        instances (list[TextBlock]): Feature vectors, one per row.
        labels (list[str]): Label of each instance.
    """

    instances: list[TextBlock]
    labels: list[str]


def read_labeled_csv(
    source: str | Path | IO[bytes] | IO[str],
    *,
    text_column: str,
    label_column: str,
) -> pl.DataFrame:
    """Read the text and label columns of a CSV file.

    Every column is read as a string. Rows with a missing text or label are
    dropped.

    Args:
        source (str | Path | IO[bytes] | IO[str]): Path or open file of the CSV.
        text_column (str): Name of the column holding raw text.
        label_column (str): Name of the column holding labels.

    Returns:
        pl.DataFrame: A two-column DataFrame `[text_column, label_column]`
            in file order.

    Raises:
        ColumnsNotFoundError: If either column is absent from the file.

    Examples:
        >>> import io
        >>> csv = io.StringIO("Label,Text\\nSpam,Buy now\\nHam,Hi mom\\n")
        >>> read_labeled_csv(csv, text_column="Text", label_column="Label").rows()
        [('Buy now', 'Spam'), ('Hi mom', 'Ham')]
    """
    df = pl.read_csv(source, infer_schema=False)
    columns = [text_column, label_column]
    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise ColumnsNotFoundError(missing_columns=missing, available_columns=df.columns)
    return df.select(pl.col(column).cast(pl.String) for column in columns).drop_nulls()


def to_examples(df: pl.DataFrame, *, text_column: str, label_column: str) -> LabeledExamples:
    """Turn a DataFrame of raw text and labels into training examples.

    Args:
        df (pl.DataFrame): DataFrame with the two columns.
        text_column (str): Name of the column holding raw text.
        label_column (str): Name of the column holding labels.

    Returns:
        LabeledExamples: One `TextBlock` per row and the matching labels.
    """
    instances = [TextBlock.from_text(text) for text in df[text_column].to_list()]
    return LabeledExamples(instances=instances, labels=df[label_column].to_list())


def train_test_split(
    df: pl.DataFrame,
    *,
    train_fraction: float,
    seed: int | None = None,
) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Shuffle rows and split them into a training part and a test part.

    Args:
        df (pl.DataFrame): Rows to split.
        train_fraction (float): Share of rows used for training, in `(0, 1]`.
            At least one row goes to training when `df` is not empty.
        seed (int | None): Random seed for the shuffle. Defaults to None.

    Returns:
        tuple[pl.DataFrame, pl.DataFrame]: The `(train, test)` parts. The
            test part is empty when `train_fraction` is 1.

    Raises:
        ValueError: If `train_fraction` is outside `(0, 1]`.
    """
    if not (0.0 < train_fraction <= 1.0):
        raise ValueError(f"train_fraction must be in (0, 1], got {train_fraction}")
    shuffled = df.sample(fraction=1.0, shuffle=True, seed=seed)
    train_rows = max(1, int(shuffled.height * train_fraction)) if shuffled.height else 0
    return shuffled.head(train_rows), shuffled.slice(train_rows)


def accuracy_table(scores: Mapping[str, float]) -> str:
    """Render an accuracy mapping as a markdown table, `"Overall"` last.

    Args:
        scores (Mapping[str, float]): Accuracy per label as returned by
            `TextClassifier.accuracy`.

    Returns:
        str: Markdown table with `label` and `accuracy` columns.
    """
    labels = sorted(label for label in scores if label != OVERALL_KEY)
    if OVERALL_KEY in scores:
        labels.append(OVERALL_KEY)
    df = pl.DataFrame(
        {"label": labels, "accuracy": [scores[label] for label in labels]},
        schema={"label": pl.String, "accuracy": pl.Float64},
    )
    with pl.Config(
        tbl_formatting="MARKDOWN",
        tbl_hide_column_data_types=True,
        tbl_hide_column_names=False,
        tbl_hide_dataframe_shape=True,
        tbl_rows=df.height,
        tbl_cols=df.width,
    ):
        return str(df)
