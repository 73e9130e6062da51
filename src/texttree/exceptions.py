"""Custom exceptions for texttree.

This module defines the failures surfaced by the classifier, the tree
serialization format, and the CSV loading helpers.

Model exceptions (subclass TextTreeError):
- TextTreeError: Base class for all classifier failures. Catch this to
  handle any error raised by a model operation.
- InvalidInputError: Raised when a public entry point receives an absent,
  empty, or length-mismatched argument (also a ValueError).
- TreeParseError: Raised when persisted tree text is malformed (also a ValueError).
- UninitializedModelError: Raised when a classifier without a tree is used
  for prediction, evaluation, or saving (also a RuntimeError).
- ReadOnlyModelError: Raised when a loaded classifier is asked to learn a new
  example (also a RuntimeError).

Data exceptions (subclass ValueError):
- ColumnsNotFoundError: Raised when requested columns do not exist in a CSV file.
"""

from __future__ import annotations


class TextTreeError(Exception):
    """Base exception for all texttree model errors.

    Catching this exception will catch every failure raised by
    `TextClassifier` and the functions in `texttree.tree`.
    """


class InvalidInputError(TextTreeError, ValueError):
    """Raised when a public entry point receives an unusable argument.

    Covers `None` arguments, empty example sequences, example and label
    sequences of different lengths, and labels that the preorder text format
    cannot represent.

    Attributes:
        argument (str | None): Name of the offending parameter, when known.

    Examples:
        >>> err = InvalidInputError("labels cannot be empty", argument="labels")
        >>> err.argument
        'labels'
        >>> isinstance(err, ValueError)
        True
    """

    argument: str | None

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        """Initialize InvalidInputError.

        Args:
            message (str): Description of the problem.
            argument (str | None): Name of the offending parameter.
        """
        super().__init__(message)
        self.argument = argument

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and argument.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, argument={self.argument!r})"


class TreeParseError(TextTreeError, ValueError):
    """Raised when saved tree text cannot be parsed.

    Attributes:
        line_number (int | None): 1-based number of the line where parsing
            failed, or `None` when the input ended unexpectedly.
        line (str | None): Text of the offending line without its terminator.

    Examples:
        >>> err = TreeParseError("expected a 'Threshold: ' line", line_number=2, line="Spam")
        >>> str(err)
        "expected a 'Threshold: ' line (line 2: 'Spam')"
        >>> TreeParseError("unexpected end of input").line_number is None
        True
    """

    line_number: int | None
    line: str | None

    def __init__(self, message: str, *, line_number: int | None = None, line: str | None = None) -> None:
        """Initialize TreeParseError.

        Args:
            message (str): Description of the parse failure.
            line_number (int | None): 1-based line number of the failure.
            line (str | None): The offending line.
        """
        location = f" (line {line_number}: {line!r})" if line_number is not None else ""
        super().__init__(f"{message}{location}")
        self.line_number = line_number
        self.line = line

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and location.
        """
        return (
            f"{self.__class__.__name__}("
            f"message={str(self)!r}, line_number={self.line_number!r}, line={self.line!r})"
        )


class UninitializedModelError(TextTreeError, RuntimeError):
    """Raised when a classifier is used before it has been trained or loaded."""

    def __init__(self, operation: str) -> None:
        """Initialize UninitializedModelError.

        Args:
            operation (str): Name of the operation that needed a tree.
        """
        super().__init__(f"Cannot {operation}: the classifier has no tree; train or load one first")
        self.operation = operation


class ReadOnlyModelError(TextTreeError, RuntimeError):
    """Raised when a loaded classifier is asked to learn a new example.

    Leaves read back from the preorder text format carry no training example,
    so there is nothing to compare a new example against when a split is needed.
    """


class ColumnsNotFoundError(ValueError):
    """Raised when requested columns do not exist in a CSV file.

    Attributes:
        missing_columns (list[str]): Column names that were not found.
        available_columns (list[str]): Column names present in the file.

    Examples:
        >>> err = ColumnsNotFoundError(
        ...     missing_columns=["Text"],
        ...     available_columns=["body", "category"],
        ... )
        >>> err.missing_columns
        ['Text']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize ColumnsNotFoundError.

        Args:
            missing_columns (list[str]): Column names not found in the file.
            available_columns (list[str]): Column names present in the file.
        """
        super().__init__(
            f"Columns not found: {sorted(missing_columns)}. Available columns: {available_columns}",
        )
        self.missing_columns = missing_columns
        self.available_columns = available_columns
