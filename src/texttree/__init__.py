"""texttree: Binary decision trees that label text by word probabilities."""

from loguru import logger

from texttree.classifier import TextClassifier
from texttree.exceptions import (
    InvalidInputError,
    ReadOnlyModelError,
    TextTreeError,
    TreeParseError,
    UninitializedModelError,
)
from texttree.logging import PACKAGE_NAME, enable_logging
from texttree.text_block import TextBlock

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the texttree module by default

__all__ = [
    "InvalidInputError",
    "ReadOnlyModelError",
    "TextBlock",
    "TextClassifier",
    "TextTreeError",
    "TreeParseError",
    "UninitializedModelError",
    "enable_logging",
]
