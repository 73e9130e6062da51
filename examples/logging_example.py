"""Demonstrates how to enable and configure logging in texttree.

texttree logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, texttree logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``SPLIT`` level
  (numeric value 15, between DEBUG and INFO) reports every leaf split made
  while a tree grows, naming the new leaf at the end of each line. The default
  ``INFO`` level only shows summaries.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Warning logging: using a loaded classifier to learn is logged before the
  error is raised.
- Automatic cleanup: logging is re-disabled when the context manager exits.
"""

import io

from texttree import ReadOnlyModelError, TextBlock, TextClassifier, enable_logging

messages = [
    ("Buy cheap pills now", "Spam"),
    ("Lunch with mom on Sunday?", "Ham"),
    ("Limited offer, click to buy", "Spam"),
    ("Meeting notes are attached", "Ham"),
    ("You won a free cruise", "Spam"),
]

# Enable logging at SPLIT level (and above) with full log format to watch the tree grow
with enable_logging(
    level="SPLIT",
    log_format="full",
):
    classifier = TextClassifier.train(
        [TextBlock.from_text(text) for text, _ in messages],
        [label for _, label in messages],
    )

    # Save and reload
    buffer = io.StringIO()
    classifier.save(buffer)
    print(f"\nSaved tree:\n{buffer.getvalue()}")
    loaded = TextClassifier.loads(buffer.getvalue())

    # Explain one prediction
    steps, label = loaded.explain(TextBlock.from_text("Free lunch offer"))
    print(f"Predicted {label!r} via {[str(step) for step in steps]}\n")

    # A loaded classifier is prediction-only; the rejected insert is logged
    try:
        loaded.insert(TextBlock.from_text("See you at lunch"), "Ham")
    except ReadOnlyModelError as exc:
        print(f"Insert refused: {exc}\n")

# Logging automatically disabled here
