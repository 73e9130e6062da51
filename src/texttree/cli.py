"""Command-line front end: train, evaluate, and apply text classifiers.

Usage:
    texttree train data.csv --model model.txt
    texttree evaluate model.txt test.csv
    texttree classify model.txt "Buy now" "Hi mom" --explain
"""

from __future__ import annotations

import argparse
import contextlib
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from texttree.classifier import TextClassifier
from texttree.config import TextTreeSettings
from texttree.data import accuracy_table, read_labeled_csv, to_examples, train_test_split
from texttree.exceptions import TextTreeError
from texttree.logging import enable_logging
from texttree.text_block import TextBlock

__all__ = ["build_parser", "main"]

_EXIT_FAILURE: int = 2


def build_parser(settings: TextTreeSettings) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from `settings`.

    Args:
        settings (TextTreeSettings): Environment-derived defaults.

    Returns:
        argparse.ArgumentParser: Parser with `train`, `evaluate`, and
            `classify` subcommands.
    """
    parser = argparse.ArgumentParser(prog="texttree", description="Decision-tree text classification")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["TRACE", "DEBUG", "SPLIT", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Write texttree log messages at this level and above to stderr (off when omitted)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    columns = argparse.ArgumentParser(add_help=False)
    columns.add_argument("--text-column", default=settings.text_column, help="CSV column holding raw text")
    columns.add_argument("--label-column", default=settings.label_column, help="CSV column holding labels")

    train = subparsers.add_parser("train", parents=[columns], help="Train a classifier on a labeled CSV file")
    train.add_argument("data", type=Path, help="Labeled CSV file")
    train.add_argument("--model", type=Path, required=True, help="Where to save the trained tree")
    train.add_argument(
        "--train-fraction",
        type=float,
        default=settings.train_fraction,
        help="Share of rows used for training; the rest is held out for the accuracy report",
    )
    train.add_argument("--seed", type=int, default=settings.seed, help="Random seed for the train/test shuffle")
    train.set_defaults(handler=_run_train)

    evaluate = subparsers.add_parser("evaluate", parents=[columns], help="Report accuracy on a labeled CSV file")
    evaluate.add_argument("model", type=Path, help="Saved tree")
    evaluate.add_argument("data", type=Path, help="Labeled CSV file")
    evaluate.set_defaults(handler=_run_evaluate)

    classify = subparsers.add_parser("classify", help="Print the predicted label of each text")
    classify.add_argument("model", type=Path, help="Saved tree")
    classify.add_argument("texts", nargs="+", help="Texts to classify")
    classify.add_argument("--explain", action="store_true", help="Also print the decisions taken for each text")
    classify.set_defaults(handler=_run_classify)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status.

    Args:
        argv (Sequence[str] | None): Arguments without the program name.
            Defaults to `sys.argv[1:]`.

    Returns:
        int: 0 on success, 2 when the command fails on bad input or a
            malformed model file.
    """
    settings = TextTreeSettings()
    args = build_parser(settings).parse_args(argv)
    logging_handle = enable_logging(level=args.log_level) if args.log_level is not None else contextlib.nullcontext()
    with logging_handle:
        try:
            args.handler(args)
        except (TextTreeError, ValueError, OSError) as exc:
            logger.error("Command failed", command=args.command, error=repr(exc))
            print(f"texttree {args.command}: {exc}", file=sys.stderr)
            return _EXIT_FAILURE
    return 0


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _run_train(args: argparse.Namespace) -> None:
    df = read_labeled_csv(args.data, text_column=args.text_column, label_column=args.label_column)
    train_df, test_df = train_test_split(df, train_fraction=args.train_fraction, seed=args.seed)
    train_examples = to_examples(train_df, text_column=args.text_column, label_column=args.label_column)
    classifier = TextClassifier.train(train_examples.instances, train_examples.labels)
    with args.model.open("w", encoding="utf-8", newline="\n") as sink:
        classifier.save(sink)

    # Without a held-out part, report accuracy on the training rows instead.
    report_df = test_df if test_df.height else train_df
    report = to_examples(report_df, text_column=args.text_column, label_column=args.label_column)
    print(f"Trained on {train_df.height} rows, evaluated on {report_df.height} rows")
    print(accuracy_table(classifier.accuracy(report.instances, report.labels)))


def _run_evaluate(args: argparse.Namespace) -> None:
    classifier = _load_model(args.model)
    df = read_labeled_csv(args.data, text_column=args.text_column, label_column=args.label_column)
    examples = to_examples(df, text_column=args.text_column, label_column=args.label_column)
    print(accuracy_table(classifier.accuracy(examples.instances, examples.labels)))


def _run_classify(args: argparse.Namespace) -> None:
    classifier = _load_model(args.model)
    for text in args.texts:
        steps, label = classifier.explain(TextBlock.from_text(text))
        print(label)
        if args.explain:
            for step in steps:
                print(f"    {step}")


def _load_model(path: Path) -> TextClassifier:
    with path.open(encoding="utf-8", newline="") as source:
        return TextClassifier.load(source)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
