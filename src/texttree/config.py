"""Settings for the texttree command-line front end."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from texttree.logging import LogLevel

__all__ = ["TextTreeSettings"]


class TextTreeSettings(BaseSettings):
    """Defaults for loading data and training, read from the environment.

    Each field can be set with a `TEXTTREE_`-prefixed environment variable
    (e.g. `TEXTTREE_LABEL_COLUMN=Category`) or in a `.env` file. Command-line
    flags take precedence over these values.

    Attributes:
        text_column (str): CSV column holding raw text.
        label_column (str): CSV column holding labels.
        train_fraction (float): Share of rows used for training; the rest is
            held out for the accuracy report.
        seed (int | None): Random seed for the train/test shuffle.
        log_level (LogLevel | None): Minimum level of texttree log messages
            written to stderr by the command line. `None` leaves logging off.

    Examples:
        >>> TextTreeSettings(label_column="Category").label_column
        'Category'
    """

    model_config = SettingsConfigDict(
        env_prefix="TEXTTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    text_column: str = Field(default="Text", description="CSV column holding raw text.")
    label_column: str = Field(default="Label", description="CSV column holding labels.")
    train_fraction: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Share of rows used for training; the rest is held out for evaluation.",
    )
    seed: int | None = Field(default=None, description="Random seed for the train/test shuffle.")
    log_level: LogLevel | None = Field(
        default=None,
        description="Minimum level of texttree log messages written to stderr; None leaves logging off.",
    )
