"""
Configuration for the Text Analyzer
===================================

Process-wide settings are read from the environment (a local .env file is
honoured). Per-run settings come from the command line and are validated in a
single step that yields either an AnalysisConfig or a ConfigurationError,
never a partially valid object.
"""

import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEXT_ANALYZER_"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class TextAnalyzerError(Exception):
    """Base class for errors reported to the user."""


class ConfigurationError(TextAnalyzerError):
    """Invalid or missing configuration; analysis is never attempted."""

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.argument = argument


class AnalyzerSettings(BaseModel):
    """Process-wide defaults and limits, overridable through TEXT_ANALYZER_* variables."""

    default_top: int = Field(
        default=10,
        gt=0,
        description="Number of phrases listed when -top is omitted",
    )
    default_phrase_size: int = Field(
        default=3,
        gt=1,
        description="Words per phrase when -phraseSize is omitted",
    )
    encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Text encoding used to decode input files",
    )
    max_content_bytes: int = Field(
        default=0,
        ge=0,
        description="Refuse input files larger than this many bytes (0 disables the limit)",
    )
    collapse_terminators: bool = Field(
        default=False,
        description="Treat a run of sentence terminators as a single boundary",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used when neither --verbose nor --extra-verbose is given",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalyzerSettings":
        """Build settings from TEXT_ANALYZER_<FIELD> variables; blank values are ignored."""
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is None or not raw.strip():
                continue
            values[field_name] = raw.strip()

        try:
            return cls(**values)
        except ValidationError as exc:
            details = "; ".join(
                f"{ENV_PREFIX}{str(err['loc'][0]).upper()}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigurationError(f"Invalid environment configuration: {details}") from exc


class AnalysisConfig(BaseModel):
    """Validated configuration for a single analysis run."""

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(min_length=1)
    top: int = Field(gt=0, strict=True)
    phrase_size: int = Field(gt=1, strict=True)
    output_json: bool = False
    collapse_terminators: bool = False
    verbose: bool = False
    extra_verbose: bool = False


@dataclass(frozen=True)
class ConfigResult:
    """Outcome of parse_arguments(): exactly one of config or error is set."""

    config: Optional[AnalysisConfig] = None
    error: Optional[ConfigurationError] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None and self.config is not None

    def unwrap(self) -> AnalysisConfig:
        if self.error is not None:
            raise self.error
        if self.config is None:
            raise ConfigurationError("No configuration was produced.")
        return self.config


_settings: Optional[AnalyzerSettings] = None


def get_settings() -> AnalyzerSettings:
    """Return the process settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = AnalyzerSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None


# -----------------------------
# Command-line parsing
# -----------------------------

# Sentinel stored by argparse when a flag is given without its value.
_MISSING = object()

_OPTION_NAMES = {
    "file_path": "-file",
    "top": "-top",
    "phrase_size": "-phraseSize",
}

# Every option string registered by build_argument_parser()
_OPTION_STRINGS = (
    "-file", "--file",
    "-top", "--top",
    "-phraseSize", "--phrase-size",
    "--json",
    "--collapse-terminators",
    "-v", "--verbose",
    "--extra-verbose",
    "-h", "--help",
)

# Same shape argparse treats as a value rather than an option
_NEGATIVE_NUMBER_RE = re.compile(r"^-\d+$|^-\d*\.\d+$")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

_MISSING_VALUE_MESSAGES = {
    "file_path": "File path not specified.",
    "top": "Top count not specified.",
    "phrase_size": "Phrase size not specified.",
}

# (out of range, not a number)
_FIELD_MESSAGES = {
    "file_path": ("File path not specified.", "File path not specified."),
    "top": ("Top must be a positive integer.", "Top must be a positive integer."),
    "phrase_size": (
        "Phrase size must be greater than 1.",
        "Phrase size must be a number greater than 1.",
    ),
}

_NUMBER_PARSE_ERRORS = {"int_parsing", "int_from_float", "int_type"}


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigurationError instead of exiting."""

    def error(self, message: str):
        raise ConfigurationError(message)


def build_argument_parser(settings: AnalyzerSettings) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="text-analyzer",
        description="Count words and sentences in a text file and list its most frequent phrases.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-file", "--file",
        dest="file_path",
        nargs="?",
        const=_MISSING,
        default=None,
        metavar="PATH",
        help="Path to the text file to analyze",
    )
    parser.add_argument(
        "-top", "--top",
        dest="top",
        nargs="?",
        const=_MISSING,
        default=None,
        metavar="N",
        help=f"Number of most frequent phrases to list (default: {settings.default_top})",
    )
    parser.add_argument(
        "-phraseSize", "--phrase-size",
        dest="phrase_size",
        nargs="?",
        const=_MISSING,
        default=None,
        metavar="N",
        help=f"Number of words per phrase, greater than 1 (default: {settings.default_phrase_size})",
    )
    parser.add_argument(
        "--json",
        dest="output_json",
        action="store_true",
        help="Print the report as JSON instead of text tables",
    )
    parser.add_argument(
        "--collapse-terminators",
        action="store_true",
        help="Count a run of '.', '!' or '?' as a single sentence boundary",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log analysis phases to stderr")
    parser.add_argument(
        "--extra-verbose",
        action="store_true",
        help="Debug logging plus a timing summary (includes --verbose)",
    )
    return parser


def _first_unknown_option(argv: Sequence[str]) -> Optional[str]:
    """Return the first option-like token that is not an exact registered option."""
    for token in argv:
        if token == "--":
            break
        if not token.startswith("-") or token == "-" or _NEGATIVE_NUMBER_RE.match(token):
            continue
        if token.split("=", 1)[0] not in _OPTION_STRINGS:
            return token
    return None


def _to_integer(value: Any) -> Any:
    """Convert a plain decimal string to int; anything else is left for validation to reject."""
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not _INTEGER_RE.fullmatch(stripped):
        return value
    try:
        return int(stripped)
    except ValueError:
        return value


def _error_from_validation(exc: ValidationError) -> ConfigurationError:
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    field_name = loc[0] if loc else None
    messages = _FIELD_MESSAGES.get(field_name)
    if messages is None:
        return ConfigurationError(first.get("msg", "Invalid configuration."))

    out_of_range, not_a_number = messages
    message = not_a_number if first.get("type") in _NUMBER_PARSE_ERRORS else out_of_range
    return ConfigurationError(message, argument=_OPTION_NAMES.get(field_name))


def parse_arguments(
    argv: Optional[Sequence[str]] = None,
    settings: Optional[AnalyzerSettings] = None,
) -> ConfigResult:
    """
    Validate command-line arguments into an AnalysisConfig.

    User errors never raise: they are returned as ConfigResult.error so the
    caller can report them and skip the analysis. Options must be spelled in
    full; prefixes such as -to are unknown arguments.

    -h/--help is not an error: argparse prints usage and raises SystemExit(0).

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        settings: Process settings supplying defaults (defaults to get_settings())

    Returns:
        ConfigResult holding either a valid config or a ConfigurationError
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = settings or get_settings()
    except ConfigurationError as exc:
        return ConfigResult(error=exc)

    unknown_option = _first_unknown_option(argv)
    if unknown_option is not None:
        return ConfigResult(
            error=ConfigurationError(f"Unknown argument: {unknown_option}", argument=unknown_option)
        )

    try:
        parser = build_argument_parser(settings)
        args, unknown = parser.parse_known_args(argv)
    except ConfigurationError as exc:
        return ConfigResult(error=exc)

    if unknown:
        return ConfigResult(
            error=ConfigurationError(f"Unknown argument: {unknown[0]}", argument=unknown[0])
        )

    for dest, message in _MISSING_VALUE_MESSAGES.items():
        if getattr(args, dest) is _MISSING:
            return ConfigResult(error=ConfigurationError(message, argument=_OPTION_NAMES[dest]))

    if args.file_path is None:
        return ConfigResult(
            error=ConfigurationError(_MISSING_VALUE_MESSAGES["file_path"], argument="-file")
        )

    try:
        config = AnalysisConfig(
            file_path=args.file_path,
            top=_to_integer(args.top) if args.top is not None else settings.default_top,
            phrase_size=(
                _to_integer(args.phrase_size) if args.phrase_size is not None else settings.default_phrase_size
            ),
            output_json=args.output_json,
            collapse_terminators=args.collapse_terminators or settings.collapse_terminators,
            verbose=args.verbose or args.extra_verbose,
            extra_verbose=args.extra_verbose,
        )
    except ValidationError as exc:
        return ConfigResult(error=_error_from_validation(exc))

    logger.debug(
        f"Parsed configuration: file={config.file_path} top={config.top} "
        f"phrase_size={config.phrase_size}"
    )
    return ConfigResult(config=config)
