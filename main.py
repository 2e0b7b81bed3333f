"""
Command-line entrypoint for the Text Analyzer.

Prints word and sentence counts for a text file followed by its most
frequent phrases:

    text-analyzer -file notes.txt -top 5 -phraseSize 3
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from config import AnalysisConfig, AnalyzerSettings, ConfigurationError, get_settings, parse_arguments
from logging_utils import Phase, configure_logging, create_phase_logger
from text_file_utils import FileReadError, read_file_content
from tools.phrase_frequency_utils import analyze_content
from tools.report_formatter import format_json_report, format_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FILE_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _resolve_log_level(config: AnalysisConfig, settings: AnalyzerSettings) -> int:
    if config.extra_verbose:
        return logging.DEBUG
    if config.verbose:
        return logging.INFO
    return logging.getLevelName(settings.log_level)


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        print(f"Configuration Error: {exc.message}")
        return EXIT_CONFIG_ERROR

    result = parse_arguments(argv, settings=settings)
    if not result.is_valid:
        print(f"Configuration Error: {result.error.message}")
        return EXIT_CONFIG_ERROR

    config = result.config
    configure_logging(_resolve_log_level(config, settings))
    phase_logger = create_phase_logger(
        run_id=Path(config.file_path).name,
        verbose=config.verbose,
        extra_verbose=config.extra_verbose,
    )

    try:
        content = read_file_content(
            config.file_path,
            encoding=settings.encoding,
            max_bytes=settings.max_content_bytes,
        )
    except FileReadError as exc:
        logger.debug(f"Skipping analysis: {exc}")
        print("Error: Unable to read the file content.")
        return EXIT_FILE_ERROR

    analysis = analyze_content(
        content,
        config.phrase_size,
        config.top,
        collapse_terminators=config.collapse_terminators,
        phase_logger=phase_logger,
    )

    with phase_logger.phase(Phase.REPORT):
        report = format_json_report(analysis) if config.output_json else format_report(analysis)
    print(report)

    phase_logger.log_timing_summary()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
