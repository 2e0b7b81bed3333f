"""
Phase Logging for the Text Analyzer
===================================

Colored, phase-tracked logging for the analysis pipeline. All output goes
through the standard logging module to stderr so stdout only carries the report.
IMPORTANT: No emojis in console output (Windows encoding issues).
"""

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Optional, Union

from colorama import Fore, Style, just_fix_windows_console

# Enable ANSI colors on Windows consoles
just_fix_windows_console()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# Phase definitions
class Phase:
    """Phase constants for the analysis pipeline"""
    TOKENIZE = "TOKENIZATION"
    SENTENCES = "SENTENCE_SPLIT"
    PHRASES = "PHRASE_FREQUENCY"
    RANK = "TOP_K_SELECTION"
    REPORT = "REPORT"

# Phase colors
PHASE_COLORS = {
    Phase.TOKENIZE: Fore.CYAN,
    Phase.SENTENCES: Fore.BLUE,
    Phase.PHRASES: Fore.YELLOW,
    Phase.RANK: Fore.MAGENTA,
    Phase.REPORT: Fore.GREEN + Style.BRIGHT,
}

# Phase icons (text-based, no emojis for Windows)
PHASE_ICONS = {
    Phase.TOKENIZE: "[TOK]",
    Phase.SENTENCES: "[SEN]",
    Phase.PHRASES: "[PHR]",
    Phase.RANK: "[RNK]",
    Phase.REPORT: "[OUT]",
}


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Route log records to stderr with the shared format and apply the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # basicConfig is a no-op once handlers exist; the level still applies
    logging.getLogger().setLevel(level)


class TimingTracker:
    """Track timing for phases and operations"""

    def __init__(self):
        self._timings: Dict[str, float] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, key: str):
        """Start timing for a key"""
        self._start_times[key] = time.perf_counter()

    def end(self, key: str) -> float:
        """End timing and return elapsed seconds"""
        if key not in self._start_times:
            return 0.0
        elapsed = time.perf_counter() - self._start_times.pop(key)
        self._timings[key] = elapsed
        return elapsed

    def get_all(self) -> Dict[str, float]:
        """Get all recorded timings"""
        return self._timings.copy()


class PhaseLogger:
    """
    Logger with phase tracking and visual formatting

    Usage:
        phase_logger = PhaseLogger(run_id="notes.txt", verbose=True)

        with phase_logger.phase(Phase.TOKENIZE):
            words = tokenize(content)
            phase_logger.log_stage_result("words", len(words))
    """

    def __init__(
        self,
        run_id: str,
        verbose: bool = False,
        extra_verbose: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        self.run_id = run_id
        self.verbose = verbose or extra_verbose
        self.extra_verbose = extra_verbose
        self.logger = logger or logging.getLogger(__name__)
        self.timing_tracker = TimingTracker()
        self._current_phase: Optional[str] = None
        self._phase_stack = []

    @property
    def current_phase(self) -> Optional[str]:
        return self._current_phase

    @contextmanager
    def phase(self, phase_name: str, sub_label: Optional[str] = None):
        """
        Context manager for phase tracking with automatic timing

        Example:
            with phase_logger.phase(Phase.RANK, sub_label="top 10"):
                ranked = get_top_phrases(counts, 10)
        """
        self._enter_phase(phase_name, sub_label)
        try:
            yield self
        finally:
            self._exit_phase(phase_name)

    def _timing_key(self, phase_name: str) -> str:
        return f"phase_{phase_name}_{len(self._phase_stack)}"

    def _enter_phase(self, phase_name: str, sub_label: Optional[str] = None):
        self._phase_stack.append(self._current_phase)
        self._current_phase = phase_name
        self.timing_tracker.start(self._timing_key(phase_name))

        if not self.verbose:
            return
        color = PHASE_COLORS.get(phase_name, Fore.WHITE)
        icon = PHASE_ICONS.get(phase_name, "[???]")
        timestamp = datetime.now().strftime("%H:%M:%S")
        sub_str = f" - {sub_label}" if sub_label else ""
        self.logger.info(
            f"{color}{icon} {phase_name} [{self.run_id}]{sub_str} [{timestamp}]{Style.RESET_ALL}"
        )

    def _exit_phase(self, phase_name: str):
        elapsed = self.timing_tracker.end(self._timing_key(phase_name))
        self._current_phase = self._phase_stack.pop() if self._phase_stack else None

        if not self.verbose:
            return
        color = PHASE_COLORS.get(phase_name, Fore.WHITE)
        icon = PHASE_ICONS.get(phase_name, "[???]")
        self.logger.info(
            f"{color}{icon} {phase_name} COMPLETED (Elapsed: {elapsed * 1000:.2f}ms){Style.RESET_ALL}"
        )

    def info(self, message: str):
        """Log info message with current phase context"""
        if self._current_phase:
            color = PHASE_COLORS.get(self._current_phase, Fore.WHITE)
            icon = PHASE_ICONS.get(self._current_phase, "[???]")
            self.logger.info(f"{color}{icon}{Style.RESET_ALL} {message}")
        else:
            self.logger.info(message)

    def debug(self, message: str):
        """Log debug message (only if extra verbose)"""
        if self.extra_verbose:
            self.logger.debug(f"{Fore.WHITE}{Style.DIM}{message}{Style.RESET_ALL}")

    def warning(self, message: str):
        self.logger.warning(f"{Fore.YELLOW}[WARN] {message}{Style.RESET_ALL}")

    def log_stage_result(self, label: str, value: Any):
        """Log a single metric produced by the current phase (only if verbose)"""
        if self.verbose:
            self.info(f"{label}: {value}")

    def log_content_preview(self, content: str, max_chars: int = 200):
        """Log the start of the analyzed content (only if extra_verbose)"""
        if not self.extra_verbose:
            return

        preview = content[:max_chars]
        if len(content) > max_chars:
            preview += f"\n... ({len(content) - max_chars} more characters)"

        self.logger.debug(f"{Fore.CYAN}[CONTENT PREVIEW]{Style.RESET_ALL}")
        self.logger.debug(preview)

    def log_timing_summary(self):
        """Log timing summary for all phases (only if extra_verbose)"""
        if not self.extra_verbose:
            return

        timings = self.timing_tracker.get_all()
        if not timings:
            return

        separator = "=" * 60
        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}{separator}{Style.RESET_ALL}")
        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}TIMING SUMMARY [{self.run_id}]{Style.RESET_ALL}")
        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}{separator}{Style.RESET_ALL}")

        total_time = 0.0
        for key, elapsed in sorted(timings.items()):
            # Extract phase name from key
            phase_name = key.replace("phase_", "", 1).rsplit("_", 1)[0]
            color = PHASE_COLORS.get(phase_name, Fore.WHITE)
            self.logger.info(f"{color}{phase_name:30s} {elapsed * 1000:10.2f}ms{Style.RESET_ALL}")
            total_time += elapsed

        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}{separator}{Style.RESET_ALL}")
        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}TOTAL TIME: {total_time * 1000:.2f}ms{Style.RESET_ALL}")


# Convenience functions
def create_phase_logger(
    run_id: str,
    verbose: bool = False,
    extra_verbose: bool = False
) -> PhaseLogger:
    """Create a new PhaseLogger instance"""
    return PhaseLogger(
        run_id=run_id,
        verbose=verbose,
        extra_verbose=extra_verbose
    )
