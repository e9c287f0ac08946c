"""
Centralized logging configuration for the camera tween application.

Uses rotating file handler with logs stored in logs/ directory.
Includes colored console output for debug mode.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


_VERBOSE: bool = False
_PERF_METRICS_ENABLED: bool = False
# Base directory for logs. Defaults to the project root; setup_logging()
# may redirect it so get_log_dir() always points at the active location.
_BASE_DIR: Path = Path(__file__).parent.parent.parent

_env_perf = os.getenv("CAMTWEEN_PERF_METRICS")
if _env_perf is not None:
    if str(_env_perf).strip().lower() in ("1", "true", "on", "yes"):
        _PERF_METRICS_ENABLED = True

LOG_FORMAT = '%(asctime)s - %(name)-30s - %(levelname)-8s - %(message)s'
LOG_FILE_NAME = "camera_tween.log"


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',       # Cyan
        'INFO': '\033[32m',        # Green
        'WARNING': '\033[33m',     # Yellow
        'ERROR': '\033[31m',       # Red
        'CRITICAL': '\033[35m',    # Magenta
    }
    TICK_COLOR = '\033[38;5;135m'   # Purple for per-tick write traces
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record):
        original_levelname = record.levelname

        color = None
        if '[TICK]' in str(record.msg):
            color = self.TICK_COLOR
        elif record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]

        if color is None:
            return super().format(record)

        record.levelname = f"{self.BOLD}{color}{record.levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = original_levelname
        return f"{color}{message}{self.RESET}"


class SuppressingStreamHandler(logging.StreamHandler):
    """Stream handler that suppresses consecutive duplicate sources.

    Per-tick DEBUG lines from the same logger/level are collapsed into a
    single summary line like "[N Suppressed: CHECK LOG]" while file logs
    remain unaffected. WARNING and above always pass through.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last_name: Optional[str] = None
        self._last_level: Optional[int] = None
        self._suppress_count: int = 0
        self._last_record: Optional[logging.LogRecord] = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emit_with_suppression(record)
        except Exception:
            self.handleError(record)

    def _emit_with_suppression(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self._flush_summary()
            super().emit(record)
            self._last_name = None
            self._last_level = None
            return

        if record.name == self._last_name and record.levelno == self._last_level:
            self._suppress_count += 1
            self._last_record = record
            return

        self._flush_summary()
        super().emit(record)
        self._last_name = record.name
        self._last_level = record.levelno
        self._last_record = record

    def _flush_summary(self) -> None:
        if self._suppress_count <= 0 or self._last_record is None:
            self._suppress_count = 0
            return

        last = self._last_record
        summary = logging.LogRecord(
            last.name,
            last.levelno,
            last.pathname,
            last.lineno,
            f"[{self._suppress_count} Suppressed: CHECK LOG]",
            args=None,
            exc_info=None,
        )
        summary.created = last.created
        summary.msecs = last.msecs
        super().emit(summary)
        self._suppress_count = 0

    def close(self) -> None:
        try:
            self._flush_summary()
        finally:
            super().close()


def get_log_dir() -> Path:
    """Return the directory used for log files."""
    return _BASE_DIR / "logs"


def setup_logging(debug: bool = False, verbose: bool = False,
                  log_dir: Optional[Path] = None) -> Path:
    """
    Configure application logging with file rotation.

    Args:
        debug: If True, set log level to DEBUG and enable console output.
        verbose: Logs old and new values on setting changes. Implies debug.
            Per-tick write traces are controlled by the camera debug flag.
        log_dir: Optional override for the log directory (its parent
            becomes the base directory reported by get_log_dir()).

    Returns:
        Path of the active log file.
    """
    global _VERBOSE, _BASE_DIR

    debug_enabled = debug or verbose
    if log_dir is not None:
        _BASE_DIR = Path(log_dir).parent
        target_dir = Path(log_dir)
    else:
        target_dir = get_log_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    log_file = target_dir / LOG_FILE_NAME
    level = logging.DEBUG if debug_enabled else logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # File handler with rotation (1MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    if debug_enabled:
        console_handler = SuppressingStreamHandler(sys.stdout)
        if sys.stdout.isatty():
            console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        else:
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    _VERBOSE = bool(verbose)

    root_logger.info("=" * 60)
    root_logger.info(
        "Camera tween logging initialized (debug=%s, verbose=%s)",
        debug_enabled,
        _VERBOSE,
    )
    root_logger.info("=" * 60)
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def is_verbose_logging() -> bool:
    """Return True when verbose debug logging is enabled globally."""

    return _VERBOSE


def is_perf_metrics_enabled() -> bool:
    """Return True when PERF metrics are enabled globally."""

    return _PERF_METRICS_ENABLED
