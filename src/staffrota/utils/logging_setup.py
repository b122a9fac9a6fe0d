"""
staffrota: Logging Infrastructure
=================================
Console and rotating-file logging for the engine, plus a rotation tracer.

Levels:
    TRACE (5): Function entry/exit, per-candidate scores
    DEBUG (10): Pool sizes, picks
    INFO (20): Run progress, side tasks, shift exceptions
    WARNING (30): Rules bent by a pin or an exhausted pool
    ERROR (40): Station shortages
"""
import functools
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

ROOT_LOGGER = "staffrota"

# Custom TRACE level (below DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class ColoredFormatter(logging.Formatter):
    """Formatter with ANSI colors for console output."""

    COLORS = {
        TRACE: "\033[90m",             # Gray
        logging.DEBUG: "\033[36m",     # Cyan
        logging.INFO: "\033[32m",      # Green
        logging.WARNING: "\033[33m",   # Yellow
        logging.ERROR: "\033[31m",     # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt, datefmt)
        self.stream = stream if stream is not None else sys.stderr

    def format(self, record):
        color = self.COLORS.get(record.levelno, "")
        message = super().format(record)
        if color and self.stream.isatty():
            return f"{color}{message}{self.RESET}"
        return message


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = "logs/staffrota.log",
    console_level: Optional[str] = None,
    max_bytes: int = 2 * 1024 * 1024,  # 2 MB
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Minimum log level for file output
        log_file: Path to log file (None = no file logging)
        console_level: Console log level (defaults to level)
        max_bytes: Max size before rotation
        backup_count: Number of backup files to keep

    Returns:
        Root logger for the application
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)  # Handlers filter
    logger.handlers.clear()

    file_level = getattr(logging, level.upper(), logging.INFO)
    cons_level = getattr(logging, (console_level or level).upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(cons_level)
    console_handler.setFormatter(ColoredFormatter(
        "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=console_handler.stream,
    ))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized: console={cons_level}, file={file_level if log_file else 'disabled'}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, e.g. ``staffrota.solver``."""
    return logging.getLogger(name)


def log_function_call(func: Callable) -> Callable:
    """
    Decorator logging entry and exit of a function at TRACE level.

    Usage:
        @log_function_call
        def solve_day(day):
            ...
    """
    logger = logging.getLogger(f"{ROOT_LOGGER}.trace.{func.__module__}")

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__name__
        args_str = ", ".join(repr(a)[:50] for a in args[:3])
        kwargs_str = ", ".join(f"{k}={repr(v)[:30]}" for k, v in list(kwargs.items())[:3])
        call_str = f"{args_str}, {kwargs_str}" if kwargs_str else args_str
        logger.log(TRACE, f"→ {name}({call_str})")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {name} raised: {type(e).__name__}: {e}")
            raise
        logger.log(TRACE, f"← {name} returned: {repr(result)[:100]}")
        return result

    return wrapper


def log_rule_check(
    logger: logging.Logger,
    name: str,
    satisfied: bool,
    details: str = "",
    level: int = logging.DEBUG,
):
    """Log a rule check result; failures go out at WARNING."""
    status = "✓" if satisfied else "✗"
    msg = f"[{status}] {name}"
    if details:
        msg += f": {details}"
    if satisfied:
        logger.log(level, msg)
    else:
        logger.warning(msg)


class SolverLogger:
    """Indented phase/step logger for the rotation loop."""

    def __init__(self, name: str = "staffrota.solver"):
        self.logger = logging.getLogger(name)
        self.indent = 0

    def _prefix(self) -> str:
        return "  " * self.indent

    def phase(self, name: str):
        """Log start of a major phase."""
        self.logger.info(f"{'=' * 12} {name} {'=' * 12}")

    def step(self, description: str):
        self.logger.info(f"{self._prefix()}▸ {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{self._prefix()}  {key}: {value}")

    def check(self, name: str, satisfied: bool, details: str = ""):
        log_rule_check(self.logger, name, satisfied, details)

    def enter(self, context: str):
        """Enter a nested context."""
        self.logger.debug(f"{self._prefix()}┌─ {context}")
        self.indent += 1

    def exit(self, context: str = ""):
        """Exit a nested context."""
        self.indent = max(0, self.indent - 1)
        if context:
            self.logger.debug(f"{self._prefix()}└─ {context}")
