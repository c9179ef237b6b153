"""
Logging configuration for the Taskboard API.
Colorized console output when attached to a terminal, plain text otherwise,
plus a decorator that traces service operations.
"""
import inspect
import logging
import sys
import time
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Optional


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for terminal formatting."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    WHITE = "\033[37m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_CYAN = "\033[96m"


class TaskboardFormatter(logging.Formatter):
    """
    Formatter producing `time | LEVEL | module | message` lines.
    """

    LEVEL_FORMATS = {
        logging.DEBUG: (Colors.DIM, "DEBUG"),
        logging.INFO: (Colors.BRIGHT_CYAN, "INFO "),
        logging.WARNING: (Colors.BRIGHT_YELLOW, "WARN "),
        logging.ERROR: (Colors.BRIGHT_RED, "ERROR"),
        logging.CRITICAL: (Colors.BOLD + Colors.BRIGHT_RED, "CRIT "),
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        color, level_text = self.LEVEL_FORMATS.get(
            record.levelno,
            (Colors.WHITE, record.levelname[:5])
        )

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        module = record.name.split(".")[-1] if record.name else "root"
        msg = record.getMessage()

        if self.use_colors:
            level_str = f"{color}{level_text}{Colors.RESET}"
            time_str = f"{Colors.DIM}{timestamp}{Colors.RESET}"
            module_str = f"{Colors.BRIGHT_BLUE}{module:12}{Colors.RESET}"
            formatted = f"{time_str} │ {level_str} │ {module_str} │ {msg}"
        else:
            formatted = f"{timestamp} | {level_text} | {module:12} | {msg}"

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_colors: bool = True
) -> None:
    """
    Configure logging for the API process.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        use_colors: Whether to use ANSI colors in console output
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(TaskboardFormatter(use_colors=use_colors))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(TaskboardFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def logged_operation(operation_name: Optional[str] = None):
    """
    Decorator tracing a service operation: entry and duration at DEBUG,
    failures at WARNING together with the calling actor (the `actor`
    argument, when the operation takes one). Exceptions are re-raised
    untouched.

    Usage:
        @logged_operation("assign_task")
        def assign_task(db, actor, task_id, assignee_id):
            ...
    """
    def decorator(func: Callable) -> Callable:
        name = operation_name or func.__name__
        op_logger = logging.getLogger(func.__module__)
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            op_logger.debug(f"▶ {name}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                op_logger.warning(
                    f"✗ {name} rejected after {duration_ms:.0f}ms "
                    f"(actor={_actor_id(signature, args, kwargs)}): "
                    f"{type(e).__name__}: {getattr(e, 'errors', None) or e}"
                )
                raise
            duration_ms = (time.perf_counter() - start_time) * 1000
            op_logger.debug(f"◀ {name} completed in {duration_ms:.0f}ms")
            return result

        return wrapper
    return decorator


def _actor_id(signature: inspect.Signature, args: tuple, kwargs: dict) -> Any:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return None
    actor = bound.arguments.get("actor")
    return getattr(actor, "id", None)
