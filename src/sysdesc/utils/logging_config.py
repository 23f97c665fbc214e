"""Logging configuration for sysdesc.

Provides configurable logging with:
- File-based logging with rotation
- Console output
- Performance timing decorator and context manager

Environment Variables:
    SYSDESC_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    SYSDESC_LOG_FILE: Path to log file (default: ~/.sysdesc/sysdesc.log)
    SYSDESC_LOG_MAX_SIZE: Max log file size in MB (default: 10)
    SYSDESC_LOG_BACKUPS: Number of backup files to keep (default: 5)

Usage:
    from sysdesc.utils.logging_config import setup_logging, timed

    setup_logging()  # Call once at startup

    @timed("compare")
    def compare(scope_a, scope_b):
        ...

    with timed_section("copy_files", scope="unmanaged_files"):
        ...
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Any, Optional

# Performance logger - separate from main logger for easy filtering
perf_logger = logging.getLogger("sysdesc.perf")


def get_log_level() -> int:
    """Get log level from environment."""
    level_str = os.environ.get("SYSDESC_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_str, logging.INFO)


def get_log_file() -> Path:
    """Get log file path from environment."""
    default_path = Path.home() / ".sysdesc" / "sysdesc.log"
    path_str = os.environ.get("SYSDESC_LOG_FILE", str(default_path))
    return Path(path_str)


def setup_logging(level: Optional[int] = None, log_to_file: bool = True) -> None:
    """Configure logging for the application.

    Sets up:
    - Console handler (INFO+ by default, respects SYSDESC_LOG_LEVEL)
    - File handler with rotation (DEBUG level - captures everything)
    - Performance log file for timing metrics

    Args:
        level: Console level, overrides SYSDESC_LOG_LEVEL
        log_to_file: Disable to only log to the console
    """
    log_level = level if level is not None else get_log_level()

    main_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | %(name)-25s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(main_format)

    root_logger = logging.getLogger("sysdesc")
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    perf_logger.setLevel(logging.DEBUG)
    perf_logger.handlers.clear()

    if not log_to_file:
        root_logger.debug(f"Logging initialized: level={logging.getLevelName(log_level)}")
        return

    log_file = get_log_file()
    max_size_mb = int(os.environ.get("SYSDESC_LOG_MAX_SIZE", "10"))
    backup_count = int(os.environ.get("SYSDESC_LOG_BACKUPS", "5"))

    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(main_format)
    root_logger.addHandler(file_handler)

    # Performance messages go to their own file; sysdesc.perf still
    # propagates to the main handlers
    perf_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | PERF | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    perf_log_file = log_file.parent / "sysdesc-perf.log"
    perf_handler = RotatingFileHandler(
        perf_log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    perf_handler.setLevel(logging.DEBUG)
    perf_handler.setFormatter(perf_format)
    perf_logger.addHandler(perf_handler)

    root_logger.debug(f"Logging initialized: level={logging.getLevelName(log_level)}, file={log_file}")


def timed(operation: str):
    """Decorator to log execution time of a function.

    Args:
        operation: Name of the operation (e.g., "compare", "export")

    Usage:
        @timed("export")
        def export(self, description, target_dir):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                elapsed = (time.perf_counter() - start) * 1000
                perf_logger.debug(f"{operation:20s} | {elapsed:8.2f}ms | OK")
                return result
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                perf_logger.warning(f"{operation:20s} | {elapsed:8.2f}ms | FAIL: {e}")
                raise

        return wrapper

    return decorator


@contextmanager
def timed_section(operation: str, **extra):
    """Context manager for timing code sections.

    Args:
        operation: Name of the operation
        **extra: Additional context to log
    """
    start = time.perf_counter()
    extra_str = " | ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""

    try:
        yield
        elapsed = (time.perf_counter() - start) * 1000
        msg = f"{operation:20s} | {elapsed:8.2f}ms | OK"
        if extra_str:
            msg += f" | {extra_str}"
        perf_logger.debug(msg)
    except Exception as e:
        elapsed = (time.perf_counter() - start) * 1000
        msg = f"{operation:20s} | {elapsed:8.2f}ms | FAIL: {e}"
        if extra_str:
            msg += f" | {extra_str}"
        perf_logger.warning(msg)
        raise
