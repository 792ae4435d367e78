"""
File logging setup for the structured logging system.

Configures stdlib handlers that structlog renders into: a console stream,
a rotating main log and an errors-only aggregator per environment.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

_SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_max_size(value: str | int) -> int:
    """Convert a size label such as "100MB" into bytes."""
    if isinstance(value, int):
        return value
    text = value.strip().upper()
    for suffix, multiplier in _SIZE_UNITS.items():
        if text.endswith(suffix):
            return int(float(text[: -len(suffix)]) * multiplier)
    return int(text)


def resolve_log_base(log_base: str) -> Path:
    """Resolve the log base directory, relative paths from the working directory."""
    path = Path(log_base)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def setup_file_logging(environment: str, log_config: dict[str, Any], log_level: str) -> Path:
    """
    Attach console and rotating file handlers to the root logger.

    Args:
        environment: Logging environment, used as the log subdirectory
        log_config: Logging configuration dictionary
        log_level: Root log level

    Returns:
        Directory the log files are written to
    """
    env_log_dir = resolve_log_base(log_config.get("log_base", "logs")) / environment
    env_log_dir.mkdir(parents=True, exist_ok=True)

    rotation = log_config.get("rotation", {})
    max_bytes = parse_max_size(rotation.get("max_size", "100MB"))
    backup_count = rotation.get("backup_count", 5)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(log_level)

    formatter = logging.Formatter("%(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    main_handler = RotatingFileHandler(
        env_log_dir / "apothecary.log", maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    main_handler.setFormatter(formatter)
    root_logger.addHandler(main_handler)

    errors_handler = RotatingFileHandler(
        env_log_dir / "errors.log", maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    errors_handler.setLevel(logging.ERROR)
    errors_handler.setFormatter(formatter)
    root_logger.addHandler(errors_handler)

    return env_log_dir
