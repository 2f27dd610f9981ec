"""Logging utilities for pngmeta"""
import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None,
                  logger_name: str = "pngmeta") -> logging.Logger:
    """Setup logging for the application"""
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s | %(levelname)-5s | %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.debug(f"Logger initialized. level={level} file={log_file}")

    return logger
