"""로거 설정 모듈.

Logger configuration.
Provides a single ``configure_logging`` entry point called at application
startup and ``get_logger`` for module-level loggers.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure Python logging with ISO timestamp and structured format.

    Args:
        level: 루트 로거 레벨 (Root logger level name, e.g. "INFO")
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get configured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)
