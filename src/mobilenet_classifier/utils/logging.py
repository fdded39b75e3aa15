"""
Centralized logging system for MobileNet Classifier.

This module provides a unified logging interface that writes to the
console and, optionally, to a per-run log file.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any


__all__ = ["Logger", "get_logger", "setup_logging"]


class Logger:
    """
    Centralized logger backed by the standard ``logging`` module.

    Console output goes to stdout at the configured level; when a log
    directory is given, everything down to DEBUG is also written to a file.
    """

    def __init__(
        self,
        name: str = "mobilenet_classifier",
        log_level: str = "INFO",
        log_dir: str | Path | None = None,
        experiment_name: str | None = None,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files; no file logging when None
            experiment_name: Name for this run, used as log file name
        """
        self.name = name
        self.log_dir = Path(log_dir) if log_dir else None
        self.experiment_name = (
            experiment_name or f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        )
        self.log_file: Path | None = None

        self._setup_console_logger(log_level)

        if self.log_dir is not None:
            self._setup_file_logger()

    def _setup_console_logger(self, log_level: str) -> None:
        """Setup console logging."""
        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            raise ValueError(f"Invalid log level: {log_level}")

        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(logging.DEBUG)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        self.logger.addHandler(console_handler)

    def _setup_file_logger(self) -> None:
        """Setup file logging."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / f"{self.experiment_name}.log"

        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        self.logger.addHandler(file_handler)

        self.info(f"Logging to file: {self.log_file}")

    # Standard logging methods
    def debug(self, message: str) -> None:
        """Log debug message."""
        self.logger.debug(message)

    def info(self, message: str) -> None:
        """Log info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log error message."""
        self.logger.error(message)

    def critical(self, message: str) -> None:
        """Log critical message."""
        self.logger.critical(message)

    def log_metrics(self, metrics: dict[str, Any], step: int | None = None) -> None:
        """
        Log a dictionary of metrics on one line.

        Args:
            metrics: Dictionary of metric names and values
            step: Optional step number (image index, batch, etc.)
        """
        metrics_str = ", ".join(
            f"{k}: {v:.4f}" if isinstance(v, float) else f"{k}: {v}"
            for k, v in metrics.items()
        )
        step_str = f" (step {step})" if step is not None else ""
        self.info(f"Metrics{step_str}: {metrics_str}")

    def log_hyperparameters(self, hparams: dict[str, Any]) -> None:
        """
        Log configuration values, one per line.

        Args:
            hparams: Dictionary of parameter names and values
        """
        self.info("Hyperparameters:")
        for name, value in hparams.items():
            self.info(f"  {name}: {value}")

    def close(self) -> None:
        """Flush and detach all handlers."""
        self.info("Logger closed")
        for handler in self.logger.handlers[:]:
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)


# Global logger instance
_global_logger: Logger | None = None


def get_logger(name: str = "mobilenet_classifier", **kwargs) -> Logger:
    """
    Get the global logger instance.

    Args:
        name: Logger name
        **kwargs: Additional arguments for Logger initialization

    Returns:
        Logger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = Logger(name=name, **kwargs)

    return _global_logger


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    experiment_name: str | None = None,
) -> Logger:
    """
    Setup global logging configuration.

    Args:
        log_level: Logging level
        log_dir: Directory for log files
        experiment_name: Run name

    Returns:
        Configured logger instance
    """
    global _global_logger

    _global_logger = Logger(
        log_level=log_level,
        log_dir=log_dir,
        experiment_name=experiment_name,
    )

    return _global_logger
