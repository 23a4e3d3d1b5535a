"""
Centralized logging for crosswalk.

`LoggerManager` hands out configured, per-name singleton loggers with a
colored console handler and an optional file handler (plain text or JSON via
`JsonLogFormatter`). Library modules call `LoggerManager.get_logger(__name__)`;
the CLI reconfigures levels and file output from settings.
"""

import os
import sys
import json
import logging
from typing import Optional

from colorlog import ColoredFormatter


LOG_DIR_ENV = "CROSSWALK_LOG_DIR"


class LoggerManager:
    """
    A factory class for creating and managing singleton `logging.Logger` instances.

    For any unique logger name (optionally suffixed with a `run_id`) the same
    logger instance is returned, so handlers are never attached twice.

    Key features of the configured loggers:
    - **Console Output**: always attached, colored through `colorlog`.
    - **File Output**: attached when a `log_file` is given, or when a log
      directory is configured (`log_dir` argument, `default_log_dir`, or the
      `CROSSWALK_LOG_DIR` environment variable). File output can be plain
      text or structured JSON.
    - **No Duplicate Propagation**: `propagate = False` so records are not
      handled again by ancestor loggers.
    """

    _loggers = {}
    default_log_dir: Optional[str] = None
    default_level: str = "INFO"

    @classmethod
    def get_logger(
        cls,
        name: str,
        log_file: Optional[str] = None,
        level: Optional[str] = None,
        use_json: bool = False,
        use_color: bool = True,
        log_dir: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> logging.Logger:
        """
        Retrieve or create a logger configured for console and optional file output.

        Args:
            name (str): A unique identifier (typically the module name).
            log_file (Optional[str]): Full path to a log file.
            level (Optional[str]): Logging level threshold ("DEBUG", "INFO", ...).
                Defaults to `LoggerManager.default_level`.
            use_json (bool): If True, format file logs as JSON.
            use_color (bool): If True, enable colored console output.
            log_dir (Optional[str]): Directory for `<name>.log` when no
                `log_file` is given.
            run_id (Optional[str]): Optional run identifier used to create
                per-run loggers.

        Returns:
            logging.Logger: A configured logger instance.
        """
        logger_key = f"{name}-{run_id}" if run_id else name
        if logger_key in cls._loggers:
            return cls._loggers[logger_key]

        level = (level or cls.default_level).upper()
        logger = logging.getLogger(logger_key)
        logger.setLevel(level)
        logger.propagate = False  # Prevent duplicate logs

        log_dir = log_dir or cls.default_log_dir or os.environ.get(LOG_DIR_ENV)
        if not log_file and log_dir:
            log_file = os.path.join(log_dir, f"{name}.log")

        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            logger.addHandler(cls._setup_file_handler(log_file, level, use_json))
        logger.addHandler(cls._setup_console_handler(level, use_color))

        cls._loggers[logger_key] = logger
        return logger

    @classmethod
    def configure(
        cls,
        level: str = "INFO",
        log_dir: Optional[str] = None,
        use_json: bool = False,
    ) -> None:
        """
        Apply process-wide defaults and update loggers created so far.

        Existing loggers get the new level; when `log_dir` is given, loggers
        without a file handler gain one.
        """
        cls.default_level = level.upper()
        cls.default_log_dir = log_dir
        for name, logger in cls._loggers.items():
            logger.setLevel(cls.default_level)
            has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
            if log_dir and not has_file:
                os.makedirs(log_dir, exist_ok=True)
                logger.addHandler(
                    cls._setup_file_handler(
                        os.path.join(log_dir, f"{name}.log"), cls.default_level, use_json
                    )
                )
            for handler in logger.handlers:
                handler.setLevel(cls.default_level)

    @staticmethod
    def _setup_file_handler(
        filepath: str, level: str, use_json: bool
    ) -> logging.Handler:
        """
        Creates and configures a file handler for logging.

        Args:
            filepath (str): Path to the log file.
            level (str): Logging level threshold.
            use_json (bool): Whether to use JSON formatting.

        Returns:
            logging.Handler: A file handler with formatter attached.
        """
        handler = logging.FileHandler(filepath, encoding="utf-8")
        handler.setLevel(level.upper())
        formatter = LoggerManager._get_formatter(use_json=use_json, color=False)
        handler.setFormatter(formatter)
        return handler

    @staticmethod
    def _setup_console_handler(level: str, use_color: bool) -> logging.Handler:
        """
        Creates and configures a console handler.

        Console output goes to stderr so that CLI commands can stream
        converted records on stdout.
        """
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level.upper())
        formatter = LoggerManager._get_formatter(use_json=False, color=use_color)
        handler.setFormatter(formatter)
        return handler

    @staticmethod
    def _get_formatter(
        use_json: bool = False, color: bool = False
    ) -> logging.Formatter:
        """
        Returns a log formatter object based on configuration.

        Args:
            use_json (bool): If True, returns a JSON formatter.
            color (bool): If True, returns a colored formatter.

        Returns:
            logging.Formatter: A formatter instance.
        """
        if use_json:
            return JsonLogFormatter()

        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        datefmt = "%Y-%m-%d %H:%M:%S"

        if color:
            return ColoredFormatter(
                fmt="%(log_color)s" + fmt,
                datefmt=datefmt,
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'bold_red',
                },
            )
        return logging.Formatter(fmt, datefmt)


class JsonLogFormatter(logging.Formatter):
    """
    A custom formatter that outputs logs in JSON format.

    Example Output:
        {
            "timestamp": "2026-05-07 13:12:01",
            "level": "WARNING",
            "logger": "crosswalk.convert.converter",
            "message": "field conversion failed",
            "field": "isbn"
        }

    Supports extra data via `extra={"extra_data": {...}}` in logging calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, "%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra_data"):
            log_record.update(record.extra_data)
        return json.dumps(log_record, default=str)
