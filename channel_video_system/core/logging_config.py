"""
Logging configuration for the Channel Video System.

Console output is colored, the optional log file rotates, and the noisy
third-party loggers are turned down unless running at DEBUG.
"""

import logging
import logging.handlers
import os
import sys
import time
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class CatalogLogger:
    """Root logger setup for the catalog, API and CLI"""

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None, enable_console: bool = True):
        self.log_level = log_level.upper()
        self.log_file = log_file
        self.enable_console = enable_console

        self._setup_logging()

    def _setup_logging(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self.log_level, logging.INFO))
        root_logger.handlers.clear()

        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, self.log_level, logging.INFO))
            console_handler.setFormatter(ColoredFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
            root_logger.addHandler(console_handler)

        if self.log_file:
            try:
                log_dir = os.path.dirname(self.log_file)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)

                # 10MB per file, 5 backups
                file_handler = logging.handlers.RotatingFileHandler(self.log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"))
                root_logger.addHandler(file_handler)
            except OSError as e:
                print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

        self._setup_component_loggers()

        logging.getLogger(__name__).debug(f"Logging initialized - Level: {self.log_level}, File: {self.log_file}")

    def _setup_component_loggers(self) -> None:
        debug = self.log_level == "DEBUG"

        # Remote client logs every call at DEBUG
        logging.getLogger("channel_video_system.catalog").setLevel(logging.DEBUG if debug else logging.INFO)
        logging.getLogger("channel_video_system.api").setLevel(logging.DEBUG if debug else logging.INFO)

        logging.getLogger("uvicorn").setLevel(logging.INFO if debug else logging.WARNING)
        logging.getLogger("fastapi").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.DEBUG if debug else logging.WARNING)

    @staticmethod
    def setup_exception_logging():
        """Send uncaught exceptions to the log"""

        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return

            logging.getLogger("uncaught_exception").critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

        sys.excepthook = handle_exception


class PerformanceLogger:
    """Times publish and sync runs"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"performance.{name}")
        self.start_time: Optional[float] = None

    def start_timer(self, operation: str) -> None:
        self.start_time = time.monotonic()
        self.logger.debug(f"Started: {operation}")

    def end_timer(self, operation: str) -> float:
        if self.start_time is None:
            self.logger.warning(f"Timer not started for: {operation}")
            return 0.0

        duration = time.monotonic() - self.start_time
        self.logger.info(f"Completed: {operation} in {duration:.3f}s")
        self.start_time = None
        return duration


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> CatalogLogger:
    """Setup logging for the entire application"""
    logger_setup = CatalogLogger(log_level=log_level, log_file=log_file)
    CatalogLogger.setup_exception_logging()
    return logger_setup


def get_performance_logger(component_name: str) -> PerformanceLogger:
    """Get a performance logger for a component"""
    return PerformanceLogger(component_name)
