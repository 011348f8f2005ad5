import enum
import logging
import logging.config
import os
import sys
from typing import List, Optional, Tuple

DEFAULT_LOG_FORMAT = "[%(levelname)s]%(asctime)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S%z"

STDOUT_PATHS = ("-", "/dev/stdout")

# between INFO and WARNING, used for "resource created / already exists" lines
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class LoggingLevel(enum.Enum):
    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    SUCCESS = SUCCESS
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    NOTSET = logging.NOTSET


class ColoredFormatter(logging.Formatter):
    """Colors the whole line by level; only used for terminal handlers."""

    COLORS = {
        logging.DEBUG: "\033[37m",  # white
        logging.INFO: "\033[33m",  # yellow
        SUCCESS: "\033[32m",  # green
        logging.WARNING: "\033[36m",  # cyan
        logging.ERROR: "\033[31m",  # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if color is None:
            return message
        return f"{color}{message}{self.RESET}"


def setup_logger(
    log_paths: Tuple[str, ...] = ("/dev/stdout",),
    logging_config_file: Optional[str] = None,
    logging_level: str = LoggingLevel.INFO.name,
):
    if logging_config_file is not None:
        logging.config.fileConfig(logging_config_file, disable_existing_loggers=False)
        return

    if not log_paths:
        log_paths = ("/dev/stdout",)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(LoggingLevel[logging_level.upper()].value)

    for log_path in log_paths:
        if log_path in STDOUT_PATHS:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(ColoredFormatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        else:
            log_dir = os.path.dirname(os.path.abspath(log_path))
            os.makedirs(log_dir, exist_ok=True)
            handler = logging.FileHandler(log_path, mode="a")
            handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

        root.addHandler(handler)


def get_logger_info(logger: logging.Logger) -> Tuple[str, str, Tuple[str, ...]]:
    """Return (format, level name, log paths) of the given logger's handlers."""
    level = logging.getLevelName(logger.getEffectiveLevel())

    log_format = DEFAULT_LOG_FORMAT
    log_paths: List[str] = []
    for handler in logger.handlers:
        if handler.formatter is not None and handler.formatter._fmt is not None:
            log_format = handler.formatter._fmt

        if isinstance(handler, logging.FileHandler):
            log_paths.append(handler.baseFilename)
        elif isinstance(handler, logging.StreamHandler):
            log_paths.append("/dev/stdout")

    return log_format, level, tuple(log_paths)
