"""Logging utilities module."""

import logging
import re
import sys
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import ClassVar

import colorama
from colorama import Fore, Style

__all__ = ["Logger", "MarkupFormatter", "get_logger"]

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class MarkupFormatter(logging.Formatter):
    """Formatter that renders the ``$$'...'$$`` and ``$${...}$$`` log markers.

    Log messages may wrap values in ``$$'value'$$`` (highlighted) or
    ``$${key: value}$$`` (dimmed) markers. With ``colored=True`` the markers are
    replaced by ANSI colors, otherwise they are stripped and only the content is
    kept, which is what ends up in log files.
    """

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "SUCCESS": Fore.GREEN + Style.BRIGHT,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }
    QUOTED_PATTERN = re.compile(r"\$\$'((?:[^']|'(?!\$\$))*)'\$\$")
    BRACED_PATTERN = re.compile(r"\$\$\{(.*?)\}\$\$")

    def __init__(self, fmt: str, colored: bool = False) -> None:
        """Initialize the formatter.

        Args:
            fmt (str): Log record format string
            colored (bool): Whether to emit ANSI color codes
        """
        super().__init__(fmt, datefmt=DATE_FORMAT)
        self.colored = colored

    def render(self, msg: str) -> str:
        """Replace the markers in a message.

        Args:
            msg (str): Raw log message

        Returns:
            str: Message with markers colored or stripped
        """
        if self.colored:
            msg = self.QUOTED_PATTERN.sub(
                f"{Fore.LIGHTBLUE_EX}'\\1'{Style.RESET_ALL}", msg
            )
            return self.BRACED_PATTERN.sub(f"{Style.DIM}{{\\1}}{Style.RESET_ALL}", msg)
        msg = self.QUOTED_PATTERN.sub("'\\1'", msg)
        return self.BRACED_PATTERN.sub("{\\1}", msg)

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record, leaving the record itself untouched.

        Args:
            record (logging.LogRecord): Log record to format

        Returns:
            str: Formatted log line
        """
        orig_msg, orig_levelname = record.msg, record.levelname
        if isinstance(record.msg, str):
            record.msg = self.render(record.msg)
        if self.colored:
            record.levelname = (
                f"{self.LEVEL_COLORS.get(record.levelname, '')}{record.levelname}"
                f"{Style.RESET_ALL}"
            )
        try:
            return super().format(record)
        finally:
            record.msg, record.levelname = orig_msg, orig_levelname


class Logger(logging.Logger):
    """Logger with a SUCCESS level and automatic class name prefixes."""

    SUCCESS = logging.INFO + 5

    def __init__(self, name, level=logging.NOTSET):
        """Initialize the logger and register the SUCCESS level name."""
        super().__init__(name, level)
        if logging.getLevelName(self.SUCCESS) != "SUCCESS":
            logging.addLevelName(self.SUCCESS, "SUCCESS")

    def _log(
        self,
        level,
        msg,
        args,
        exc_info=None,
        extra=None,
        stack_info=False,
        stacklevel=1,
    ):
        """Prefix messages logged from inside a method with the owning class name."""
        try:
            # Frame 0 is _log, frame 1 the level method, frame 2 the caller
            frame = sys._getframe(2)
            owner = frame.f_locals.get("self")
            if owner is not None and not isinstance(owner, logging.Logger):
                class_name = owner.__class__.__name__
            elif isinstance(frame.f_locals.get("cls"), type):
                class_name = frame.f_locals["cls"].__name__
            else:
                class_name = None

            if class_name and isinstance(msg, str):
                msg = f"{class_name}: {msg}"
        except (ValueError, KeyError, AttributeError):
            pass

        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )

    def success(self, msg, *args, **kwargs):
        """Log a message with SUCCESS level."""
        self.log(self.SUCCESS, msg, *args, **kwargs)

    def setup(self, log_level: str, log_dir: str | None = None) -> None:
        """Attach console and (optionally) rotating file handlers.

        Args:
            log_level (str): Logging level ('DEBUG', 'INFO', 'SUCCESS', etc.)
            log_dir (str | None, optional): Directory where log files will be stored.
        """
        from trailerbridge.utils.terminal import supports_color

        colored = supports_color()
        if colored:
            if sys.platform == "win32":
                colorama.just_fix_windows_console()
            else:
                colorama.init()

        level = self.SUCCESS if log_level == "SUCCESS" else getattr(logging, log_level)
        self.setLevel(level)

        for handler in self.handlers[:]:
            self.removeHandler(handler)

        log_format = (
            "%(asctime)s - %(name)s - %(levelname)s\t%(filename)s:%(lineno)d\t"
            "%(message)s"
            if level <= logging.DEBUG
            else "%(asctime)s - %(name)s - %(levelname)s\t%(message)s"
        )

        if log_dir is not None:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_path / f"{self.name}.{log_level}.log",
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
            )
            file_handler.setFormatter(MarkupFormatter(log_format))
            file_handler.setLevel(level)
            self.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(MarkupFormatter(log_format, colored=colored))
        console_handler.setLevel(level)
        self.addHandler(console_handler)


logging.setLoggerClass(Logger)


def _get_logger(
    log_name: str, log_level: str = "INFO", log_dir: str | Path | None = None
) -> Logger:
    """Get a configured instance of Logger.

    Args:
        log_name (str): Name of the logger and base name for log file.
        log_level (str): Logging level. Defaults to "INFO".
        log_dir (str | Path | None): Directory where log files will be stored.

    Returns:
        Logger: Configured logger instance
    """
    logger = logging.getLogger(log_name)
    if not isinstance(logger, Logger):
        logger = Logger(log_name)
    logger.setup(log_level, str(log_dir) if log_dir is not None else None)
    return logger


@lru_cache(maxsize=1)
def get_logger() -> Logger:
    """Get the main application logger.

    Returns:
        Logger: Main application logger instance
    """
    from trailerbridge.config.settings import get_config

    config = get_config()

    return _get_logger(
        log_name="TrailerBridge",
        log_level=str(config.log_level),
        log_dir=config.data_path / "logs",
    )
