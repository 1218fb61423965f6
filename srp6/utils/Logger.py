#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from colorama import init, Fore, Style
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from srp6.utils.ConfigLoader import ConfigLoader

init()


class DebugColorLevel(Enum):
    SUCCESS = Fore.GREEN + Style.BRIGHT
    INFO = Fore.BLUE + Style.BRIGHT
    WARNING = Fore.YELLOW + Style.BRIGHT
    ERROR = Fore.RED + Style.BRIGHT
    DEBUG = Fore.CYAN + Style.BRIGHT


class DebugLevel(IntEnum):
    NONE = 0x00
    SUCCESS = 0x01
    INFO = 0x02
    WARNING = 0x08
    ERROR = 0x10
    DEBUG = 0x20
    ALL = 0xff


class Logger:
    """Unified colored console logger + file logger."""

    # set by set_level(), wins over the configured console levels
    _console_mask = None

    @staticmethod
    def _settings() -> dict:
        return ConfigLoader.get_config().get('Logging', {})

    @staticmethod
    def _get_logging_mask(levels):
        level_map = {
            'None': DebugLevel.NONE,
            'Success': DebugLevel.SUCCESS,
            'Information': DebugLevel.INFO,
            'Warning': DebugLevel.WARNING,
            'Error': DebugLevel.ERROR,
            'Debug': DebugLevel.DEBUG,
            'All': DebugLevel.ALL
        }

        mask = DebugLevel.NONE
        for level in levels:
            level = level.strip()
            if level in level_map:
                mask |= level_map[level]

        return mask

    @staticmethod
    def _should_log(level: DebugLevel):
        if Logger._console_mask is not None:
            return (Logger._console_mask & level) != 0
        levels = Logger._settings().get('logging_levels', 'All').split(',')
        mask = Logger._get_logging_mask(levels)
        return (mask & level) != 0

    @staticmethod
    def _should_log_file(level: DebugLevel):
        levels = Logger._settings().get('logging_file_levels', 'None').split(',')
        mask = Logger._get_logging_mask(levels)
        return (mask & level) != 0

    @staticmethod
    def enabled(level: DebugLevel) -> bool:
        """True if a message of `level` would reach the console or the log file."""
        return Logger._should_log(level) or Logger._should_log_file(level)

    @staticmethod
    def _date():
        return datetime.now().strftime(Logger._settings().get('date_format', '[%H:%M:%S]'))

    @staticmethod
    def _colorize(label, color, msg):
        if label:
            return f"{color.value}{label}{Style.RESET_ALL}{Logger._date()} {msg}"
        return msg

    @staticmethod
    def set_level(levels: str):
        """
        Override the console levels, e.g. "ALL" or "Warning, Error".
        Passing None restores the configured levels.
        """
        if levels is None:
            Logger._console_mask = None
            return
        if levels.upper() == "ALL":
            Logger._console_mask = DebugLevel.ALL
            return
        Logger._console_mask = Logger._get_logging_mask(levels.split(','))

    @staticmethod
    def log_path() -> Path:
        settings = Logger._settings()
        return Path(settings.get('log_dir', 'logs')) / settings.get('log_file', 'srp6.log')

    @staticmethod
    def add_to_log(msg, level_tag):
        path = Logger.log_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        if level_tag:
            line = f"[{level_tag}] {Logger._date()} {msg}"
        else:
            line = msg

        with open(path, "a", encoding='utf-8', errors='replace') as log:
            log.write(line + "\n")

    @staticmethod
    def reset_log():
        path = Logger.log_path()
        if path.exists():
            open(path, "w").close()

    # ===================================================================
    # Console + File logging methods
    # ===================================================================

    @staticmethod
    def _emit(level: DebugLevel, color: DebugColorLevel, tag: str, msg):
        if Logger._should_log(level):
            print(Logger._colorize(f"[{tag}]", color, msg))
        if Logger._should_log_file(level):
            Logger.add_to_log(msg, tag)

    @staticmethod
    def debug(msg):
        Logger._emit(DebugLevel.DEBUG, DebugColorLevel.DEBUG, "DEBUG", msg)

    @staticmethod
    def info(msg):
        Logger._emit(DebugLevel.INFO, DebugColorLevel.INFO, "INFO", msg)

    @staticmethod
    def warning(msg):
        Logger._emit(DebugLevel.WARNING, DebugColorLevel.WARNING, "WARNING", msg)

    @staticmethod
    def error(msg):
        Logger._emit(DebugLevel.ERROR, DebugColorLevel.ERROR, "ERROR", msg)

    @staticmethod
    def success(msg):
        Logger._emit(DebugLevel.SUCCESS, DebugColorLevel.SUCCESS, "SUCCESS", msg)

    # ===================================================================
    # to_log = FILE ONLY
    # ===================================================================

    @staticmethod
    def to_log(msg):
        """Write ONLY to log file, never print to console."""
        if Logger._should_log_file(DebugLevel.INFO):
            Logger.add_to_log(msg, "")
