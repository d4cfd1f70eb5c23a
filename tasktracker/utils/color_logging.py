"""Colorized logging setup.

Applies ANSI colors to log level names when writing to a TTY. Falls back to
plain formatting when:
  * Not a TTY
  * TERM=dumb
  * TASKTRACKER_NO_COLOR is set (any non-empty value)

Usage:
    from tasktracker.utils.color_logging import enable_color_logging
    enable_color_logging()

Leading ``[tag]`` tokens in a message ([build], [refresh], [vault]) get their
own color. Safe to call multiple times (idempotent).
"""
from __future__ import annotations

import logging
import sys

from .env_adapter import get_str

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
FG_RED = "\x1b[31m"
FG_GREEN = "\x1b[32m"
FG_YELLOW = "\x1b[33m"
FG_BLUE = "\x1b[34m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_WHITE = "\x1b[37m"
BG_RED = "\x1b[41m"

_THEMES: dict[str, dict[str, str]] = {
    'default': {
        "DEBUG": DIM + FG_GREEN,
        "INFO": FG_GREEN,
        "WARNING": FG_YELLOW,
        "ERROR": FG_RED,
        "CRITICAL": BOLD + FG_RED + BG_RED,
    },
    'vivid': {
        "DEBUG": FG_CYAN,
        "INFO": FG_GREEN + BOLD,
        "WARNING": BOLD + FG_YELLOW,
        "ERROR": BOLD + FG_RED,
        "CRITICAL": BOLD + FG_WHITE + BG_RED,
    },
    'mono': {
        "DEBUG": '',
        "INFO": '',
        "WARNING": '',
        "ERROR": '',
        "CRITICAL": BOLD,
    },
}

_TAG_COLORS = {
    'build': FG_CYAN,
    'refresh': FG_MAGENTA,
    'vault': FG_BLUE,
}


class ColorFormatter(logging.Formatter):
    def __init__(self, fmt: str, datefmt: str | None = None, use_color: bool = True, theme: str = 'default'):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color
        self.theme = theme if theme in _THEMES else 'default'

    def _color_level(self, level: str) -> str:
        style = _THEMES[self.theme].get(level, '')
        if not style:
            return level
        return f"{style}{level}{RESET}"

    def _color_tags(self, message: str) -> str:
        parts = message.split(' ')
        for i, p in enumerate(parts):
            if not (p.startswith('[') and p.endswith(']') and len(p) > 2):
                break  # tags only lead the message
            color = _TAG_COLORS.get(p.strip('[]').lower())
            if color:
                parts[i] = f"{color}{p}{RESET}"
        return ' '.join(parts)

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        original_level = record.levelname
        record.levelname = self._color_level(original_level)
        try:
            out = super().format(record)
        finally:
            record.levelname = original_level
        msg = record.getMessage()
        colored_msg = self._color_tags(msg)
        if colored_msg != msg:
            out = out[::-1].replace(msg[::-1], colored_msg[::-1], 1)[::-1]
        return out


_DEF_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_enabled = False


def _ansi_supported() -> bool:
    if get_str('TASKTRACKER_NO_COLOR', ''):
        return False
    if get_str('TERM', '') == 'dumb':
        return False
    return sys.stdout.isatty() if hasattr(sys.stdout, 'isatty') else False


def _level_from_env() -> int:
    level_name = get_str("TASKTRACKER_LOG_LEVEL", "INFO").strip()
    if level_name.isdigit():
        return int(level_name)
    level = getattr(logging, level_name.upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def enable_color_logging(format: str = _DEF_FORMAT) -> None:
    global _enabled
    if _enabled:
        return
    root = logging.getLogger()
    use_color = _ansi_supported()
    theme = get_str('TASKTRACKER_LOG_COLOR_THEME', 'default').lower()
    if theme not in _THEMES:
        theme = 'default'
    if not root.handlers:
        logging.basicConfig(level=_level_from_env(), format=format)
    # Replace existing stream handlers' formatter; leave others unchanged
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler):
            h.setFormatter(ColorFormatter(format, use_color=use_color, theme=theme))
    _enabled = True


__all__ = ["enable_color_logging", "ColorFormatter"]
