import io
import logging

from tasktracker.utils import color_logging
from tasktracker.utils.color_logging import RESET, ColorFormatter, enable_color_logging


def _record(msg, level=logging.WARNING):
    return logging.LogRecord('tasktracker.controller', level, __file__, 1, msg, None, None)


def test_plain_formatter_leaves_message_untouched():
    fmt = ColorFormatter('%(levelname)s %(message)s', use_color=False)
    assert fmt.format(_record('[build] Sprint 1: Folder not found')) == 'WARNING [build] Sprint 1: Folder not found'


def test_color_formatter_colors_level_and_leading_tags():
    fmt = ColorFormatter('%(levelname)s %(message)s', theme='vivid')
    out = fmt.format(_record('[refresh] Sprint 1 -> 50%'))
    assert RESET in out
    assert f"{color_logging.FG_MAGENTA}[refresh]{RESET}" in out
    record = _record('[refresh] x')
    fmt.format(record)
    assert record.levelname == 'WARNING'


def test_tags_only_lead_the_message():
    fmt = ColorFormatter('%(message)s', theme='mono')
    out = fmt.format(_record('ready [vault]', level=logging.INFO))
    assert out == 'ready [vault]'


def test_unknown_theme_falls_back_to_default():
    assert ColorFormatter('%(message)s', theme='neon').theme == 'default'


def test_enable_color_logging_respects_no_color(monkeypatch):
    handler = logging.StreamHandler(io.StringIO())
    monkeypatch.setattr(logging.getLogger(), 'handlers', [handler])
    monkeypatch.setattr(color_logging, '_enabled', False)
    monkeypatch.setenv('TASKTRACKER_NO_COLOR', '1')
    monkeypatch.setenv('TASKTRACKER_LOG_COLOR_THEME', 'VIVID')

    enable_color_logging()

    assert isinstance(handler.formatter, ColorFormatter)
    assert handler.formatter.use_color is False
    assert handler.formatter.theme == 'vivid'
    replaced = handler.formatter
    enable_color_logging()  # idempotent
    assert handler.formatter is replaced


def test_level_from_env(monkeypatch):
    monkeypatch.setenv('TASKTRACKER_LOG_LEVEL', 'debug')
    assert color_logging._level_from_env() == logging.DEBUG
    monkeypatch.setenv('TASKTRACKER_LOG_LEVEL', '30')
    assert color_logging._level_from_env() == 30
    monkeypatch.setenv('TASKTRACKER_LOG_LEVEL', 'chatty')
    assert color_logging._level_from_env() == logging.INFO
