"""Tests for logging setup."""

import logging

import pytest

from notion_bridge.utils.logging import parse_verbosity, setup_logging, strip_verbosity


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "args,expected",
    [
        ([], 0),
        (["config.yaml"], 0),
        (["-v"], 1),
        (["config.yaml", "-vv"], 2),
        (["-vvv"], 3),
    ],
)
def test_parse_verbosity(args, expected):
    assert parse_verbosity(args) == expected


def test_strip_verbosity():
    assert strip_verbosity(["-v", "config.yaml", "-vv"]) == ["config.yaml"]


@pytest.mark.parametrize("verbosity,level", [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG)])
def test_console_level(tmp_path, verbosity, level):
    setup_logging(verbosity=verbosity, log_file=str(tmp_path / "bridge.log"))

    console = [h for h in logging.getLogger().handlers if not isinstance(h, logging.FileHandler)]
    assert console[0].level == level


def test_file_captures_debug(tmp_path):
    log_file = tmp_path / "nested" / "bridge.log"
    setup_logging(verbosity=0, log_file=str(log_file))

    logging.getLogger("notion_bridge.test").debug("resolved page abc")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "resolved page abc" in log_file.read_text(encoding="utf-8")


def test_default_log_file_in_log_dir(tmp_path):
    setup_logging(verbosity=1, log_dir=str(tmp_path / "logs"))

    files = list((tmp_path / "logs").glob("notion_bridge_*.log"))
    assert len(files) == 1


def test_noisy_loggers_quieted(tmp_path):
    setup_logging(verbosity=2, log_file=str(tmp_path / "bridge.log"))
    assert logging.getLogger("httpx").level == logging.WARNING
