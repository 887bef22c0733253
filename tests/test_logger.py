import re

import pytest

from webrecon.logger import Logger, setup_file_logger


@pytest.mark.parametrize(
    "method, tag",
    [("info", "[INFO]"), ("success", "[SUCCESS]"), ("warning", "[WARNING]"), ("error", "[ERROR]")],
)
def test_tagged_messages_are_formatted(method, tag, capsys):
    getattr(Logger(), method)("found %d ports on %s", 3, "host")
    out = capsys.readouterr().out
    assert f"{tag} found 3 ports on host" in out


def test_message_without_args_keeps_percent(capsys):
    Logger().info("100% done")
    assert "[INFO] 100% done" in capsys.readouterr().out


def test_debug_silent_unless_verbose(capsys):
    Logger().debug("hidden")
    assert capsys.readouterr().out == ""
    Logger(verbose=True).debug("shown %s", "now")
    assert "[DEBUG] shown now" in capsys.readouterr().out


def test_fatal_exits_with_status_one(capsys):
    with pytest.raises(SystemExit) as excinfo:
        Logger().fatal("broken %s", "badly")
    assert excinfo.value.code == 1
    assert "[FATAL] broken badly" in capsys.readouterr().out


def test_log_to_file_appends_timestamped_lines(tmp_path):
    path = tmp_path / "scan.log"
    logger = Logger()
    logger.log_to_file(path, "first %d", 1)
    logger.log_to_file(path, "second")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    pattern = r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] "
    assert re.match(pattern + r"first 1$", lines[0])
    assert re.match(pattern + r"second$", lines[1])


def test_log_to_file_raises_for_bad_path(tmp_path):
    with pytest.raises(OSError):
        Logger().log_to_file(tmp_path / "missing" / "scan.log", "x")


def test_setup_file_logger_writes_lines(tmp_path):
    path = tmp_path / "app.log"
    logger = setup_file_logger(path)
    try:
        assert logger.handlers
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        content = path.read_text(encoding="utf-8")
        assert re.match(r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2} hello\n$", content)
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_setup_file_logger_exits_when_unopenable(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        setup_file_logger(tmp_path)
    assert excinfo.value.code == 1
    assert "Failed to open log file" in capsys.readouterr().err