import importlib
from pathlib import Path
from typing import Any

import interpreter_sandbox.utils.logger as logger_module


def test_logger_creates_log_directory(tmp_path: Path, monkeypatch: Any) -> None:
    """
    Verify that reloading the logger module creates the configured log directory.
    """
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("INTERPRETER_SANDBOX_LOG_DIR", str(log_dir))

    importlib.reload(logger_module)

    assert log_dir.is_dir()
    # stderr and file sinks
    assert len(logger_module.logger._core.handlers) == 2


def test_logger_sink_configuration(tmp_path: Path, monkeypatch: Any, capsys: Any) -> None:
    """
    Verify messages reach stderr and the JSON file sink.
    """
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("INTERPRETER_SANDBOX_LOG_DIR", str(log_dir))
    importlib.reload(logger_module)

    test_message = "This is a test message."
    logger_module.logger.info(test_message)

    captured = capsys.readouterr()
    assert test_message in captured.err

    # Removing the sinks flushes the enqueued file sink before reading
    logger_module.logger.remove()
    log_content = (log_dir / "app.log").read_text()
    assert '"message": "' + test_message + '"' in log_content
