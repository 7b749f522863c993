import logging

import pytest

from surveyviz._utils import enable_io_logs, read_config, temp_log_level

logger = logging.getLogger("test_logger")


# -------------------------------
# Tests for enable_io_logs
# -------------------------------

def test_enable_io_logs_logs_permission_error(caplog):
    @enable_io_logs()
    def raise_permission():
        raise PermissionError("nope")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(PermissionError):
            raise_permission()
    assert "Permission denied" in caplog.text

def test_enable_io_logs_logs_file_not_found_error(caplog):
    @enable_io_logs(logger)
    def raise_missing():
        raise FileNotFoundError("gone")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(FileNotFoundError):
            raise_missing()
    assert "File not found in raise_missing" in caplog.text
    assert any(record.name == "test_logger" for record in caplog.records)

def test_enable_io_logs_logs_generic_exception(caplog):
    @enable_io_logs()
    def raise_generic():
        raise ValueError("oops")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ValueError, match="oops"):
            raise_generic()
    assert "Unexpected IO error" in caplog.text

def test_enable_io_logs_passes_return_value():
    @enable_io_logs()
    def read_ok():
        return 42

    assert read_ok() == 42

# -------------------------------
# Tests for read_config / temp_log_level
# -------------------------------

def test_read_config_messages_is_cached():
    first = read_config("messages")
    second = read_config("messages")
    assert first is second
    assert "column_not_found_f" in first["errors"]

def test_temp_log_level_restores_level():
    test_logger = logging.getLogger("test_logger.temp")
    test_logger.setLevel(logging.WARNING)
    with temp_log_level(test_logger, logging.DEBUG):
        assert test_logger.level == logging.DEBUG
    assert test_logger.level == logging.WARNING
