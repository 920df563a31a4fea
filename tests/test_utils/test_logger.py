import logging

from loudness_engine.utils.logger import get_logger, level_from_env, log_performance, setup_logging


def test_level_from_env(monkeypatch):
    monkeypatch.delenv("LOUDNESS_ENGINE_LOG_LEVEL", raising=False)
    assert level_from_env() == logging.INFO
    monkeypatch.setenv("LOUDNESS_ENGINE_LOG_LEVEL", "debug")
    assert level_from_env() == logging.DEBUG
    monkeypatch.setenv("LOUDNESS_ENGINE_LOG_LEVEL", "nonsense")
    assert level_from_env(logging.WARNING) == logging.WARNING


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "engine.log"
    setup_logging(level=logging.INFO, log_file=str(log_file), console_output=False)
    try:
        get_logger("loudness_engine.test").info("hello from the test")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello from the test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        setup_logging()


def test_log_performance_preserves_result():
    @log_performance
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"
