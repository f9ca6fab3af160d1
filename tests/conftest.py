import logging

import pytest


@pytest.fixture(autouse=True)
def clean_env_and_logging(monkeypatch, tmp_path):
    """
    Ensure tests don't leak env, logger state, or root handlers.
    """

    keys = [
        "SOURCELOG_LOGS_DIR",
        "SOURCELOG_LOG_PREFIX",
        "SOURCELOG_VERBOSE",
        "SOURCELOG_QUIET",
        "LOG_LEVEL",
        "LOG_RETENTION",
        "FORCE_COLOR",
        "NO_COLOR",
    ]
    for k in keys:
        monkeypatch.delenv(k, raising=False)

    # Never write into the working tree
    monkeypatch.setenv("SOURCELOG_LOGS_DIR", str(tmp_path / "logs"))

    import sourcelog

    sourcelog.shutdown_logging()
    root = logging.getLogger()
    saved_level = root.level

    yield

    sourcelog.shutdown_logging()
    root.setLevel(saved_level)


@pytest.fixture
def make_record():
    def _make(msg="Hello World!", level=logging.INFO, path="src/main.rs", lineno=74, **extra):
        record = logging.LogRecord("test", level, path, lineno, msg, None, None)
        record.__dict__.update(extra)
        return record

    return _make
