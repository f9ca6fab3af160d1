import logging
from pathlib import Path

from sourcelog.retention import enforce_retention, prune_logs, scan_logs


def _touch(path, text="x"):
    path.write_text(text)
    return path


def test_scan_filters_prefix_and_sorts(tmp_path):
    _touch(tmp_path / "app.2024-01-03T00:00:00")
    _touch(tmp_path / "app.2024-01-01T00:00:00")
    _touch(tmp_path / "other.2024-01-02T00:00:00")

    logs = scan_logs(tmp_path, "app")

    assert [p.name for p in logs] == [
        "app.2024-01-01T00:00:00",
        "app.2024-01-03T00:00:00",
    ]


def test_scan_ignores_directories_and_nested_files(tmp_path):
    nested = tmp_path / "app.nested"
    nested.mkdir()
    _touch(nested / "app.2024-01-01T00:00:00")
    _touch(tmp_path / "app.2024-01-02T00:00:00")

    logs = scan_logs(tmp_path, "app")

    assert [p.name for p in logs] == ["app.2024-01-02T00:00:00"]


def test_scan_ignores_symlinks(tmp_path):
    target = _touch(tmp_path / "target.txt")
    (tmp_path / "app.link").symlink_to(target)

    assert scan_logs(tmp_path, "app") == []


def test_scan_empty_prefix_matches_all_files(tmp_path):
    _touch(tmp_path / "a")
    _touch(tmp_path / "b")

    assert [p.name for p in scan_logs(tmp_path, "")] == ["a", "b"]


def test_scan_missing_directory_is_empty(tmp_path):
    assert scan_logs(tmp_path / "nope", "app") == []


def test_prune_removes_oldest_first(tmp_path):
    for day in (1, 2, 3):
        _touch(tmp_path / f"prefix.2024-01-0{day}T00:00:00")

    removed = enforce_retention(tmp_path, "prefix", 2)

    assert [p.name for p in removed] == ["prefix.2024-01-01T00:00:00", "prefix.2024-01-02T00:00:00"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["prefix.2024-01-03T00:00:00"]


def test_prune_below_limit_keeps_everything(tmp_path):
    logs = [_touch(tmp_path / f"p.{i}") for i in range(2)]

    assert prune_logs(logs, 3) == []
    assert all(p.exists() for p in logs)


def test_prune_coerces_non_positive_max_to_one(tmp_path):
    logs = [_touch(tmp_path / f"p.{i}") for i in range(3)]

    removed = prune_logs(logs, 0)

    assert removed == logs
    assert list(tmp_path.iterdir()) == []


def test_prune_continues_after_failed_delete(tmp_path, monkeypatch, caplog):
    logs = [_touch(tmp_path / f"p.{i}") for i in range(4)]
    stuck = logs[0]
    real_unlink = Path.unlink

    def flaky_unlink(self, *args, **kwargs):
        if self == stuck:
            raise PermissionError("denied")
        return real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", flaky_unlink)

    with caplog.at_level(logging.WARNING, logger="sourcelog.retention"):
        removed = prune_logs(logs, 2)

    assert removed == logs[1:3]
    assert stuck.exists()
    assert logs[3].exists()
    assert "Could not remove old log" in caplog.text


def test_scan_skips_entries_that_cannot_be_inspected(tmp_path, monkeypatch):
    bad = _touch(tmp_path / "app.2024-01-01T00:00:00")
    good = _touch(tmp_path / "app.2024-01-02T00:00:00")
    real_lstat = Path.lstat

    def flaky_lstat(self):
        if self == bad:
            raise PermissionError("denied")
        return real_lstat(self)

    monkeypatch.setattr(Path, "lstat", flaky_lstat)

    assert scan_logs(tmp_path, "app") == [good]
