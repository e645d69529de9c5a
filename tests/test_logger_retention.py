import os

import pytest

from conftest import MAX_FILES


def _remaining_ids(d):
    files = sorted(d.iterdir(), key=lambda p: p.stat().st_mtime)
    return ",".join(p.read_text() for p in files)


def _cleaner(d, keep):
    from logger.log_paths import FilesystemLogFileProvider
    from logger.retention import LogFileCleaner

    return LogFileCleaner(FilesystemLogFileProvider(d), keep)


class StaticProvider:
    def __init__(self, directory, entries):
        self.directory = directory
        self.entries = entries

    def list_log_files(self):
        return list(self.entries)


def test_cleaner_keeps_four_newest(log_dir):
    result = _cleaner(log_dir, 4).clean()

    assert sorted(p.name for p in log_dir.iterdir()) == [
        "6.log",
        "7.log",
        "8.log",
        "9.log",
    ]
    assert _remaining_ids(log_dir) == "6,7,8,9"
    assert result.ok
    assert len(result.deleted) == 6
    assert len(result.kept) == 4


def test_cleaner_erases_all_files_if_given_zero(log_dir):
    _cleaner(log_dir, 0).clean()
    assert list(log_dir.iterdir()) == []


def test_cleaner_limit_equal_to_count_is_noop(log_dir):
    before = {p.name: p.stat().st_mtime for p in log_dir.iterdir()}

    result = _cleaner(log_dir, MAX_FILES).clean()

    after = {p.name: p.stat().st_mtime for p in log_dir.iterdir()}
    assert after == before
    assert result.deleted == ()
    assert result.failures == ()


def test_cleaner_limit_above_count_is_noop(log_dir):
    result = _cleaner(log_dir, MAX_FILES + 25).clean()

    assert len(list(log_dir.iterdir())) == MAX_FILES
    assert result.ok


@pytest.mark.parametrize("keep", range(MAX_FILES + 1))
def test_cleaner_preserves_most_recent_files(log_dir, keep):
    _cleaner(log_dir, keep).clean()

    expected = ",".join(str(i) for i in range(MAX_FILES - keep, MAX_FILES))
    assert _remaining_ids(log_dir) == expected
    assert len(list(log_dir.iterdir())) == min(keep, MAX_FILES)


@pytest.mark.parametrize("keep", [0, 3, 7])
def test_retained_files_are_never_older_than_deleted(log_dir, keep):
    result = _cleaner(log_dir, keep).clean()

    if result.kept and result.deleted:
        assert min(e.mtime for e in result.kept) >= max(
            e.mtime for e in result.deleted
        )


def test_clean_is_idempotent(log_dir):
    cleaner = _cleaner(log_dir, 3)

    cleaner.clean()
    once = sorted(p.name for p in log_dir.iterdir())

    second = cleaner.clean()
    twice = sorted(p.name for p in log_dir.iterdir())

    assert once == twice == ["7.log", "8.log", "9.log"]
    assert second.deleted == ()


def test_equal_mtimes_are_ordered_by_name(tmp_path):
    d = tmp_path / "ties"
    d.mkdir()
    for name in ["c.log", "a.log", "b.log", "d.log"]:
        p = d / name
        p.write_text(name)
        os.utime(p, (500, 500))

    _cleaner(d, 2).clean()

    assert sorted(p.name for p in d.iterdir()) == ["c.log", "d.log"]


def test_select_victims_is_pure(tmp_path):
    from logger.log_paths import LogFileEntry
    from logger.retention import select_victims

    entries = [
        LogFileEntry(tmp_path / "new.log", mtime=30.0, size=1),
        LogFileEntry(tmp_path / "old.log", mtime=10.0, size=1),
        LogFileEntry(tmp_path / "mid.log", mtime=20.0, size=1),
    ]

    assert [v.name for v in select_victims(entries, 1)] == ["old.log", "mid.log"]
    assert select_victims(entries, 3) == []
    assert [e.name for e in entries] == ["new.log", "old.log", "mid.log"]


def test_only_log_files_are_counted(log_dir):
    (log_dir / "notes.txt").write_text("keep me")
    (log_dir / "archive.log").mkdir()

    _cleaner(log_dir, 2).clean()

    assert sorted(p.name for p in log_dir.iterdir()) == [
        "8.log",
        "9.log",
        "archive.log",
        "notes.txt",
    ]


def test_plan_does_not_delete(log_dir):
    victims = _cleaner(log_dir, 7).plan()

    assert [v.name for v in victims] == ["0.log", "1.log", "2.log"]
    assert len(list(log_dir.iterdir())) == MAX_FILES


@pytest.mark.parametrize("bad", [-1, -100, True, 2.5, "3", None])
def test_invalid_limit_is_rejected(log_dir, bad):
    from logger.errors import InvalidConfiguration

    with pytest.raises(InvalidConfiguration):
        _cleaner(log_dir, bad)

    assert len(list(log_dir.iterdir())) == MAX_FILES


def test_file_already_removed_is_not_an_error(tmp_path):
    from logger.log_paths import LogFileEntry
    from logger.retention import LogFileCleaner

    gone = tmp_path / "gone.log"
    present = tmp_path / "present.log"
    present.write_text("x")

    provider = StaticProvider(
        tmp_path,
        [
            LogFileEntry(gone, mtime=1.0, size=0),
            LogFileEntry(present, mtime=2.0, size=1),
        ],
    )

    result = LogFileCleaner(provider, 0).clean()

    assert result.ok
    assert [e.name for e in result.deleted] == ["present.log"]
    assert len(result.failures) == 1
    assert result.failures[0].missing
    assert result.failures[0].path == gone
    assert not present.exists()


def test_failed_deletion_does_not_stop_the_pass(tmp_path):
    from logger.log_paths import LogFileEntry
    from logger.retention import LogFileCleaner

    stuck = tmp_path / "stuck.log"
    stuck.mkdir()  # unlink() on a directory fails
    a = tmp_path / "a.log"
    b = tmp_path / "b.log"
    a.write_text("a")
    b.write_text("b")

    provider = StaticProvider(
        tmp_path,
        [
            LogFileEntry(stuck, mtime=1.0, size=0),
            LogFileEntry(a, mtime=2.0, size=1),
            LogFileEntry(b, mtime=3.0, size=1),
        ],
    )

    result = LogFileCleaner(provider, 0).clean()

    assert not result.ok
    assert [f.path for f in result.failures] == [stuck]
    assert not result.failures[0].missing
    assert [e.name for e in result.deleted] == ["a.log", "b.log"]
    assert stuck.exists()
    assert not a.exists() and not b.exists()


def test_listing_failure_aborts_the_pass(tmp_path):
    from logger.errors import DirectoryUnavailable
    from logger.retention import LogFileCleaner

    class BrokenProvider:
        directory = tmp_path

        def list_log_files(self):
            raise DirectoryUnavailable(tmp_path, "permission denied")

    with pytest.raises(DirectoryUnavailable):
        LogFileCleaner(BrokenProvider(), 0).clean()


def test_empty_directory_is_a_clean_outcome(tmp_path):
    d = tmp_path / "empty"
    d.mkdir()

    result = _cleaner(d, 0).clean()

    assert result.ok
    assert result.kept == result.deleted == result.failures == ()


def test_enforce_retention_prunes_old_logs(tmp_path):
    from logger.retention import enforce_retention

    for i in range(5):
        p = tmp_path / f"{i}.log"
        p.write_text("x")
        os.utime(p, (i, i))

    result = enforce_retention(tmp_path, keep=2)

    assert sorted(p.name for p in tmp_path.glob("*.log")) == ["3.log", "4.log"]
    assert len(result.deleted) == 3
