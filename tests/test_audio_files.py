"""Tests for the orphaned-audio scan and file deletion helpers."""

from pathlib import Path

from bmskeys.audio_files import delete_file, delete_files, find_orphaned_audio


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_bytes(b"")


def test_find_orphaned_audio(tmp_path: Path) -> None:
    _touch(tmp_path, "a.wav", "b.OGG", "c.txt", "d.wav", "song.bms")
    orphans = find_orphaned_audio(tmp_path, ["a.wav"], extensions=["ogg", "wav"])
    assert [p.name for p in orphans] == ["b.OGG", "d.wav"]


def test_find_orphaned_audio_accepts_dotted_extensions(tmp_path: Path) -> None:
    _touch(tmp_path, "a.flac", "b.wav")
    orphans = find_orphaned_audio(tmp_path, [], extensions=[".flac"])
    assert [p.name for p in orphans] == ["a.flac"]


def test_find_orphaned_audio_with_everything_declared(tmp_path: Path) -> None:
    _touch(tmp_path, "a.wav")
    assert find_orphaned_audio(tmp_path, ["a.wav"], extensions=["wav"]) == []


def test_delete_file_removes_regular_file(tmp_path: Path) -> None:
    _touch(tmp_path, "a.wav")
    assert delete_file(tmp_path / "a.wav")
    assert not (tmp_path / "a.wav").exists()


def test_delete_file_skips_missing_file(tmp_path: Path) -> None:
    assert delete_file(tmp_path / "missing.wav")


def test_delete_file_refuses_directories(tmp_path: Path) -> None:
    folder = tmp_path / "sub.wav"
    folder.mkdir()
    assert not delete_file(folder)
    assert folder.is_dir()


def test_delete_files_reports_failures_and_continues(tmp_path: Path) -> None:
    _touch(tmp_path, "a.wav", "c.wav")
    folder = tmp_path / "b.wav"
    folder.mkdir()

    failed = delete_files([tmp_path / "a.wav", folder, tmp_path / "c.wav"])
    assert failed == [folder]
    assert not (tmp_path / "a.wav").exists()
    assert not (tmp_path / "c.wav").exists()
