"""Audio files beside a chart: finding orphans and deleting them."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from bmskeys import config


def find_orphaned_audio(
    directory: Path,
    declared_filenames: Iterable[str],
    extensions: Iterable[str] = config.AUDIO_EXTENSIONS,
) -> list[Path]:
    """
    List audio files in ``directory`` that no declaration names.

    Only the top level of the folder is scanned. A file counts as audio when
    its extension (compared case-insensitively, without the dot) is one of
    ``extensions``.

    Returns:
        Matching paths sorted by name.
    """
    wanted = {ext.lower().lstrip(".") for ext in extensions}
    declared = set(declared_filenames)
    return sorted(
        path
        for path in directory.iterdir()
        if path.suffix.lower().lstrip(".") in wanted and path.name not in declared
    )


def delete_file(path: Path) -> bool:
    """
    Delete a regular file.

    Returns:
        True if the file was removed or did not exist, False if it exists
        but is not a regular file or could not be removed.
    """
    if not path.exists():
        logger.warning("Skipping deletion of {} (doesn't exist)", path)
        return True
    if not path.is_file():
        logger.error("{} exists, but is not a regular file", path)
        return False
    try:
        path.unlink()
    except OSError as exc:
        logger.error("Error removing {}: {}", path, exc)
        return False
    logger.info("Removed {}", path)
    return True


def delete_files(paths: Iterable[Path]) -> list[Path]:
    """Delete each path, carrying on past failures; return the paths that failed."""
    return [path for path in paths if not delete_file(path)]
