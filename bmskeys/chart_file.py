"""ChartFile: loads, reloads, backs up, and saves a ChartDocument on disk."""

from __future__ import annotations

import shutil
from pathlib import Path

from loguru import logger

from bmskeys import config
from bmskeys.chart_document import ChartDocument
from bmskeys.errors import ChartFileError


class ChartFile:
    """
    A chart document bound to the file it was read from.

    The document is owned exclusively by this object. ``reload`` swaps in a
    freshly parsed document in one assignment, or discards the old one and
    raises; it never leaves stale data behind a failed read.

        chart = ChartFile.open("song.bms")
        chart.document.rewrite(old_id, new_id)
        chart.save()
    """

    def __init__(
        self,
        path: str | Path,
        encoding: str = config.ENCODING,
        backup_suffix: str | None = None,
    ) -> None:
        """
        Args:
            path:          Chart file.
            encoding:      Text encoding used to read and write it.
            backup_suffix: When set, the first ``save`` copies the untouched
                           chart to ``<stem><suffix><ext>`` before writing.
        """
        self.path = Path(path)
        self.encoding = encoding
        self.backup_suffix = backup_suffix
        self.backup_path: Path | None = None
        self.document = ChartDocument.empty()

    @classmethod
    def open(
        cls,
        path: str | Path,
        encoding: str = config.ENCODING,
        backup_suffix: str | None = None,
    ) -> ChartFile:
        chart = cls(path, encoding=encoding, backup_suffix=backup_suffix)
        chart.load()
        return chart

    @property
    def directory(self) -> Path:
        """Folder that keysound filenames are relative to."""
        return self.path.parent

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _read_lines(self) -> list[str]:
        try:
            text = self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise ChartFileError(f"Unable to read {self.path}: {exc}") from exc
        return text.splitlines()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> ChartDocument:
        """
        Read and parse the chart.

        Raises:
            ChartFileError:   If the file cannot be read or decoded.
            DeclarationError: If a ``#WAV`` line is malformed.
        """
        self.document = ChartDocument.parse(self._read_lines())
        return self.document

    def reload(self) -> ChartDocument:
        """Re-read the chart so edits made in another editor are picked up."""
        logger.info("Reloading {}", self.path)
        try:
            document = ChartDocument.parse(self._read_lines())
        except Exception:
            logger.error("Error reloading {}; in-memory chart discarded", self.path)
            self.document = ChartDocument.empty()
            raise
        self.document = document
        return document

    def save(self) -> None:
        """
        Write the serialized document back over the chart.

        Raises:
            OSError: If the file cannot be written.
        """
        if self.backup_suffix is not None and self.backup_path is None:
            self.backup(self.backup_suffix)
        logger.info("Saving {}", self.path)
        self.path.write_text(self.document.to_text(), encoding=self.encoding)

    def backup(self, suffix: str = config.BACKUP_SUFFIX) -> Path:
        """
        Copy the chart to ``<stem><suffix><ext>`` beside it.

        Returns:
            Path of the backup copy.
        """
        target = self.path.with_name(f"{self.path.stem}{suffix}{self.path.suffix}")
        shutil.copyfile(self.path, target)
        self.backup_path = target
        logger.info("Backed up {} to {}", self.path, target)
        return target
