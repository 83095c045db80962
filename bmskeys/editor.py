"""Keysound edits that span several declarations: merging and pruning."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from bmskeys.audio_files import delete_file
from bmskeys.chart_document import ChartDocument, RewriteReport
from bmskeys.declarations import KeysoundDeclaration
from bmskeys.errors import UnknownKeysoundError
from bmskeys.keysound_id import encode


def merge_keysounds(
    document: ChartDocument, target_id: int, source_ids: Iterable[int]
) -> list[RewriteReport]:
    """
    Replace several keysounds with one.

    Every id must be declared or nothing is changed. A source equal to the
    target is skipped, since rewriting it would drop the target's declaration.

    Raises:
        UnknownKeysoundError: If the target or any source is not declared.
    """
    sources = list(dict.fromkeys(source_ids))
    missing = [i for i in [target_id, *sources] if not document.has_keysound(i)]
    if missing:
        raise UnknownKeysoundError(sorted(set(missing)))

    reports = []
    for source_id in sources:
        if source_id == target_id:
            continue
        logger.info("Replacing {} with {}", encode(source_id), encode(target_id))
        reports.append(document.rewrite(source_id, target_id))
    return reports


def prune_unused_keysounds(
    document: ChartDocument,
    unused: Iterable[KeysoundDeclaration],
    directory: Path | None = None,
) -> list[KeysoundDeclaration]:
    """
    Remove the given declarations, optionally deleting their audio files.

    Args:
        document:  Chart to edit.
        unused:    Declarations to drop, normally ``document.unused_keysounds()``.
        directory: When given, each declaration's file in this folder is
                   deleted too. A declaration whose file cannot be deleted is
                   kept in the chart, even if a duplicate of its id is removed.

    Returns:
        The declarations that were removed.
    """
    removable: list[KeysoundDeclaration] = []
    for declaration in unused:
        if directory is not None and not delete_file(directory / declaration.filename):
            logger.warning("Keeping keysound {}: its file was not deleted", declaration.token)
            continue
        removable.append(declaration)
    return document.remove_declarations(removable)
