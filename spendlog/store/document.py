"""Reading and writing the transactions document.

Every write replaces the whole file atomically: the new content goes to a
temporary sibling which is then renamed over the live file. Before the live
file is replaced, timestamped backups are rotated so at most MAX_BACKUPS
remain. A file that fails to parse is copied aside and reset to empty.
"""

import json
import os
import shutil
from pathlib import Path

from spendlog.logging_setup import get_logger
from spendlog.store.errors import StorageIOError, StorageLimitExceeded
from spendlog.store.schema import (
    MAX_BACKUPS,
    MAX_FILE_SIZE,
    StoreDocument,
    backup_path,
    coerce_document,
    corrupted_path,
    empty_document,
    file_timestamp,
    resolve_path,
    temp_path,
    transient_backup_path,
)

logger = get_logger("spendlog.store.document")


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove %s: %s", path, e)


def _list_siblings(path: Path, marker: str, suffix: str) -> list[Path]:
    prefix = f"{path.name}.{marker}."
    if not path.parent.is_dir():
        return []
    matches = [p for p in path.parent.iterdir() if p.name.startswith(prefix) and p.name.endswith(suffix)]
    # Newest first; the timestamped name breaks mtime ties
    return sorted(matches, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)


def list_backups(data_path: Path | None = None) -> list[Path]:
    """List timestamped backups of the document, newest first.

    Args:
        data_path: Path to the transactions file. If None, uses default location.

    Returns:
        Backup file paths.
    """
    return _list_siblings(resolve_path(data_path), "backup", ".json")


def list_corrupted_backups(data_path: Path | None = None) -> list[Path]:
    """List copies of documents that failed to parse, newest first."""
    return _list_siblings(resolve_path(data_path), "corrupted", ".bak")


def rotate_backups(data_path: Path | None = None) -> None:
    """Keep the newest backups and add a new one of the live file.

    Deletes all but the newest MAX_BACKUPS - 1 backups, then copies the live
    file to a new timestamped backup. Failures are logged and never raised.

    Args:
        data_path: Path to the transactions file. If None, uses default location.
    """
    path = resolve_path(data_path)
    try:
        for old in list_backups(path)[MAX_BACKUPS - 1 :]:
            try:
                old.unlink()
            except OSError as e:
                logger.warning("Failed to delete old backup %s: %s", old.name, e)

        if path.exists():
            shutil.copyfile(path, backup_path(path, file_timestamp()))
    except OSError as e:
        logger.warning("Failed to rotate backups: %s", e)


def _recover_corrupted(path: Path) -> None:
    backup = corrupted_path(path, file_timestamp())
    try:
        shutil.copyfile(path, backup)
    except OSError as e:
        logger.error("Failed to back up corrupted data file %s: %s", path, e)
        return
    logger.warning("Corrupted data file backed up to: %s", backup)

    try:
        write_document(empty_document(), path)
    except StorageIOError as e:
        logger.error("Failed to reset corrupted data file %s: %s", path, e)


def read_document(data_path: Path | None = None) -> StoreDocument:
    """Read the transactions document.

    Args:
        data_path: Path to the transactions file. If None, uses default location.

    Returns:
        The stored document. Empty if the file is missing, blank or corrupted.

    Raises:
        StorageLimitExceeded: If the file is larger than MAX_FILE_SIZE.
        StorageIOError: If the file cannot be read.
    """
    path = resolve_path(data_path)
    if not path.exists():
        return empty_document()

    try:
        size = path.stat().st_size
        if size > MAX_FILE_SIZE:
            raise StorageLimitExceeded(size, MAX_FILE_SIZE)
        raw = path.read_bytes()
    except OSError as e:
        raise StorageIOError(f"Failed to read data: {e}") from e

    try:
        text = raw.decode("utf-8")
        if not text.strip():
            return empty_document()
        parsed = json.loads(text)
    except ValueError:
        _recover_corrupted(path)
        return empty_document()

    return coerce_document(parsed)


def write_document(document: StoreDocument, data_path: Path | None = None) -> None:
    """Atomically replace the transactions document.

    Args:
        document: Document to persist.
        data_path: Path to the transactions file. If None, uses default location.

    Raises:
        StorageLimitExceeded: If the serialized document exceeds MAX_FILE_SIZE.
            Nothing is written.
        StorageIOError: If writing fails. The live file is left untouched.
    """
    path = resolve_path(data_path)
    payload = json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")
    if len(payload) > MAX_FILE_SIZE:
        raise StorageLimitExceeded(len(payload), MAX_FILE_SIZE)

    tmp = temp_path(path)
    transient = transient_backup_path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())

        if path.exists():
            rotate_backups(path)
            shutil.copyfile(path, transient)

        os.replace(tmp, path)
    except OSError as e:
        _remove_quietly(tmp)
        _remove_quietly(transient)
        raise StorageIOError(f"Failed to write data: {e}") from e

    _remove_quietly(transient)
    logger.debug("Wrote %d bytes to %s", len(payload), path)
