"""Document shape, file locations and backup naming for the record store."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypedDict

from spendlog.config import get_data_path

MAX_FILE_SIZE = 10 * 1024 * 1024
MAX_BACKUPS = 3


class StoreDocument(TypedDict):
    """The unit of persistence: every record plus user settings."""

    expenses: list[dict[str, Any]]
    income: list[dict[str, Any]]
    settings: dict[str, Any]


def empty_document() -> StoreDocument:
    """Return a new empty document."""
    return StoreDocument(expenses=[], income=[], settings={})


def coerce_document(raw: Any) -> StoreDocument:
    """Coerce parsed JSON into a document, field by field.

    A non-list ``expenses`` or ``income`` becomes an empty list, a non-object
    ``settings`` becomes an empty dict. A non-object top level becomes the
    empty document.

    Args:
        raw: Parsed JSON value.

    Returns:
        Well-formed document.
    """
    if not isinstance(raw, dict):
        return empty_document()

    expenses = raw.get("expenses")
    income = raw.get("income")
    settings = raw.get("settings")

    return StoreDocument(
        expenses=expenses if isinstance(expenses, list) else [],
        income=income if isinstance(income, list) else [],
        settings=settings if isinstance(settings, dict) else {},
    )


def resolve_path(data_path: Path | None = None) -> Path:
    """Return the given path, or the configured transactions file."""
    if data_path is None:
        return get_data_path()
    return data_path


def file_timestamp(now: datetime | None = None) -> str:
    """UTC ISO-8601 timestamp safe for file names (':' and '.' become '-')."""
    if now is None:
        now = datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return iso.replace(":", "-").replace(".", "-")


def temp_path(data_path: Path) -> Path:
    return data_path.with_name(data_path.name + ".tmp")


def transient_backup_path(data_path: Path) -> Path:
    return data_path.with_name(data_path.name + ".backup")


def backup_path(data_path: Path, timestamp: str) -> Path:
    return data_path.with_name(f"{data_path.name}.backup.{timestamp}.json")


def corrupted_path(data_path: Path, timestamp: str) -> Path:
    return data_path.with_name(f"{data_path.name}.corrupted.{timestamp}.bak")
