"""Record store layer - durable storage of the transactions document.

This module re-exports all public store functions for easy importing.
"""

from spendlog.store.document import (
    list_backups,
    list_corrupted_backups,
    read_document,
    rotate_backups,
    write_document,
)
from spendlog.store.errors import StorageError, StorageIOError, StorageLimitExceeded
from spendlog.store.queries import (
    add_expense,
    add_income,
    delete_expense,
    delete_income,
    get_expenses,
    get_income,
    get_settings,
    save_settings,
    update_expense,
    update_income,
)
from spendlog.store.schema import MAX_BACKUPS, MAX_FILE_SIZE, StoreDocument, coerce_document, empty_document

__all__ = [
    # Schema
    "MAX_BACKUPS",
    "MAX_FILE_SIZE",
    "StoreDocument",
    "coerce_document",
    "empty_document",
    # Document
    "list_backups",
    "list_corrupted_backups",
    "read_document",
    "rotate_backups",
    "write_document",
    # Errors
    "StorageError",
    "StorageIOError",
    "StorageLimitExceeded",
    # Queries
    "add_expense",
    "add_income",
    "delete_expense",
    "delete_income",
    "get_expenses",
    "get_income",
    "get_settings",
    "save_settings",
    "update_expense",
    "update_income",
]
