"""Flat-file record store: one CSV file per collection plus invoice documents.

Every collection is read whole, appended to one row at a time, or rewritten
whole. There are no partial updates. Invoice documents live one file per
invoice under ``invoices/``.
"""

from __future__ import annotations

import csv
import io
import logging
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from filelock import FileLock

from billbook.config import INVOICES_DIR
from billbook.services.exceptions import StorageError

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def read_all(self, collection: str) -> list[list[str]]: ...

    def append(self, collection: str, row: list[str]) -> None: ...

    def rewrite(self, collection: str, rows: Iterable[list[str]]) -> None: ...

    def write_document(self, invoice_id: int, text: str) -> str: ...

    def read_document(self, invoice_id: int) -> str | None: ...

    def delete_document(self, invoice_id: int) -> None: ...


def document_name(invoice_id: int | str) -> str:
    return f"invoice_{invoice_id}.txt"


def single_line(value: str) -> str:
    """Replace line breaks with spaces so a field fits on one record line."""
    return value.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def _encode(row: Iterable[str]) -> str:
    """Serialize one row as a single CSV line."""
    buf = io.StringIO()
    cells = [single_line(str(c)) for c in row]
    csv.writer(buf, lineterminator="\n").writerow(cells)
    return buf.getvalue()


def _decode(text: str, source: str) -> list[list[str]]:
    rows: list[list[str]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            rows.append(next(csv.reader([line])))
        except (csv.Error, StopIteration):
            logger.warning("Skipping unparseable line %d in %s", lineno, source)
    return rows


class FileStore:
    """Record store backed by a data directory on the local filesystem."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def collection_path(self, collection: str) -> Path:
        return self.root / f"{collection}.csv"

    def documents_dir(self) -> Path:
        return self.root / INVOICES_DIR

    def document_path(self, invoice_id: int | str) -> Path:
        return self.documents_dir() / document_name(invoice_id)

    @contextmanager
    def _locked(self, path: Path) -> Iterator[None]:
        """Hold an exclusive file lock while a collection file is written."""
        path.parent.mkdir(parents=True, exist_ok=True)
        lock = FileLock(path.with_suffix(".lock"))
        with lock:
            yield

    # --- Collections ---

    def read_all(self, collection: str) -> list[list[str]]:
        """Return every row of a collection in file order.

        A missing file is an empty collection; an unreadable one is logged
        and also treated as empty.
        """
        path = self.collection_path(collection)
        if not path.exists():
            return []
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Collection unreadable, treating as empty: %s", path, exc_info=True)
            return []
        return _decode(text, str(path))

    def append(self, collection: str, row: list[str]) -> None:
        path = self.collection_path(collection)
        try:
            with self._locked(path), path.open("a", encoding="utf-8", newline="") as f:
                f.write(_encode(row))
        except OSError as e:
            raise StorageError(f"Cannot append to {path}: {e}", str(path)) from e

    def rewrite(self, collection: str, rows: Iterable[list[str]]) -> None:
        """Replace the whole collection (atomic write)."""
        path = self.collection_path(collection)
        content = "".join(_encode(row) for row in rows)
        try:
            with self._locked(path):
                tmp = path.with_suffix(".tmp")
                tmp.write_text(content, encoding="utf-8")
                os.replace(tmp, path)
        except OSError as e:
            raise StorageError(f"Cannot rewrite {path}: {e}", str(path)) from e

    # --- Documents ---

    def write_document(self, invoice_id: int, text: str) -> str:
        path = self.document_path(invoice_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise StorageError(f"Cannot write invoice document {path}: {e}", str(path)) from e
        return str(path)

    def read_document(self, invoice_id: int | str) -> str | None:
        path = self.document_path(invoice_id)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            logger.warning("Invoice document unreadable: %s", path, exc_info=True)
            return None

    def delete_document(self, invoice_id: int) -> None:
        self.document_path(invoice_id).unlink(missing_ok=True)


class MemoryStore:
    """In-memory record store; keeps row order, nothing touches disk."""

    def __init__(self) -> None:
        self.collections: dict[str, list[list[str]]] = {}
        self.documents: dict[str, str] = {}

    def read_all(self, collection: str) -> list[list[str]]:
        return [list(row) for row in self.collections.get(collection, [])]

    def append(self, collection: str, row: list[str]) -> None:
        self.collections.setdefault(collection, []).append(list(row))

    def rewrite(self, collection: str, rows: Iterable[list[str]]) -> None:
        self.collections[collection] = [list(row) for row in rows]

    def write_document(self, invoice_id: int, text: str) -> str:
        name = document_name(invoice_id)
        self.documents[name] = text
        return f"{INVOICES_DIR}/{name}"

    def read_document(self, invoice_id: int | str) -> str | None:
        return self.documents.get(document_name(invoice_id))

    def delete_document(self, invoice_id: int) -> None:
        self.documents.pop(document_name(invoice_id), None)
