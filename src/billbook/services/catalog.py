"""Customer and item catalogs.

Each catalog loads its whole collection into memory once, appends a row on
add and rewrites the collection on remove.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Generic, TypeVar

from billbook.config import CUSTOMERS, ITEMS
from billbook.models.customer import Customer
from billbook.models.item import TWO_PLACES, Item
from billbook.services.exceptions import CustomerNotFound, ItemNotFound, NotFoundError
from billbook.utils.sequence import next_id, next_id_from_rows
from billbook.utils.store import RecordStore, single_line

logger = logging.getLogger(__name__)

T = TypeVar("T", Customer, Item)


class _Catalog(Generic[T]):
    collection: str
    not_found: type[NotFoundError]
    model: type[T]

    def __init__(self, store: RecordStore, default_start: int) -> None:
        self._store = store
        self._default_start = default_start
        rows = store.read_all(self.collection)
        self._records: list[T] = []
        seen: set[int] = set()
        for row in rows:
            try:
                record = self.model.from_record(row)
            except (ValueError, IndexError):
                logger.warning("Skipping malformed %s record: %r", self.collection, row)
                continue
            if record.id in seen:
                # First row wins, as in find_by_id
                logger.warning("Skipping duplicate %s id %d: %r", self.collection, record.id, row)
                continue
            seen.add(record.id)
            self._records.append(record)
        self._next_id = next_id_from_rows(rows, default_start)

    def _allocate_id(self) -> int:
        allocated = self.peek_next_id()
        self._next_id = allocated + 1
        return allocated

    def _store_new(self, record: T) -> T:
        self._store.append(self.collection, record.to_record())
        self._records.append(record)
        return record

    def peek_next_id(self) -> int:
        """Return the id the next add would receive, without reserving it."""
        return max(self._next_id, next_id((r.id for r in self._records), self._default_start))

    def list_all(self) -> list[T]:
        return list(self._records)

    def find_by_id(self, record_id: int) -> T | None:
        return next((r for r in self._records if r.id == record_id), None)

    def get(self, record_id: int) -> T:
        record = self.find_by_id(record_id)
        if record is None:
            raise self.not_found(record_id)
        return record

    def search(self, query: str) -> list[T]:
        """Case-insensitive substring match over the searchable text fields."""
        needle = query.lower()
        return [r for r in self._records if needle in r.search_text.lower()]

    def remove(self, record_id: int) -> bool:
        """Remove a record by id. Returns False (and writes nothing) if absent."""
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            return False
        self._store.rewrite(self.collection, (r.to_record() for r in remaining))
        self._records = remaining
        logger.info("Removed %s record %d", self.collection, record_id)
        return True

    def __len__(self) -> int:
        return len(self._records)


class CustomerCatalog(_Catalog[Customer]):
    collection = CUSTOMERS
    not_found = CustomerNotFound
    model = Customer

    def add(self, name: str, address: str = "", email: str = "", phone: str = "") -> Customer:
        customer = Customer(
            id=self._allocate_id(),
            name=single_line(name),
            address=single_line(address),
            email=single_line(email),
            phone=single_line(phone),
        )
        return self._store_new(customer)


class ItemCatalog(_Catalog[Item]):
    collection = ITEMS
    not_found = ItemNotFound
    model = Item

    def add(
        self,
        code: str,
        description: str,
        unit_price: Decimal | str,
        tax_percent: Decimal | str = Decimal(0),
    ) -> Item:
        """Add an item. Price and tax are stored rounded to two decimals."""
        item = Item(
            id=self._allocate_id(),
            code=single_line(code),
            description=single_line(description),
            unit_price=Decimal(unit_price).quantize(TWO_PLACES),
            tax_percent=Decimal(tax_percent).quantize(TWO_PLACES),
        )
        return self._store_new(item)

    def find_by_code(self, code: str) -> Item | None:
        return next((i for i in self._records if i.code == code), None)

    def resolve(self, key: str) -> Item | None:
        """Look an item up by numeric id first, then by code."""
        key = key.strip()
        if key.isascii() and key.isdigit():
            item = self.find_by_id(int(key))
            if item is not None:
                return item
        return self.find_by_code(key)
