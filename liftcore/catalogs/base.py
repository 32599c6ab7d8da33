"""Read-mostly catalog interface shared by the equipment and scenario catalogs."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, Generic, Iterable, Iterator, Tuple, TypeVar, Union

from liftcore.errors import NotFound
from liftcore.logger import get_logger

T = TypeVar("T")

log = get_logger("lift-training.catalog")


class Catalog(ABC, Generic[T]):
    """Id-keyed registry.

    Reads go straight to the current mapping without locking. Writes hold a
    single writer lock, build a new mapping and swap it in, so a reader sees
    either the old or the new catalog, never a partial one.
    """

    def __init__(self, records: Iterable[T] = ()):
        self._write_lock = threading.Lock()
        self._items: Dict[str, T] = {}
        for record in records:
            self._put(record)

    @property
    @abstractmethod
    def kind(self) -> str:
        """Name used in NotFound results and log lines."""

    def validate(self, record: T) -> None:
        """Hook for authoring invariants; raise to reject ``record``."""

    def get(self, key: str) -> Union[T, NotFound]:
        item = self._items.get(key)
        if item is None:
            return NotFound(self.kind, key)
        return item

    def list(self) -> Tuple[T, ...]:
        return tuple(self._items.values())

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    def _put(self, record: T) -> T:
        with self._write_lock:
            self.validate(record)
            items = dict(self._items)
            items[record.id] = record
            self._items = items
        log.info("%s catalog: registered %s", self.kind, record.id)
        return record
