"""
In-memory shipment store.

Used when no DATABASE_URL is configured. The collection and the id counter
are guarded by a single reader/writer lock: lookups share the lock, writes
take it exclusively. Ids are assigned under the write lock, so concurrent
creates always get distinct, increasing ids. Ids of deleted records are
never handed out again.
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional

from shipment_service.application.schemas import ShipmentCreate
from shipment_service.domain.models import Shipment, copy_shipment


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReadWriteLock:
    """
    Many readers or one writer.

    Once a writer is waiting, new readers queue behind it so a steady stream
    of reads cannot starve writes.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


def demo_shipment(now: datetime) -> Shipment:
    """The sample record an optionally seeded store starts with."""
    return Shipment(
        id=1,
        nama="Halim",
        pengirim="Judy",
        nama_penerima="Jasonn",
        alamat_penerima="Jalan agust 11,jakarta",
        nama_item="baju",
        berat_item=90,
        timestamp=now,
        created_at=now,
    )


class InMemoryShipmentRepository:
    """Non-persistent store; contents are lost when the process exits."""

    mode = "memory"

    def __init__(self, seed: bool = False, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._lock = ReadWriteLock()
        self._shipments: List[Shipment] = []
        self._next_id = 1
        if seed:
            self._shipments.append(demo_shipment(clock()))
            self._next_id = 2

    def _index_of(self, shipment_id: int) -> int:
        for index, shipment in enumerate(self._shipments):
            if shipment.id == shipment_id:
                return index
        return -1

    def list(self) -> List[Shipment]:
        with self._lock.read_locked():
            return [copy_shipment(s) for s in self._shipments]

    def get(self, shipment_id: int) -> Optional[Shipment]:
        with self._lock.read_locked():
            index = self._index_of(shipment_id)
            if index == -1:
                return None
            return copy_shipment(self._shipments[index])

    def create(self, data: ShipmentCreate) -> Shipment:
        payload = data.model_dump()
        with self._lock.write_locked():
            now = self._clock()
            if payload.get("timestamp") is None:
                payload["timestamp"] = now
            shipment = Shipment(id=self._next_id, created_at=now, **payload)
            self._next_id += 1
            self._shipments.append(shipment)
            return copy_shipment(shipment)

    def update(self, shipment_id: int, data: ShipmentCreate) -> Optional[Shipment]:
        payload = data.model_dump()
        with self._lock.write_locked():
            index = self._index_of(shipment_id)
            if index == -1:
                return None
            current = self._shipments[index]
            if payload.get("timestamp") is None:
                payload["timestamp"] = current.timestamp
            replacement = Shipment(id=current.id, created_at=current.created_at, **payload)
            self._shipments[index] = replacement
            return copy_shipment(replacement)

    def delete(self, shipment_id: int) -> bool:
        with self._lock.write_locked():
            index = self._index_of(shipment_id)
            if index == -1:
                return False
            del self._shipments[index]
            return True

    def check(self) -> None:
        return None
