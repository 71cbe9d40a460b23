import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from shipment_service.application.repository import ShipmentRepository
from shipment_service.application.schemas import ShipmentCreate
from shipment_service.infrastructure.memory_repository import (
    InMemoryShipmentRepository,
    ReadWriteLock,
)

FIXED_NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def payload(**changes) -> ShipmentCreate:
    data = {
        "nama": "Halim",
        "pengirim": "Judy",
        "namaPenerima": "Jason",
        "alamatPenerima": "Jalan 11",
        "namaItem": "baju",
        "beratItem": 5,
    }
    data.update(changes)
    return ShipmentCreate.model_validate(data)


def fixed_repo(**kwargs) -> InMemoryShipmentRepository:
    return InMemoryShipmentRepository(clock=lambda: FIXED_NOW, **kwargs)


def test_implements_repository_protocol():
    assert isinstance(InMemoryShipmentRepository(), ShipmentRepository)


def test_create_assigns_id_and_timestamps():
    repo = fixed_repo()
    shipment = repo.create(payload())
    assert shipment.id == 1
    assert shipment.created_at == FIXED_NOW
    assert shipment.timestamp == FIXED_NOW
    assert shipment.nama == "Halim"
    assert shipment.berat_item == 5


def test_create_keeps_supplied_event_time():
    repo = fixed_repo()
    event_time = datetime(2024, 1, 1, 12, 0)
    shipment = repo.create(payload(datetime="2024-01-01T12:00:00"))
    assert shipment.timestamp == event_time
    assert shipment.created_at == FIXED_NOW


def test_seeded_store_starts_counter_at_two():
    repo = fixed_repo(seed=True)
    assert [s.id for s in repo.list()] == [1]
    assert repo.get(1).nama == "Halim"
    assert repo.create(payload()).id == 2


def test_ids_never_reused_after_delete():
    repo = fixed_repo()
    first = repo.create(payload())
    second = repo.create(payload())
    assert repo.delete(second.id) is True
    third = repo.create(payload())
    assert third.id == 3
    assert [s.id for s in repo.list()] == [first.id, third.id]


def test_delete_missing_returns_false():
    repo = fixed_repo()
    assert repo.delete(42) is False


def test_get_missing_returns_none():
    assert fixed_repo().get(1) is None


def test_update_preserves_identity_and_creation_time():
    times = iter([FIXED_NOW, datetime(2030, 1, 1, tzinfo=timezone.utc)])
    repo = InMemoryShipmentRepository(clock=lambda: next(times))
    created = repo.create(payload(datetime="2024-01-01T12:00:00"))
    updated = repo.update(created.id, payload(nama="Baru", beratItem=0))
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.timestamp == created.timestamp
    assert updated.nama == "Baru"
    assert updated.berat_item == 0


def test_update_missing_returns_none():
    assert fixed_repo().update(7, payload()) is None


def test_returned_records_are_copies():
    repo = fixed_repo()
    created = repo.create(payload())
    created.nama = "changed"
    listed = repo.list()
    listed[0].nama = "changed again"
    assert repo.get(created.id).nama == "Halim"


def test_concurrent_creates_get_distinct_ids():
    repo = InMemoryShipmentRepository()
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: repo.create(payload()).id, range(200)))
    assert sorted(ids) == list(range(1, 201))
    assert [s.id for s in repo.list()] == sorted(ids)


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader():
        with lock.read_locked():
            entered.set()

    with lock.read_locked():
        thread = threading.Thread(target=reader)
        thread.start()
        assert entered.wait(2)
    thread.join(2)


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    acquired = threading.Event()

    def writer():
        with lock.write_locked():
            acquired.set()

    lock.acquire_read()
    thread = threading.Thread(target=writer)
    thread.start()
    assert not acquired.wait(0.1)
    lock.release_read()
    assert acquired.wait(2)
    thread.join(2)


def test_reader_waits_for_writer():
    lock = ReadWriteLock()
    acquired = threading.Event()

    def reader():
        with lock.read_locked():
            acquired.set()

    lock.acquire_write()
    thread = threading.Thread(target=reader)
    thread.start()
    assert not acquired.wait(0.1)
    lock.release_write()
    assert acquired.wait(2)
    thread.join(2)
