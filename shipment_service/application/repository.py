"""
Shipment storage interface.

Both backing stores (relational and in-memory) implement this protocol.
One of them is selected at startup and injected into the request handlers.
"""
from typing import List, Optional, Protocol, runtime_checkable

from shipment_service.domain.models import Shipment
from .schemas import ShipmentCreate


@runtime_checkable
class ShipmentRepository(Protocol):
    """Contract shared by every backing store."""

    #: Short label reported in logs and health output ("database" or "memory")
    mode: str

    def list(self) -> List[Shipment]:
        """All shipments in ascending id order"""
        ...

    def get(self, shipment_id: int) -> Optional[Shipment]:
        """Shipment by id, or None when absent"""
        ...

    def create(self, data: ShipmentCreate) -> Shipment:
        """Store a new shipment and return it with its assigned fields"""
        ...

    def update(self, shipment_id: int, data: ShipmentCreate) -> Optional[Shipment]:
        """Replace a shipment's fields, or return None when absent"""
        ...

    def delete(self, shipment_id: int) -> bool:
        """Remove a shipment; True when a record was removed"""
        ...

    def check(self) -> None:
        """Raise if the store cannot serve requests"""
        ...
