from fastapi import HTTPException
from .repository import ShipmentRepository
from .schemas import ShipmentCreate

NOT_FOUND = "shipment not found"

class ShipmentService:
    def __init__(self, repository: ShipmentRepository):
        self.repository = repository

    def list(self):
        return self.repository.list()

    def get(self, shipment_id: int):
        shipment = self.repository.get(shipment_id)
        if shipment is None:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return shipment

    def create(self, data: ShipmentCreate):
        return self.repository.create(data)

    def update(self, shipment_id: int, data: ShipmentCreate):
        shipment = self.repository.update(shipment_id, data)
        if shipment is None:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return shipment

    def delete(self, shipment_id: int) -> int:
        if not self.repository.delete(shipment_id):
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        return shipment_id
