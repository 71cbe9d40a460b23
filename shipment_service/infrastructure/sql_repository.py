from typing import List, Optional
from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from shipment_service.application.schemas import ShipmentCreate
from shipment_service.domain.models import Shipment
from .db import ping

class SqlShipmentRepository:
    """Shipments stored in the relational database through the ORM."""

    mode = "database"

    def __init__(self, engine: Engine, session_factory: sessionmaker):
        self.engine = engine
        self.session_factory = session_factory

    def list(self) -> List[Shipment]:
        with self.session_factory() as db:
            return list(db.scalars(select(Shipment).order_by(Shipment.id)))

    def get(self, shipment_id: int) -> Optional[Shipment]:
        with self.session_factory() as db:
            return db.get(Shipment, shipment_id)

    def create(self, data: ShipmentCreate) -> Shipment:
        payload = data.model_dump()
        # Leave the column out so the server default (NOW()) applies
        if payload.get("timestamp") is None:
            payload.pop("timestamp", None)
        obj = Shipment(**payload)
        with self.session_factory() as db:
            db.add(obj)
            db.commit()
            db.refresh(obj)
        return obj

    def update(self, shipment_id: int, data: ShipmentCreate) -> Optional[Shipment]:
        with self.session_factory() as db:
            shipment = db.get(Shipment, shipment_id)
            if shipment is None:
                return None
            for key, value in data.model_dump().items():
                if key == "timestamp" and value is None:
                    continue
                setattr(shipment, key, value)
            db.commit()
            db.refresh(shipment)
            return shipment

    def delete(self, shipment_id: int) -> bool:
        with self.session_factory() as db:
            result = db.execute(delete(Shipment).where(Shipment.id == shipment_id))
            db.commit()
            return result.rowcount == 1

    def check(self) -> None:
        ping(self.engine)
