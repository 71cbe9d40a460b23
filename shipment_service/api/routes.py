from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from shipment_service.application.repository import ShipmentRepository
from shipment_service.application.service import ShipmentService
from shipment_service.application.schemas import ShipmentCreate, ShipmentDeleted, ShipmentRead

router = APIRouter(tags=["shipments"])

def get_repository(request: Request) -> ShipmentRepository:
    return request.app.state.repository

def get_service(repository: ShipmentRepository = Depends(get_repository)) -> ShipmentService:
    return ShipmentService(repository)

# Largest id a signed 64-bit column can hold
MAX_ID = 2**63 - 1

def parse_id(raw: str) -> int:
    """Positive decimal id within 64-bit range; anything else is a client error."""
    if not (raw.isascii() and raw.isdigit()):
        raise HTTPException(status_code=400, detail="invalid id")
    value = int(raw)
    if value <= 0 or value > MAX_ID:
        raise HTTPException(status_code=400, detail="invalid id")
    return value

def shipment_id_path(shipment_id: str) -> int:
    return parse_id(shipment_id)

@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root():
    return "OK"

@router.get("/shipment", response_model=list[ShipmentRead])
def list_shipments(service: ShipmentService = Depends(get_service)):
    return service.list()

@router.get("/shipment/{shipment_id}", response_model=ShipmentRead)
def get_shipment(shipment_id: int = Depends(shipment_id_path), service: ShipmentService = Depends(get_service)):
    return service.get(shipment_id)

@router.post("/shipments", response_model=ShipmentRead, status_code=201)
def create_shipment(payload: ShipmentCreate, service: ShipmentService = Depends(get_service)):
    return service.create(payload)

@router.put("/shipment/{shipment_id}", response_model=ShipmentRead)
def update_shipment(
    payload: ShipmentCreate,
    shipment_id: int = Depends(shipment_id_path),
    service: ShipmentService = Depends(get_service),
):
    return service.update(shipment_id, payload)

@router.delete("/shipment/{shipment_id}", response_model=ShipmentDeleted)
def delete_shipment(shipment_id: int = Depends(shipment_id_path), service: ShipmentService = Depends(get_service)):
    return {"deleted_id": service.delete(shipment_id)}
