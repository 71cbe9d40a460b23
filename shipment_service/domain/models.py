from datetime import datetime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import DateTime, Integer, String, func

class Base(DeclarativeBase):
    pass

class Shipment(Base):
    __tablename__ = "shipments"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nama: Mapped[str] = mapped_column(String(200))
    pengirim: Mapped[str] = mapped_column(String(200))
    nama_penerima: Mapped[str] = mapped_column(String(200))
    alamat_penerima: Mapped[str] = mapped_column(String(500))
    nama_item: Mapped[str] = mapped_column(String(200))
    berat_item: Mapped[int] = mapped_column(Integer, default=0)
    # Event time supplied by the client; the database fills it in when omitted
    timestamp: Mapped[datetime] = mapped_column(
        "timestamp", DateTime(timezone=True), server_default=func.now()
    )
    # Set once on insert, never updated
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Shipment id={self.id} nama={self.nama!r}>"

# Fields a client may set; id and created_at are always store-assigned
EDITABLE_FIELDS = (
    "nama",
    "pengirim",
    "nama_penerima",
    "alamat_penerima",
    "nama_item",
    "berat_item",
    "timestamp",
)

def copy_shipment(source: Shipment) -> Shipment:
    """Detached copy of a shipment, used to hand out in-memory records."""
    return Shipment(
        id=source.id,
        created_at=source.created_at,
        **{name: getattr(source, name) for name in EDITABLE_FIELDS},
    )
