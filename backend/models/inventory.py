import enum
import uuid

from sqlalchemy import Column, Integer, String, ForeignKey, Enum, Uuid
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class InventoryStatus(enum.Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class Inventory(Base, TimestampMixin):
    __tablename__ = "inventory"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    jenis = Column(String, nullable=False) # e.g., "Pakan", "Obat", "Vitamin"
    id_kandang = Column(Uuid, ForeignKey("kandang.id"), nullable=False, index=True)
    status = Column(Enum(InventoryStatus, name="inventory_status"), default=InventoryStatus.ACTIVE, nullable=False)
    version = Column(Integer, nullable=False)

    # Relationships
    kandang = relationship("Kandang", back_populates="inventories")
    images = relationship("InventoryImage", back_populates="inventory", order_by="InventoryImage.created_at")
    logs = relationship("LogInventory", back_populates="inventory")

    # Concurrent read-modify-write on the same row fails with StaleDataError
    __mapper_args__ = {"version_id_col": version}

    @property
    def is_deleted(self) -> bool:
        return self.status == InventoryStatus.DELETED
