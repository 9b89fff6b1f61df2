import uuid

from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class InventoryImage(Base, TimestampMixin):
    __tablename__ = "inventory_image"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    url = Column(String(500), nullable=False)
    id_inventory = Column(Uuid, ForeignKey("inventory.id"), nullable=False, index=True)

    inventory = relationship("Inventory", back_populates="images")
