import uuid

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import now_local


class LogInventory(Base):
    """Append-only history entry for an inventory item.

    ``keterangan`` is the human readable sentence shown to farm staff; the
    ``field``/``old_value``/``new_value`` columns carry the same change in a
    structured form. Rows are never updated or deleted.
    """
    __tablename__ = "log_inventory"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    id_inventory = Column(Uuid, ForeignKey("inventory.id"), nullable=False, index=True)
    keterangan = Column(Text, nullable=False)
    field = Column(String, nullable=True) # "name", "stock", "jenis", "image", "deleted"
    old_value = Column(String, nullable=True)
    new_value = Column(String, nullable=True)
    created_by = Column(Uuid, ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_local, nullable=False)

    inventory = relationship("Inventory", back_populates="logs")
    user = relationship("User")
