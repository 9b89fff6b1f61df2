import uuid

from sqlalchemy import Column, Integer, String, Boolean, Float, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class Kandang(Base, TimestampMixin):
    __tablename__ = "kandang"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    nama = Column(String, nullable=False)
    lokasi = Column(String, nullable=False)
    longitude = Column(Float(precision=53), nullable=False)
    latitude = Column(Float(precision=53), nullable=False)
    jumlah_ayam = Column(Integer, nullable=False)
    id_pemilik = Column(Uuid, ForeignKey("user.id"), nullable=False, index=True)
    is_deleted = Column(Boolean, default=False, nullable=False)

    # Relationships
    pemilik = relationship("User", back_populates="kandang")
    inventories = relationship("Inventory", back_populates="kandang")
