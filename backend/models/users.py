import uuid

from database import Base
from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship
from models.audit_mixin import TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = 'user'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    nama = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=True)
    role = Column(String, nullable=False, default="peternak")

    kandang = relationship("Kandang", back_populates="pemilik")

    def __repr__(self):
        return f"<User(id={self.id}, nama={self.nama}, role={self.role})>"
