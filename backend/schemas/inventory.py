from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class InventoryBase(BaseModel):
    name: str
    stock: int
    jenis: str # e.g., "Pakan", "Obat", "Vitamin"


class InventoryCreate(InventoryBase):
    id_kandang: UUID


class InventoryUpdate(BaseModel):
    # Only supplied fields are compared against the stored record
    name: Optional[str] = None
    stock: Optional[int] = None
    jenis: Optional[str] = None
    id_kandang: Optional[UUID] = None


class Inventory(InventoryBase):
    id: UUID
    id_kandang: UUID
    is_deleted: bool = Field(serialization_alias="isDeleted")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class InventoryPage(BaseModel):
    total_count: int = Field(serialization_alias="totalCount")
    total_pages: int = Field(serialization_alias="totalPages")
    data: List[dict]
