from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from uuid import UUID


class LogInventoryCreate(BaseModel):
    """Structured description of a single change to an inventory item."""
    id_inventory: UUID
    field: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    actor_id: UUID
    actor_name: str
    actor_role: Optional[str] = None


class LogInventory(BaseModel):
    id: UUID
    id_inventory: UUID
    keterangan: str
    field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    created_by: UUID
    created_at: datetime

    class Config:
        from_attributes = True
