from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class KandangBase(BaseModel):
    nama: str
    lokasi: str
    longitude: float = Field(ge=-180, le=180)
    latitude: float = Field(ge=-90, le=90)
    jumlah_ayam: int = Field(ge=0)


class KandangCreate(KandangBase):
    pass


class KandangUpdate(BaseModel):
    nama: Optional[str] = None
    lokasi: Optional[str] = None
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    jumlah_ayam: Optional[int] = Field(None, ge=0)


class Kandang(KandangBase):
    id: UUID
    id_pemilik: UUID
    is_deleted: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaginatedKandangResponse(BaseModel):
    data: List[Kandang]
    total_count: int
    total_pages: int
