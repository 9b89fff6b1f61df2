from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session
from models.kandang import Kandang
from schemas.kandang import KandangCreate, KandangUpdate
from utils import Page, paginate


def get_kandang(db: Session, kandang_id: UUID) -> Optional[Kandang]:
    return db.query(Kandang).filter(Kandang.id == kandang_id, Kandang.is_deleted == False).first()


def get_owned_kandang(db: Session, kandang_id: UUID, owner_id: UUID) -> Optional[Kandang]:
    return db.query(Kandang).filter(
        Kandang.id == kandang_id,
        Kandang.id_pemilik == owner_id,
        Kandang.is_deleted == False,
    ).first()


def get_kandang_list(db: Session, owner_id: UUID, name: Optional[str] = None, page: int = 1, page_size: int = 10) -> Page:
    query = db.query(Kandang).filter(Kandang.id_pemilik == owner_id, Kandang.is_deleted == False)
    if name:
        query = query.filter(Kandang.nama.contains(name, autoescape=True))
    return paginate(query.order_by(Kandang.nama.asc()), page, page_size)


def create_kandang(db: Session, kandang: KandangCreate, owner_id: UUID) -> Kandang:
    db_kandang = Kandang(**kandang.model_dump(), id_pemilik=owner_id)
    db.add(db_kandang)
    db.commit()
    db.refresh(db_kandang)
    return db_kandang


def update_kandang(db: Session, kandang_id: UUID, kandang: KandangUpdate, owner_id: UUID) -> Optional[Kandang]:
    db_kandang = get_owned_kandang(db, kandang_id, owner_id)
    if db_kandang:
        update_data = kandang.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_kandang, key, value)
        db.commit()
        db.refresh(db_kandang)
    return db_kandang


def delete_kandang(db: Session, kandang_id: UUID, owner_id: UUID) -> bool:
    db_kandang = get_owned_kandang(db, kandang_id, owner_id)
    if db_kandang:
        db_kandang.is_deleted = True
        db.commit()
        return True
    return False
