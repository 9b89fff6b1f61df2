from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from database import get_db
from schemas.kandang import Kandang, KandangCreate, KandangUpdate, PaginatedKandangResponse
from crud import kandang as crud_kandang
from utils.auth_utils import get_current_user, get_user_id

router = APIRouter(prefix="/kandang", tags=["Kandang"])
logger = logging.getLogger("kandang")


def _internal_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error"},
    )


@router.post("/", response_model=Kandang, status_code=status.HTTP_201_CREATED)
def create_kandang(
    kandang: KandangCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """Create a new kandang owned by the current user."""
    owner_id = get_user_id(user)
    try:
        new_kandang = crud_kandang.create_kandang(db=db, kandang=kandang, owner_id=owner_id)
        logger.info(f"Kandang '{new_kandang.nama}' ({new_kandang.id}) created by user {owner_id}")
        return new_kandang
    except Exception as e:
        logger.exception(f"Error creating kandang '{kandang.nama}': {e}")
        return _internal_error()


@router.get("/", response_model=PaginatedKandangResponse)
def read_kandang_list(
    name: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """Retrieve the current user's kandang."""
    owner_id = get_user_id(user)
    try:
        result = crud_kandang.get_kandang_list(db=db, owner_id=owner_id, name=name, page=page, page_size=page_size)
        return PaginatedKandangResponse(data=result.docs, total_count=result.total, total_pages=result.pages)
    except Exception as e:
        logger.exception(f"Error listing kandang of user {owner_id}: {e}")
        return _internal_error()


@router.get("/{kandang_id}", response_model=Kandang)
def read_kandang(kandang_id: UUID, db: Session = Depends(get_db)):
    """Retrieve a single kandang by ID."""
    try:
        db_kandang = crud_kandang.get_kandang(db=db, kandang_id=kandang_id)
        if db_kandang is None:
            raise HTTPException(status_code=404, detail="Kandang not found")
        return db_kandang
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error fetching kandang {kandang_id}: {e}")
        return _internal_error()


@router.patch("/{kandang_id}", response_model=Kandang)
def update_kandang(
    kandang_id: UUID,
    kandang: KandangUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """Update a kandang owned by the current user."""
    owner_id = get_user_id(user)
    try:
        updated_kandang = crud_kandang.update_kandang(db=db, kandang_id=kandang_id, kandang=kandang, owner_id=owner_id)
        if updated_kandang is None:
            raise HTTPException(status_code=404, detail="Kandang not found")
        logger.info(f"Kandang {kandang_id} updated by user {owner_id}")
        return updated_kandang
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error updating kandang {kandang_id}: {e}")
        return _internal_error()


@router.delete("/{kandang_id}", status_code=status.HTTP_200_OK)
def delete_kandang(
    kandang_id: UUID,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """Soft delete a kandang owned by the current user."""
    owner_id = get_user_id(user)
    try:
        if not crud_kandang.delete_kandang(db=db, kandang_id=kandang_id, owner_id=owner_id):
            raise HTTPException(status_code=404, detail="Kandang not found")
        logger.info(f"Kandang {kandang_id} deleted by user {owner_id}")
        return {"message": "Kandang deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error deleting kandang {kandang_id}: {e}")
        return _internal_error()
