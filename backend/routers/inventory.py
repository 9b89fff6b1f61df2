from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Form
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from database import get_db
from exceptions import ConflictError, NotFoundError, ValidationError
from schemas.inventory import Inventory, InventoryCreate, InventoryUpdate, InventoryPage
from schemas.log_inventory import LogInventory
from utils.auth_utils import get_current_user, get_user_id, get_user_identifier
from utils.space_storage import SpaceStorage, get_storage
from crud import inventory as crud_inventory
from crud import log_inventory as crud_log_inventory

router = APIRouter(prefix="/inventory", tags=["Inventory"])
logger = logging.getLogger("inventory")


def _respond(success: bool, message: str, status_code: int = status.HTTP_200_OK, **payload) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": success, "message": message, **payload})


def _internal_error() -> JSONResponse:
    return _respond(False, "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def _serialize(db_item, image_urls: List[str]) -> dict:
    data = Inventory.model_validate(db_item).model_dump(mode="json", by_alias=True)
    data["images"] = image_urls
    return data


def _read_files(files: Optional[List[UploadFile]]) -> list:
    return [(file.filename, file.file.read()) for file in files or [] if file.filename]


@router.post("/")
def create_inventory(
    name: str = Form(...),
    stock: int = Form(...),
    jenis: str = Form(...),
    id_kandang: UUID = Form(...),
    files: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    storage: SpaceStorage = Depends(get_storage),
    user: dict = Depends(get_current_user),
):
    """Create an inventory item together with its initial images."""
    try:
        item = InventoryCreate(name=name, stock=stock, jenis=jenis, id_kandang=id_kandang)
        new_item = crud_inventory.create_inventory(db=db, storage=storage, item=item, files=_read_files(files))
        logger.info(f"Inventory '{new_item.name}' ({new_item.id}) created in kandang {id_kandang} by user {get_user_identifier(user)}")
        return _respond(True, "Inventory created successfully")
    except ValidationError as e:
        return _respond(False, e.message, status.HTTP_400_BAD_REQUEST)
    except NotFoundError as e:
        return _respond(False, e.message, status.HTTP_404_NOT_FOUND)
    except Exception as e:
        logger.exception(f"Error creating inventory '{name}': {e}")
        return _internal_error()


@router.get("/kandang/{kandang_id}")
def read_inventory_by_kandang(
    kandang_id: UUID,
    name: Optional[str] = None,
    jenis: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    db: Session = Depends(get_db),
):
    """List active inventory of a kandang, optionally filtered by name and jenis."""
    try:
        result, image_urls = crud_inventory.get_inventory_by_kandang(
            db=db, kandang_id=kandang_id, name=name, jenis=jenis, page=page, page_size=page_size
        )
        response = InventoryPage(
            total_count=result.total,
            total_pages=result.pages,
            data=[_serialize(doc, image_urls.get(doc.id, [])) for doc in result.docs],
        ).model_dump(by_alias=True)

        if not result.docs:
            return _respond(False, "Inventory not found", result=response)
        return _respond(True, "Inventory retrieved successfully", result=response)
    except Exception as e:
        logger.exception(f"Error listing inventory for kandang {kandang_id}: {e}")
        return _internal_error()


@router.get("/{inventory_id}")
def read_inventory(inventory_id: UUID, db: Session = Depends(get_db)):
    """Retrieve a single inventory item, soft-deleted ones included."""
    try:
        db_item = crud_inventory.get_inventory(db=db, inventory_id=inventory_id)
        if db_item is None:
            return _respond(False, "Inventory not found")
        image_urls = crud_inventory.get_image_urls(db, [db_item.id])
        return _respond(True, "Inventory retrieved successfully", data=_serialize(db_item, image_urls.get(db_item.id, [])))
    except Exception as e:
        logger.exception(f"Error fetching inventory {inventory_id}: {e}")
        return _internal_error()


@router.get("/{inventory_id}/logs", response_model=List[LogInventory])
def read_inventory_logs(inventory_id: UUID, db: Session = Depends(get_db)):
    """Retrieve the change history of an inventory item, newest first."""
    try:
        db_item = crud_inventory.get_inventory(db=db, inventory_id=inventory_id)
        if db_item is None:
            raise HTTPException(status_code=404, detail="Inventory not found")
        return crud_log_inventory.get_inventory_logs(db=db, inventory_id=inventory_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error fetching logs of inventory {inventory_id}: {e}")
        return _internal_error()


@router.put("/{inventory_id}")
def update_inventory(
    inventory_id: UUID,
    name: Optional[str] = Form(None),
    stock: Optional[int] = Form(None),
    jenis: Optional[str] = Form(None),
    id_kandang: Optional[UUID] = Form(None),
    deleted_images_id: Optional[str] = Form(None, alias="deletedImagesId"),
    files: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    storage: SpaceStorage = Depends(get_storage),
    user: dict = Depends(get_current_user),
):
    """Update fields, remove listed images and attach new ones."""
    actor_id = get_user_id(user)
    try:
        changes = InventoryUpdate(name=name or None, stock=stock, jenis=jenis or None, id_kandang=id_kandang)
        crud_inventory.update_inventory(
            db=db,
            storage=storage,
            inventory_id=inventory_id,
            changes=changes,
            actor_id=actor_id,
            deleted_images_id=deleted_images_id,
            files=_read_files(files),
        )
        logger.info(f"Inventory {inventory_id} updated by user {actor_id}")
        return _respond(True, "Inventory updated successfully")
    except NotFoundError as e:
        return _respond(False, e.message, status.HTTP_404_NOT_FOUND)
    except ConflictError as e:
        return _respond(False, e.message, status.HTTP_409_CONFLICT)
    except Exception as e:
        logger.exception(f"Error updating inventory {inventory_id}: {e}")
        return _internal_error()


@router.delete("/{inventory_id}")
def delete_inventory(
    inventory_id: UUID,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Soft delete an inventory item."""
    actor_id = get_user_id(user)
    try:
        db_item = crud_inventory.delete_inventory(db=db, inventory_id=inventory_id, actor_id=actor_id)
        logger.info(f"Inventory '{db_item.name}' ({inventory_id}) deleted by user {actor_id}")
        return _respond(True, "Inventory deleted successfully")
    except NotFoundError as e:
        return _respond(False, e.message, status.HTTP_404_NOT_FOUND)
    except ConflictError as e:
        return _respond(False, e.message, status.HTTP_409_CONFLICT)
    except Exception as e:
        logger.exception(f"Error deleting inventory {inventory_id}: {e}")
        return _internal_error()
