"""
Inventory operations: records, their images in object storage and their change log.

Every mutating operation runs in a single database transaction. Object
storage is outside that transaction, so it is kept consistent by ordering:

- files uploaded during a request are deleted again if the commit fails;
- blobs of removed images are deleted only after the commit succeeded.
"""
import logging
import os
import time
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from crud.kandang import get_kandang
from crud.log_inventory import log_change, IMAGE_FIELD, DELETED_FIELD
from crud.users import get_user
from exceptions import ConflictError, NotFoundError, ValidationError
from models.inventory import Inventory, InventoryStatus
from models.inventory_image import InventoryImage
from schemas.inventory import InventoryCreate, InventoryUpdate
from utils import Page, paginate
from utils.space_storage import SpaceStorage, file_key_from_url

logger = logging.getLogger(__name__)

IMAGE_CATEGORY = "Inventory"
TRACKED_FIELDS = ("name", "stock", "jenis")

# (original filename, file content)
UploadedFile = Tuple[str, bytes]


def build_file_name(original_name: str) -> str:
    """Storage name for an upload, disambiguated by the upload time in milliseconds."""
    return f"{IMAGE_CATEGORY}-{int(time.time() * 1000)}-{os.path.basename(original_name.strip())}"


def _upload_files(storage: SpaceStorage, files: Iterable[UploadedFile], uploaded: List[str]) -> None:
    # Appends to ``uploaded`` as it goes so the caller can clean up after a partial failure
    for original_name, content in files:
        uploaded.append(storage.upload_file_to_space(content, build_file_name(original_name), IMAGE_CATEGORY))


def _discard_uploads(storage: SpaceStorage, urls: Iterable[str]) -> None:
    for url in urls:
        try:
            storage.delete_file_from_space(file_key_from_url(url), IMAGE_CATEGORY)
        except Exception:
            logger.exception(f"Could not remove orphaned upload {url}")


def _parse_image_ids(deleted_images_id: Optional[str]) -> List[UUID]:
    ids = []
    for token in (deleted_images_id or "").split(","):
        token = token.strip()
        if not token:
            continue
        try:
            ids.append(UUID(token))
        except ValueError:
            logger.info(f"Ignoring malformed image id '{token}'")
    return ids


def get_inventory(db: Session, inventory_id: UUID) -> Optional[Inventory]:
    """Fetch one item, soft-deleted items included."""
    return db.query(Inventory).filter(Inventory.id == inventory_id).first()


def get_image_urls(db: Session, inventory_ids: Sequence[UUID]) -> Dict[UUID, List[str]]:
    """Image urls keyed by the inventory they belong to."""
    urls = defaultdict(list)
    if not inventory_ids:
        return urls
    images = (
        db.query(InventoryImage)
        .filter(InventoryImage.id_inventory.in_(inventory_ids))
        .order_by(InventoryImage.created_at.asc())
        .all()
    )
    for image in images:
        urls[image.id_inventory].append(image.url)
    return urls


def get_inventory_by_kandang(
    db: Session,
    kandang_id: UUID,
    name: Optional[str] = None,
    jenis: Optional[str] = None,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[Page, Dict[UUID, List[str]]]:
    """Page of active items in a kandang plus the image urls of each item on the page.

    Items are ordered by name only when neither filter is given; filtered
    results come back in whatever order the database returns them. A missing
    or soft-deleted kandang yields an empty page.
    """
    if get_kandang(db, kandang_id) is None:
        return Page([], 0, 0), {}

    query = db.query(Inventory).filter(
        Inventory.id_kandang == kandang_id,
        Inventory.status == InventoryStatus.ACTIVE,
    )
    if name:
        query = query.filter(Inventory.name.contains(name, autoescape=True))
    if jenis:
        query = query.filter(Inventory.jenis.contains(jenis, autoescape=True))
    if not name and not jenis:
        query = query.order_by(Inventory.name.asc())

    result = paginate(query, page, page_size)
    return result, get_image_urls(db, [doc.id for doc in result.docs])


def create_inventory(db: Session, storage: SpaceStorage, item: InventoryCreate, files: Sequence[UploadedFile]) -> Inventory:
    if not files:
        raise ValidationError("No file uploaded")
    if get_kandang(db, item.id_kandang) is None:
        raise NotFoundError("Kandang not found")

    db_item = Inventory(**item.model_dump())
    db.add(db_item)
    uploaded = []
    try:
        db.flush()
        _upload_files(storage, files, uploaded)
        for url in uploaded:
            db.add(InventoryImage(url=url, id_inventory=db_item.id))
        db.commit()
    except Exception:
        db.rollback()
        _discard_uploads(storage, uploaded)
        raise
    db.refresh(db_item)
    return db_item


def update_inventory(
    db: Session,
    storage: SpaceStorage,
    inventory_id: UUID,
    changes: InventoryUpdate,
    actor_id: UUID,
    deleted_images_id: Optional[str] = None,
    files: Sequence[UploadedFile] = (),
) -> Inventory:
    """Apply field changes, image removals and new images as one unit.

    Each changed tracked field gets its own log entry, written before the
    field is overwritten. Moving the item to another kandang is not logged.
    Image ids that do not belong to this item are skipped without error.
    """
    db_item = get_inventory(db, inventory_id)
    if db_item is None:
        raise NotFoundError("Inventory not found")
    actor = get_user(db, actor_id)
    if actor is None:
        raise NotFoundError("User not found")

    uploaded = []
    removed_keys = []
    try:
        for field in TRACKED_FIELDS:
            new_value = getattr(changes, field)
            old_value = getattr(db_item, field)
            if new_value is not None and new_value != old_value:
                log_change(db, db_item.id, actor, field, old_value, new_value)
                setattr(db_item, field, new_value)

        if changes.id_kandang is not None and changes.id_kandang != db_item.id_kandang:
            if get_kandang(db, changes.id_kandang) is None:
                raise NotFoundError("Kandang not found")
            db_item.id_kandang = changes.id_kandang

        image_ids = _parse_image_ids(deleted_images_id)
        if image_ids:
            images = db.query(InventoryImage).filter(
                InventoryImage.id.in_(image_ids),
                InventoryImage.id_inventory == db_item.id,
            ).all()
            for image in images:
                removed_keys.append(file_key_from_url(image.url))
                db.delete(image)

        if files:
            _upload_files(storage, files, uploaded)
            for url in uploaded:
                db.add(InventoryImage(url=url, id_inventory=db_item.id))
            log_change(db, db_item.id, actor, IMAGE_FIELD)

        db.commit()
    except StaleDataError:
        db.rollback()
        _discard_uploads(storage, uploaded)
        raise ConflictError("Inventory was modified concurrently")
    except Exception:
        db.rollback()
        _discard_uploads(storage, uploaded)
        raise

    for key in removed_keys:
        try:
            storage.delete_file_from_space(key, IMAGE_CATEGORY)
        except Exception:
            # The image row is already gone; only the blob is left behind.
            logger.exception(f"Could not delete blob {key} of inventory {inventory_id}")

    db.refresh(db_item)
    return db_item


def delete_inventory(db: Session, inventory_id: UUID, actor_id: UUID) -> Inventory:
    db_item = get_inventory(db, inventory_id)
    if db_item is None or db_item.is_deleted:
        raise NotFoundError("Inventory not found")
    actor = get_user(db, actor_id)
    if actor is None:
        raise NotFoundError("User not found")

    try:
        db_item.status = InventoryStatus.DELETED
        db.flush()
        log_change(db, db_item.id, actor, DELETED_FIELD, old_value=db_item.name)
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError("Inventory was modified concurrently")
    except Exception:
        db.rollback()
        raise
    return db_item
