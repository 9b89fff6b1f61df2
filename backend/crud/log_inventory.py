from typing import Any, List
from uuid import UUID

from sqlalchemy.orm import Session
from models.log_inventory import LogInventory
from models.users import User
from schemas.log_inventory import LogInventoryCreate

IMAGE_FIELD = "image"
DELETED_FIELD = "deleted"


def describe_change(entry: LogInventoryCreate) -> str:
    """Render the sentence stored in ``keterangan`` for a structured change."""
    if entry.field == IMAGE_FIELD:
        return f"{entry.actor_name} changed image"
    actor = f"{entry.actor_name} (as {entry.actor_role})"
    if entry.field == DELETED_FIELD:
        return f"{actor} deleted {entry.old_value}"
    return f"{actor} changed {entry.field} from {entry.old_value} to {entry.new_value}"


def create_log_inventory(db: Session, entry: LogInventoryCreate) -> LogInventory:
    # Added to the caller's transaction; committing is the caller's job.
    db_log = LogInventory(
        id_inventory=entry.id_inventory,
        keterangan=describe_change(entry),
        field=entry.field,
        old_value=entry.old_value,
        new_value=entry.new_value,
        created_by=entry.actor_id,
    )
    db.add(db_log)
    return db_log


def log_change(db: Session, inventory_id: UUID, actor: User, field: str, old_value: Any = None, new_value: Any = None) -> LogInventory:
    entry = LogInventoryCreate(
        id_inventory=inventory_id,
        field=field,
        old_value=None if old_value is None else str(old_value),
        new_value=None if new_value is None else str(new_value),
        actor_id=actor.id,
        actor_name=actor.nama,
        actor_role=actor.role,
    )
    return create_log_inventory(db, entry)


def get_inventory_logs(db: Session, inventory_id: UUID) -> List[LogInventory]:
    return (
        db.query(LogInventory)
        .filter(LogInventory.id_inventory == inventory_id)
        .order_by(LogInventory.created_at.desc())
        .all()
    )
