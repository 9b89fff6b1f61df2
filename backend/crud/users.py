from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session
from models.users import User


def get_user(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()
