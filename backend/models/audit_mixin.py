from sqlalchemy import Column, DateTime
from datetime import datetime
import os
import pytz

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Jakarta")


def now_local():
    return datetime.now(pytz.timezone(APP_TIMEZONE))


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Soft-delete state is not part of this mixin; each model that supports it
    declares its own flag or lifecycle column.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=now_local, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_local, onupdate=now_local, nullable=False)
