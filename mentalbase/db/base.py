import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Uuid
from sqlalchemy.orm import DeclarativeBase

from mentalbase.db.types import UTCDateTime


def utcnow() -> datetime:
    """Timezone-aware now, used as the python-side default for timestamps."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    type_annotation_map = {
        datetime: UTCDateTime(),
        uuid.UUID: Uuid(as_uuid=True),
        dict: JSON,
        list: JSON,
    }
