"""Pydantic schemas for the activity feed."""

from datetime import datetime

from pydantic import BaseModel

from mentalbase.db.enums import ActivityType


class ActivityRead(BaseModel):
    id: str
    type: ActivityType
    description: str
    timestamp: datetime
    icon: str
    icon_color: str
    background_color: str
