"""API routers."""

from mentalbase.routers.dashboard import router as dashboard_router
from mentalbase.routers.data_access import router as data_access_router
from mentalbase.routers.goals import router as goals_router
from mentalbase.routers.mentor import router as mentor_router
from mentalbase.routers.notes import router as notes_router
from mentalbase.routers.records import router as records_router
from mentalbase.routers.relationships import router as relationships_router
from mentalbase.routers.reports import router as reports_router
from mentalbase.routers.tasks import router as tasks_router

__all__ = [
    "dashboard_router",
    "data_access_router",
    "goals_router",
    "mentor_router",
    "notes_router",
    "records_router",
    "relationships_router",
    "reports_router",
    "tasks_router",
]
