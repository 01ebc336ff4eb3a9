"""Client dashboard: compass, today's tasks and recent activity in one call."""

from functools import partial
from uuid import UUID

from sqlalchemy.orm import sessionmaker

from mentalbase.core.async_utils import gather_in_threads, run_async
from mentalbase.core.config import settings
from mentalbase.core.deps import get_session_factory
from mentalbase.schemas.dashboard import DashboardResponse
from mentalbase.services import activity_feed_service, progress_service, task_service
from mentalbase.services.mentor_view_service import CategoryFetchTimeoutError, resolve_timeout


def _in_session(factory: sessionmaker, fn, user_id: UUID):
    with factory() as session:
        return fn(session, user_id)


def get_dashboard(
    user_id: UUID,
    session_factory: sessionmaker | None = None,
    timeout_seconds: float | None = None,
) -> DashboardResponse:
    """
    Gather the three dashboard sections concurrently.

    Raises:
        CategoryFetchTimeoutError: deadline elapsed
    """
    factory = session_factory or get_session_factory()
    calls = {
        "compass_summary": partial(_in_session, factory, progress_service.get_compass_summary, user_id),
        "today_tasks": partial(_in_session, factory, task_service.list_today_tasks, user_id),
        "recent_activities": partial(_in_session, factory, activity_feed_service.build_feed, user_id),
    }
    timeout = resolve_timeout(timeout_seconds)
    try:
        sections = run_async(
            gather_in_threads(calls, max_concurrency=settings.CATEGORY_FETCH_CONCURRENCY),
            timeout=timeout,
        )
    except TimeoutError:
        raise CategoryFetchTimeoutError(f"Dashboard fetch exceeded {timeout:g}s") from None
    return DashboardResponse(**sections)
