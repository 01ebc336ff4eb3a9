"""
Test configuration and fixtures.

Provides:
- Fresh in-memory SQLite schema per test (shared StaticPool connection)
- Users, relationships and client records via the `make` factory
- HTTPX AsyncClients authenticated as a given user (cookie + CSRF header)
"""
import os
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, Generator

# Must be set before the app (and its settings) are imported.
# Worker-thread fetches share the single in-memory connection, so run them
# one at a time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CATEGORY_FETCH_CONCURRENCY"] = "1"
os.environ["ENV"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from mentalbase.core.constants import COOKIE_NAME, CSRF_HEADER, CSRF_HEADER_VALUE
from mentalbase.core.deps import get_db
from mentalbase.core.security import create_session_token
from mentalbase.db.base import Base
from mentalbase.db.enums import TaskPriority, TaskStatus
from mentalbase.db.models import (
    ActionPlan,
    AIAnalysisReport,
    Goal,
    Log,
    MentorClientRelationship,
    Reflection,
    Task,
    User,
)
from mentalbase.db.session import SessionLocal, engine
from mentalbase.main import app
from mentalbase.services import relationship_service


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Creates all tables, yields a session, drops everything afterwards.

    Data must be committed: request handlers, worker threads and audit
    writes each use their own session on the same connection.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


class Factory:
    """Creates and commits test rows."""

    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, *, mentor: bool = False, name: str | None = None) -> User:
        suffix = uuid.uuid4().hex[:8]
        return self._save(
            User(
                email=f"{'mentor' if mentor else 'client'}-{suffix}@test.com",
                name=name or f"User {suffix}",
                is_mentor=mentor,
            )
        )

    def relationship(self, mentor: User, client: User, *, accept: bool = True) -> MentorClientRelationship:
        relationship = relationship_service.invite(self.db, mentor, client.email)
        if accept:
            relationship = relationship_service.accept(self.db, relationship.id, client.id)
        return relationship

    def goal(self, user: User, title: str = "Run a 10k", **kwargs) -> Goal:
        return self._save(Goal(user_id=user.id, title=title, **kwargs))

    def task(
        self,
        user: User,
        title: str = "Stretch",
        *,
        priority: TaskPriority = TaskPriority.MEDIUM,
        completed: bool = False,
        **kwargs,
    ) -> Task:
        if completed:
            kwargs.setdefault("completed_at", datetime.now(timezone.utc))
        return self._save(
            Task(
                user_id=user.id,
                title=title,
                priority=priority.value,
                status=(TaskStatus.COMPLETED if completed else TaskStatus.PENDING).value,
                **kwargs,
            )
        )

    def log(self, user: User, content: str = "Felt focused today", **kwargs) -> Log:
        return self._save(Log(user_id=user.id, content=content, **kwargs))

    def reflection(self, user: User, period: str = "weekly", **kwargs) -> Reflection:
        now = datetime.now(timezone.utc)
        kwargs.setdefault("start_date", now)
        kwargs.setdefault("end_date", now)
        return self._save(
            Reflection(user_id=user.id, period=period, content="Good week", **kwargs)
        )

    def action_plan(self, user: User, title: str = "Sleep earlier", **kwargs) -> ActionPlan:
        return self._save(
            ActionPlan(
                user_id=user.id,
                title=title,
                description="Lights out by 23:00",
                action_items=["Set alarm"],
                **kwargs,
            )
        )

    def report(self, user: User, confidence: float = 0.855, **kwargs) -> AIAnalysisReport:
        kwargs.setdefault("insights", ["Mornings are productive"])
        kwargs.setdefault(
            "recommendations",
            [{"priority": 2, "text": "Plan tomorrow"}, {"priority": 1, "text": "Rest"}],
        )
        return self._save(AIAnalysisReport(user_id=user.id, confidence=confidence, **kwargs))


@pytest.fixture(scope="function")
def make(db: Session) -> Factory:
    return Factory(db)


@pytest.fixture(scope="function")
def mentor(make: Factory) -> User:
    return make.user(mentor=True, name="Mentor Mori")


@pytest.fixture(scope="function")
def client_user(make: Factory) -> User:
    return make.user(name="Client Chen")


@pytest.fixture(scope="function")
def relationship(make: Factory, mentor: User, client_user: User) -> MentorClientRelationship:
    """Active relationship with default (all shared) permissions."""
    return make.relationship(mentor, client_user)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client_for(db: Session) -> AsyncGenerator[Callable[[User | None], AsyncClient], None]:
    """
    Returns a function that builds an AsyncClient authenticated as `user`
    (or unauthenticated for None), with the CSRF header set.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    clients: list[AsyncClient] = []

    def _make(user: User | None) -> AsyncClient:
        cookies = {}
        if user is not None:
            cookies[COOKIE_NAME] = create_session_token(user.id, user.token_version)
        c = AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            cookies=cookies,
            headers={CSRF_HEADER: CSRF_HEADER_VALUE},
        )
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def mentor_client(client_for, mentor: User) -> AsyncClient:
    return client_for(mentor)


@pytest.fixture(scope="function")
def authed_client(client_for, client_user: User) -> AsyncClient:
    """AsyncClient authenticated as the client (data owner)."""
    return client_for(client_user)
