"""Structured logging helpers (PII-safe)."""

import logging
from typing import Any


def configure_logging(level: str) -> None:
    """Configure root logging once at application start."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_log_context(
    *,
    user_id: str | None = None,
    mentor_id: str | None = None,
    client_id: str | None = None,
    relationship_id: str | None = None,
    category: str | None = None,
    report_id: str | None = None,
    route: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict containing ids only, never record content."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if mentor_id:
        context["mentor_id"] = mentor_id
    if client_id:
        context["client_id"] = client_id
    if relationship_id:
        context["relationship_id"] = relationship_id
    if category:
        context["category"] = category
    if report_id:
        context["report_id"] = report_id
    if route:
        context["route"] = route
    return context
