"""CLI tools for Mentalbase administration."""

import click
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from mentalbase.db.base import Base
from mentalbase.db.models import User
from mentalbase.db.session import SessionLocal, engine
from mentalbase.services import audit_service


@click.group()
def cli():
    """Mentalbase CLI tools."""
    pass


@cli.command()
def init_db():
    """
    Create all tables on the configured database.

    Example:
        python -m mentalbase.cli init-db
    """
    Base.metadata.create_all(bind=engine)
    click.echo(f"✓ Tables created: {', '.join(sorted(Base.metadata.tables))}")


@cli.command()
@click.option("--email", required=True, help="User email address")
@click.option("--name", required=True, help="Display name")
@click.option("--mentor", is_flag=True, help="Grant the mentor surface")
def create_user(email: str, name: str, mentor: bool):
    """
    Create a user account. Credentials live with the external auth service.

    Example:
        python -m mentalbase.cli create-user --email "coach@example.com" --name "Coach" --mentor
    """
    db = SessionLocal()
    try:
        email = email.strip().lower()
        existing = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if existing:
            click.echo(f"❌ User already exists: {email}")
            return

        user = User(email=email, name=name.strip(), is_mentor=mentor)
        db.add(user)
        db.commit()

        click.echo(f"✓ Created {'mentor' if mentor else 'client'}: {email}")
        click.echo(f"  ID: {user.id}")
    except SQLAlchemyError as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="User email to revoke sessions for")
def revoke_sessions(email: str):
    """
    Revoke all sessions for a user by bumping their token_version.

    Example:
        python -m mentalbase.cli revoke-sessions --email "user@example.com"
    """
    db = SessionLocal()
    try:
        user = db.execute(
            select(User).where(User.email == email.strip().lower())
        ).scalar_one_or_none()
        if not user:
            click.echo(f"❌ User not found: {email}")
            return

        old_version = user.token_version
        user.token_version += 1
        db.commit()

        click.echo(f"✓ Revoked all sessions for {email}")
        click.echo(f"  Token version: {old_version} → {user.token_version}")
    except SQLAlchemyError as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
        raise SystemExit(1)
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="Client email")
@click.option("--limit", default=20, show_default=True, help="Rows to show")
def view_logs(email: str, limit: int):
    """
    Show recent mentor access to a client's data.

    Example:
        python -m mentalbase.cli view-logs --email "client@example.com"
    """
    with SessionLocal() as db:
        user = db.execute(
            select(User).where(User.email == email.strip().lower())
        ).scalar_one_or_none()
        if not user:
            click.echo(f"❌ User not found: {email}")
            return

        logs = audit_service.list_client_view_logs(db, user.id, limit=limit)
        if not logs:
            click.echo("No mentor access recorded")
            return
        for log in logs:
            detail = log.reason if log.outcome == "denied" else f"{log.record_count} records"
            click.echo(
                f"{log.created_at:%Y-%m-%d %H:%M:%S}  mentor={log.mentor_id}  "
                f"{log.data_type:<12} {log.outcome:<8} {detail}"
            )


if __name__ == "__main__":
    cli()
