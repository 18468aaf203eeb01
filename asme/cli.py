"""CLI tools for ASME administration."""

import uuid

import click
from sqlalchemy.exc import SQLAlchemyError

from asme.core.config import settings
from asme.core.logging_config import configure_logging
from asme.db.enums import Role
from asme.db.session import SessionLocal
from asme.services import media_migration_service, role_service


@click.group()
def cli():
    """ASME CLI tools."""
    configure_logging(settings.LOG_LEVEL)


@cli.command()
@click.option("--user-id", required=True, help="Auth provider user id (UUID)")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.ADMIN.value,
    show_default=True,
    help="Dashboard role to grant",
)
def grant_role(user_id: str, role: str):
    """
    Give an existing auth user a dashboard role.

    This is the bootstrap command for the first admin; later staff are
    invited from the dashboard.

    Example:
        asme grant-role --user-id 6f1c... --role admin
    """
    try:
        parsed_id = uuid.UUID(user_id)
    except ValueError:
        raise click.BadParameter("must be a UUID", param_hint="--user-id")

    db = SessionLocal()
    try:
        row = role_service.set_role(db, parsed_id, Role(role))
        click.echo(f"✓ {row.user_id} now has role: {row.role}")
    except SQLAlchemyError as e:
        db.rollback()
        raise click.ClickException(f"Could not save role: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--dry-run", is_flag=True, help="Preview changes without applying")
def migrate_media(dry_run: bool):
    """
    Move blog media from the old storage host into the Space.

    Failed files keep their original URL; rerunning picks them up again.
    """
    db = SessionLocal()
    try:
        stats = media_migration_service.migrate_blog_media(db, dry_run=dry_run)
    finally:
        db.close()

    if dry_run:
        click.echo("🔍 DRY RUN - no changes made")
    click.echo(f"Posts:    {stats.posts}")
    click.echo(f"Migrated: {stats.migrated}")
    click.echo(f"Skipped:  {stats.skipped}")
    click.echo(f"Failed:   {stats.failed}")
    click.echo(f"Updated:  {stats.updated}")


if __name__ == "__main__":
    cli()
