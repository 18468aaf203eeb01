"""Tests for the admin CLI."""

import uuid

from click.testing import CliRunner

from asme.cli import cli
from asme.db.models import UserRole


def test_grant_role_creates_row(db):
    user_id = uuid.uuid4()

    result = CliRunner().invoke(cli, ["grant-role", "--user-id", str(user_id), "--role", "lawyer"])

    assert result.exit_code == 0, result.output
    assert "now has role: lawyer" in result.output
    assert db.query(UserRole).filter(UserRole.user_id == user_id).one().role == "lawyer"


def test_grant_role_rejects_bad_uuid(db):
    result = CliRunner().invoke(cli, ["grant-role", "--user-id", "not-a-uuid"])

    assert result.exit_code == 2
    assert "must be a UUID" in result.output


def test_migrate_media_dry_run_prints_stats(db):
    result = CliRunner().invoke(cli, ["migrate-media", "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "DRY RUN" in result.output
    assert "Posts:    0" in result.output
