"""CLI command for rebuilding stored user statistics.

Usage:
    flask recompute-stats               # Every active user
    flask recompute-stats --user-id 1   # One user
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext


@click.command("recompute-stats")
@click.option("--user-id", "-u", type=int, help="Recompute for a specific user ID only")
@with_appcontext
def recompute_stats_command(user_id: int | None):
    """Re-scan entries and rewrite total_entries, total_words and last_entry_date."""
    from daily_journal.core.users.services import list_user_ids
    from daily_journal.domains.journal.services.lifecycle import refresh_stats_safely

    user_ids = [user_id] if user_id else list_user_ids()
    failures = 0
    for uid in user_ids:
        user = refresh_stats_safely(uid)
        if user is None:
            failures += 1
            click.echo(f"  ✗ user {uid}: not recomputed", err=True)
            continue
        click.echo(f"  ✓ user {uid}: {user.total_entries} entries, {user.total_words} words")
    click.echo(f"Recomputed {len(user_ids) - failures}/{len(user_ids)} users")
    if failures:
        raise SystemExit(1)


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(recompute_stats_command)
