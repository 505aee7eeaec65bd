# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/marketplace/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init
#   Create all tables (idempotent). Use `flask db upgrade` for managed schemas.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users create-admin --email admin@b2bmarket.com --password "secret123"
#   Create an admin account (prompts if options are omitted).
# - python -m flask users promote --email someone@example.com
#   Give an existing account the admin role.
# - python -m flask users deactivate --email someone@example.com
#   Disable login; existing sessions stop validating. `users activate` reverses it.
# - python -m flask users list
#   List all users with role and active status.
#
# Listings:
# - python -m flask listings seed
#   Insert the sample franchises and businesses.
# - python -m flask listings list-pending
#   Show businesses and advertisements waiting for moderation.

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import User
from .services import auth_service, lifecycle_service, seed_service
from .services.auth_service import PasswordValidationError
from .validation import ConflictError, NotFoundError, ValidationError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """Create all tables that do not exist yet."""
    click.echo("START Initializing marketplace database...")
    db.create_all()
    click.echo("PASS Tables created")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()
    click.echo("BUILD Creating all tables...")
    db.create_all()
    click.echo("PASS Database reset complete")


# =============================================================================
# USER COMMANDS
# =============================================================================

@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('create-admin')
@click.option('--email', prompt=True, help='Admin email')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Admin password')
@click.option('--first-name', default=None)
@click.option('--last-name', default=None)
@with_appcontext
def create_admin(email, password, first_name, last_name):
    """Create an admin account."""
    try:
        user = auth_service.register_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role="admin",
        )
    except PasswordValidationError as e:
        click.echo(f"FAIL Password validation failed: {e}")
        raise SystemExit(1)
    except (ConflictError, ValidationError) as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)

    click.echo(f"PASS Created admin: {user.email} (ID: {user.id})")


@users_group.command('promote')
@click.option('--email', required=True, help='Email of the account to promote')
@with_appcontext
def promote_user(email):
    """Give an existing account the admin role."""
    try:
        user = auth_service.promote_to_admin(email)
    except NotFoundError:
        click.echo(f"FAIL No user with email '{email}'")
        raise SystemExit(1)
    click.echo(f"PASS {user.email} is now an admin")


def _set_active(email, is_active):
    user = auth_service.get_user_by_email(email)
    if user is None:
        click.echo(f"FAIL No user with email '{email}'")
        raise SystemExit(1)
    auth_service.set_user_active(user.id, is_active)
    click.echo(f"PASS {user.email} is now {'active' if is_active else 'inactive'}")


@users_group.command('deactivate')
@click.option('--email', required=True, help='Email of the account to disable')
@with_appcontext
def deactivate_user(email):
    """Disable login for an account; its sessions stop validating."""
    _set_active(email, False)


@users_group.command('activate')
@click.option('--email', required=True, help='Email of the account to re-enable')
@with_appcontext
def activate_user(email):
    """Re-enable a deactivated account."""
    _set_active(email, True)


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users."""
    users = db.session.query(User).order_by(User.id).all()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<5} {'Email':<40} {'Role':<8} {'Active':<8}")
    click.echo("="*80)

    for user in users:
        active_str = "Yes" if user.is_active else "No"
        click.echo(f"{user.id:<5} {user.email:<40} {user.role:<8} {active_str:<8}")

    click.echo("="*80 + "\n")


# =============================================================================
# LISTING COMMANDS
# =============================================================================

@click.group('listings')
def listings_group():
    """Catalogue seeding and moderation inspection."""


@listings_group.command('seed')
@with_appcontext
def seed_listings():
    """Insert sample franchises and businesses (skips names that already exist)."""
    counts = seed_service.seed_sample_listings()
    click.echo(f"PASS Seeded {counts['franchises']} franchises, {counts['businesses']} businesses")


@listings_group.command('list-pending')
@with_appcontext
def list_pending():
    """Businesses and advertisements with status 'pending'."""
    queue = lifecycle_service.get_pending_queue()

    if not queue["businesses"] and not queue["advertisements"]:
        click.echo("Nothing pending.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'Type':<14} {'ID':<5} {'Name':<35} {'Payment':<10} {'State'}")
    click.echo("="*80)

    for b in queue["businesses"]:
        click.echo(f"{'business':<14} {b.id:<5} {b.name[:35]:<35} {b.payment_status:<10} {b.lifecycle_state}")
    for a in queue["advertisements"]:
        click.echo(f"{'advertisement':<14} {a.id:<5} {a.title[:35]:<35} {a.payment_status:<10} {a.lifecycle_state}")

    click.echo("="*80 + "\n")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(listings_group)
