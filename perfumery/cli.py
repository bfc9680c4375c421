"""
Flask CLI commands

    flask --app app create-admin alice
    flask --app app seed-demo
"""

import click
from flask.cli import with_appcontext

from perfumery.errors import PerfumeryError
from perfumery.services import seed


@click.command('create-admin')
@click.argument('username')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True,
              help='Password for a new account (ignored when promoting).')
@click.option('--full-name', default=None, help='Display name for a new account.')
@with_appcontext
def create_admin_command(username, password, full_name):
    """Create an admin account, or promote an existing user."""
    try:
        user, created = seed.promote_or_create_admin(username, password, full_name)
    except PerfumeryError as exc:
        raise click.ClickException(exc.message)
    if created:
        click.echo(f'New admin user created: {user.username}')
    else:
        click.echo(f'Existing user promoted to admin: {user.username}')


@click.command('seed-demo')
@with_appcontext
def seed_demo_command():
    """Insert demo accounts (admin/admin123, user/user123) and a sample catalog."""
    added = seed.seed_demo_data()
    click.echo(f'Demo data ready ({added} perfumes added).')


def register_commands(app):
    app.cli.add_command(create_admin_command)
    app.cli.add_command(seed_demo_command)
