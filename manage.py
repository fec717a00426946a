from rsvpkit.app import create_app, db, seed_templates

from flask_migrate import Migrate
from flask.cli import FlaskGroup
import click

from rsvpkit.models import Wedding
from rsvpkit.services.analytics import wedding_stats
from rsvpkit.shared.auth_bridge import lookup_user
from rsvpkit.shared.links import invitation_url


migrate = Migrate()


def create_rsvpkit_app():
    app = create_app()
    migrate.init_app(app, db)
    return app


cli = FlaskGroup(create_app=create_rsvpkit_app)


@cli.command("seed_templates")
def seed_templates_command():
    """Insert the default invitation template catalog when it is empty."""
    count = seed_templates()
    if count:
        click.echo(f"Seeded {count} templates")
    else:
        click.echo("Templates already present")


@cli.command("rsvp_report")
@click.option("--email", "email", required=True)
def rsvp_report(email: str):
    """Print the RSVP summary for the wedding owned by EMAIL."""
    user = lookup_user(email)
    if user is None:
        click.echo("Not found", err=True)
        return
    wedding = Wedding.query.filter_by(user_id=user.id).one_or_none()
    if wedding is None:
        click.echo("No wedding set up", err=True)
        return
    stats = wedding_stats(wedding)
    click.echo(f"{wedding.title} ({wedding.date.isoformat()})")
    if wedding.invitation:
        click.echo(f"link={invitation_url(wedding.invitation.slug)}")
    click.echo(
        f"guests={stats.total_guests} responded={stats.total_rsvps} "
        f"attending={stats.attending} declined={stats.not_attending} "
        f"pending={stats.pending} response_rate={stats.response_rate}%"
    )
    if stats.rsvp_overflow:
        click.echo(f"warning: {stats.rsvp_overflow} more responses than guests")
    for name, count in stats.meal_choices:
        click.echo(f"meal {name}={count}")


if __name__ == "__main__":
    cli()
