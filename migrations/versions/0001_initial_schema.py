"""users, weddings, events, guests, invitation templates, invitations, rsvps"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255)),
        sa.Column("full_name", sa.String(255)),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_users_email_lower", "users", [sa.text("lower(email)")], unique=True
    )

    op.create_table(
        "weddings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "wedding_id",
            sa.Integer,
            sa.ForeignKey("weddings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("date", sa.DateTime, nullable=False),
        sa.Column("end_date", sa.DateTime),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index("ix_events_wedding_id", "events", ["wedding_id"])

    op.create_table(
        "guests",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "wedding_id",
            sa.Integer,
            sa.ForeignKey("weddings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(64)),
        sa.Column(
            "plus_one_allowed", sa.Boolean, nullable=False, server_default=sa.false()
        ),
        sa.Column("group_id", sa.String(64)),
        sa.Column(
            "invitation_sent", sa.Boolean, nullable=False, server_default=sa.false()
        ),
        sa.Column("rsvp_token", sa.String(64), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index("ix_guests_wedding_id", "guests", ["wedding_id"])

    op.create_table(
        "invitation_templates",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("thumbnail_url", sa.String(1024)),
        sa.Column("is_premium", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )

    op.create_table(
        "invitations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "wedding_id",
            sa.Integer,
            sa.ForeignKey("weddings.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "template_id",
            sa.Integer,
            sa.ForeignKey("invitation_templates.id"),
            nullable=False,
        ),
        sa.Column("custom_message", sa.Text),
        sa.Column(
            "accent_color", sa.String(7), nullable=False, server_default="#8b4513"
        ),
        sa.Column(
            "font_choice",
            sa.String(64),
            nullable=False,
            server_default="Playfair Display",
        ),
        sa.Column("slug", sa.String(64), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )

    op.create_table(
        "rsvps",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "guest_id",
            sa.Integer,
            sa.ForeignKey("guests.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("attending", sa.Boolean, nullable=True),
        sa.Column("meal_choice", sa.String(64)),
        sa.Column("plus_one_name", sa.String(255)),
        sa.Column("plus_one_meal_choice", sa.String(64)),
        sa.Column("notes", sa.Text),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("rsvps")
    op.drop_table("invitations")
    op.drop_table("invitation_templates")
    op.drop_index("ix_guests_wedding_id", table_name="guests")
    op.drop_table("guests")
    op.drop_index("ix_events_wedding_id", table_name="events")
    op.drop_table("events")
    op.drop_table("weddings")
    op.drop_index("ix_users_email_lower", table_name="users")
    op.drop_table("users")
