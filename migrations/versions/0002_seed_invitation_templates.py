"""seed the default invitation template catalog"""

from alembic import op
import sqlalchemy as sa

revision = "0002_seed_invitation_templates"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None

TEMPLATES = [
    ("Classic Elegance", "Serif lettering on an ivory card.", "/static/templates/classic.png", False),
    ("Garden Party", "Watercolour florals framing the details.", "/static/templates/garden.png", False),
    ("Modern Minimal", "Clean sans-serif layout with generous whitespace.", "/static/templates/minimal.png", False),
    ("Gilded Night", "Gold foil accents on a midnight background.", "/static/templates/gilded.png", True),
]


def upgrade() -> None:
    bind = op.get_bind()
    existing = bind.execute(sa.text("SELECT COUNT(*) FROM invitation_templates")).scalar()
    if existing:
        return
    table = sa.table(
        "invitation_templates",
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
        sa.column("thumbnail_url", sa.String),
        sa.column("is_premium", sa.Boolean),
    )
    op.bulk_insert(
        table,
        [
            {"name": n, "description": d, "thumbnail_url": t, "is_premium": p}
            for n, d, t, p in TEMPLATES
        ],
    )


def downgrade() -> None:
    names = [row[0] for row in TEMPLATES]
    op.execute(
        sa.text("DELETE FROM invitation_templates WHERE name IN :names").bindparams(
            sa.bindparam("names", value=names, expanding=True)
        )
    )
