"""Create events and locations tables.

Initial calendar schema: venues in `locations`, dated entries in `events`
with a nullable link to their venue.

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create locations and events."""
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.CheckConstraint("name != ''", name="ck_location_non_empty_name"),
    )
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "location_id",
            sa.Integer(),
            sa.ForeignKey("locations.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("ix_events_date", "events", ["date"])
    op.create_index("ix_events_location_id", "events", ["location_id"])


def downgrade() -> None:
    """Drop events and locations."""
    op.drop_index("ix_events_location_id", table_name="events")
    op.drop_index("ix_events_date", table_name="events")
    op.drop_table("events")
    op.drop_table("locations")
