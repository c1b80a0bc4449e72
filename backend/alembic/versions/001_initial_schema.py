"""Initial schema — geo_locations, name_entries, duplicate_name_entries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

name_entries.name carries a UNIQUE constraint: concurrent inserts of the same
new name resolve in the database (ON CONFLICT DO NOTHING), never in application code.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _name_columns() -> list[sa.Column]:
    return [
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("tonal_mark", sa.String(255), nullable=True),
        sa.Column("meaning", sa.Text, nullable=True),
        sa.Column("extended_meaning", sa.Text, nullable=True),
        sa.Column("morphology", sa.Text, nullable=True),
        sa.Column("etymology", sa.JSON, nullable=False),
        sa.Column("famous_people", sa.Text, nullable=True),
        sa.Column("in_other_languages", sa.Text, nullable=True),
        sa.Column("media", sa.Text, nullable=True),
        sa.Column("tags", sa.Text, nullable=True),
        sa.Column("variants", sa.Text, nullable=True),
        sa.Column("submitted_by", sa.String(255), nullable=False, server_default="Not Available"),
        sa.Column(
            "geo_location_place", sa.String(100),
            sa.ForeignKey("geo_locations.place", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "geo_locations",
        sa.Column("place", sa.String(100), primary_key=True),
        sa.Column("region", sa.String(100), nullable=False),
    )

    op.create_table(
        "name_entries",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        *_name_columns(),
        sa.Column("is_indexed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("name", name="uq_name_entries_name"),
    )

    op.create_table(
        "duplicate_name_entries",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        *_name_columns(),
        sa.Column(
            "name_entry_id", sa.Integer,
            sa.ForeignKey("name_entries.id", ondelete="CASCADE"), nullable=False,
        ),
    )
    op.create_index(
        "ix_duplicate_name_entries_name_entry_id",
        "duplicate_name_entries", ["name_entry_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_duplicate_name_entries_name_entry_id", "duplicate_name_entries")
    op.drop_table("duplicate_name_entries")
    op.drop_table("name_entries")
    op.drop_table("geo_locations")
