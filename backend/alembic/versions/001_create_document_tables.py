"""Create services and bookings tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates one table per document collection: `services` and `bookings`.
How:   Each row is (id UUID, data JSONB, created_at TIMESTAMPTZ), indexed on
       created_at for natural-order listing.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COLLECTIONS = ("services", "bookings")


def upgrade() -> None:
    for table in COLLECTIONS:
        op.create_table(
            table,
            sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
            sa.Column(
                "data",
                sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
                nullable=False,
            ),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("CURRENT_TIMESTAMP"),
                nullable=False,
            ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"idx_{table}_created_at", table, ["created_at"])

    # Owner lookups: GET /bookings?email=...
    if op.get_bind().dialect.name == "postgresql":
        op.execute("CREATE INDEX idx_bookings_email ON bookings ((data->>'email'))")


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP INDEX IF EXISTS idx_bookings_email")
    for table in reversed(COLLECTIONS):
        op.drop_index(f"idx_{table}_created_at", table_name=table)
        op.drop_table(table)
