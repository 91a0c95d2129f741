"""kv entries store

Revision ID: 0001_kv_entries
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_kv_entries"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # one JSON document per logical store (users, leaderboard, records, ...)
    op.create_table(
        "kv_entries",
        sa.Column("key", sa.Text, primary_key=True),
        sa.Column("value", sa.Text, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table("kv_entries")
