"""add device serial and intake warnings

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def _device_columns() -> set[str]:
    inspector = sa.inspect(op.get_bind())
    return {column["name"] for column in inspector.get_columns("devices")}


def upgrade() -> None:
    columns = _device_columns()
    with op.batch_alter_table("devices") as batch_op:
        if "serial" not in columns:
            batch_op.add_column(sa.Column("serial", sa.String(32), nullable=True))
        if "ocr_warnings" not in columns:
            batch_op.add_column(sa.Column("ocr_warnings", sa.JSON(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("devices") as batch_op:
        batch_op.drop_column("ocr_warnings")
        batch_op.drop_column("serial")
