"""add prediction id and model profile to generations

Revision ID: 8b1e4c6a2f93
Revises: 3f9c2a7d1b40
Create Date: 2026-03-15 09:40:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "8b1e4c6a2f93"
down_revision = "3f9c2a7d1b40"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("generations", sa.Column("prediction_id", sa.String(length=100), nullable=True))
    op.add_column("generations", sa.Column("model_profile", sa.String(length=50), nullable=True))
    op.create_index("ix_generations_prediction_id", "generations", ["prediction_id"])


def downgrade() -> None:
    op.drop_index("ix_generations_prediction_id", table_name="generations")
    op.drop_column("generations", "model_profile")
    op.drop_column("generations", "prediction_id")
