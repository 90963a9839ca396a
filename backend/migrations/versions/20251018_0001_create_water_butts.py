from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "20251018_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "water_butts",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("litres", sa.Integer(), nullable=True),
        sa.Column("postcode", sa.String(length=16), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=False),
        sa.Column("approved", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_water_butts_postcode", "water_butts", ["postcode"])
    op.create_index("ix_water_butts_approved", "water_butts", ["approved"])

def downgrade() -> None:
    op.drop_index("ix_water_butts_approved", table_name="water_butts")
    op.drop_index("ix_water_butts_postcode", table_name="water_butts")
    op.drop_table("water_butts")
