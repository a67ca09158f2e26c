from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "2026_10_01_create_clubs"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "clubs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("club_name", sa.String(255), nullable=False),
        sa.Column("website", sa.String(512)),
        sa.Column("membership_contact_name", sa.String(255)),
        sa.Column("membership_contact_phone", sa.String(50)),
        sa.Column("street_number", sa.String(20)),
        sa.Column("street_name", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("province", sa.String(50)),
        sa.Column("postal", sa.String(20)),
        sa.Column("lat", sa.Float, nullable=False),
        sa.Column("lng", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
    )

def downgrade():
    op.drop_table("clubs")
