"""
# Nombre de archivo: 20261019_01_records.py
# Ubicación de archivo: db/alembic/versions/20261019_01_records.py
# Descripción: Crea las tablas interventions y reclamations con índices por usuario y fecha de creación
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None

RECLAMATION_TYPE = sa.Enum("hydraulic", "electric", "mechanic", name="reclamation_type")


def upgrade() -> None:
    op.create_table(
        "interventions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("user_email", sa.String(length=320), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("entreprise_name", sa.String(length=255), nullable=False),
        sa.Column("responsable", sa.String(length=255), nullable=False),
        sa.Column("team_members", sa.JSON(), nullable=False),
        sa.Column("site_name", sa.String(length=255), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("recipient_emails", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_interventions_user_id", "interventions", ["user_id"])
    op.create_index("ix_interventions_created_at", "interventions", ["created_at"])

    op.create_table(
        "reclamations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("user_email", sa.String(length=320), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("station_name", sa.String(length=255), nullable=False),
        sa.Column("reclamation_type", RECLAMATION_TYPE, nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("recipient_emails", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_reclamations_user_id", "reclamations", ["user_id"])
    op.create_index("ix_reclamations_created_at", "reclamations", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_reclamations_created_at", table_name="reclamations")
    op.drop_index("ix_reclamations_user_id", table_name="reclamations")
    op.drop_table("reclamations")
    RECLAMATION_TYPE.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_interventions_created_at", table_name="interventions")
    op.drop_index("ix_interventions_user_id", table_name="interventions")
    op.drop_table("interventions")
