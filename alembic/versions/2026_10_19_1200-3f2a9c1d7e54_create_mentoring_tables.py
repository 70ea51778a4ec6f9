"""create mentoring tables

Revision ID: 3f2a9c1d7e54
Create Date: 2026-10-19 12:00:00.000000
"""

from alembic import op

import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f2a9c1d7e54"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "mentors",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("intra_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("email", sa.String(length=256), nullable=True),
        sa.Column("slack_id", sa.String(length=64), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("markdown_content", sa.Text(), nullable=True),
        sa.Column("available_time", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("intra_id"),
        mysql_collate="utf8mb4_bin",
    )
    op.create_table(
        "cadets",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("intra_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("intra_id"),
        mysql_collate="utf8mb4_bin",
    )
    op.create_table(
        "mentoring_logs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mentor_id", sa.String(length=36), nullable=False),
        sa.Column("cadet_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("meeting_start", sa.DateTime(), nullable=False),
        sa.Column("meeting_end", sa.DateTime(), nullable=False),
        sa.Column("report_status", sa.Enum("READY", "IN_PROGRESS", "COMPLETED", name="reportstatus"), nullable=False),
        sa.Column("money", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["cadet_id"], ["cadets.id"]),
        sa.ForeignKeyConstraint(["mentor_id"], ["mentors.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        mysql_collate="utf8mb4_bin",
    )
    op.create_table(
        "reports",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mentoring_log_id", sa.String(length=36), nullable=False),
        sa.Column("mentor_id", sa.String(length=36), nullable=True),
        sa.Column("cadet_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("topic", sa.String(length=256), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("place", sa.String(length=256), nullable=True),
        sa.Column("image_urls", sa.JSON(), nullable=False),
        sa.Column("signature_url", sa.String(length=512), nullable=True),
        sa.Column("feedback1", sa.SmallInteger(), nullable=True),
        sa.Column("feedback2", sa.SmallInteger(), nullable=True),
        sa.Column("feedback3", sa.SmallInteger(), nullable=True),
        sa.Column("feedback_message", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["cadet_id"], ["cadets.id"]),
        sa.ForeignKeyConstraint(["mentor_id"], ["mentors.id"]),
        sa.ForeignKeyConstraint(["mentoring_log_id"], ["mentoring_logs.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id"),
        sa.UniqueConstraint("mentoring_log_id"),
        mysql_collate="utf8mb4_bin",
    )


def downgrade() -> None:
    op.drop_table("reports")
    op.drop_table("mentoring_logs")
    op.drop_table("cadets")
    op.drop_table("mentors")
