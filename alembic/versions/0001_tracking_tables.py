"""Create jobs, tracked applications and status history tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create jobs table
    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("company", sa.String(length=500), nullable=False),
        sa.Column("location", sa.String(length=500), nullable=False),
        sa.Column("job_type", sa.String(length=50), nullable=False),
        sa.Column("platform", sa.String(length=100), nullable=False),
        sa.Column("source_id", sa.String(length=255), nullable=False),
        sa.Column("source_url", sa.String(length=2000), nullable=True),
        sa.Column("deadline", sa.DateTime(), nullable=True),
        sa.Column("salary", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("source_id", "platform", name="uq_jobs_source_platform"),
    )
    op.create_index("ix_jobs_title", "jobs", ["title"], unique=False)
    op.create_index("ix_jobs_company", "jobs", ["company"], unique=False)
    op.create_index("ix_jobs_platform", "jobs", ["platform"], unique=False)
    op.create_index("ix_jobs_created_at", "jobs", ["created_at"], unique=False)

    # Create tracked_applications table
    op.create_table(
        "tracked_applications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("job_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("is_favorite", sa.Boolean(), nullable=False),
        sa.Column("custom_tags", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("next_steps", sa.JSON(), nullable=False),
        sa.Column("interview_dates", sa.JSON(), nullable=False),
        sa.Column("reminder_date", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "job_id", name="uq_tracked_applications_user_job"
        ),
    )
    op.create_index(
        "ix_tracked_applications_user_id", "tracked_applications", ["user_id"]
    )
    op.create_index(
        "ix_tracked_applications_job_id", "tracked_applications", ["job_id"]
    )
    op.create_index(
        "ix_tracked_applications_reminder_date",
        "tracked_applications",
        ["reminder_date"],
    )
    op.create_index(
        "ix_tracked_applications_created_at", "tracked_applications", ["created_at"]
    )
    op.create_index(
        "ix_tracked_applications_user_status",
        "tracked_applications",
        ["user_id", "status"],
    )
    op.create_index(
        "ix_tracked_applications_user_favorite",
        "tracked_applications",
        ["user_id", "is_favorite"],
    )

    # Create status_history table
    op.create_table(
        "status_history",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tracked_application_id", sa.Integer(), nullable=False),
        sa.Column("previous_status", sa.String(length=50), nullable=False),
        sa.Column("new_status", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("updated_by", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["tracked_application_id"],
            ["tracked_applications.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_status_history_tracked_application_id",
        "status_history",
        ["tracked_application_id"],
    )
    op.create_index("ix_status_history_created_at", "status_history", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_status_history_created_at", table_name="status_history")
    op.drop_index(
        "ix_status_history_tracked_application_id", table_name="status_history"
    )
    op.drop_table("status_history")
    for index in (
        "ix_tracked_applications_user_favorite",
        "ix_tracked_applications_user_status",
        "ix_tracked_applications_created_at",
        "ix_tracked_applications_reminder_date",
        "ix_tracked_applications_job_id",
        "ix_tracked_applications_user_id",
    ):
        op.drop_index(index, table_name="tracked_applications")
    op.drop_table("tracked_applications")
    for index in (
        "ix_jobs_created_at",
        "ix_jobs_platform",
        "ix_jobs_company",
        "ix_jobs_title",
    ):
        op.drop_index(index, table_name="jobs")
    op.drop_table("jobs")
