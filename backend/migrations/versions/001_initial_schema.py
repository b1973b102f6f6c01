"""Initial schema: users, categories, clubs, events, rsvps.

Revision ID: 001
Revises:
Create Date: 2026-09-14
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTENT_STATUSES = ("PENDING", "APPROVED", "REJECTED")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _content_status() -> sa.Column:
    return sa.Column(
        "status",
        sa.Enum(*CONTENT_STATUSES, name="content_status", native_enum=False, length=20),
        server_default="PENDING",
        nullable=False,
    )


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("is_admin", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("is_active", sa.Boolean, server_default=sa.true(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )

    # Categories
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), unique=True, nullable=False, index=True),
        *_timestamps(),
    )

    # Clubs
    op.create_table(
        "clubs",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), unique=True, nullable=False),
        sa.Column("purpose", sa.Text, nullable=False),
        sa.Column("category_description", sa.String(255)),
        sa.Column("primary_contact_name", sa.String(255)),
        sa.Column("contact_email", sa.String(255)),
        sa.Column("website_url", sa.String(500)),
        sa.Column("meeting_time", sa.String(255)),
        sa.Column("meeting_location", sa.String(255)),
        _content_status(),
        sa.Column(
            "submitted_by_user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        *_timestamps(),
    )
    op.create_index("idx_club_status", "clubs", ["status"])

    # Events
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("external_id", sa.String(64), unique=True),
        sa.Column("event_url", sa.String(1000)),
        sa.Column("event_page_url", sa.String(1000)),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("start_datetime", sa.DateTime(timezone=True)),
        sa.Column("end_datetime", sa.DateTime(timezone=True)),
        sa.Column("all_day", sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column("location", sa.String(500)),
        sa.Column("location_virtual_url", sa.String(1000)),
        sa.Column(
            "attendance_type",
            sa.Enum("IN_PERSON", "ONLINE", "HYBRID", name="attendance_type", native_enum=False, length=20),
            server_default="IN_PERSON",
            nullable=False,
        ),
        sa.Column("cost_admission", sa.String(255)),
        sa.Column("organizer_sponsor", sa.String(500)),
        sa.Column("contact_name", sa.String(255)),
        sa.Column("contact_phone", sa.String(50)),
        sa.Column("contact_email", sa.String(255)),
        sa.Column("last_scraped_at", sa.DateTime(timezone=True)),
        _content_status(),
        sa.Column("club_id", sa.Uuid(as_uuid=True), sa.ForeignKey("clubs.id", ondelete="SET NULL"), index=True),
        *_timestamps(),
    )
    op.create_index("idx_event_status_start", "events", ["status", "start_datetime"])

    # Tagging join tables
    op.create_table(
        "club_categories",
        sa.Column("club_id", sa.Uuid(as_uuid=True), sa.ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "category_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "event_categories",
        sa.Column("event_id", sa.Uuid(as_uuid=True), sa.ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
        sa.Column(
            "category_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # RSVPs
    op.create_table(
        "rsvps",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.Uuid(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("event_id", sa.Uuid(as_uuid=True), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "event_id", name="uq_rsvps_user_event"),
    )


def downgrade() -> None:
    op.drop_table("rsvps")
    op.drop_table("event_categories")
    op.drop_table("club_categories")
    op.drop_index("idx_event_status_start", table_name="events")
    op.drop_table("events")
    op.drop_index("idx_club_status", table_name="clubs")
    op.drop_table("clubs")
    op.drop_table("categories")
    op.drop_table("users")
