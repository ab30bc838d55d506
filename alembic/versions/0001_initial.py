"""users, environments and access_logs

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("admin", "student", name="user_role")
environment_type = sa.Enum("classroom", "laboratory", "study_room", name="environment_type")

NOT_DELETED = sa.text('"deletedAt" IS NULL')
OPEN_SESSION = sa.text('"checkOut" IS NULL')


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("registration", sa.String(50), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("isActive", sa.Boolean(), nullable=False),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deletedAt", sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_registration", "users", ["registration"])
    op.create_index("uq_users_email_active", "users", ["email"], unique=True,
                    postgresql_where=NOT_DELETED, sqlite_where=NOT_DELETED)
    op.create_index("uq_users_registration_active", "users", ["registration"], unique=True,
                    postgresql_where=NOT_DELETED, sqlite_where=NOT_DELETED)

    op.create_table(
        "environments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", environment_type, nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("building", sa.String(100), nullable=True),
        sa.Column("floor", sa.String(50), nullable=True),
        sa.Column("isActive", sa.Boolean(), nullable=False),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("deletedAt", sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index("ix_environments_id", "environments", ["id"])
    op.create_index("uq_environments_name_active", "environments", ["name"], unique=True,
                    postgresql_where=NOT_DELETED, sqlite_where=NOT_DELETED)

    op.create_table(
        "access_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("userId", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("environmentId", sa.Integer(), sa.ForeignKey("environments.id"), nullable=False),
        sa.Column("checkIn", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("checkOut", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_access_logs_id", "access_logs", ["id"])
    op.create_index("ix_access_logs_userId", "access_logs", ["userId"])
    op.create_index("ix_access_logs_environment_open", "access_logs", ["environmentId", "checkOut"])
    op.create_index("uq_access_logs_open_session", "access_logs", ["userId"], unique=True,
                    postgresql_where=OPEN_SESSION, sqlite_where=OPEN_SESSION)


def downgrade() -> None:
    op.drop_table("access_logs")
    op.drop_table("environments")
    op.drop_table("users")
    environment_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
