"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_users (Alembic Migration)

Responsibilities:
  - Crear la tabla `users` con constraints e índices del servicio.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/user.py (usa este esquema como contrato)

Policy:
  - Convención de nombres:
      pk_<tabla>          - Primary keys
      uq_<tabla>_<col>    - Unique constraints (el repo mapea estos nombres)
      ck_<tabla>_<col>    - Check constraints
      ix_<tabla>_<col>    - Indexes
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_users"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _flag(name: str) -> sa.Column:
    return sa.Column(name, sa.Boolean, nullable=False, server_default=sa.text("true"))


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("first_name", sa.String(50), nullable=True),
        sa.Column("last_name", sa.String(50), nullable=True),
        # role como string (nombre del enum), validado por check constraint.
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'USER'"),
        ),
        _flag("is_enabled"),
        _flag("is_account_non_locked"),
        _flag("is_account_non_expired"),
        _flag("is_credentials_non_expired"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "role IN ('USER', 'ADMIN', 'MODERATOR')", name="ck_users_role"
        ),
        sa.CheckConstraint("created_at <= updated_at", name="ck_users_timestamps"),
    )

    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_is_enabled", "users", ["is_enabled"])


def downgrade() -> None:
    op.drop_index("ix_users_is_enabled", table_name="users")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")
