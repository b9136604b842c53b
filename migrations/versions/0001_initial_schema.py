"""Начальная схема: привычки и дневные записи

Revision ID: 0001
Revises:
Create Date: 2025-12-20 12:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


habit_mode_enum = sa.Enum("positive", "negative", name="habit_mode_enum")


def upgrade() -> None:
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("mode", habit_mode_enum, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Время создания записи",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Время последнего обновления записи",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habits")),
        sa.UniqueConstraint("name", name=op.f("uq_habits_name")),
    )
    op.create_index(op.f("ix_habits_id"), "habits", ["id"], unique=False)

    op.create_table(
        "habit_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), nullable=False),
        sa.Column("entry_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_success", sa.Boolean(), nullable=False),
        sa.Column("craving_level", sa.Integer(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Время создания записи",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Время последнего обновления записи",
        ),
        sa.ForeignKeyConstraint(
            ["habit_id"],
            ["habits.id"],
            name=op.f("fk_habit_entries_habit_id_habits"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_habit_entries")),
    )
    op.create_index(op.f("ix_habit_entries_id"), "habit_entries", ["id"], unique=False)
    op.create_index(op.f("ix_habit_entries_habit_id"), "habit_entries", ["habit_id"], unique=False)
    op.create_index(op.f("ix_habit_entries_entry_date"), "habit_entries", ["entry_date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_habit_entries_entry_date"), table_name="habit_entries")
    op.drop_index(op.f("ix_habit_entries_habit_id"), table_name="habit_entries")
    op.drop_index(op.f("ix_habit_entries_id"), table_name="habit_entries")
    op.drop_table("habit_entries")
    op.drop_index(op.f("ix_habits_id"), table_name="habits")
    op.drop_table("habits")
    habit_mode_enum.drop(op.get_bind(), checkfirst=True)
