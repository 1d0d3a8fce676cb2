# pyright: reportAttributeAccessIssue=false, reportUndefinedVariable=false
"""Initial gacha schema

Revision ID: 3f1c2a9d8b47
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel.sql.sqltypes

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d8b47"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

RARITY = sa.Enum("THREE_STAR", "FOUR_STAR", "FIVE_STAR", name="rarity")
EVENT_TYPE = sa.Enum(
    "PLAYER_CREATED",
    "PULL_COMPLETED",
    "ADMIN_INCREASE_CURRENCY",
    "ADMIN_DECREASE_CURRENCY",
    name="eventtype",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "players",
        *_timestamps(),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("tickets", sa.Integer(), nullable=False),
        sa.Column("diamonds", sa.Integer(), nullable=False),
        sa.Column("tokens", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_players_id"), "players", ["id"], unique=False)

    op.create_table(
        "owned_items",
        *_timestamps(),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("item_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("acquired_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("player_id", "item_id", name="uq_owned_items_player_item"),
    )
    op.create_index(op.f("ix_owned_items_id"), "owned_items", ["id"], unique=False)
    op.create_index(op.f("ix_owned_items_player_id"), "owned_items", ["player_id"], unique=False)
    op.create_index(op.f("ix_owned_items_item_id"), "owned_items", ["item_id"], unique=False)

    op.create_table(
        "gacha_pity",
        *_timestamps(),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("banner_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("pity_count", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("player_id", "banner_id", name="uq_gacha_pity_player_banner"),
    )
    op.create_index(op.f("ix_gacha_pity_id"), "gacha_pity", ["id"], unique=False)
    op.create_index(op.f("ix_gacha_pity_player_id"), "gacha_pity", ["player_id"], unique=False)
    op.create_index(op.f("ix_gacha_pity_banner_id"), "gacha_pity", ["banner_id"], unique=False)

    op.create_table(
        "gacha_pulls",
        *_timestamps(),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("banner_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("item_id", sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column("rarity", RARITY, nullable=False),
        sa.Column("is_duplicate", sa.Boolean(), nullable=False),
        sa.Column("was_guaranteed", sa.Boolean(), nullable=False),
        sa.Column("tokens_awarded", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_gacha_pulls_id"), "gacha_pulls", ["id"], unique=False)
    op.create_index(op.f("ix_gacha_pulls_player_id"), "gacha_pulls", ["player_id"], unique=False)
    op.create_index(op.f("ix_gacha_pulls_banner_id"), "gacha_pulls", ["banner_id"], unique=False)
    op.create_index(op.f("ix_gacha_pulls_item_id"), "gacha_pulls", ["item_id"], unique=False)

    op.create_table(
        "event_logs",
        *_timestamps(),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("event_type", EVENT_TYPE, nullable=False),
        sa.Column("context", sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_event_logs_id"), "event_logs", ["id"], unique=False)
    op.create_index(op.f("ix_event_logs_player_id"), "event_logs", ["player_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("event_logs")
    op.drop_table("gacha_pulls")
    op.drop_table("gacha_pity")
    op.drop_table("owned_items")
    op.drop_table("players")
    EVENT_TYPE.drop(op.get_bind(), checkfirst=True)
    RARITY.drop(op.get_bind(), checkfirst=True)
