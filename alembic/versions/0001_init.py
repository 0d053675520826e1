"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
  op.create_table(
    "users",
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("username", sa.String(16), nullable=False),
    sa.Column("password_hash", sa.String(), nullable=False),
    sa.Column("name", sa.String(), nullable=True),
    sa.Column("boards", sa.JSON(), nullable=False),
    sa.Column("created_on", sa.BigInteger(), nullable=False),
    sa.Column("updated_on", sa.BigInteger(), nullable=False),
    sa.Column("last_login", sa.BigInteger(), nullable=False),
  )
  op.create_index("ix_users_username", "users", ["username"], unique=True)

  op.create_table(
    "boards",
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("name", sa.String(), nullable=False),
    sa.Column("color", sa.String(), nullable=False),
    sa.Column("owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("lists", sa.JSON(), nullable=False),
    sa.Column("list_order", sa.JSON(), nullable=False),
    sa.Column("created_on", sa.BigInteger(), nullable=False),
    sa.Column("updated_on", sa.BigInteger(), nullable=False),
  )
  op.create_index("ix_boards_owner", "boards", ["owner"], unique=False)

  op.create_table(
    "lists",
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("name", sa.String(), nullable=False),
    sa.Column("owner", sa.String(36), sa.ForeignKey("boards.id"), nullable=False),
    sa.Column("indirect_owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("cards", sa.JSON(), nullable=False),
    sa.Column("card_order", sa.JSON(), nullable=False),
    sa.Column("created_on", sa.BigInteger(), nullable=False),
    sa.Column("updated_on", sa.BigInteger(), nullable=False),
  )
  op.create_index("ix_lists_owner", "lists", ["owner"], unique=False)
  op.create_index("ix_lists_indirect_owner", "lists", ["indirect_owner"], unique=False)

  op.create_table(
    "cards",
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("name", sa.String(), nullable=False),
    sa.Column("description", sa.Text(), nullable=False),
    sa.Column("color", sa.String(), nullable=False),
    sa.Column("owner", sa.String(36), sa.ForeignKey("lists.id"), nullable=False),
    sa.Column("indirect_owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("checklists", sa.JSON(), nullable=False),
    sa.Column("checklist_order", sa.JSON(), nullable=False),
    sa.Column("created_on", sa.BigInteger(), nullable=False),
    sa.Column("updated_on", sa.BigInteger(), nullable=False),
  )
  op.create_index("ix_cards_owner", "cards", ["owner"], unique=False)
  op.create_index("ix_cards_indirect_owner", "cards", ["indirect_owner"], unique=False)

  op.create_table(
    "checklists",
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("objective", sa.Text(), nullable=False),
    sa.Column("is_completed", sa.Boolean(), nullable=False),
    sa.Column("owner", sa.String(36), sa.ForeignKey("cards.id"), nullable=False),
    sa.Column("indirect_owner", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
    sa.Column("created_on", sa.BigInteger(), nullable=False),
    sa.Column("updated_on", sa.BigInteger(), nullable=False),
  )
  op.create_index("ix_checklists_owner", "checklists", ["owner"], unique=False)
  op.create_index("ix_checklists_indirect_owner", "checklists", ["indirect_owner"], unique=False)


def downgrade() -> None:
  op.drop_table("checklists")
  op.drop_table("cards")
  op.drop_table("lists")
  op.drop_table("boards")
  op.drop_table("users")
