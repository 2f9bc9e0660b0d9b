"""initial_kanban_schema

Revision ID: 0001_initial_kanban_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '0001_initial_kanban_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('boards',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_boards_owner_id_users'),
        sa.PrimaryKeyConstraint('id', name='pk_boards')
    )

    op.create_table('board_members',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('board_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], name='fk_board_members_board_id_boards', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_board_members_user_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_board_members'),
        sa.UniqueConstraint('board_id', 'user_id', name='unique_board_member')
    )
    op.create_index('ix_board_members_board_id', 'board_members', ['board_id'])
    op.create_index('ix_board_members_user_id', 'board_members', ['user_id'])

    op.create_table('lists',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('board_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], name='fk_lists_board_id_boards', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_lists')
    )
    op.create_index('ix_lists_board_id', 'lists', ['board_id'])

    op.create_table('cards',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('list_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('board_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('assigned_to', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['list_id'], ['lists.id'], name='fk_cards_list_id_lists', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], name='fk_cards_board_id_boards', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assigned_to'], ['users.id'], name='fk_cards_assigned_to_users', ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name='pk_cards')
    )
    op.create_index('ix_cards_board_id', 'cards', ['board_id'])
    # Snapshot reads sort one list by order
    op.create_index('ix_cards_list_id_order', 'cards', ['list_id', 'order'])


def downgrade() -> None:
    op.drop_index('ix_cards_list_id_order', table_name='cards')
    op.drop_index('ix_cards_board_id', table_name='cards')
    op.drop_table('cards')
    op.drop_index('ix_lists_board_id', table_name='lists')
    op.drop_table('lists')
    op.drop_index('ix_board_members_user_id', table_name='board_members')
    op.drop_index('ix_board_members_board_id', table_name='board_members')
    op.drop_table('board_members')
    op.drop_table('boards')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
