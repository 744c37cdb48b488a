"""create accounts, users and diary tables

Revision ID: 3f1d2a9c8b70
Revises:
Create Date: 2024-05-01 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '3f1d2a9c8b70'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade():
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('token_version', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_accounts'),
        sa.UniqueConstraint('email', name='uq_accounts_email'),
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('nickname', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['id'], ['accounts.id'], name='fk_users_id_accounts', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_table(
        'diary',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('emotion', sa.String(length=20), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('contents', sa.Text(), nullable=False),
        sa.Column('draw', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['accounts.id'], name='fk_diary_user_id_accounts', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_diary'),
    )
    op.create_index('ix_diary_user_id_date', 'diary', ['user_id', 'date'], unique=False)


def downgrade():
    op.drop_index('ix_diary_user_id_date', table_name='diary')
    op.drop_table('diary')
    op.drop_table('users')
    op.drop_table('accounts')
