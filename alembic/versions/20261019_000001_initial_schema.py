"""Create users, deposits and referral_earnings tables.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create referral ledger tables."""

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('referral_code', sa.String(20), nullable=False),
        sa.Column('referred_by_code', sa.String(20), nullable=True),
        sa.Column('balance', sa.DECIMAL(18, 8), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('balance >= 0', name='check_user_balance_non_negative'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_referral_code', 'users', ['referral_code'], unique=True)
    op.create_index('ix_users_referred_by_code', 'users', ['referred_by_code'])

    op.create_table(
        'deposits',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.DECIMAL(18, 8), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='completed'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint('amount > 0', name='check_deposit_amount_positive'),
    )
    op.create_index('ix_deposits_user_id', 'deposits', ['user_id'])

    op.create_table(
        'referral_earnings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('referrer_id', sa.Integer(), nullable=False),
        sa.Column('referred_user_id', sa.Integer(), nullable=False),
        sa.Column('deposit_id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('percentage', sa.DECIMAL(5, 2), nullable=False),
        sa.Column('amount', sa.DECIMAL(18, 8), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('claimed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['referrer_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['referred_user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['deposit_id'], ['deposits.id'], ondelete='CASCADE'),
        sa.CheckConstraint('level >= 1 AND level <= 3', name='check_referral_earning_level_range'),
        sa.CheckConstraint('amount >= 0', name='check_referral_earning_amount_non_negative'),
        sa.UniqueConstraint('deposit_id', 'referrer_id', name='uq_referral_earning_deposit_referrer'),
    )
    op.create_index('ix_referral_earnings_referrer_id', 'referral_earnings', ['referrer_id'])
    op.create_index('ix_referral_earnings_referred_user_id', 'referral_earnings', ['referred_user_id'])
    op.create_index('ix_referral_earnings_deposit_id', 'referral_earnings', ['deposit_id'])
    op.create_index('ix_referral_earnings_status', 'referral_earnings', ['status'])
    op.create_index(
        'idx_referral_earning_referrer_status',
        'referral_earnings',
        ['referrer_id', 'status'],
    )
    op.create_index(
        'idx_referral_earning_referrer_created',
        'referral_earnings',
        ['referrer_id', 'created_at'],
    )


def downgrade() -> None:
    """Drop referral ledger tables."""
    op.drop_table('referral_earnings')
    op.drop_table('deposits')
    op.drop_table('users')
