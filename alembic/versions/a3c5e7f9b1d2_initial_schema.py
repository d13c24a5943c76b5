"""initial_schema

Revision ID: a3c5e7f9b1d2
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = 'a3c5e7f9b1d2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('open_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=320), nullable=True),
        sa.Column('login_method', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('role', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('last_signed_in', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_open_id'), 'users', ['open_id'], unique=True)

    op.create_table(
        'retirement_scenarios',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('current_age', sa.Integer(), nullable=False),
        sa.Column('retirement_age', sa.Integer(), nullable=False),
        sa.Column('life_expectancy', sa.Integer(), nullable=False),
        sa.Column('current_savings', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('monthly_expenses', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('social_security_age', sa.Integer(), nullable=False),
        sa.Column('estimated_social_security', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('has_spouse', sa.Boolean(), nullable=False),
        sa.Column('spouse_age', sa.Integer(), nullable=True),
        sa.Column('spouse_retirement_age', sa.Integer(), nullable=True),
        sa.Column('spouse_social_security_age', sa.Integer(), nullable=True),
        sa.Column('spouse_social_security', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('readiness_score', sa.Integer(), nullable=True),
        sa.Column('projected_shortfall', sa.Numeric(precision=20, scale=2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_retirement_scenarios_user_id'), 'retirement_scenarios', ['user_id'], unique=False)

    op.create_table(
        'roth_conversions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('scenario_id', sa.Integer(), nullable=True),
        sa.Column('current_age', sa.Integer(), nullable=False),
        sa.Column('traditional_ira_balance', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('current_tax_bracket', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('retirement_tax_bracket', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('conversion_amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('conversion_year', sa.Integer(), nullable=False),
        sa.Column('taxes_paid_now', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('taxes_saved_later', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('net_benefit', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('recommendation', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        # Analyses outlive the scenario they were run against
        sa.ForeignKeyConstraint(['scenario_id'], ['retirement_scenarios.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_roth_conversions_user_id'), 'roth_conversions', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_roth_conversions_user_id'), table_name='roth_conversions')
    op.drop_table('roth_conversions')
    op.drop_index(op.f('ix_retirement_scenarios_user_id'), table_name='retirement_scenarios')
    op.drop_table('retirement_scenarios')
    op.drop_index(op.f('ix_users_open_id'), table_name='users')
    op.drop_table('users')
