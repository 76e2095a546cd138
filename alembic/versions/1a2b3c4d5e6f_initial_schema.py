"""initial_schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19

Creates:
- users and sessions for local auth
- digestive_logs, consumed_meals
- supplements, supplement_regimens
- food_items, food_experiments

Note: After running this migration, create a user with:
    python -m gut_insights.cli create-user --email your@email.com
"""
from alembic import op
import sqlalchemy as sa

revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('token', sa.String(64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_agent', sa.String(512), nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_sessions_token'), 'sessions', ['token'], unique=True)

    op.create_table(
        'digestive_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('log_date', sa.Date(), nullable=False),
        sa.Column('log_time', sa.Time(), nullable=True),
        sa.Column('symptom', sa.String(100), nullable=True),
        sa.Column('severity', sa.Integer(), nullable=True),
        sa.Column('bloating', sa.Integer(), nullable=True),
        sa.Column('pain', sa.Integer(), nullable=True),
        sa.Column('gas', sa.Integer(), nullable=True),
        sa.Column('reflux', sa.Integer(), nullable=True),
        sa.Column('urgency', sa.Integer(), nullable=True),
        sa.Column('bristol', sa.Integer(), nullable=True),
        sa.Column('sleep_hours', sa.Float(), nullable=True),
        sa.Column('stress', sa.Integer(), nullable=True),
        sa.Column('energy', sa.Integer(), nullable=True),
        sa.Column('alcohol', sa.Boolean(), nullable=True),
        sa.Column('caffeine', sa.Boolean(), nullable=True),
        sa.Column('associated_meal', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_digestive_logs_user_date', 'digestive_logs', ['user_id', 'log_date'])

    op.create_table(
        'consumed_meals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('consumed_date', sa.Date(), nullable=False),
        sa.Column('meal_time', sa.Time(), nullable=True),
        sa.Column('meal_label', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('recipe_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_consumed_meals_user_date', 'consumed_meals', ['user_id', 'consumed_date'])

    op.create_table(
        'supplements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('brand', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'supplement_regimens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('supplement_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('dose_value', sa.Float(), nullable=False),
        sa.Column('dose_unit', sa.String(20), nullable=False),
        sa.Column('frequency', sa.String(50), nullable=False),
        sa.Column('time_of_day', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['supplement_id'], ['supplements.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_supplement_regimens_user_id', 'supplement_regimens', ['user_id'])

    op.create_table(
        'food_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'food_experiments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('food_item_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('target_dose', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['food_item_id'], ['food_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_food_experiments_user_id', 'food_experiments', ['user_id'])


def downgrade() -> None:
    op.drop_index('idx_food_experiments_user_id', table_name='food_experiments')
    op.drop_table('food_experiments')
    op.drop_table('food_items')
    op.drop_index('idx_supplement_regimens_user_id', table_name='supplement_regimens')
    op.drop_table('supplement_regimens')
    op.drop_table('supplements')
    op.drop_index('idx_consumed_meals_user_date', table_name='consumed_meals')
    op.drop_table('consumed_meals')
    op.drop_index('idx_digestive_logs_user_date', table_name='digestive_logs')
    op.drop_table('digestive_logs')
    op.drop_index(op.f('ix_sessions_token'), table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('users')
