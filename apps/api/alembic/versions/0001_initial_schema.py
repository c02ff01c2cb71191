"""initial schema: users, workouts, library, templates, records, journal

Revision ID: 0001
Revises:
Create Date: 2025-01-06 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('display_name', sa.Text(), nullable=True),
        sa.Column('current_level', sa.Text(), nullable=True),
        sa.Column('streak', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('total_volume', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_workouts_user_id', 'workouts', ['user_id'])
    op.create_index('ix_workouts_user_date', 'workouts', ['user_id', 'date'])

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('sets', JSON_TYPE, nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_exercises_workout_id', 'exercises', ['workout_id'])

    op.create_table(
        'exercise_library',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('slug', sa.Text(), nullable=False, unique=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('category', sa.Text(), nullable=False),
        sa.Column('difficulty', sa.Text(), nullable=False),
    )

    op.create_table(
        'workout_templates',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('difficulty', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "category IS NULL OR category IN ('push', 'pull', 'legs', 'core', 'full_body')",
            name='ck_workout_templates_category',
        ),
        sa.CheckConstraint(
            "difficulty IS NULL OR difficulty IN ('beginner', 'intermediate', 'advanced')",
            name='ck_workout_templates_difficulty',
        ),
    )
    op.create_index('ix_workout_templates_user_id', 'workout_templates', ['user_id'])

    op.create_table(
        'workout_template_exercises',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('workout_templates.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercise_library.id'), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('default_sets', sa.Integer(), nullable=False),
        sa.Column('default_reps', sa.Integer(), nullable=False),
        sa.Column('default_rest_seconds', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_workout_template_exercises_template_id', 'workout_template_exercises', ['template_id'])

    op.create_table(
        'personal_records',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('exercise_name', sa.Text(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('achieved_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_personal_records_user_id', 'personal_records', ['user_id'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('mood', sa.Integer(), nullable=False),
        sa.Column('energy_level', sa.Integer(), nullable=False),
        sa.Column('photo_url', sa.Text(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('mood BETWEEN 1 AND 10', name='ck_journal_entries_mood'),
        sa.CheckConstraint('energy_level BETWEEN 1 AND 10', name='ck_journal_entries_energy_level'),
    )
    op.create_index('ix_journal_entries_user_id', 'journal_entries', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_journal_entries_user_id', table_name='journal_entries')
    op.drop_table('journal_entries')
    op.drop_index('ix_personal_records_user_id', table_name='personal_records')
    op.drop_table('personal_records')
    op.drop_index('ix_workout_template_exercises_template_id', table_name='workout_template_exercises')
    op.drop_table('workout_template_exercises')
    op.drop_index('ix_workout_templates_user_id', table_name='workout_templates')
    op.drop_table('workout_templates')
    op.drop_table('exercise_library')
    op.drop_index('ix_exercises_workout_id', table_name='exercises')
    op.drop_table('exercises')
    op.drop_index('ix_workouts_user_date', table_name='workouts')
    op.drop_index('ix_workouts_user_id', table_name='workouts')
    op.drop_table('workouts')
    op.drop_table('users')
