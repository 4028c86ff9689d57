"""Create skill swap tables

Revision ID: 8f2c1d7a9b3e
Revises:
Create Date: 2026-10-18 09:12:41.204518
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from app.db.models.enums import (
    AvailabilityTypeEnum,
    ProfileVisibilityEnum,
    SkillTypeEnum,
    SwapStatusEnum,
)

# revision identifiers, used by Alembic.
revision: str = '8f2c1d7a9b3e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=True),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_visibility', sa.Enum(ProfileVisibilityEnum), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('profile_photo', sa.String(500), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=True),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'skills',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('description', sa.String(200), nullable=True),
        sa.Column('is_custom', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=True),
    )
    op.create_index('ix_skills_category', 'skills', ['category'])
    op.create_index('uq_skills_name_lower', 'skills', [sa.text('lower(name)')], unique=True)

    op.create_table(
        'user_skills',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('skill_id', sa.String(36), sa.ForeignKey('skills.id', ondelete='CASCADE'), nullable=False),
        sa.Column('skill_type', sa.Enum(SkillTypeEnum), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
        sa.UniqueConstraint('user_id', 'skill_id', 'skill_type', name='uq_user_skill_type'),
        sa.CheckConstraint('level BETWEEN 1 AND 5', name='ck_user_skills_level_range'),
    )
    op.create_index('ix_user_skills_user_id', 'user_skills', ['user_id'])
    op.create_index('ix_user_skills_skill_id', 'user_skills', ['skill_id'])

    op.create_table(
        'user_availabilities',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('availability_type', sa.Enum(AvailabilityTypeEnum), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=True),
        sa.Column('end_time', sa.String(5), nullable=True),
        sa.Column('days_of_week', sa.ARRAY(sa.String()).with_variant(sa.JSON(), 'sqlite'), nullable=True),
    )
    op.create_index('ix_user_availabilities_user_id', 'user_availabilities', ['user_id'])

    op.create_table(
        'swap_requests',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('sender_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('offered_skill_id', sa.String(36), sa.ForeignKey('skills.id'), nullable=False),
        sa.Column('requested_skill_id', sa.String(36), sa.ForeignKey('skills.id'), nullable=False),
        sa.Column('message', sa.String(500), nullable=True),
        sa.Column('scheduled_date', sa.DateTime(), nullable=True),
        sa.Column('status', sa.Enum(SwapStatusEnum), nullable=False),
        # Set only while PENDING; one pending request per pair of users
        sa.Column('pending_pair_key', sa.String(80), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=True),
        sa.UniqueConstraint('pending_pair_key', name='uq_swap_requests_pending_pair_key'),
    )
    op.create_index('ix_swap_requests_sender_id', 'swap_requests', ['sender_id'])
    op.create_index('ix_swap_requests_receiver_id', 'swap_requests', ['receiver_id'])
    op.create_index('ix_swap_requests_status', 'swap_requests', ['status'])

    op.create_table(
        'feedback',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('swap_request_id', sa.String(36), sa.ForeignKey('swap_requests.id', ondelete='CASCADE'), nullable=False),
        sa.Column('giver_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.String(500), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=True),
        sa.UniqueConstraint('swap_request_id', 'giver_id', name='uq_feedback_swap_giver'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_feedback_rating_range'),
    )
    op.create_index('ix_feedback_swap_request_id', 'feedback', ['swap_request_id'])
    op.create_index('ix_feedback_giver_id', 'feedback', ['giver_id'])
    op.create_index('ix_feedback_receiver_id', 'feedback', ['receiver_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('feedback')
    op.drop_table('swap_requests')
    op.drop_table('user_availabilities')
    op.drop_table('user_skills')
    op.drop_table('skills')
    op.drop_table('users')
    bind = op.get_bind()
    for enum_cls in (SwapStatusEnum, AvailabilityTypeEnum, SkillTypeEnum, ProfileVisibilityEnum):
        sa.Enum(enum_cls).drop(bind, checkfirst=True)
