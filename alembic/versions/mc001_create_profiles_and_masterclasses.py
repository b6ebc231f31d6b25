"""Create profiles, catalog masterclasses and mentor masterclasses

Revision ID: mc001_create_masterclasses
Revises:
Create Date: 2025-01-20

This migration creates:
- profiles: one row per auth subject, with the student/mentor role
- masterclasses: admin-curated catalog (date + time + duration)
- mentor_masterclasses: mentor-authored sessions (start/end instants,
  participant cap, draft/published status)
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'mc001_create_masterclasses'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('role', sa.Enum('student', 'mentor', name='profile_role_enum'), nullable=True),
        sa.Column('student_type', sa.String(), nullable=True),
        sa.Column('institution_name', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'])

    op.create_table(
        'masterclasses',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('mentor_name', sa.String(), nullable=True),
        sa.Column('type', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('fee', sa.Numeric(10, 2), nullable=True),  # NULL = free
        sa.Column('prerequisites', sa.JSON(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.Time(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('meeting_link', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )
    op.create_index('ix_masterclasses_category', 'masterclasses', ['category'])
    op.create_index('idx_masterclasses_schedule', 'masterclasses', ['scheduled_date', 'scheduled_time'])

    op.create_table(
        'mentor_masterclasses',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('mentor_id', sa.String(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('prerequisites', sa.JSON(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('meeting_link', sa.String(), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),  # NULL = uncapped
        sa.Column('current_participants', sa.Integer(), nullable=False, server_default='0'),
        sa.Column(
            'status',
            sa.Enum('draft', 'published', name='mentor_masterclass_status_enum'),
            nullable=False,
            server_default='draft',
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.CheckConstraint(
            'current_participants >= 0',
            name='ck_mentor_masterclass_participants_non_negative',
        ),
    )
    op.create_index('ix_mentor_masterclasses_mentor_id', 'mentor_masterclasses', ['mentor_id'])
    op.create_index('ix_mentor_masterclasses_category', 'mentor_masterclasses', ['category'])
    op.create_index('ix_mentor_masterclasses_status', 'mentor_masterclasses', ['status'])


def downgrade() -> None:
    op.drop_index('ix_mentor_masterclasses_status', table_name='mentor_masterclasses')
    op.drop_index('ix_mentor_masterclasses_category', table_name='mentor_masterclasses')
    op.drop_index('ix_mentor_masterclasses_mentor_id', table_name='mentor_masterclasses')
    op.drop_table('mentor_masterclasses')

    op.drop_index('idx_masterclasses_schedule', table_name='masterclasses')
    op.drop_index('ix_masterclasses_category', table_name='masterclasses')
    op.drop_table('masterclasses')

    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_table('profiles')

    sa.Enum(name='mentor_masterclass_status_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='profile_role_enum').drop(op.get_bind(), checkfirst=True)
