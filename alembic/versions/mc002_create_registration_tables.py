"""Create masterclass and workshop registration tables

Revision ID: mc002_create_registrations
Revises: mc001_create_masterclasses
Create Date: 2025-01-20

One registration per (user_id, masterclass_id) and per
(user_id, workshop_id) is enforced by unique constraints; the service maps
the constraint violation to "already registered".
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'mc002_create_registrations'
down_revision = 'mc001_create_masterclasses'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'masterclass_registrations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        # Either masterclasses.id or mentor_masterclasses.id, so no FK
        sa.Column('masterclass_id', sa.String(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('registered', 'attended', 'missed', name='registration_status_enum'),
            nullable=False,
            server_default='registered',
        ),
        sa.Column(
            'payment_status',
            sa.Enum(
                'not_required', 'pending', 'completed', 'failed', 'verified',
                name='payment_status_enum',
            ),
            nullable=False,
            server_default='pending',
        ),
        sa.Column('transaction_id', sa.String(), nullable=True),
        sa.Column('payment_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.UniqueConstraint('user_id', 'masterclass_id', name='unique_masterclass_registration_user'),
    )
    op.create_index('ix_masterclass_registrations_user_id', 'masterclass_registrations', ['user_id'])
    op.create_index('ix_masterclass_registrations_masterclass_id', 'masterclass_registrations', ['masterclass_id'])

    op.create_table(
        'workshop_registrations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('workshop_id', sa.String(), nullable=False),
        sa.Column('registered_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.UniqueConstraint('user_id', 'workshop_id', name='unique_workshop_registration_user'),
    )
    op.create_index('ix_workshop_registrations_user_id', 'workshop_registrations', ['user_id'])
    op.create_index('ix_workshop_registrations_workshop_id', 'workshop_registrations', ['workshop_id'])


def downgrade() -> None:
    op.drop_index('ix_workshop_registrations_workshop_id', table_name='workshop_registrations')
    op.drop_index('ix_workshop_registrations_user_id', table_name='workshop_registrations')
    op.drop_table('workshop_registrations')

    op.drop_index('ix_masterclass_registrations_masterclass_id', table_name='masterclass_registrations')
    op.drop_index('ix_masterclass_registrations_user_id', table_name='masterclass_registrations')
    op.drop_table('masterclass_registrations')

    sa.Enum(name='payment_status_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='registration_status_enum').drop(op.get_bind(), checkfirst=True)
