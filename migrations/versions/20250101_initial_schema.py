"""
Initial buddy tracker schema.

- users keyed by external identity id, with role
- buddy and new hire profiles (one user may hold either)
- associations pairing a buddy with a new hire
- tasks (+ assignments) and meetings (+ notes) owned by an association

Every child table references its parent with ON DELETE CASCADE so removing a
profile, association, task or meeting removes its dependents in the store.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'buddy_initial_20250101'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('external_id', sa.String(320), nullable=False),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('email', sa.String(320), nullable=True),
        sa.Column('login_method', sa.String(64), nullable=True),
        sa.Column('role', sa.String(16), nullable=False, server_default='user'),
        *_timestamps(),
        sa.Column('last_signed_in', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role in ('admin','buddy','newHire','user')", name='ck_users_role'),
    )
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)

    op.create_table(
        'buddies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('nickname', sa.String(100), nullable=True),
        sa.Column('team', sa.String(100), nullable=True),
        sa.Column('level', sa.String(50), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='available'),
        *_timestamps(),
        sa.CheckConstraint("status in ('available','inactive','unavailable')", name='ck_buddies_status'),
    )
    op.create_index('idx_buddies_user_id', 'buddies', ['user_id'], unique=True)

    op.create_table(
        'new_hires',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('nickname', sa.String(100), nullable=True),
        sa.Column('team', sa.String(100), nullable=True),
        sa.Column('level', sa.String(50), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='onboarding'),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status in ('active','completed','inactive','onboarding')", name='ck_new_hires_status'
        ),
    )
    op.create_index('idx_new_hires_user_id', 'new_hires', ['user_id'], unique=True)

    op.create_table(
        'associations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('buddy_id', sa.Integer(), sa.ForeignKey('buddies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('new_hire_id', sa.Integer(), sa.ForeignKey('new_hires.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status in ('active','completed','inactive','paused')", name='ck_associations_status'
        ),
    )
    op.create_index('idx_associations_buddy_id', 'associations', ['buddy_id'])
    op.create_index('idx_associations_new_hire_id', 'associations', ['new_hire_id'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'association_id', sa.Integer(), sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('useful_link', sa.String(500), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status in ('completed','inProgress','overdue','pending')", name='ck_tasks_status'
        ),
    )
    op.create_index('idx_tasks_association_id', 'tasks', ['association_id'])
    op.create_index('idx_tasks_status', 'tasks', ['status'])

    op.create_table(
        'task_assignments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('task_id', sa.Integer(), sa.ForeignKey('tasks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_task_assignments_task_id', 'task_assignments', ['task_id'])

    op.create_table(
        'meetings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'association_id', sa.Integer(), sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_meetings_association_id', 'meetings', ['association_id'])

    op.create_table(
        'meeting_notes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('meeting_id', sa.Integer(), sa.ForeignKey('meetings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_meeting_notes_meeting_id', 'meeting_notes', ['meeting_id'])


def downgrade() -> None:
    for index, table in (
        ('idx_meeting_notes_meeting_id', 'meeting_notes'),
        ('idx_meetings_association_id', 'meetings'),
        ('idx_task_assignments_task_id', 'task_assignments'),
        ('idx_tasks_status', 'tasks'),
        ('idx_tasks_association_id', 'tasks'),
        ('idx_associations_new_hire_id', 'associations'),
        ('idx_associations_buddy_id', 'associations'),
        ('idx_new_hires_user_id', 'new_hires'),
        ('idx_buddies_user_id', 'buddies'),
        ('ix_users_external_id', 'users'),
    ):
        op.drop_index(index, table_name=table)
    for table in (
        'meeting_notes',
        'meetings',
        'task_assignments',
        'tasks',
        'associations',
        'new_hires',
        'buddies',
        'users',
    ):
        op.drop_table(table)
