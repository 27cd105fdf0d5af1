"""Create tax_forms and tax_form_histories tables

Revision ID: create_tax_forms_001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'create_tax_forms_001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


TAX_FORM_STATUSES = ('NOT_STARTED', 'IN_PROGRESS', 'SUBMITTED', 'RETURNED', 'ACCEPTED')
HISTORY_STATUSES = ('SUBMITTED', 'RETURNED', 'ACCEPTED')


def upgrade() -> None:
    op.create_table(
        'tax_forms',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('form_year', sa.Integer, nullable=False),
        sa.Column('form_name', sa.String(255), nullable=False),
        sa.Column('details', sa.JSON, nullable=True),  # assessed/appraised value, ratio, comments
        sa.Column(
            'status',
            sa.Enum(*TAX_FORM_STATUSES, name='taxformstatus'),
            nullable=False,
            server_default='NOT_STARTED',
        ),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_tax_forms_form_year', 'tax_forms', ['form_year'])

    # Append-only: rows are never updated, and only removed with their form
    op.create_table(
        'tax_form_histories',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('tax_form_id', sa.Integer,
                  sa.ForeignKey('tax_forms.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.Enum(*HISTORY_STATUSES, name='taxformhistorystatus'), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_tax_form_histories_tax_form_id', 'tax_form_histories', ['tax_form_id'])


def downgrade() -> None:
    op.drop_index('ix_tax_form_histories_tax_form_id', table_name='tax_form_histories')
    op.drop_table('tax_form_histories')
    op.drop_index('ix_tax_forms_form_year', table_name='tax_forms')
    op.drop_table('tax_forms')
    sa.Enum(name='taxformhistorystatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='taxformstatus').drop(op.get_bind(), checkfirst=True)
