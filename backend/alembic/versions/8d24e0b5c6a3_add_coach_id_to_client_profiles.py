"""add coach_id to client_profiles

Revision ID: 8d24e0b5c6a3
Revises: 3f1a9c2d7b10
Create Date: 2025-03-18 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d24e0b5c6a3'
down_revision: Union[str, None] = '3f1a9c2d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Databases patched by hand with maintenance.add_coach_column already have it
    columns = [c['name'] for c in sa.inspect(op.get_bind()).get_columns('client_profiles')]
    if 'coach_id' in columns:
        return
    with op.batch_alter_table('client_profiles') as batch_op:
        batch_op.add_column(sa.Column('coach_id', sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            'fk_client_profiles_coach_id', 'coach_profiles', ['coach_id'], ['id'], ondelete='SET NULL'
        )
        batch_op.create_index('ix_client_profiles_coach_id', ['coach_id'])


def downgrade() -> None:
    with op.batch_alter_table('client_profiles') as batch_op:
        batch_op.drop_index('ix_client_profiles_coach_id')
        batch_op.drop_constraint('fk_client_profiles_coach_id', type_='foreignkey')
        batch_op.drop_column('coach_id')
