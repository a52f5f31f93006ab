"""unique conversation per coach/client pair

Revision ID: c7e5a1f09b42
Revises: 8d24e0b5c6a3
Create Date: 2025-04-05 14:15:00.000000

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = 'c7e5a1f09b42'
down_revision: Union[str, None] = '8d24e0b5c6a3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Fold duplicate conversations into the oldest one before adding the constraint
    op.execute(
        """
        UPDATE messages SET conversation_id = (
            SELECT MIN(c2.id) FROM conversations c1
            JOIN conversations c2
              ON c2.coach_id = c1.coach_id AND c2.client_id = c1.client_id
            WHERE c1.id = messages.conversation_id
        )
        """
    )
    op.execute(
        """
        DELETE FROM conversations WHERE id NOT IN (
            SELECT MIN(id) FROM conversations GROUP BY coach_id, client_id
        )
        """
    )
    with op.batch_alter_table('conversations') as batch_op:
        batch_op.create_unique_constraint('uq_conversations_coach_client', ['coach_id', 'client_id'])


def downgrade() -> None:
    with op.batch_alter_table('conversations') as batch_op:
        batch_op.drop_constraint('uq_conversations_coach_client', type_='unique')
