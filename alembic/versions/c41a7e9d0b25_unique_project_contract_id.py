"""unique project contract_id

Revision ID: c41a7e9d0b25
Revises: 8d2f4a6e1c07
Create Date: 2026-10-17 09:31:47.205116

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c41a7e9d0b25'
down_revision: Union[str, Sequence[str], None] = '8d2f4a6e1c07'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.drop_index("ix_projects_contract_id", table_name="projects")
    op.execute(
        """
        CREATE UNIQUE INDEX IF NOT EXISTS uq_projects_contract_id
        ON projects(contract_id)
        WHERE contract_id IS NOT NULL;
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS uq_projects_contract_id;")
    op.create_index("ix_projects_contract_id", "projects", ["contract_id"], unique=False)
