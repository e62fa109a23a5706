"""document store

Revision ID: 3b7f2c91d0a4
Revises: 
Create Date: 2025-11-12 09:14:52.318406

"""
from pathlib import Path
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3b7f2c91d0a4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    project_root = Path(__file__).resolve().parents[2]
    sql_dir = project_root / "sql"

    for filename in ("001_extensions.sql", "010_schema.sql"):
        op.execute((sql_dir / filename).read_text())


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS document_collection_date_idx;")
    op.drop_table("document", schema="public")
    op.execute("DROP EXTENSION IF EXISTS pgcrypto;")
