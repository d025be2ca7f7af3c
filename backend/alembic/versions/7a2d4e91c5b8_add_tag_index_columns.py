"""add tag_index columns

Revision ID: 7a2d4e91c5b8
Revises: 3f1c9a7d2b40
Create Date: 2026-10-16 15:40:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from tasknet.services.relevance import build_tag_index, dump_tags, parse_tags


revision: str = '7a2d4e91c5b8'
down_revision: Union[str, None] = '3f1c9a7d2b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TAGGED_TABLES = ('notes', 'tasks', 'wikis')


def upgrade() -> None:
    for table in TAGGED_TABLES:
        op.add_column(table, sa.Column('tag_index', sa.Text(), nullable=False, server_default=''))

    # Rewrite existing tags without \u escapes and fill the index from them.
    bind = op.get_bind()
    for table in TAGGED_TABLES:
        rows = bind.execute(sa.text(f'SELECT id, tags FROM {table}')).fetchall()
        for row_id, raw in rows:
            tags = parse_tags(raw)
            bind.execute(
                sa.text(f'UPDATE {table} SET tags = :tags, tag_index = :tag_index WHERE id = :id'),
                {'tags': dump_tags(tags), 'tag_index': build_tag_index(tags), 'id': row_id},
            )


def downgrade() -> None:
    for table in TAGGED_TABLES:
        op.drop_column(table, 'tag_index')
