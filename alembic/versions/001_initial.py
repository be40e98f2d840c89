"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('username_key', sa.String(50), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('seq')
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=True)
    op.create_index('ix_users_username_key', 'users', ['username_key'])
    
    # Posts table
    op.create_table(
        'posts',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('author_id', sa.String(64), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('seq')
    )
    op.create_index('ix_posts_id', 'posts', ['id'], unique=True)
    op.create_index('ix_posts_author_id', 'posts', ['author_id'])
    
    # Messages table
    op.create_table(
        'messages',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('sender_id', sa.String(64), nullable=False),
        sa.Column('receiver_id', sa.String(64), nullable=False),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('seq')
    )
    op.create_index('ix_messages_id', 'messages', ['id'], unique=True)
    op.create_index('idx_message_receiver', 'messages', ['receiver_id'])
    op.create_index('idx_message_sender', 'messages', ['sender_id'])


def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('posts')
    op.drop_table('users')
