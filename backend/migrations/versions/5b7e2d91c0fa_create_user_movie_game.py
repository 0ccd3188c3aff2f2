"""create user, movie and game tables

Revision ID: 5b7e2d91c0fa
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b7e2d91c0fa'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'movie' not in existing_tables:
        op.create_table(
            'movie',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('title', sa.String(length=256), nullable=False),
            sa.Column('poster_path', sa.String(length=256), nullable=True),
            sa.Column('release_date', sa.String(length=10), nullable=True),
        )

    if 'game' not in existing_tables:
        op.create_table(
            'game',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('lives', sa.Integer(), nullable=False),
            sa.Column('combo', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('record', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('current_movie_id', sa.Integer(), sa.ForeignKey('movie.id'), nullable=True),
            sa.Column('seen_movie_ids', sa.Text(), nullable=True),
        )
        op.create_index('ix_game_user_id', 'game', ['user_id'], unique=True)


def downgrade():
    op.drop_index('ix_game_user_id', table_name='game')
    op.drop_table('game')
    op.drop_table('movie')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
