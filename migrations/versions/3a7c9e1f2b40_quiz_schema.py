"""quiz schema: user, question_set, quiz_session, player, answer

Revision ID: 3a7c9e1f2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c9e1f2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'question_set',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('questions_json', sa.Text(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_question_set_user_id', 'question_set', ['user_id'])

    op.create_table(
        'quiz_session',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('questions_json', sa.Text(), nullable=False),
        sa.Column('room_code', sa.String(length=6), nullable=True),
        sa.Column('question_set_id', sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    # Unique index is the gate that settles concurrent room code claims
    op.create_index('ix_quiz_session_room_code', 'quiz_session', ['room_code'], unique=True)

    op.create_table(
        'player',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('joined_at', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['quiz_session.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_player_session_id', 'player', ['session_id'])

    op.create_table(
        'answer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('question_index', sa.Integer(), nullable=False),
        sa.Column('value', sa.BigInteger(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('submitted_at', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['quiz_session.id']),
        sa.ForeignKeyConstraint(['player_id'], ['player.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_answer_player_id', 'answer', ['player_id'])
    op.create_index('ix_answer_session_player', 'answer', ['session_id', 'player_id'])


def downgrade():
    op.drop_index('ix_answer_session_player', table_name='answer')
    op.drop_index('ix_answer_player_id', table_name='answer')
    op.drop_table('answer')
    op.drop_index('ix_player_session_id', table_name='player')
    op.drop_table('player')
    op.drop_index('ix_quiz_session_room_code', table_name='quiz_session')
    op.drop_table('quiz_session')
    op.drop_index('ix_question_set_user_id', table_name='question_set')
    op.drop_table('question_set')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
