"""create Groups, Challenges, Questions, AnsweredQuestions, ClearTimes

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2024-09-20 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # Databases carried over from the previous deployment already hold these tables
    existing_tables = set(insp.get_table_names())

    if 'Groups' not in existing_tables:
        op.create_table(
            'Groups',
            sa.Column('GroupId', sa.String(length=36), primary_key=True),
            sa.Column('Name', sa.String(length=128), nullable=False),
            sa.Column('PlayerCount', sa.Integer(), nullable=False),
            sa.Column('ChallengesCount', sa.Integer(), nullable=False),
            sa.Column('WasCleared', sa.String(length=1), nullable=False),
            sa.Column('SnackState', sa.String(length=8), nullable=False),
        )
        op.create_index('ix_Groups_Name', 'Groups', ['Name'], unique=True)

    if 'Challenges' not in existing_tables:
        op.create_table(
            'Challenges',
            sa.Column('ChallengeId', sa.String(length=36), primary_key=True),
            sa.Column('GroupId', sa.String(length=36), sa.ForeignKey('Groups.GroupId'), nullable=False),
            sa.Column('Difficulty', sa.Integer(), nullable=False),
            sa.Column('RoomId', sa.String(length=64), nullable=False),
            sa.Column('State', sa.String(length=16), nullable=False),
            sa.Column('StartTime', sa.String(length=32), nullable=False),
        )
        op.create_index('ix_Challenges_GroupId', 'Challenges', ['GroupId'])
        op.create_index('ix_Challenges_RoomId', 'Challenges', ['RoomId'])

    if 'Questions' not in existing_tables:
        op.create_table(
            'Questions',
            sa.Column('ID', sa.String(length=64), primary_key=True),
            sa.Column('Difficulty', sa.Integer(), nullable=False),
            sa.Column('Content', sa.Text(), nullable=True),
            sa.Column('Answer', sa.Text(), nullable=True),
            sa.Column('CollectCount', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('WrongCount', sa.Integer(), nullable=False, server_default='0'),
        )
        op.create_index('ix_Questions_Difficulty', 'Questions', ['Difficulty'])

    if 'AnsweredQuestions' not in existing_tables:
        op.create_table(
            'AnsweredQuestions',
            sa.Column('Id', sa.Integer(), primary_key=True),
            sa.Column('GroupId', sa.String(length=36), nullable=False),
            sa.Column('QuestionId', sa.String(length=64), nullable=False),
            sa.Column('Result', sa.String(length=16), nullable=False),
            sa.Column('ChallengerAnswer', sa.Text(), nullable=True),
        )
        op.create_index('ix_AnsweredQuestions_GroupId', 'AnsweredQuestions', ['GroupId'])
        op.create_index('ix_AnsweredQuestions_QuestionId', 'AnsweredQuestions', ['QuestionId'])

    if 'ClearTimes' not in existing_tables:
        op.create_table(
            'ClearTimes',
            sa.Column('Id', sa.Integer(), primary_key=True),
            sa.Column('ElapsedTime', sa.Integer(), nullable=False),
            sa.Column('ChallengeId', sa.String(length=36), nullable=False),
            sa.Column('Difficulty', sa.Integer(), nullable=False),
            sa.Column('GroupName', sa.String(length=128), nullable=False),
        )
        op.create_index('ix_ClearTimes_ChallengeId', 'ClearTimes', ['ChallengeId'])


def downgrade():
    op.drop_table('ClearTimes')
    op.drop_table('AnsweredQuestions')
    op.drop_table('Questions')
    op.drop_table('Challenges')
    op.drop_table('Groups')
