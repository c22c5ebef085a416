"""Initial schema: players, tournaments, rosters and pairings

Revision ID: 0001
Revises:
Create Date: 2026-10-17

Standings are not stored; they are replayed from the pairings table.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

tournament_status = sa.Enum('UPCOMING', 'ONGOING', 'COMPLETED', name='tournamentstatus')
game_result = sa.Enum(
    'PENDING', 'WHITE_WINS', 'BLACK_WINS', 'DRAW',
    'WHITE_FORFEIT', 'BLACK_FORFEIT', 'DOUBLE_FORFEIT', 'BYE',
    name='gameresult',
)


def upgrade() -> None:
    op.create_table(
        'players',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='800'),
        sa.Column('fide_id', sa.String(20), nullable=True, unique=True),
        sa.Column('state', sa.String(50), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_players_state', 'players', ['state'])
    op.create_index('ix_players_rating', 'players', ['rating'])

    op.create_table(
        'tournaments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('venue', sa.String(200), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(50), nullable=True),
        sa.Column('total_rounds', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('current_round', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('time_control', sa.String(50), nullable=False, server_default='90min + 30sec'),
        sa.Column('status', tournament_status, nullable=False, server_default='UPCOMING'),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_tournaments_status', 'tournaments', ['status'])
    op.create_index('ix_tournaments_start_date', 'tournaments', ['start_date'])

    op.create_table(
        'tournament_players',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tournament_id', sa.String(36), sa.ForeignKey('tournaments.id'), nullable=False),
        sa.Column('player_id', sa.String(36), sa.ForeignKey('players.id'), nullable=False),
        sa.Column('pairing_number', sa.Integer(), nullable=False),
        sa.Column('seed_rating', sa.Integer(), nullable=False),
        sa.Column('is_withdrawn', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_tournament_players_tournament_id', 'tournament_players', ['tournament_id'])
    op.create_index('ix_tournament_players_player_id', 'tournament_players', ['player_id'])
    op.create_index('ix_tp_tournament_player', 'tournament_players', ['tournament_id', 'player_id'], unique=True)
    op.create_index('ix_tp_tournament_number', 'tournament_players', ['tournament_id', 'pairing_number'], unique=True)
    op.create_index('ix_tp_tournament_withdrawn', 'tournament_players', ['tournament_id', 'is_withdrawn'])

    op.create_table(
        'pairings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tournament_id', sa.String(36), sa.ForeignKey('tournaments.id'), nullable=False),
        sa.Column('round_number', sa.Integer(), nullable=False),
        sa.Column('white_player_id', sa.String(36), sa.ForeignKey('players.id'), nullable=False),
        # Null for a bye
        sa.Column('black_player_id', sa.String(36), sa.ForeignKey('players.id'), nullable=True),
        sa.Column('board_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('result', game_result, nullable=False, server_default='PENDING'),
        sa.Column('played_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_pairings_tournament_id', 'pairings', ['tournament_id'])
    op.create_index('ix_pairings_round_number', 'pairings', ['round_number'])
    op.create_index('ix_pairings_tournament_round', 'pairings', ['tournament_id', 'round_number'])
    op.create_index(
        'ix_pairings_tournament_round_board', 'pairings',
        ['tournament_id', 'round_number', 'board_number'],
        unique=True,
    )
    op.create_index('ix_pairings_white_player', 'pairings', ['white_player_id'])
    op.create_index('ix_pairings_black_player', 'pairings', ['black_player_id'])
    op.create_index('ix_pairings_result', 'pairings', ['tournament_id', 'result'])


def downgrade() -> None:
    op.drop_table('pairings')
    op.drop_table('tournament_players')
    op.drop_table('tournaments')
    op.drop_table('players')
