"""A falling-block puzzle game for the terminal."""

import logging

from .board import Board, CellTag
from .config import GameConfig
from .controls import Action, NameEntry, action_for_key
from .game_state import GameRound, RoundPhase
from .leaderboard import HighScore, Leaderboard
from .rng import PieceSource, SequencePieceSource, UniformPieceSource
from .tetromino import PieceKind, Tetromino, rotate_index, shape_cells
from .utils import can_move, line_clear_score, ticks_per_drop

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Action",
    "Board",
    "CellTag",
    "GameConfig",
    "GameRound",
    "HighScore",
    "Leaderboard",
    "NameEntry",
    "PieceKind",
    "PieceSource",
    "RoundPhase",
    "SequencePieceSource",
    "Tetromino",
    "UniformPieceSource",
    "action_for_key",
    "can_move",
    "line_clear_score",
    "rotate_index",
    "shape_cells",
    "ticks_per_drop",
]
