from __future__ import annotations

from hexlines.games.yavalath.board import Cell, HexBoard
from hexlines.games.yavalath.npc import NpcTier, choose_cell
from hexlines.games.yavalath.rules import GameOutcome, ResultKind, RuleEngine, RuleState
from hexlines.games.yavalath.session import (
    GameHandle,
    MoveOutcome,
    MoveOutcomeKind,
    active_color,
    legal_moves,
    new_game,
    outcome,
    request_npc_move,
    submit_move,
)
from hexlines.games.yavalath.types import Color

__all__ = [
    "Cell",
    "HexBoard",
    "Color",
    "NpcTier",
    "choose_cell",
    "GameOutcome",
    "ResultKind",
    "RuleEngine",
    "RuleState",
    "GameHandle",
    "MoveOutcome",
    "MoveOutcomeKind",
    "new_game",
    "legal_moves",
    "submit_move",
    "request_npc_move",
    "active_color",
    "outcome",
]
