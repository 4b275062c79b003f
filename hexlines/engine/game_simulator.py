"""Synchronous game simulator — drives a plugin through actions in memory.

Used by the Arena to play complete games without any session or
presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hexlines.engine.errors import GameNotActiveError, InvalidActionError
from hexlines.engine.models import Action, GameResult, Phase, Player, PlayerId
from hexlines.engine.protocol import GamePlugin


@dataclass
class SimulationState:
    """Mutable game state for synchronous simulation."""

    game_data: dict
    phase: Phase
    players: list[Player]
    scores: dict[str, float] = field(default_factory=dict)
    game_over: GameResult | None = None


def apply_action(
    plugin: GamePlugin,
    state: SimulationState,
    action: Action,
) -> None:
    """Validate and apply an action, mutating *state* in place.

    Raises ``GameNotActiveError`` once the game is over and
    ``InvalidActionError`` when the plugin rejects the action.
    """
    if state.game_over is not None:
        raise GameNotActiveError("Game is already over")

    error = plugin.validate_action(state.game_data, state.phase, action)
    if error:
        raise InvalidActionError(error, action)

    result = plugin.apply_action(
        state.game_data, state.phase, action, state.players
    )
    state.game_data = result.game_data
    state.phase = result.next_phase
    state.scores = result.scores or state.scores
    state.game_over = result.game_over


def acting_player_id(phase: Phase) -> PlayerId | None:
    """Return the player the phase is waiting on, if any."""
    if phase.expected_actions:
        return phase.expected_actions[0].player_id
    return None
