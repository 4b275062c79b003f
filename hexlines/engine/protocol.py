from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from hexlines.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)


@runtime_checkable
class GamePlugin(Protocol):
    """Interface a game implements to be played by the simulator and arena.

    ``game_data`` is a plain dict owned by the plugin. ``apply_action``
    must not mutate the dict it receives; it returns the next state in a
    ``TransitionResult`` instead.
    """

    game_id: ClassVar[str]
    display_name: ClassVar[str]
    min_players: ClassVar[int]
    max_players: ClassVar[int]
    description: ClassVar[str]

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        ...

    def validate_config(self, options: dict) -> list[str]:
        """Return a list of problems with *options*; empty when valid."""
        ...

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        ...

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        """Return an error message, or ``None`` if *action* may be applied."""
        ...

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        ...

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        ...
