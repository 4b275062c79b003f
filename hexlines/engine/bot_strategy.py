"""Bot strategy abstraction — maps bot_id strings to action-selection callables."""

from __future__ import annotations

import random as _random
from typing import Callable, Protocol

from hexlines.engine.models import Phase, Player, PlayerId
from hexlines.engine.protocol import GamePlugin


class BotStrategy(Protocol):
    """A bot strategy selects an action payload given the current game state."""

    def choose_action(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
        plugin: GamePlugin,
        players: list[Player] | None = None,
    ) -> dict:
        """Return the chosen action payload (same shape as get_valid_actions items)."""
        ...


class RandomStrategy:
    """Picks a uniformly random valid action."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = _random.Random(seed)

    def choose_action(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
        plugin: GamePlugin,
        players: list[Player] | None = None,
    ) -> dict:
        valid = plugin.get_valid_actions(game_data, phase, player_id)
        return self._rng.choice(valid)


def _heuristic_factory(tier: int) -> Callable[..., BotStrategy]:
    def factory(seed: int | None = None, **_kwargs: object) -> BotStrategy:
        from hexlines.games.yavalath.strategy import HeuristicStrategy

        return HeuristicStrategy(tier=tier, seed=seed)

    return factory


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_STRATEGY_FACTORIES: dict[str, Callable[..., BotStrategy]] = {
    "random": lambda seed=None, **_kwargs: RandomStrategy(seed=seed),
    "npc1": _heuristic_factory(1),
    "npc2": _heuristic_factory(2),
    "npc3": _heuristic_factory(3),
}


def available_strategies() -> list[str]:
    return sorted(_STRATEGY_FACTORIES)


def get_strategy(bot_id: str, **kwargs: object) -> BotStrategy:
    """Create a BotStrategy instance for the given *bot_id*."""
    factory = _STRATEGY_FACTORIES.get(bot_id)
    if factory is None:
        raise ValueError(f"Unknown bot_id: {bot_id!r}")
    return factory(**kwargs)


def register_strategy(
    bot_id: str, factory: Callable[..., BotStrategy]
) -> None:
    """Register a new strategy factory."""
    _STRATEGY_FACTORIES[bot_id] = factory
