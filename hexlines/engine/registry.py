from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hexlines.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Registers in-process game plugins by ``game_id``."""

    def __init__(self) -> None:
        self._plugins: dict[str, GamePlugin] = {}

    def register(self, plugin: GamePlugin) -> None:
        game_id = plugin.game_id
        if game_id in self._plugins:
            raise ValueError(f"Game '{game_id}' already registered")
        self._plugins[game_id] = plugin
        logger.debug("Registered game plugin %s", game_id)

    def get(self, game_id: str) -> GamePlugin:
        if game_id not in self._plugins:
            raise KeyError(f"Unknown game: {game_id}")
        return self._plugins[game_id]

    def list_games(self) -> list[dict]:
        return [
            {
                "game_id": p.game_id,
                "display_name": p.display_name,
                "min_players": p.min_players,
                "max_players": p.max_players,
                "description": p.description,
            }
            for p in self._plugins.values()
        ]


def create_default_registry() -> PluginRegistry:
    """Return a registry holding every game shipped with hexlines."""
    from hexlines.games.yavalath.plugin import YavalathPlugin

    registry = PluginRegistry()
    registry.register(YavalathPlugin())
    logger.info(f"Loaded {len(registry.list_games())} game plugins")
    return registry
