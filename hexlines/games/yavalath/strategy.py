"""Bot strategy adapter that plays the NPC tiers through the plugin interface."""

from __future__ import annotations

import logging
import random as _random

from hexlines.engine.models import Phase, Player, PlayerId
from hexlines.engine.protocol import GamePlugin
from hexlines.games.yavalath.board import HexBoard
from hexlines.games.yavalath.npc import NpcTier, choose_cell
from hexlines.games.yavalath.types import Color

logger = logging.getLogger(__name__)


class HeuristicStrategy:
    """Chooses a ``{"q", "r"}`` payload with one of the NPC tiers."""

    def __init__(self, tier: int = NpcTier.SAFE_RANDOM, seed: int | None = None) -> None:
        self.tier = NpcTier(tier)
        self._rng = _random.Random(seed)

    def choose_action(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
        plugin: GamePlugin,
        players: list[Player] | None = None,
    ) -> dict:
        board = HexBoard.from_snapshot(game_data["board"])
        mover = Color(game_data["colors"][player_id])
        cell = choose_cell(board, mover, game_data["player_count"], self.tier, self._rng)
        if cell is None:
            raise ValueError("No empty cells left to play")
        logger.debug("Tier %d chose %s for %s", self.tier, cell.coords, mover.value)
        return {"q": cell.q, "r": cell.r}
