"""YavalathMatch — game modes, seat assignment and paced NPC replies.

Wraps a ``GameHandle`` with the choices a player makes before a game:
player-vs-player or player-vs-NPC, 2 or 3 seats, and the NPC tier. Changes
made with ``configure()`` only take effect at the next ``restart()``.
"""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum

from pydantic import BaseModel, field_validator

from hexlines.config import settings as app_settings
from hexlines.engine.errors import GameNotActiveError, NotYourTurnError
from hexlines.games.yavalath.board import Cell
from hexlines.games.yavalath.npc import NpcTier
from hexlines.games.yavalath.session import (
    GameHandle,
    MoveOutcome,
    new_game,
    request_npc_move,
    submit_move,
)
from hexlines.games.yavalath.types import Color, player_colors

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    PVP = "pvp"
    NPC = "npc"


class MatchSettings(BaseModel):
    mode: GameMode = GameMode.PVP
    player_count: int = 2
    npc_level: NpcTier = NpcTier.SAFE_RANDOM

    @field_validator("player_count")
    @classmethod
    def _check_player_count(cls, v: int) -> int:
        player_colors(v)
        return v

    @classmethod
    def from_config(cls) -> MatchSettings:
        return cls(
            mode=GameMode(app_settings.default_mode),
            player_count=app_settings.default_player_count,
            npc_level=NpcTier(app_settings.default_npc_level),
        )


class YavalathMatch:
    """A series of games sharing one set of pre-game choices.

    In NPC mode the human gets a random seat and every other seat is
    played by the NPC at ``settings.npc_level``.
    """

    def __init__(
        self,
        settings: MatchSettings | None = None,
        seed: int | None = None,
        npc_delay_seconds: float | None = None,
    ) -> None:
        self._rng = random.Random(seed if seed is not None else app_settings.random_seed)
        self.settings = settings or MatchSettings.from_config()
        self._pending_settings = self.settings
        if npc_delay_seconds is None:
            npc_delay_seconds = app_settings.npc_move_delay_ms / 1000
        self.npc_delay_seconds = npc_delay_seconds
        self._npc_task: asyncio.Task | None = None
        self.handle: GameHandle
        self.user_color = Color.B
        self.restart()

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def configure(self, **changes: object) -> MatchSettings:
        """Stage new settings for the next ``restart()``."""
        self._pending_settings = MatchSettings(
            **{**self._pending_settings.model_dump(), **changes}
        )
        return self._pending_settings

    def restart(self) -> GameHandle:
        self.cancel_pending_npc_move()
        self.settings = self._pending_settings
        self.handle = new_game(self.settings.player_count, seed=self._rng.getrandbits(32))

        if self.settings.mode == GameMode.NPC:
            self.user_color = self._rng.choice(player_colors(self.settings.player_count))
        else:
            self.user_color = Color.B

        logger.info(
            "Match restarted: mode=%s players=%d npc_level=%d user=%s",
            self.settings.mode.value,
            self.settings.player_count,
            self.settings.npc_level,
            self.user_color.value,
        )
        self._schedule_if_loop_running()
        return self.handle

    # ------------------------------------------------------------------ #
    #  Turns
    # ------------------------------------------------------------------ #

    @property
    def is_over(self) -> bool:
        return self.handle.engine.is_over

    @property
    def is_user_turn(self) -> bool:
        if self.settings.mode == GameMode.PVP:
            return True
        return self.handle.engine.active_color == self.user_color

    @property
    def is_npc_turn(self) -> bool:
        return not self.is_over and not self.is_user_turn

    @property
    def _npc_can_move(self) -> bool:
        # A full board with no result leaves the NPC seat nothing to play
        return self.is_npc_turn and bool(self.handle.board.empty_cells())

    def play_user_move(self, cell: Cell | tuple[int, int]) -> MoveOutcome:
        if not self.is_user_turn:
            raise NotYourTurnError(
                f"It is {self.handle.engine.active_color.value}'s turn, not {self.user_color.value}'s"
            )
        outcome = submit_move(self.handle, cell)
        if outcome.accepted:
            self._schedule_if_loop_running()
        return outcome

    def play_npc_move(self) -> MoveOutcome:
        """Let the NPC choose and play one move for the active seat."""
        if self.is_over:
            raise GameNotActiveError("Game is already over")
        if self.is_user_turn:
            raise NotYourTurnError("It is the human player's turn")

        cell = request_npc_move(self.handle, self.settings.npc_level)
        if cell is None:
            raise GameNotActiveError("No empty cells left")
        outcome = submit_move(self.handle, cell)
        logger.info(
            "NPC %s (level %d) played %s: %s",
            cell.state.value if cell.state else "?",
            self.settings.npc_level,
            cell.coords,
            outcome.kind.value,
        )
        return outcome

    def play_npc_turns(self) -> list[MoveOutcome]:
        """Play NPC seats until the human is to move or the game ends."""
        outcomes: list[MoveOutcome] = []
        while self._npc_can_move:
            outcomes.append(self.play_npc_move())
        return outcomes

    # ------------------------------------------------------------------ #
    #  Paced NPC replies
    # ------------------------------------------------------------------ #

    @property
    def pending_npc_move(self) -> bool:
        return self._npc_task is not None and not self._npc_task.done()

    def schedule_npc_move_if_needed(self) -> asyncio.Task | None:
        """If an NPC seat is to move, play it after ``npc_delay_seconds``.

        Must be called from a running event loop. ``restart()`` and
        ``play_user_move()`` call it themselves when a loop is running. At
        most one reply is pending at a time; the pending task is returned.
        """
        if self.pending_npc_move:
            return self._npc_task
        if not self._npc_can_move:
            return None

        self._npc_task = asyncio.create_task(self._execute_npc_move(self.handle))
        return self._npc_task

    def cancel_pending_npc_move(self) -> bool:
        if not self.pending_npc_move:
            self._npc_task = None
            return False
        self._npc_task.cancel()
        self._npc_task = None
        return True

    def _schedule_if_loop_running(self) -> None:
        # Without a running loop the caller drives NPC seats via play_npc_turns()
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self.schedule_npc_move_if_needed()

    async def _execute_npc_move(self, handle: GameHandle) -> MoveOutcome | None:
        try:
            await asyncio.sleep(self.npc_delay_seconds)
        except asyncio.CancelledError:
            return None

        self._npc_task = None
        # Re-check state after delay: the match may have restarted
        if handle is not self.handle or not self._npc_can_move:
            return None

        outcome = self.play_npc_move()
        self.schedule_npc_move_if_needed()
        return outcome
