"""YavalathPlugin — implements the GamePlugin protocol for Yavalath."""

from __future__ import annotations

from typing import ClassVar

from hexlines.engine.models import (
    Action,
    Event,
    ExpectedAction,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from hexlines.games.yavalath.board import HexBoard
from hexlines.games.yavalath.rules import ResultKind, RuleEngine
from hexlines.games.yavalath.types import Color, next_color, player_colors

PHASE_PLACE_STONE = "place_stone"


def _make_phase(player_id: str, player_index: int) -> Phase:
    return Phase(
        name=PHASE_PLACE_STONE,
        expected_actions=[
            ExpectedAction(player_id=PlayerId(player_id), action_type=PHASE_PLACE_STONE)
        ],
        metadata={"player_index": player_index},
    )


def _restore_engine(game_data: dict) -> RuleEngine:
    board = HexBoard.from_snapshot(game_data["board"])
    return RuleEngine.restore(
        board, game_data["player_count"], Color(game_data["active_color"])
    )


class YavalathPlugin:
    """Yavalath — make four in a row without first making three."""

    game_id: ClassVar[str] = "yavalath"
    display_name: ClassVar[str] = "Yavalath"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 3
    description: ClassVar[str] = (
        "Place stones on a 61-cell hexagon. Four in a row wins, "
        "but three in a row loses. For 2 or 3 players."
    )

    # ── Lifecycle ──

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        errors = self.validate_config(config.options)
        if errors:
            raise ValueError("; ".join(errors))
        requested = config.options.get("player_count")
        if requested is not None and requested != len(players):
            raise ValueError(
                f"player_count option is {requested} but {len(players)} players are seated"
            )

        colors = player_colors(len(players))
        # Colors are stored as plain strings so game_data stays JSON-friendly
        game_data: dict = {
            "board": {},
            "player_count": len(players),
            "colors": {p.player_id: colors[i].value for i, p in enumerate(players)},
            "active_color": Color.B.value,
            "current_player_index": 0,
            "last_move": None,
            "scores": {p.player_id: 0.0 for p in players},
        }

        events = [
            Event(event_type="game_started", payload={
                "players": [p.player_id for p in players],
                "colors": game_data["colors"],
            }),
        ]
        return game_data, _make_phase(players[0].player_id, 0), events

    def validate_config(self, options: dict) -> list[str]:
        errors: list[str] = []
        count = options.get("player_count")
        if count is not None and count not in (2, 3):
            errors.append(f"player_count must be 2 or 3, got {count!r}")
        return errors

    # ── Core game loop ──

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        if phase.name != PHASE_PLACE_STONE:
            return []
        expected_pid = phase.expected_actions[0].player_id if phase.expected_actions else None
        if player_id != expected_pid:
            return []

        board = HexBoard.from_snapshot(game_data["board"])
        return [{"q": c.q, "r": c.r} for c in board.empty_cells()]

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        if phase.name != PHASE_PLACE_STONE:
            return f"No moves accepted in phase {phase.name}"

        expected_pid = phase.expected_actions[0].player_id if phase.expected_actions else None
        if action.player_id != expected_pid:
            return "Not your turn"

        q = action.payload.get("q")
        r = action.payload.get("r")
        if not isinstance(q, int) or not isinstance(r, int):
            return "Payload needs integer q and r"

        board = HexBoard.from_snapshot(game_data["board"])
        cell = board.cell_at(q, r)
        if cell is None:
            return f"({q}, {r}) is off the board"
        if cell.state is not None:
            return f"Cell ({q}, {r}) is already occupied"
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        if phase.name != PHASE_PLACE_STONE:
            raise ValueError(f"Unknown phase: {phase.name}")

        engine = _restore_engine(game_data)
        cell = engine.board.cell_at(action.payload["q"], action.payload["r"])
        mover = engine.active_color
        outcome = engine.apply_move(cell)

        new_data = dict(game_data)
        new_data["board"] = engine.board.snapshot()
        new_data["last_move"] = {"q": cell.q, "r": cell.r, "color": mover.value}

        events = [
            Event(
                event_type="stone_placed",
                player_id=action.player_id,
                payload={"q": cell.q, "r": cell.r, "color": mover.value},
            ),
        ]

        if outcome is not None:
            if outcome.result == ResultKind.LOSS:
                # The seat after the loser takes the win
                winner_color = next_color(mover, engine.player_count)
                reason = "three_in_row"
            else:
                winner_color = mover
                reason = "four_in_row"
            winner = self._player_for_color(new_data, players, winner_color)
            return self._end_game(
                new_data, events, players, [winner.player_id], reason,
                details={"result": outcome.result.value, "color": mover.value,
                         "cell": list(outcome.cell)},
            )

        if engine.board.is_full():
            return self._end_game(
                new_data, events, players, [p.player_id for p in players], "draw",
            )

        return self._advance(new_data, events, players, engine.active_color)

    # ── View filtering ──

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        # No hidden info; return everything
        return {
            "board": game_data["board"],
            "colors": game_data["colors"],
            "active_color": game_data["active_color"],
            "current_player_index": game_data["current_player_index"],
            "last_move": game_data["last_move"],
        }

    # ── Private helpers ──

    def _player_for_color(self, game_data: dict, players: list[Player], color: Color) -> Player:
        for p in players:
            if game_data["colors"][p.player_id] == color.value:
                return p
        raise ValueError(f"No player holds color {color.value}")

    def _advance(
        self,
        game_data: dict,
        events: list[Event],
        players: list[Player],
        color: Color,
    ) -> TransitionResult:
        player = self._player_for_color(game_data, players, color)
        game_data["active_color"] = color.value
        game_data["current_player_index"] = player.seat_index
        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=_make_phase(player.player_id, player.seat_index),
            scores=game_data["scores"],
        )

    def _end_game(
        self,
        game_data: dict,
        events: list[Event],
        players: list[Player],
        winners: list[PlayerId],
        reason: str,
        details: dict | None = None,
    ) -> TransitionResult:
        share = 1.0 / len(winners)
        scores = {
            p.player_id: (share if p.player_id in winners else 0.0) for p in players
        }
        game_data["scores"] = scores

        events.append(Event(
            event_type="game_ended",
            payload={"winners": winners, "reason": reason, **(details or {})},
        ))

        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=Phase(name="game_over"),
            scores=scores,
            game_over=GameResult(
                winners=winners,
                final_scores=scores,
                reason=reason,
                details=details or {},
            ),
        )
