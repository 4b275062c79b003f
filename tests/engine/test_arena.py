"""Tests for the bot-vs-bot arena."""

import pytest

from hexlines.engine.arena import ArenaResult, run_arena
from hexlines.engine.arena_cli import main
from hexlines.engine.bot_strategy import RandomStrategy, get_strategy
from hexlines.games.yavalath.plugin import YavalathPlugin

END_REASONS = {"three_in_row", "four_in_row", "draw"}


def test_arena_runs_games():
    """Arena should complete N games and produce valid results."""
    plugin = YavalathPlugin()
    strategies = {"r1": RandomStrategy(seed=1), "r2": RandomStrategy(seed=2)}

    result = run_arena(plugin=plugin, strategies=strategies, num_games=5, base_seed=0)

    assert result.num_games == 5
    assert result.wins["r1"] + result.wins["r2"] + result.draws == 5
    assert len(result.game_durations_ms) == 5
    assert len(result.game_lengths) == 5
    assert set(result.end_reasons) <= END_REASONS
    assert sum(result.end_reasons.values()) == 5


def test_arena_three_players():
    plugin = YavalathPlugin()
    strategies = {
        "a": get_strategy("npc1", seed=1),
        "b": get_strategy("npc2", seed=2),
        "c": RandomStrategy(seed=3),
    }

    result = run_arena(
        plugin=plugin, strategies=strategies, num_games=3, num_players=3,
        game_options={"player_count": 3},
    )
    assert sum(result.wins.values()) + result.draws == 3
    assert set(result.end_reasons) <= END_REASONS


def test_arena_no_alternation():
    """With alternate_seats=False, seat order stays fixed."""
    plugin = YavalathPlugin()
    strategies = {"x": get_strategy("npc2", seed=1), "y": get_strategy("npc2", seed=2)}

    result = run_arena(
        plugin=plugin, strategies=strategies, num_games=3,
        alternate_seats=False,
    )
    assert result.num_games == 3


def test_arena_strategy_count_must_match():
    with pytest.raises(ValueError, match="Need exactly 3 strategies"):
        run_arena(
            plugin=YavalathPlugin(),
            strategies={"a": RandomStrategy(), "b": RandomStrategy()},
            num_players=3,
        )


def test_arena_progress_callback():
    calls = []
    run_arena(
        plugin=YavalathPlugin(),
        strategies={"a": RandomStrategy(seed=1), "b": RandomStrategy(seed=2)},
        num_games=2,
        progress_callback=lambda done, total: calls.append((done, total)),
    )
    assert calls == [(1, 2), (2, 2)]


def test_arena_result_statistics():
    """ArenaResult should compute correct win rates and confidence intervals."""
    result = ArenaResult(
        num_games=100,
        wins={"a": 70, "b": 25},
        draws=5,
        game_durations_ms=[100.0] * 100,
        game_lengths=[20] * 100,
    )

    assert result.win_rate("a") == 0.70
    assert result.win_rate("b") == 0.25
    assert result.avg_game_length() == 20

    lo, hi = result.confidence_interval_95("a")
    assert lo < 0.70 < hi

    summary = result.summary()
    assert "Arena Results (100 games)" in summary
    assert "Draws" in summary


def test_arena_result_empty():
    result = ArenaResult(num_games=0, wins={}, draws=0, game_durations_ms=[])
    assert result.confidence_interval_95("a") == (0.0, 0.0)
    assert result.win_rate("a") == 0.0


def test_cli_runs(capsys):
    main(["--games", "2", "--p1", "npc1", "--p2", "random", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert "Arena: npc1 vs random, 2 games" in out
    assert "Arena Results (2 games)" in out


def test_cli_three_players_same_strategy(capsys):
    main(["--games", "1", "--players", "3", "--p1", "npc2", "--p2", "npc2", "--p3", "npc1",
          "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert "npc2_1 vs npc2_2 vs npc1" in out
