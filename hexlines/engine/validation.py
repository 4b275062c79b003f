from __future__ import annotations

from hexlines.engine.models import GameConfig, Phase, Player, PlayerId
from hexlines.engine.protocol import GamePlugin


def validate_plugin(plugin: GamePlugin) -> list[str]:
    """Run sanity checks on a plugin. Returns list of errors (empty = OK)."""
    errors: list[str] = []

    for attr in ("game_id", "display_name", "min_players", "max_players"):
        if not hasattr(plugin, attr):
            errors.append(f"Missing attribute: {attr}")

    if errors:
        return errors  # Can't proceed without metadata

    # Every supported seat count must produce a playable first phase
    for num_players in range(plugin.min_players, plugin.max_players + 1):
        try:
            players = [
                Player(
                    player_id=PlayerId(f"test-{i}"),
                    display_name=f"Test {i}",
                    seat_index=i,
                )
                for i in range(num_players)
            ]
            config = GameConfig(random_seed=42)
            game_data, phase, _events = plugin.create_initial_state(players, config)

            if not isinstance(game_data, dict):
                errors.append("create_initial_state must return dict as game_data")
                continue

            if not isinstance(phase, Phase):
                errors.append("create_initial_state must return Phase as second element")
                continue

            if not phase.expected_actions:
                errors.append(f"First phase has no expected_actions ({num_players} players)")

            acting = phase.expected_actions[0].player_id if phase.expected_actions else None
            if acting is not None and not plugin.get_valid_actions(game_data, phase, acting):
                errors.append(f"First player has no valid actions ({num_players} players)")

            for p in players:
                plugin.get_player_view(game_data, phase, p.player_id, players)

            game_data2, _phase2, _events2 = plugin.create_initial_state(players, config)
            if game_data != game_data2:
                errors.append("create_initial_state is not deterministic with same seed")

        except Exception as e:
            errors.append(f"create_initial_state failed ({num_players} players): {e}")

    return errors
