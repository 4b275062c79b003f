from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # New-game defaults
    default_player_count: int = 2
    default_mode: str = "pvp"
    default_npc_level: int = 1

    # Pause before an NPC reply, for presentation pacing only
    npc_move_delay_ms: int = 500

    random_seed: int | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HEXLINES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
