from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, Field

# --- Identifiers ---
PlayerId = NewType("PlayerId", str)

# --- Player ---
class Player(BaseModel):
    player_id: PlayerId
    display_name: str
    seat_index: int
    is_bot: bool = False
    bot_id: str | None = None

class GameConfig(BaseModel):
    options: dict = Field(default_factory=dict)
    random_seed: int | None = None

# --- Phase ---
class ExpectedAction(BaseModel):
    player_id: PlayerId | None = None
    action_type: str

class Phase(BaseModel):
    name: str
    expected_actions: list[ExpectedAction] = Field(default_factory=list)
    metadata: dict = Field(default_factory=dict)

# --- Action ---
class Action(BaseModel):
    action_type: str
    player_id: PlayerId
    payload: dict = Field(default_factory=dict)

# --- Event ---
class Event(BaseModel):
    event_type: str
    player_id: PlayerId | None = None
    payload: dict = Field(default_factory=dict)

# --- Transition Result ---
class GameResult(BaseModel):
    winners: list[PlayerId]
    final_scores: dict[str, float]  # PlayerId -> score
    reason: str = "normal"
    details: dict = Field(default_factory=dict)

class TransitionResult(BaseModel):
    game_data: dict
    events: list[Event]
    next_phase: Phase
    scores: dict[str, float] = Field(default_factory=dict)
    game_over: GameResult | None = None
