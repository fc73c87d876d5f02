# lanebattle/config.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------------------------------------------------------
# Tunables
# ---------------------------------------------------------
BOARD_ROWS = 5
BOARD_COLS = 30
MAX_ROWS = 26                    # lanes are lettered A-Z
ZONE_COLS = 10                   # deploy zone width on each side
TICK_MS = 1                      # 1 tick = 1 ms of battle time
LOOP_INTERVAL_MS = 10            # realtime loop wakes every 10 ms (10 ticks)
MAX_TICKS_PER_STEP = 1000        # cap after a stalled event loop
DEFAULT_PROJECTILE_SPEED = 50    # ticks per tile
RENDER_EVERY = 1.5               # seconds between board posts


class BattleConfig(BaseSettings):
    """
    Board shape and rule policies for one battle.

    Every field can be set from a LANEBATTLE_<FIELD> environment variable,
    e.g. LANEBATTLE_ROWS=3. Keyword arguments win over the environment.

    reset_cooldown_on_miss:
      True  -> an attack countdown that reaches 0 with no target resets to the
               full frequency (reference cadence)
      False -> it stays at 0 and retries next tick
    simultaneous_exchange:
      True  -> a melee unit struck down earlier in a tick still lands its own
               strike that tick; ranged units never fire after death
    """

    model_config = SettingsConfigDict(
        env_prefix="LANEBATTLE_",
        frozen=True,
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    rows: int = Field(default=BOARD_ROWS, ge=1, le=MAX_ROWS, description="Lanes on the board")
    cols: int = Field(default=BOARD_COLS, ge=2, description="Columns per lane")
    player_zone_cols: int = Field(default=ZONE_COLS, ge=1, description="Player deploy zone width")
    opponent_zone_cols: int = Field(default=ZONE_COLS, ge=1, description="Opponent deploy zone width")
    default_projectile_speed: int = Field(
        default=DEFAULT_PROJECTILE_SPEED,
        ge=1,
        description="Ticks per tile for ranged attacks without their own speed",
    )
    reset_cooldown_on_miss: bool = True
    simultaneous_exchange: bool = True
    seed: Optional[int] = Field(default=None, description="RNG seed; unset means unseeded")

    @model_validator(mode="after")
    def _zones_fit(self) -> "BattleConfig":
        if self.player_zone_cols + self.opponent_zone_cols > self.cols:
            raise ValueError(
                f"Deploy zones ({self.player_zone_cols} + {self.opponent_zone_cols}) "
                f"overlap on a {self.cols}-column board"
            )
        return self
