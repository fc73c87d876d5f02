# lanebattle/match.py
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from lanebattle.clock import TickClock
from lanebattle.combat import resolve_units
from lanebattle.config import LOOP_INTERVAL_MS, RENDER_EVERY, TICK_MS, BattleConfig
from lanebattle.definitions import DefinitionRegistry
from lanebattle.errors import LifecycleError, PlacementError
from lanebattle.rules import (
    OUTCOME_VICTORY,
    REJECT_MESSAGES,
    REJECT_NOT_IN_SETUP,
    check_deploy,
    evaluate_victory,
)
from lanebattle.snapshot import BattleSnapshot, build_snapshot
from lanebattle.state import SimulationState
from lanebattle.unit import Unit
from lanebattle.visuals import render_board_emoji

logger = logging.getLogger(__name__)


# ---- Phases ----
PHASE_SETUP = "setup"
PHASE_BATTLE = "battle"
PHASE_ENDED = "ended"


class Match:
    """
    Match owns:
      - the SimulationState (units, grid, projectiles, rng)
      - lifecycle (setup -> battle -> ended, restart back to setup)
      - the tick clock and the per-tick pipeline
      - a lock so the realtime loop and commands never interleave

    Match does NOT own (but calls):
      - deploy/victory rules (rules.py)
      - combat rules (combat.py)
      - rendering (visuals.py)
    """

    def __init__(self, registry: DefinitionRegistry, config: Optional[BattleConfig] = None) -> None:
        self.registry = registry
        self.config = config or BattleConfig()
        self.state = SimulationState(registry, self.config)
        self.phase = PHASE_SETUP
        self.outcome: Optional[str] = None
        self.clock = TickClock(tick_ms=TICK_MS)

        self.lock = asyncio.Lock()
        self.loop_task: Optional[asyncio.Task] = None

    # -----------------------------------------------------
    # BASIC HELPERS
    # -----------------------------------------------------
    @property
    def tick(self) -> int:
        return self.state.tick

    @property
    def is_running(self) -> bool:
        return self.phase == PHASE_BATTLE

    def unit_at(self, row: int, col: int) -> Optional[Unit]:
        return self.state.unit_at(row, col)

    def snapshot(self) -> BattleSnapshot:
        return build_snapshot(self.state, self.phase, self.outcome)

    # -----------------------------------------------------
    # UNIT PLACEMENT (setup only)
    # -----------------------------------------------------
    def place_unit(self, type_id: str, team: str, row: int, col: int) -> Unit:
        """
        Validate and place a unit. Raises PlacementError with a reason code;
        a rejected request leaves the board untouched.
        """
        if self.phase != PHASE_SETUP:
            raise PlacementError(REJECT_NOT_IN_SETUP, REJECT_MESSAGES[REJECT_NOT_IN_SETUP])

        reason = check_deploy(self.state, type_id, team, row, col)
        if reason is not None:
            raise PlacementError(reason, REJECT_MESSAGES[reason])

        unit = self.state.spawn(type_id, team, row, col)
        logger.debug("Placed %s (%s) for %s at (%d, %d)", unit.id, type_id, team, row, col)
        return unit

    def remove_unit(self, unit_id: str) -> bool:
        """Take a placed unit back off the board (setup only)."""
        if self.phase != PHASE_SETUP:
            raise LifecycleError("Units can only be removed during setup")
        return self.state.remove_unit(unit_id)

    # -----------------------------------------------------
    # LIFECYCLE
    # -----------------------------------------------------
    def start_battle(self) -> None:
        if self.phase != PHASE_SETUP:
            raise LifecycleError(f"Cannot start a battle from phase '{self.phase}'")

        self.phase = PHASE_BATTLE
        self.clock.reset()
        logger.info("Battle started with %d units", len(self.state.units))

    def restart(self) -> None:
        """Tear down any battle and return to an empty setup board."""
        if self.loop_task is not None and not self.loop_task.done():
            self.loop_task.cancel()
        self.loop_task = None

        self.state.reset()
        self.phase = PHASE_SETUP
        self.outcome = None
        self.clock.reset()
        logger.info("Match restarted")

    # -----------------------------------------------------
    # SIMULATION STEP
    # -----------------------------------------------------
    def step(self) -> Optional[str]:
        """
        One tick: units -> projectiles -> victory check.
        Returns the outcome if this tick ended the battle.
        """
        if self.phase != PHASE_BATTLE:
            return None

        self.state.tick += 1
        resolve_units(self.state)
        self.state.projectiles.advance(self.state)

        outcome = evaluate_victory(self.state)
        if outcome is not None:
            self._end(outcome)
        return outcome

    def advance(self, ticks: int) -> int:
        """Run up to `ticks` whole ticks; stops early when the battle ends."""
        if ticks < 0:
            raise ValueError("ticks must be >= 0")

        done = 0
        while done < ticks and self.phase == PHASE_BATTLE:
            self.step()
            done += 1
        return done

    def advance_realtime(self, now: float) -> int:
        """Advance by however many whole ticks of wall-clock time have passed."""
        if self.phase != PHASE_BATTLE:
            return 0
        return self.advance(self.clock.consume(now))

    def run_until_done(self, max_ticks: int) -> Optional[str]:
        """Headless helper: run until an outcome or max_ticks."""
        self.advance(max_ticks)
        return self.outcome

    def _end(self, outcome: str) -> None:
        self.phase = PHASE_ENDED
        self.outcome = outcome
        self.clock.stop()
        logger.info("Battle ended at tick %d: %s", self.state.tick, outcome)


# =========================================================
# REALTIME LOOP
# =========================================================

def outcome_message(outcome: Optional[str]) -> str:
    if outcome == OUTCOME_VICTORY:
        return "🏆 **Victory!**"
    return "💀 **Defeat**"


async def realtime_loop(bot, channel_id: int, match: Match) -> None:
    """
    Real-time loop:
    - converts elapsed wall-clock time into whole ticks
    - renders occasionally (not every tick)
    - posts the outcome and exits when the battle ends
    """
    channel = bot.get_channel(channel_id)
    if channel is None:
        return

    last_render = time.monotonic()
    match.clock.start(last_render)

    try:
        while match.is_running:
            now = time.monotonic()

            async with match.lock:
                match.advance_realtime(now)
                if match.phase == PHASE_ENDED:
                    await channel.send(render_board_emoji(match.snapshot()))
                    await channel.send(outcome_message(match.outcome))
                    return

            # Render throttled
            if now - last_render >= RENDER_EVERY:
                last_render = now
                await channel.send(render_board_emoji(match.snapshot()))

            await asyncio.sleep(LOOP_INTERVAL_MS / 1000)

    except asyncio.CancelledError:
        return
