"""Simulated player positions on a square field."""

from __future__ import annotations

import argparse
import math
import random
import time
from dataclasses import dataclass, field

__all__ = [
    "FIELD_SIZE",
    "NUM_PLAYERS",
    "MAX_STEP_SIZE",
    "Vector3",
    "Position",
    "current_time_ms",
    "PositionGenerator",
    "main",
]

FIELD_SIZE = 100
NUM_PLAYERS = 10
MAX_STEP_SIZE = 2


@dataclass(frozen=True)
class Vector3:
    """A point in metres."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Position:
    """A sensor reading: which player, when, and where."""

    sensor_id: int = 0
    timestamp: int = 0
    player: Vector3 = field(default_factory=Vector3)


def current_time_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


class PositionGenerator:
    """Places players at random and moves them by random steps each round."""

    def __init__(
        self,
        num_players: int = NUM_PLAYERS,
        field_size: int = FIELD_SIZE,
        step_size: int = MAX_STEP_SIZE,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if num_players < 0:
            raise ValueError("number of players must not be negative")
        if field_size <= 0:
            raise ValueError("field size must be positive")
        if step_size < 0:
            raise ValueError("step size must not be negative")
        self.num_players = num_players
        self.field_size = field_size
        self.step_size = step_size
        self._rng = rng if rng is not None else random.Random()
        self.positions: list[Position] = []
        self.initialize_players()

    def initialize_players(self) -> list[Position]:
        """Scatter the players uniformly over the field; return their positions."""
        self.positions = [
            Position(
                sensor_id=sensor_id,
                player=Vector3(
                    self._rng.uniform(0, self.field_size),
                    self._rng.uniform(0, self.field_size),
                    0.0,
                ),
            )
            for sensor_id in range(self.num_players)
        ]
        return list(self.positions)

    def _clamp(self, value: float) -> float:
        return max(0.0, min(float(self.field_size), value))

    def create_positions(self) -> list[Position]:
        """Move every player one random step and return the new positions."""
        moved = []
        for position in self.positions:
            angle = self._rng.uniform(0, 2 * math.pi)
            step = self._rng.uniform(-self.step_size, self.step_size)
            player = position.player
            moved.append(
                Position(
                    sensor_id=position.sensor_id,
                    timestamp=current_time_ms(),
                    player=Vector3(
                        self._clamp(player.x + step * math.cos(angle)),
                        self._clamp(player.y + step * math.sin(angle)),
                        player.z,
                    ),
                )
            )
        self.positions = moved
        return list(moved)


def main(argv: list[str] | None = None) -> int:
    """Print player positions once per interval."""
    parser = argparse.ArgumentParser(description="Simulate player positions.")
    parser.add_argument("--players", type=int, default=NUM_PLAYERS)
    parser.add_argument("--field-size", type=int, default=FIELD_SIZE)
    parser.add_argument("--step-size", type=int, default=MAX_STEP_SIZE)
    parser.add_argument("--interval", type=float, default=1.0)
    parser.add_argument("--steps", type=int, default=None, help="rounds to run (default: forever)")
    args = parser.parse_args(argv)
    try:
        generator = PositionGenerator(args.players, args.field_size, args.step_size)
    except ValueError as exc:
        parser.error(str(exc))
    rounds = 0
    try:
        while args.steps is None or rounds < args.steps:
            positions = generator.create_positions()
            print("".join(f"{p.player.x:g} {p.player.y:g}, " for p in positions))
            rounds += 1
            if args.interval > 0 and (args.steps is None or rounds < args.steps):
                time.sleep(args.interval)
    except KeyboardInterrupt:
        pass
    return 0